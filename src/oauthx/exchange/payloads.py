"""Platform wire payloads for the ``init`` and ``refresh`` operations.

The connection platform calls the OAuth service with two body shapes:

``refresh``::

    {"OAUTH_CLIENT_ID": "...", "OAUTH_CLIENT_SECRET": "...",
     "OAUTH_REFRESH_TOKEN": "...", "OAUTH_METADATA": {...}}

``init`` (authorization code callback)::

    {"clientId": "...", "clientSecret": "...",
     "metadata": {"code": "...", "redirectUri": "...",
                  "additionalData": {"realmId": "..."}}}

and expects results in camelCase::

    {"accessToken": "...", "refreshToken": "...", "expiresIn": 3600,
     "tokenType": "Bearer", "meta": {...}}
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from .contracts import ExchangeRequest, OAuthResult
from .engine import TokenExchangeEngine
from .errors import ValidationFailure


class PayloadOperation(str, Enum):
    INIT = "init"
    REFRESH = "refresh"


def _require(provider_id: str, body: Mapping[str, Any], key: str, where: str = "body") -> Any:
    value = body.get(key)
    if value is None or value == "":
        raise ValidationFailure(provider_id, f"Missing '{key}' in {where}")
    return value


def _optional_mapping(provider_id: str, value: Any, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValidationFailure(provider_id, f"'{key}' must be an object")
    return dict(value)


def parse_refresh_payload(provider_id: str, body: Mapping[str, Any]) -> ExchangeRequest:
    """Build a refresh-token request from a ``refresh`` body."""
    return ExchangeRequest.for_refresh(
        client_id=str(_require(provider_id, body, "OAUTH_CLIENT_ID")),
        client_secret=str(_require(provider_id, body, "OAUTH_CLIENT_SECRET")),
        refresh_token=str(_require(provider_id, body, "OAUTH_REFRESH_TOKEN")),
        scope=body.get("OAUTH_SCOPE"),
        metadata=_optional_mapping(provider_id, body.get("OAUTH_METADATA"), "OAUTH_METADATA"),
    )


def parse_init_payload(provider_id: str, body: Mapping[str, Any]) -> ExchangeRequest:
    """Build an authorization-code request from an ``init`` body.

    ``metadata.additionalData`` becomes the request metadata, which is where
    Quickbooks' ``realmId`` travels.
    """
    metadata = _optional_mapping(provider_id, body.get("metadata"), "metadata")
    return ExchangeRequest.for_authorization_code(
        client_id=str(_require(provider_id, body, "clientId")),
        client_secret=str(_require(provider_id, body, "clientSecret")),
        code=str(_require(provider_id, metadata, "code", "metadata")),
        redirect_uri=str(_require(provider_id, metadata, "redirectUri", "metadata")),
        metadata=_optional_mapping(
            provider_id, metadata.get("additionalData"), "metadata.additionalData"
        ),
    )


def parse_payload(
    provider_id: str, operation: PayloadOperation | str, body: Any
) -> ExchangeRequest:
    if not isinstance(body, Mapping):
        raise ValidationFailure(provider_id, "Payload must be a JSON object")
    if PayloadOperation(operation) is PayloadOperation.INIT:
        return parse_init_payload(provider_id, body)
    return parse_refresh_payload(provider_id, body)


def render_oauth_response(result: OAuthResult) -> dict[str, Any]:
    """Render a result in the platform's camelCase response shape."""
    return {
        "accessToken": result.access_token,
        "refreshToken": result.refresh_token,
        "expiresIn": result.expires_in,
        "tokenType": result.token_type,
        "meta": dict(result.metadata),
    }


async def run_payload(
    engine: TokenExchangeEngine,
    provider_id: str,
    operation: PayloadOperation | str,
    body: Any,
) -> dict[str, Any]:
    """Parse a platform payload, run the exchange and render the response."""
    engine.registry.lookup(provider_id)
    request = parse_payload(provider_id, operation, body)
    result = await engine.exchange(provider_id, request)
    return render_oauth_response(result)


__all__ = [
    "PayloadOperation",
    "parse_init_payload",
    "parse_payload",
    "parse_refresh_payload",
    "render_oauth_response",
    "run_payload",
]
