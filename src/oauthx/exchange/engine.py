"""Token exchange engine.

The engine is the single entry point for exchanging an authorization code or
refresh token with a provider:

    caller -> TokenExchangeEngine.exchange(provider_id, request)
           -> ProviderRegistry.lookup
           -> request validation
           -> AuthStrategy.build
           -> Transport.post
           -> ResultNormalizer.normalize

Each call is stateless and performs at most one HTTP request. Failures are
raised as :class:`~oauthx.exchange.errors.ExchangeError` subclasses and are
never retried here.

Example:
    ```python
    engine = TokenExchangeEngine()
    result = await engine.exchange(
        "apollo",
        ExchangeRequest.for_refresh(client_id="id", client_secret="s", refresh_token="rt"),
    )
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from oauthx.models import OAuthxBaseModel
from oauthx.telemetry import SpanKind, traced_operation

from .adapter import ProviderAdapter
from .auth_strategies import strategy_for
from .contracts import (
    DEFAULT_TIMEOUT,
    ContentType,
    ExchangeRequest,
    GrantType,
    OAuthResult,
    Transport,
    TransportError,
)
from .errors import ProviderRejected, TransportFailure, ValidationFailure
from .normalizer import ResultNormalizer
from .redaction import redact_text, redact_value
from .registry import ProviderRegistry, default_registry
from .transport import HttpxTransport

logger = logging.getLogger(__name__)


class TokenRequest(OAuthxBaseModel):
    """Fully built token endpoint request, ready for the transport."""

    url: str
    headers: dict[str, str]
    body: dict[str, Any]
    content_type: ContentType


def validate_request(adapter: ProviderAdapter, request: ExchangeRequest) -> None:
    """Check that ``request`` carries exactly what its grant type needs.

    Raises:
        ValidationFailure: On any missing or conflicting field.
    """
    provider_id = adapter.provider_id

    if not adapter.supports(request.grant_type):
        supported = ", ".join(grant.value for grant in adapter.grant_types)
        raise ValidationFailure(
            provider_id,
            f"Grant type '{request.grant_type.value}' is not supported (supported: {supported})",
        )
    if not request.client_id or not request.client_secret.get_secret_value():
        raise ValidationFailure(provider_id, "client_id and client_secret are required")

    has_code = request.code is not None and bool(request.code.get_secret_value())
    has_refresh = request.refresh_token is not None and bool(
        request.refresh_token.get_secret_value()
    )

    if request.grant_type is GrantType.AUTHORIZATION_CODE:
        if not has_code or not request.redirect_uri:
            raise ValidationFailure(
                provider_id, "authorization_code grant requires code and redirect_uri"
            )
        if has_refresh:
            raise ValidationFailure(
                provider_id, "authorization_code grant must not carry a refresh_token"
            )
    else:
        if not has_refresh:
            raise ValidationFailure(provider_id, "refresh_token grant requires refresh_token")
        if has_code:
            raise ValidationFailure(provider_id, "refresh_token grant must not carry a code")


def build_token_request(adapter: ProviderAdapter, request: ExchangeRequest) -> TokenRequest:
    """Assemble URL, headers and body for a validated request."""
    grant = adapter.grant(request.grant_type)

    body: dict[str, Any] = {"grant_type": request.grant_type.value}
    for body_key, source in grant.body_fields.items():
        value = request.field_value(source)
        if value is not None:
            body[body_key] = value
    body.update(grant.static_fields)

    auth_headers, credentials = strategy_for(adapter.auth_strategy).build(
        request.client_id, request.client_secret.get_secret_value()
    )
    body.update(credentials)

    return TokenRequest(
        url=adapter.token_url,
        headers={"Accept": "application/json", **auth_headers},
        body=body,
        content_type=adapter.content_type,
    )


class TokenExchangeEngine:
    """Provider-agnostic OAuth2 token exchange.

    Args:
        registry: Provider registry; defaults to the built-in providers.
        transport: HTTP transport; defaults to :class:`HttpxTransport`.
        timeout: Per-request timeout in seconds passed to the transport.
    """

    def __init__(
        self,
        registry: ProviderRegistry | None = None,
        transport: Transport | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.registry = registry or default_registry()
        self.transport: Transport = transport or HttpxTransport()
        self.timeout = timeout
        self.normalizer = ResultNormalizer(self.registry)

    async def exchange(self, provider_id: str, request: ExchangeRequest) -> OAuthResult:
        """Exchange ``request`` with ``provider_id``'s token endpoint.

        Raises:
            UnknownProvider: The provider id is not registered.
            ValidationFailure: The request is incomplete for its grant type.
            TransportFailure: Network error or non-2xx response.
            ProviderRejected: The provider returned an OAuth error in a 2xx body.
            MalformedResponse: The response lacks required fields.
        """
        adapter = self.registry.lookup(provider_id)
        attributes = {
            "oauthx.provider": adapter.provider_id,
            "oauthx.grant_type": request.grant_type.value,
        }
        with traced_operation("oauthx.exchange", attributes, kind=SpanKind.CLIENT) as span:
            validate_request(adapter, request)
            token_request = build_token_request(adapter, request)
            secrets = request.secret_values()

            logger.info(
                f"Requesting {request.grant_type.value} token from {adapter.provider_id} "
                f"({token_request.url})"
            )
            try:
                response = await self.transport.post(
                    token_request.url,
                    headers=token_request.headers,
                    body=token_request.body,
                    content_type=token_request.content_type,
                    timeout=self.timeout,
                )
            except TransportError as exc:
                message = redact_text(str(exc), secrets)
                logger.error(f"{adapter.provider_id} token request failed: {message}")
                raise TransportFailure(
                    adapter.provider_id, f"Token request failed: {message}"
                ) from exc

            span.set_attribute("http.status_code", response.status_code)
            body = redact_value(response.body, secrets)

            if not response.ok:
                detail = _oauth_error_detail(response.body) or response.text[:200].strip()
                message = f"Token endpoint returned HTTP {response.status_code}"
                if detail:
                    message = f"{message}: {redact_text(detail, secrets)}"
                logger.error(f"{adapter.provider_id} {message}")
                raise TransportFailure(
                    adapter.provider_id,
                    message,
                    status_code=response.status_code,
                    body=body if body is not None else redact_text(response.text, secrets),
                )

            if isinstance(response.body, Mapping) and response.body.get("error"):
                error = str(response.body["error"])
                raise ProviderRejected(
                    adapter.provider_id,
                    redact_text(_oauth_error_detail(response.body) or error, secrets),
                    error=error,
                    status_code=response.status_code,
                    body=body,
                )

            result = self.normalizer.normalize(adapter.provider_id, response.body, request)
            logger.info(
                f"{adapter.provider_id} {request.grant_type.value} exchange succeeded "
                f"(expires_in={result.expires_in})"
            )
            return result


def _oauth_error_detail(payload: Any) -> str | None:
    """``error: error_description`` from an RFC 6749 error body, if present."""
    if not isinstance(payload, Mapping) or not payload.get("error"):
        return None
    error = str(payload["error"])
    description = payload.get("error_description")
    return f"{error}: {description}" if description else error


__all__ = ["TokenExchangeEngine", "TokenRequest", "build_token_request", "validate_request"]
