"""Normalization of provider token responses into :class:`OAuthResult`."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import Any

from .adapter import ProviderAdapter
from .contracts import ExchangeRequest, GrantType, OAuthResult
from .errors import MalformedResponse
from .redaction import redact_value
from .registry import ProviderRegistry

logger = logging.getLogger(__name__)


def coerce_expires_in(value: Any) -> int:
    """Coerce an ``expires_in`` value to a non-negative number of seconds.

    Accepts ints, finite floats (truncated) and numeric strings. Booleans,
    negative numbers and anything else raise ``ValueError``.
    """
    if isinstance(value, bool):
        raise ValueError("boolean is not a duration")
    if isinstance(value, int):
        seconds = value
    elif isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"non-finite duration {value!r}")
        seconds = int(value)
    elif isinstance(value, str):
        text = value.strip()
        try:
            seconds = int(text)
        except ValueError:
            number = float(text)
            if not math.isfinite(number):
                raise ValueError(f"non-finite duration {value!r}") from None
            seconds = int(number)
    else:
        raise ValueError(f"unsupported type {type(value).__name__}")
    if seconds < 0:
        raise ValueError(f"negative duration {seconds}")
    return seconds


def normalize_response(
    adapter: ProviderAdapter, raw_response: Any, request: ExchangeRequest
) -> OAuthResult:
    """Apply ``adapter``'s response mapping and metadata extractor."""
    provider_id = adapter.provider_id
    secrets = request.secret_values()

    if not isinstance(raw_response, Mapping):
        raise MalformedResponse(
            provider_id,
            f"Token response is not a JSON object (got {type(raw_response).__name__})",
        )

    def malformed(message: str) -> MalformedResponse:
        return MalformedResponse(provider_id, message, body=redact_value(raw_response, secrets))

    fields = adapter.response_fields

    access_token = raw_response.get(fields.access_token)
    if not isinstance(access_token, str) or not access_token:
        raise malformed(f"Missing or invalid '{fields.access_token}' in token response")

    token_type = raw_response.get(fields.token_type)
    if not isinstance(token_type, str) or not token_type:
        raise malformed(f"Missing or invalid '{fields.token_type}' in token response")

    if raw_response.get(fields.expires_in) is None:
        raise malformed(f"Missing '{fields.expires_in}' in token response")
    try:
        expires_in = coerce_expires_in(raw_response[fields.expires_in])
    except ValueError as exc:
        raise malformed(f"Invalid '{fields.expires_in}' in token response: {exc}") from exc

    refresh_token = raw_response.get(fields.refresh_token)
    if refresh_token is not None and not isinstance(refresh_token, str):
        raise malformed(f"Invalid '{fields.refresh_token}' in token response")
    if not refresh_token:
        if adapter.rotates_refresh_token:
            raise malformed(f"Missing '{fields.refresh_token}' in token response")
        refresh_token = None
        if request.grant_type is GrantType.REFRESH_TOKEN and request.refresh_token is not None:
            # Non-rotating provider: the current refresh token stays valid.
            refresh_token = request.refresh_token.get_secret_value()

    try:
        metadata = dict(adapter.metadata_extractor(raw_response, request))
    except Exception as exc:
        raise malformed(f"Could not extract provider metadata: {exc}") from exc

    return OAuthResult(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type=token_type,
        expires_in=expires_in,
        metadata=metadata,
    )


class ResultNormalizer:
    """Maps raw provider responses to :class:`OAuthResult` by provider id."""

    def __init__(self, registry: ProviderRegistry):
        self.registry = registry

    def normalize(
        self, provider_id: str, raw_response: Any, request: ExchangeRequest
    ) -> OAuthResult:
        """Normalize ``raw_response`` for ``provider_id``.

        Raises:
            UnknownProvider: If ``provider_id`` is not registered.
            MalformedResponse: If a required field is absent or has the wrong shape.
        """
        adapter = self.registry.lookup(provider_id)
        result = normalize_response(adapter, raw_response, request)
        logger.debug(
            f"Normalized {adapter.provider_id} token response: token_type={result.token_type}, "
            f"expires_in={result.expires_in}, metadata_keys={sorted(result.metadata)}"
        )
        return result


__all__ = ["ResultNormalizer", "coerce_expires_in", "normalize_response"]
