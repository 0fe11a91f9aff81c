"""Default HTTP transport for token requests, built on httpx."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from .contracts import DEFAULT_TIMEOUT, ContentType, TransportError, TransportResponse

logger = logging.getLogger(__name__)


def create_http_client(timeout: float = DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    """Create the async client used for a single token request."""
    return httpx.AsyncClient(follow_redirects=True, timeout=httpx.Timeout(timeout))


class HttpxTransport:
    """Transport that performs one POST per call with a fresh ``httpx.AsyncClient``.

    Network failures (timeouts, DNS errors, resets) are raised as
    :class:`TransportError`. HTTP error statuses are returned, not raised;
    classifying them is the engine's job.
    """

    async def post(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        body: Mapping[str, Any],
        content_type: ContentType,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> TransportResponse:
        request_headers = {**headers, "Content-Type": content_type.value}
        try:
            async with create_http_client(timeout) as client:
                if content_type is ContentType.JSON:
                    resp = await client.post(url, json=dict(body), headers=request_headers)
                else:
                    resp = await client.post(url, data=dict(body), headers=request_headers)
        except httpx.HTTPError as exc:
            logger.warning(f"Token request to {url} failed: {type(exc).__name__}")
            raise TransportError(f"{type(exc).__name__}: {exc}") from exc

        text = resp.text

        try:
            payload: Any = resp.json()
        except ValueError:
            payload = None

        return TransportResponse(status_code=resp.status_code, body=payload, text=text)


__all__ = ["HttpxTransport", "create_http_client"]
