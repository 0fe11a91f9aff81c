"""Error taxonomy for the token exchange core.

Every failure of :meth:`TokenExchangeEngine.exchange` is raised as a subclass
of :class:`ExchangeError`. Errors carry the provider id and, when there was an
upstream response, its status code and a redacted copy of its body. Nothing is
retried internally; the caller owns retry policy.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ExchangeErrorKind(str, Enum):
    UNKNOWN_PROVIDER = "UnknownProvider"
    VALIDATION_FAILURE = "ValidationFailure"
    PROVIDER_REJECTED = "ProviderRejected"
    TRANSPORT_FAILURE = "TransportFailure"
    MALFORMED_RESPONSE = "MalformedResponse"


class ExchangeError(Exception):
    """Base class for all token exchange failures."""

    kind: ExchangeErrorKind

    def __init__(
        self,
        provider_id: str,
        message: str,
        *,
        status_code: int | None = None,
        body: Any = None,
    ):
        super().__init__(f"{provider_id}: {message}")
        self.provider_id = provider_id
        self.message = message
        self.status_code = status_code
        self.body = body

    def to_dict(self) -> dict[str, Any]:
        """Diagnostic view of the error; the body is already redacted."""
        info: dict[str, Any] = {
            "kind": self.kind.value,
            "provider": self.provider_id,
            "message": self.message,
        }
        if self.status_code is not None:
            info["status_code"] = self.status_code
        if self.body is not None:
            info["body"] = self.body
        return info


class UnknownProvider(ExchangeError):
    kind = ExchangeErrorKind.UNKNOWN_PROVIDER

    def __init__(self, provider_id: str):
        super().__init__(provider_id, f"Unknown OAuth provider '{provider_id}'")


class ProviderRejected(ExchangeError):
    """The exchange was refused, either by the provider or by local validation."""

    kind = ExchangeErrorKind.PROVIDER_REJECTED

    def __init__(
        self,
        provider_id: str,
        message: str,
        *,
        error: str | None = None,
        status_code: int | None = None,
        body: Any = None,
    ):
        super().__init__(provider_id, message, status_code=status_code, body=body)
        self.error = error


class ValidationFailure(ProviderRejected):
    """The request was rejected locally before any HTTP call was made."""

    kind = ExchangeErrorKind.VALIDATION_FAILURE

    def __init__(self, provider_id: str, message: str):
        super().__init__(provider_id, message, error="invalid_request")


class TransportFailure(ExchangeError):
    """Network failure or non-2xx status from the token endpoint."""

    kind = ExchangeErrorKind.TRANSPORT_FAILURE


class MalformedResponse(ExchangeError):
    """The token endpoint answered 2xx but the payload could not be normalized."""

    kind = ExchangeErrorKind.MALFORMED_RESPONSE


__all__ = [
    "ExchangeError",
    "ExchangeErrorKind",
    "MalformedResponse",
    "ProviderRejected",
    "TransportFailure",
    "UnknownProvider",
    "ValidationFailure",
]
