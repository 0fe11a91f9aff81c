"""Contracts and shared types for the token exchange core."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Protocol, runtime_checkable

from pydantic import Field, SecretStr

from oauthx.models import OAuthxBaseModel

DEFAULT_TIMEOUT = 30.0


class GrantType(str, Enum):
    """OAuth2 grant types supported by the exchange engine."""

    AUTHORIZATION_CODE = "authorization_code"
    REFRESH_TOKEN = "refresh_token"


class ContentType(str, Enum):
    """Encoding of the token request body."""

    FORM = "application/x-www-form-urlencoded"
    JSON = "application/json"

    @classmethod
    def parse(cls, value: str | ContentType) -> ContentType:
        """Accept either the short name (``form``/``json``) or the MIME type."""
        if isinstance(value, ContentType):
            return value
        short = {"form": cls.FORM, "json": cls.JSON}
        if value in short:
            return short[value]
        return cls(value)


class ExchangeRequest(OAuthxBaseModel):
    """A single token exchange request.

    Secrets are held as ``SecretStr`` so the request can be logged or put in
    an exception message without leaking them. ``metadata`` carries free-form
    provider context such as Quickbooks' ``realmId``.
    """

    client_id: str
    client_secret: SecretStr
    grant_type: GrantType = GrantType.REFRESH_TOKEN
    code: SecretStr | None = None
    redirect_uri: str | None = None
    refresh_token: SecretStr | None = None
    scope: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def for_refresh(
        cls,
        *,
        client_id: str,
        client_secret: str,
        refresh_token: str,
        scope: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> ExchangeRequest:
        return cls(
            client_id=client_id,
            client_secret=SecretStr(client_secret),
            grant_type=GrantType.REFRESH_TOKEN,
            refresh_token=SecretStr(refresh_token),
            scope=scope,
            metadata=dict(metadata or {}),
        )

    @classmethod
    def for_authorization_code(
        cls,
        *,
        client_id: str,
        client_secret: str,
        code: str,
        redirect_uri: str,
        scope: str | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> ExchangeRequest:
        return cls(
            client_id=client_id,
            client_secret=SecretStr(client_secret),
            grant_type=GrantType.AUTHORIZATION_CODE,
            code=SecretStr(code),
            redirect_uri=redirect_uri,
            scope=scope,
            metadata=dict(metadata or {}),
        )

    def secret_values(self) -> list[str]:
        """Plain-text secrets carried by this request, for redaction."""
        values = [self.client_secret.get_secret_value()]
        for secret in (self.code, self.refresh_token):
            if secret is not None:
                values.append(secret.get_secret_value())
        return [value for value in values if value]

    def field_value(self, source: str) -> Any:
        """Resolve a request-field source used by adapter field mappings.

        Sources are attribute names (``client_id``, ``code``, ``redirect_uri``,
        ``refresh_token``, ``scope``) or ``metadata.<key>``. Unset sources
        resolve to ``None``.
        """
        if source.startswith("metadata."):
            return self.metadata.get(source.removeprefix("metadata."))
        if source not in REQUEST_FIELD_SOURCES:
            raise ValueError(f"Unknown request field source: {source}")
        value = getattr(self, source)
        if isinstance(value, SecretStr):
            return value.get_secret_value()
        return value


REQUEST_FIELD_SOURCES = frozenset({"client_id", "code", "redirect_uri", "refresh_token", "scope"})


class OAuthResult(OAuthxBaseModel):
    """Normalized token response returned to the caller."""

    access_token: str
    refresh_token: str | None = None
    token_type: str
    expires_in: int = Field(ge=0)
    metadata: dict[str, Any] = Field(default_factory=dict)

    def __repr__(self) -> str:
        return (
            f"OAuthResult(token_type={self.token_type!r}, expires_in={self.expires_in}, "
            f"has_refresh_token={self.refresh_token is not None}, metadata={self.metadata!r})"
        )

    __str__ = __repr__


class TransportResponse(OAuthxBaseModel):
    """What the transport hands back for a completed HTTP exchange."""

    status_code: int
    body: Any = None
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class TransportError(Exception):
    """Network-level failure raised by a transport (timeout, DNS, reset...)."""


@runtime_checkable
class Transport(Protocol):
    """Narrow HTTP contract the engine depends on."""

    async def post(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        body: Mapping[str, Any],
        content_type: ContentType,
        timeout: float,
    ) -> TransportResponse:
        """POST ``body`` to ``url``; raise :class:`TransportError` on network failure."""
        ...


__all__ = [
    "DEFAULT_TIMEOUT",
    "ContentType",
    "ExchangeRequest",
    "GrantType",
    "OAuthResult",
    "REQUEST_FIELD_SOURCES",
    "Transport",
    "TransportError",
    "TransportResponse",
]
