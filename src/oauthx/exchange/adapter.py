"""Declarative provider adapter descriptors.

A :class:`ProviderAdapter` describes everything the engine needs to talk to one
provider's token endpoint: where to POST, how to authenticate the client, which
request fields go into the body for each grant type, and how to read the
response. Adapters are frozen and built once at start-up.

Example:
    >>> adapter = ProviderAdapter(
    ...     provider_id="acme",
    ...     token_url="https://auth.acme.test/oauth/token",
    ...     auth_strategy=AuthStrategyTag.BASIC_HEADER,
    ...     grants=(GrantMapping(grant_type=GrantType.REFRESH_TOKEN,
    ...                          body_fields={"refresh_token": "refresh_token"}),),
    ... )
    >>> adapter.supports(GrantType.REFRESH_TOKEN)
    True
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any, Literal

from pydantic import Field, field_validator, model_validator

from oauthx.models import OAuthxBaseModel

from .auth_strategies import AuthStrategyTag
from .contracts import REQUEST_FIELD_SOURCES, ContentType, ExchangeRequest, GrantType

MetadataExtractor = Callable[[Mapping[str, Any], ExchangeRequest], dict[str, Any]]


def no_metadata(response: Mapping[str, Any], request: ExchangeRequest) -> dict[str, Any]:
    return {}


def declared_metadata(
    response_fields: Iterable[str] = (),
    request_fields: Iterable[str] = (),
) -> MetadataExtractor:
    """Build an extractor that copies named members into the result metadata.

    ``response_fields`` are read from the token response, ``request_fields``
    from the request's metadata. Members that are absent are left out.
    Request metadata wins when a name appears in both.
    """
    response_fields = tuple(response_fields)
    request_fields = tuple(request_fields)

    def extract(response: Mapping[str, Any], request: ExchangeRequest) -> dict[str, Any]:
        meta: dict[str, Any] = {}
        for name in response_fields:
            if response.get(name) is not None:
                meta[name] = response[name]
        for name in request_fields:
            if request.metadata.get(name) is not None:
                meta[name] = request.metadata[name]
        return meta

    return extract


class GrantMapping(OAuthxBaseModel):
    """Body layout for one grant type.

    ``body_fields`` maps a body key to a request field source (see
    :meth:`ExchangeRequest.field_value`); sources that resolve to ``None`` are
    omitted. ``static_fields`` are sent verbatim. Both are read-only.
    """

    grant_type: GrantType
    body_fields: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    static_fields: Mapping[str, str] = Field(default_factory=dict, validate_default=True)

    @field_validator("body_fields")
    @classmethod
    def _known_sources(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        for body_key, source in value.items():
            if source not in REQUEST_FIELD_SOURCES and not source.startswith("metadata."):
                raise ValueError(f"Unknown request field source '{source}' for '{body_key}'")
        return MappingProxyType(dict(value))

    @field_validator("static_fields")
    @classmethod
    def _freeze_static(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))


def default_grant(grant_type: GrantType) -> GrantMapping:
    """Standard RFC 6749 body layout for a grant type."""
    if grant_type is GrantType.AUTHORIZATION_CODE:
        return GrantMapping(
            grant_type=grant_type,
            body_fields={"code": "code", "redirect_uri": "redirect_uri"},
        )
    return GrantMapping(grant_type=grant_type, body_fields={"refresh_token": "refresh_token"})


class ResponseFieldMapping(OAuthxBaseModel):
    """Response keys read into the normalized result fields."""

    access_token: str = "access_token"
    refresh_token: str = "refresh_token"
    expires_in: str = "expires_in"
    token_type: str = "token_type"


class ProviderAdapter(OAuthxBaseModel):
    """Immutable description of one provider's token endpoint."""

    provider_id: str
    display_name: str | None = None
    token_url: str
    method: Literal["POST"] = "POST"
    content_type: ContentType = ContentType.FORM
    auth_strategy: AuthStrategyTag = AuthStrategyTag.BODY_CREDENTIALS
    grants: tuple[GrantMapping, ...]
    response_fields: ResponseFieldMapping = Field(default_factory=ResponseFieldMapping)
    metadata_extractor: MetadataExtractor = no_metadata
    # Non-rotating providers may omit refresh_token on refresh.
    rotates_refresh_token: bool = True

    @field_validator("provider_id")
    @classmethod
    def _normalize_id(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("provider_id must not be empty")
        return value

    @field_validator("token_url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        if not value.startswith(("https://", "http://")):
            raise ValueError(f"token_url must be an http(s) URL, got '{value}'")
        return value

    @field_validator("content_type", mode="before")
    @classmethod
    def _parse_content_type(cls, value: Any) -> Any:
        return ContentType.parse(value) if isinstance(value, str) else value

    @model_validator(mode="after")
    def _check_grants(self) -> ProviderAdapter:
        if not self.grants:
            raise ValueError(f"Provider '{self.provider_id}' declares no grant types")
        grant_types = [grant.grant_type for grant in self.grants]
        if len(set(grant_types)) != len(grant_types):
            raise ValueError(f"Provider '{self.provider_id}' declares a grant type twice")
        return self

    @property
    def name(self) -> str:
        return self.display_name or self.provider_id

    @property
    def grant_types(self) -> tuple[GrantType, ...]:
        return tuple(grant.grant_type for grant in self.grants)

    def supports(self, grant_type: GrantType) -> bool:
        return grant_type in self.grant_types

    def grant(self, grant_type: GrantType) -> GrantMapping:
        for grant in self.grants:
            if grant.grant_type == grant_type:
                return grant
        raise KeyError(grant_type)


__all__ = [
    "GrantMapping",
    "MetadataExtractor",
    "ProviderAdapter",
    "ResponseFieldMapping",
    "declared_metadata",
    "default_grant",
    "no_metadata",
]
