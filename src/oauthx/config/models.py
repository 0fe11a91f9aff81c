"""Pydantic models for the oauthx configuration file.

Example ``oauthx.yml``::

    oauthx: 1
    transport:
      timeout: 15
    telemetry:
      enabled: true
      endpoint: ${OTEL_ENDPOINT}
    providers:
      teams:
        token_url: ${TEAMS_TOKEN_URL}
      acme:
        token_url: https://auth.acme.test/oauth/token
        auth_strategy: basic_header
        content_type: json
        grant_types: [refresh_token]
        response_metadata_fields: [scope]
        rotates_refresh_token: false

## Security-relevant fields

- ``token_url``: where client secrets are sent.
- ``auth_strategy``: whether secrets travel in a header or in the body.
- ``scope``: permissions requested from the provider on every exchange.
"""

from typing import Literal

from pydantic import ConfigDict, Field

from oauthx.exchange.adapter import ResponseFieldMapping
from oauthx.exchange.auth_strategies import AuthStrategyTag
from oauthx.exchange.contracts import DEFAULT_TIMEOUT, GrantType
from oauthx.models import OAuthxBaseModel


class TransportConfigModel(OAuthxBaseModel):
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)


class TelemetryConfigModel(OAuthxBaseModel):
    """OpenTelemetry tracing settings."""

    enabled: bool = False
    endpoint: str | None = None
    console_export: bool = False
    service_name: str | None = None
    environment: str | None = None
    headers: dict[str, str] | None = None


class ProviderConfigModel(OAuthxBaseModel):
    """Override of a built-in provider, or definition of a new one.

    Unset fields keep the built-in value. A new provider must set ``token_url``.
    """

    display_name: str | None = None
    token_url: str | None = None
    content_type: Literal["form", "json"] | None = None
    auth_strategy: AuthStrategyTag | None = None
    grant_types: list[GrantType] | None = None
    scope: str | None = None
    static_fields: dict[str, str] | None = None
    response_fields: ResponseFieldMapping | None = None
    response_metadata_fields: list[str] | None = None
    request_metadata_fields: list[str] | None = None
    rotates_refresh_token: bool | None = None


class OAuthxConfigModel(OAuthxBaseModel):
    """Top-level configuration file."""

    # Override frozen=True so the CLI can apply command-line overrides
    model_config = ConfigDict(extra="forbid", frozen=False)

    oauthx: Literal[1] = 1
    transport: TransportConfigModel = Field(default_factory=TransportConfigModel)
    telemetry: TelemetryConfigModel = Field(default_factory=TelemetryConfigModel)
    providers: dict[str, ProviderConfigModel] = Field(default_factory=dict)
