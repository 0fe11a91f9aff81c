"""Build a provider registry from configuration."""

import logging
from typing import Any

from oauthx.exchange.adapter import (
    GrantMapping,
    ProviderAdapter,
    declared_metadata,
    default_grant,
)
from oauthx.exchange.contracts import GrantType
from oauthx.exchange.registry import ProviderRegistry, default_registry

from .models import OAuthxConfigModel, ProviderConfigModel

logger = logging.getLogger(__name__)

DEFAULT_GRANT_TYPES = [GrantType.AUTHORIZATION_CODE, GrantType.REFRESH_TOKEN]


def _grants(
    existing: tuple[GrantMapping, ...],
    grant_types: list[GrantType] | None,
    static_fields: dict[str, str],
) -> tuple[GrantMapping, ...]:
    by_type = {grant.grant_type: grant for grant in existing}
    wanted = grant_types if grant_types is not None else list(by_type) or DEFAULT_GRANT_TYPES
    grants = []
    for grant_type in wanted:
        grant = by_type.get(grant_type) or default_grant(grant_type)
        if static_fields:
            grant = GrantMapping(
                grant_type=grant.grant_type,
                body_fields=grant.body_fields,
                static_fields={**grant.static_fields, **static_fields},
            )
        grants.append(grant)
    return tuple(grants)


def adapter_from_config(
    provider_id: str, entry: ProviderConfigModel, base: ProviderAdapter | None = None
) -> ProviderAdapter:
    """Apply ``entry`` on top of ``base`` (or build a new adapter when ``base`` is None)."""
    if base is None and not entry.token_url:
        raise ValueError(f"Provider '{provider_id}' is not built in and has no token_url")

    fields: dict[str, Any] = (
        {name: getattr(base, name) for name in ProviderAdapter.model_fields}
        if base is not None
        else {"provider_id": provider_id, "grants": ()}
    )

    for name in ("display_name", "token_url", "content_type", "auth_strategy"):
        value = getattr(entry, name)
        if value is not None:
            fields[name] = value
    if entry.rotates_refresh_token is not None:
        fields["rotates_refresh_token"] = entry.rotates_refresh_token
    if entry.response_fields is not None:
        fields["response_fields"] = entry.response_fields

    static_fields = dict(entry.static_fields or {})
    if entry.scope is not None:
        static_fields["scope"] = entry.scope
    fields["grants"] = _grants(fields["grants"], entry.grant_types, static_fields)

    if entry.response_metadata_fields is not None or entry.request_metadata_fields is not None:
        fields["metadata_extractor"] = declared_metadata(
            response_fields=entry.response_metadata_fields or (),
            request_fields=entry.request_metadata_fields or (),
        )

    return ProviderAdapter(**fields)


def build_registry(
    config: OAuthxConfigModel, base: ProviderRegistry | None = None
) -> ProviderRegistry:
    """Registry of built-in providers plus the overrides and additions in ``config``."""
    base = base or default_registry()
    adapters = []
    for provider_id, entry in config.providers.items():
        key = provider_id.strip().lower()
        existing = base.lookup(key) if key in base else None
        logger.debug(
            f"{'Overriding' if existing else 'Registering'} provider '{key}' from configuration"
        )
        adapters.append(adapter_from_config(key, entry, existing))
    return base.with_adapters(adapters)
