"""Intuit Quickbooks Online token exchange.

Intuit authenticates the client with HTTP Basic and never echoes the company
id back from the token endpoint: ``realmId`` arrives on the OAuth callback
and is carried through in the request metadata.
"""

from ..adapter import ProviderAdapter, declared_metadata, default_grant
from ..auth_strategies import AuthStrategyTag
from ..contracts import ContentType, GrantType

QUICKBOOKS_TOKEN_URL = "https://oauth.platform.intuit.com/oauth2/v1/tokens/bearer"

QUICKBOOKS = ProviderAdapter(
    provider_id="quickbooks",
    display_name="Quickbooks",
    token_url=QUICKBOOKS_TOKEN_URL,
    content_type=ContentType.FORM,
    auth_strategy=AuthStrategyTag.BASIC_HEADER,
    grants=(
        default_grant(GrantType.AUTHORIZATION_CODE),
        default_grant(GrantType.REFRESH_TOKEN),
    ),
    metadata_extractor=declared_metadata(request_fields=["realmId"]),
)
