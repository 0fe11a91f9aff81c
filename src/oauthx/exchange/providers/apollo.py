"""Apollo.io token refresh."""

from ..adapter import ProviderAdapter, default_grant
from ..auth_strategies import AuthStrategyTag
from ..contracts import ContentType, GrantType

APOLLO_TOKEN_URL = "https://app.apollo.io/api/v1/oauth/token"

APOLLO = ProviderAdapter(
    provider_id="apollo",
    display_name="Apollo",
    token_url=APOLLO_TOKEN_URL,
    content_type=ContentType.FORM,
    auth_strategy=AuthStrategyTag.BODY_CREDENTIALS,
    grants=(default_grant(GrantType.REFRESH_TOKEN),),
)
