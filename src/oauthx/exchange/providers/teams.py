"""Microsoft Teams (Microsoft identity platform v2.0) token refresh."""

from ..adapter import GrantMapping, ProviderAdapter, declared_metadata
from ..auth_strategies import AuthStrategyTag
from ..contracts import ContentType, GrantType

TEAMS_TOKEN_URL = "https://login.microsoftonline.com/common/oauth2/v2.0/token"

# Microsoft requires the scope on every refresh; it is fixed for the Teams integration.
TEAMS_SCOPE = " ".join(
    [
        "Calendars.ReadWrite",
        "Calendars.ReadWrite.Shared",
        "offline_access",
        "Team.Create",
        "Team.ReadBasic.All",
        "Channel.Create",
        "Channel.Delete.All",
        "Channel.ReadBasic.All",
        "ChannelMember.ReadWrite.All",
        "ChannelMessage.ReadWrite",
        "ChannelMessage.UpdatePolicyViolation.All",
        "ChannelSettings.ReadWrite.All",
        "Chat.ManageDeletion.All",
        "Chat.ReadWrite",
        "Chat.ReadWrite.All",
        "Chat.UpdatePolicyViolation.All",
        "ChatMessage.Send",
        "Contacts.ReadWrite",
        "Contacts.ReadWrite.Shared",
        "Mail.ReadWrite.Shared",
        "Mail.Send",
        "Mail.Send.Shared",
        "OnlineMeetings.ReadWrite",
        "TeamsActivity.Send",
        "TeamsTab.Create",
        "TeamsTab.ReadWrite.All",
        "User.ReadWrite.All",
        "VirtualEvent.ReadWrite",
    ]
)

TEAMS = ProviderAdapter(
    provider_id="teams",
    display_name="Microsoft Teams",
    token_url=TEAMS_TOKEN_URL,
    content_type=ContentType.FORM,
    auth_strategy=AuthStrategyTag.BODY_CREDENTIALS,
    grants=(
        GrantMapping(
            grant_type=GrantType.REFRESH_TOKEN,
            body_fields={"refresh_token": "refresh_token"},
            static_fields={"scope": TEAMS_SCOPE},
        ),
    ),
    metadata_extractor=declared_metadata(response_fields=["scope"]),
)
