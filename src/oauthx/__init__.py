"""oauthx - provider-agnostic OAuth2 token exchange and refresh."""

from oauthx.exchange import (
    ExchangeError,
    ExchangeRequest,
    GrantType,
    OAuthResult,
    ProviderAdapter,
    ProviderRegistry,
    TokenExchangeEngine,
    default_registry,
)
from oauthx.version import PACKAGE_VERSION as __version__

__all__ = [
    "ExchangeError",
    "ExchangeRequest",
    "GrantType",
    "OAuthResult",
    "ProviderAdapter",
    "ProviderRegistry",
    "TokenExchangeEngine",
    "__version__",
    "default_registry",
]
