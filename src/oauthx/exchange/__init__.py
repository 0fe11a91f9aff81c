"""OAuth token exchange core.

Provider-agnostic exchange of authorization codes and refresh tokens with
pluggable, declarative per-provider adapters.

## Quick Example

```python
from oauthx.exchange import ExchangeRequest, TokenExchangeEngine

engine = TokenExchangeEngine()
result = await engine.exchange(
    "quickbooks",
    ExchangeRequest.for_authorization_code(
        client_id="cid",
        client_secret="secret",
        code="auth-code",
        redirect_uri="https://app.example.com/callback",
        metadata={"realmId": "123"},
    ),
)
result.metadata["realmId"]  # "123"
```
"""

from .adapter import (
    GrantMapping,
    MetadataExtractor,
    ProviderAdapter,
    ResponseFieldMapping,
    declared_metadata,
    default_grant,
    no_metadata,
)
from .auth_strategies import AuthStrategy, AuthStrategyTag, BasicHeader, BodyCredentials, strategy_for
from .contracts import (
    DEFAULT_TIMEOUT,
    ContentType,
    ExchangeRequest,
    GrantType,
    OAuthResult,
    Transport,
    TransportError,
    TransportResponse,
)
from .engine import TokenExchangeEngine, TokenRequest, build_token_request, validate_request
from .errors import (
    ExchangeError,
    ExchangeErrorKind,
    MalformedResponse,
    ProviderRejected,
    TransportFailure,
    UnknownProvider,
    ValidationFailure,
)
from .normalizer import ResultNormalizer, coerce_expires_in, normalize_response
from .payloads import PayloadOperation, render_oauth_response, run_payload
from .providers import BUILTIN_PROVIDERS
from .registry import ProviderRegistry, default_registry
from .transport import HttpxTransport

__all__ = [
    # Engine
    "TokenExchangeEngine",
    "TokenRequest",
    "build_token_request",
    "validate_request",
    # Contracts
    "DEFAULT_TIMEOUT",
    "ContentType",
    "ExchangeRequest",
    "GrantType",
    "OAuthResult",
    "Transport",
    "TransportError",
    "TransportResponse",
    "HttpxTransport",
    # Adapters and registry
    "BUILTIN_PROVIDERS",
    "GrantMapping",
    "MetadataExtractor",
    "ProviderAdapter",
    "ProviderRegistry",
    "ResponseFieldMapping",
    "declared_metadata",
    "default_grant",
    "default_registry",
    "no_metadata",
    # Auth strategies
    "AuthStrategy",
    "AuthStrategyTag",
    "BasicHeader",
    "BodyCredentials",
    "strategy_for",
    # Normalization
    "ResultNormalizer",
    "coerce_expires_in",
    "normalize_response",
    # Platform payloads
    "PayloadOperation",
    "render_oauth_response",
    "run_payload",
    # Errors
    "ExchangeError",
    "ExchangeErrorKind",
    "MalformedResponse",
    "ProviderRejected",
    "TransportFailure",
    "UnknownProvider",
    "ValidationFailure",
]
