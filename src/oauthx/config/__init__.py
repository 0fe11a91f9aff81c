"""Configuration loading for oauthx."""

from .loader import CONFIG_ENV_VAR, find_config_path, load_config, parse_config
from .models import (
    OAuthxConfigModel,
    ProviderConfigModel,
    TelemetryConfigModel,
    TransportConfigModel,
)
from .providers import adapter_from_config, build_registry
from .resolvers import EnvResolver

__all__ = [
    "CONFIG_ENV_VAR",
    "EnvResolver",
    "OAuthxConfigModel",
    "ProviderConfigModel",
    "TelemetryConfigModel",
    "TransportConfigModel",
    "adapter_from_config",
    "build_registry",
    "find_config_path",
    "load_config",
    "parse_config",
]
