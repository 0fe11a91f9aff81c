"""Configuration loader for oauthx.

The configuration file is optional. When no path is given the loader looks,
in order, at:

1. the ``OAUTHX_CONFIG`` environment variable
2. ``~/.oauthx/config.yml``
3. ``./oauthx.yml``

and falls back to the defaults when none exists.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .models import OAuthxConfigModel
from .resolvers import EnvResolver

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "OAUTHX_CONFIG"


def find_config_path() -> Path | None:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    for candidate in (Path.home() / ".oauthx" / "config.yml", Path.cwd() / "oauthx.yml"):
        if candidate.exists():
            return candidate
    return None


def load_config(
    config_path: Path | None = None, resolver: EnvResolver | None = None
) -> OAuthxConfigModel:
    """Load and validate the oauthx configuration file.

    Args:
        config_path: Explicit path; if omitted, see :func:`find_config_path`.
        resolver: Resolver for ``${VAR}`` references; defaults to the process env.

    Raises:
        FileNotFoundError: If an explicit (or ``OAUTHX_CONFIG``) path does not exist.
        ValueError: If the file is not valid YAML, references an unset
            environment variable, or fails validation.
    """
    if config_path is None:
        config_path = find_config_path()
        if config_path is None:
            logger.info("No oauthx config file found, using defaults")
            return OAuthxConfigModel()

    if not config_path.exists():
        raise FileNotFoundError(f"oauthx config file not found at {config_path}")

    logger.debug(f"Loading oauthx config from: {config_path}")

    try:
        with open(config_path) as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML config file {config_path}: {e}") from e

    if not raw_config:
        logger.info("Empty oauthx config file, using defaults")
        return OAuthxConfigModel()

    return parse_config(raw_config, resolver=resolver, source=str(config_path))


def parse_config(
    raw_config: Any, resolver: EnvResolver | None = None, source: str = "<config>"
) -> OAuthxConfigModel:
    """Validate an already-loaded configuration mapping."""
    if not isinstance(raw_config, dict):
        raise ValueError(f"Invalid oauthx config in {source}: expected a mapping")

    resolved = (resolver or EnvResolver()).resolve_tree(raw_config)
    try:
        return OAuthxConfigModel.model_validate(resolved)
    except ValidationError as e:
        raise ValueError(f"Invalid oauthx config in {source}: {e}") from e
