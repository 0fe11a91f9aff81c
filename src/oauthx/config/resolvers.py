"""Resolution of ``${VAR_NAME}`` references in configuration values."""

import logging
import os
import re
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)


class EnvResolver:
    """Resolver for environment variable references like ``${VAR_NAME}``.

    References may be embedded in a longer string
    (``https://${TENANT}.example.com/token``). A reference to an unset
    variable is an error rather than an empty string.
    """

    ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z0-9_]+)\}")

    def __init__(self, environ: Mapping[str, str] | None = None):
        self._environ = os.environ if environ is None else environ

    @property
    def name(self) -> str:
        return "env"

    def can_resolve(self, reference: str) -> bool:
        return self.ENV_VAR_PATTERN.search(reference) is not None

    def resolve(self, reference: str) -> str:
        def substitute(match: re.Match[str]) -> str:
            var_name = match.group(1)
            value = self._environ.get(var_name)
            if value is None:
                raise ValueError(f"Environment variable not found: {var_name}")
            return value

        return self.ENV_VAR_PATTERN.sub(substitute, reference)

    def resolve_tree(self, value: Any) -> Any:
        """Resolve references in every string of a YAML-loaded structure."""
        if isinstance(value, dict):
            return {key: self.resolve_tree(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self.resolve_tree(item) for item in value]
        if isinstance(value, str) and self.can_resolve(value):
            return self.resolve(value)
        return value
