"""Secret redaction for log lines, error messages and upstream bodies."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

REDACTED = "***"

SENSITIVE_KEYS = frozenset(
    {
        "access_token",
        "refresh_token",
        "id_token",
        "client_secret",
        "code",
        "code_verifier",
        "assertion",
        "password",
    }
)


def redact_text(text: str, secrets: Iterable[str]) -> str:
    """Replace every occurrence of each secret in ``text`` with ``***``."""
    # Longest first so a secret containing another is not partially masked.
    for secret in sorted({s for s in secrets if s}, key=len, reverse=True):
        text = text.replace(secret, REDACTED)
    return text


def redact_value(value: Any, secrets: Iterable[str] = ()) -> Any:
    """Return a copy of a JSON-like value with sensitive members masked.

    String members whose key is in :data:`SENSITIVE_KEYS` are replaced by
    ``***``; any other string has known secret values masked. Numeric members
    such as a provider's diagnostic ``code`` are kept.
    """
    secrets = list(secrets)
    if isinstance(value, Mapping):
        return {
            key: (
                REDACTED
                if isinstance(item, str) and str(key).lower() in SENSITIVE_KEYS
                else redact_value(item, secrets)
            )
            for key, item in value.items()
        }
    if isinstance(value, list | tuple):
        return [redact_value(item, secrets) for item in value]
    if isinstance(value, str):
        return redact_text(value, secrets)
    return value
