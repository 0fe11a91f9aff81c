"""Client authentication strategies for token endpoint requests.

A strategy turns client credentials into request headers and/or body fields.
Strategies are pure: no I/O and no state.
"""

from __future__ import annotations

import base64
from enum import Enum
from typing import Protocol


class AuthStrategyTag(str, Enum):
    BASIC_HEADER = "basic_header"
    BODY_CREDENTIALS = "body_credentials"


class AuthStrategy(Protocol):
    tag: AuthStrategyTag

    def build(self, client_id: str, client_secret: str) -> tuple[dict[str, str], dict[str, str]]:
        """Return ``(headers, body_fragment)`` for the given credentials."""
        ...


class BasicHeader:
    """HTTP Basic client authentication (RFC 6749 section 2.3.1)."""

    tag = AuthStrategyTag.BASIC_HEADER

    def build(self, client_id: str, client_secret: str) -> tuple[dict[str, str], dict[str, str]]:
        basic = base64.b64encode(f"{client_id}:{client_secret}".encode()).decode()
        return {"Authorization": f"Basic {basic}"}, {}


class BodyCredentials:
    """Client credentials posted as ``client_id``/``client_secret`` body fields."""

    tag = AuthStrategyTag.BODY_CREDENTIALS

    def build(self, client_id: str, client_secret: str) -> tuple[dict[str, str], dict[str, str]]:
        return {}, {"client_id": client_id, "client_secret": client_secret}


_STRATEGIES: dict[AuthStrategyTag, AuthStrategy] = {
    AuthStrategyTag.BASIC_HEADER: BasicHeader(),
    AuthStrategyTag.BODY_CREDENTIALS: BodyCredentials(),
}


def strategy_for(tag: AuthStrategyTag | str) -> AuthStrategy:
    """Resolve a strategy tag (enum member or its string value)."""
    return _STRATEGIES[AuthStrategyTag(tag)]


__all__ = [
    "AuthStrategy",
    "AuthStrategyTag",
    "BasicHeader",
    "BodyCredentials",
    "strategy_for",
]
