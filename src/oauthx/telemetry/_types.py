"""Type definitions for oauthx telemetry."""

from enum import Enum
from typing import Any, Protocol


class StatusCode(Enum):
    """Span status codes."""

    UNSET = 0
    OK = 1
    ERROR = 2


class Status:
    """Span status: a status code plus an optional description."""

    def __init__(self, status_code: StatusCode, description: str | None = None):
        self.status_code = status_code
        self.description = description


class SpanKind(Enum):
    """Relationship of a span to other spans.

    Token requests leave the process, so the exchange engine uses CLIENT.
    """

    INTERNAL = 0
    SERVER = 1
    CLIENT = 2


class Span(Protocol):
    """Minimal span interface used by oauthx code."""

    def set_attribute(self, key: str, value: Any) -> None:
        """Set an attribute on the span."""
        ...

    def set_status(self, status: Status) -> None:
        """Set the span status."""
        ...

    def record_exception(self, exception: Exception) -> None:
        """Record an exception on the span."""
        ...

    def is_recording(self) -> bool:
        """Return True if the span records data."""
        ...
