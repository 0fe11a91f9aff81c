"""oauthx telemetry - a thin OpenTelemetry wrapper.

Quick Start:
    ```python
    from oauthx.telemetry import TelemetryConfig, configure_telemetry, traced_operation

    configure_telemetry(TelemetryConfig(enabled=True, endpoint="http://localhost:4318"))

    with traced_operation("oauthx.exchange", {"oauthx.provider": "teams"}) as span:
        span.set_attribute("http.status_code", 200)
    ```

Token values and client secrets are never attached to spans.
"""

from ._config import (
    TelemetryConfig,
    configure_telemetry,
    is_telemetry_enabled,
    shutdown_telemetry,
)
from ._tracer import NoOpSpan, SpanWrapper, traced_operation
from ._types import Span, SpanKind, Status, StatusCode

__all__ = [
    "NoOpSpan",
    "Span",
    "SpanKind",
    "SpanWrapper",
    "Status",
    "StatusCode",
    "TelemetryConfig",
    "configure_telemetry",
    "is_telemetry_enabled",
    "shutdown_telemetry",
    "traced_operation",
]
