from typing import Any

import pytest
from pytest import MonkeyPatch

from oauthx.telemetry import (
    NoOpSpan,
    SpanWrapper,
    Status,
    StatusCode,
    TelemetryConfig,
    configure_telemetry,
    is_telemetry_enabled,
    shutdown_telemetry,
    traced_operation,
)


class _RecordingOTelSpan:
    def __init__(self) -> None:
        self.attributes: dict[str, Any] = {}
        self.status: Any = None
        self.exceptions: list[Exception] = []

    def is_recording(self) -> bool:
        return True

    def set_attribute(self, key: str, value: Any) -> None:
        self.attributes[key] = value

    def set_status(self, status: Any) -> None:
        self.status = status

    def record_exception(self, exception: Exception) -> None:
        self.exceptions.append(exception)


def test_disabled_telemetry_yields_noop_span() -> None:
    configure_telemetry(TelemetryConfig(enabled=False))

    with traced_operation("oauthx.test", {"oauthx.provider": "teams"}) as span:
        assert isinstance(span, NoOpSpan)
        assert not span.is_recording()
    assert not is_telemetry_enabled()


def test_enabled_without_endpoint_stays_disabled() -> None:
    configure_telemetry(enabled=True)

    assert not is_telemetry_enabled()


def test_span_wrapper_filters_attribute_types() -> None:
    otel_span = _RecordingOTelSpan()
    span = SpanWrapper(otel_span)

    span.set_attribute("http.status_code", 200)
    span.set_attribute("skipped", None)
    span.set_attribute("grants", ["refresh_token"])

    assert otel_span.attributes == {"http.status_code": 200, "grants": "['refresh_token']"}


def test_span_wrapper_sets_error_status() -> None:
    otel_span = _RecordingOTelSpan()

    SpanWrapper(otel_span).set_status(Status(StatusCode.ERROR, "boom"))

    assert otel_span.status.description == "boom"


def test_exceptions_propagate_through_enabled_span(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr("oauthx.telemetry._tracer.is_telemetry_enabled", lambda: True)

    with pytest.raises(RuntimeError, match="boom"):
        with traced_operation("oauthx.test"):
            raise RuntimeError("boom")


def test_config_from_dict_defaults() -> None:
    config = TelemetryConfig.from_dict({"enabled": True, "endpoint": "http://collector:4318"})

    assert config.service_name == "oauthx"
    assert config.environment == "development"
    assert config.console_export is False


def test_shutdown_disables_telemetry(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr("oauthx.telemetry._config._telemetry_enabled", True)
    assert is_telemetry_enabled()

    shutdown_telemetry()

    assert not is_telemetry_enabled()
    with traced_operation("oauthx.exchange") as span:
        assert isinstance(span, NoOpSpan)
