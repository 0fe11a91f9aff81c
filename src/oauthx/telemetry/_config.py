"""Telemetry configuration for oauthx.

This module is the only place that configures OpenTelemetry providers and
exporters; the rest of the package uses :func:`oauthx.telemetry.traced_operation`.
"""

import logging
from dataclasses import dataclass
from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
)

from oauthx.version import PACKAGE_NAME, PACKAGE_VERSION

logger = logging.getLogger(__name__)

_telemetry_enabled = False


@dataclass
class TelemetryConfig:
    """Configuration for telemetry."""

    enabled: bool = False
    endpoint: str | None = None
    service_name: str = PACKAGE_NAME
    service_version: str = PACKAGE_VERSION
    environment: str = "development"
    headers: dict[str, str] | None = None
    console_export: bool = False

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "TelemetryConfig":
        """Create config from the ``telemetry`` section of the config file."""
        return cls(
            enabled=config.get("enabled", False),
            endpoint=config.get("endpoint"),
            service_name=config.get("service_name") or PACKAGE_NAME,
            service_version=config.get("service_version") or PACKAGE_VERSION,
            environment=config.get("environment") or "development",
            headers=config.get("headers"),
            console_export=config.get("console_export", False),
        )


def configure_telemetry(config: TelemetryConfig | None = None, **kwargs: Any) -> None:
    """Configure OpenTelemetry tracing for oauthx.

    Examples:
        configure_telemetry(TelemetryConfig(enabled=True, endpoint="http://localhost:4318"))
        configure_telemetry(enabled=True, console_export=True)
    """
    global _telemetry_enabled

    if config is None:
        config = TelemetryConfig(**kwargs)

    if not config.enabled:
        logger.info("Telemetry disabled")
        _telemetry_enabled = False
        return

    resource = Resource.create(
        {
            "service.name": config.service_name,
            "service.version": config.service_version,
            "deployment.environment": config.environment,
        }
    )
    provider = TracerProvider(resource=resource)

    processor: SimpleSpanProcessor | BatchSpanProcessor
    if config.console_export:
        processor = SimpleSpanProcessor(ConsoleSpanExporter())
    elif config.endpoint:
        exporter = OTLPSpanExporter(
            endpoint=f"{config.endpoint}/v1/traces", headers=config.headers or {}
        )
        processor = BatchSpanProcessor(exporter)
    else:
        logger.warning("Telemetry enabled but no endpoint configured")
        _telemetry_enabled = False
        return

    provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)
    _telemetry_enabled = True

    logger.info(f"Telemetry configured with {type(processor).__name__}")


def shutdown_telemetry() -> None:
    """Flush and shut down the tracer provider, if it supports it."""
    global _telemetry_enabled

    provider = trace.get_tracer_provider()
    if hasattr(provider, "shutdown"):
        provider.shutdown()
    _telemetry_enabled = False


def is_telemetry_enabled() -> bool:
    """Check if telemetry is currently enabled."""
    return _telemetry_enabled
