import json
import logging
import os
import traceback
from pathlib import Path
from typing import Any

import click

from oauthx.config import OAuthxConfigModel, build_registry, load_config
from oauthx.exchange import ExchangeError, TokenExchangeEngine
from oauthx.telemetry import TelemetryConfig, configure_telemetry


def get_env_flag(env_var: str, default: bool = False) -> bool:
    """Get a boolean flag from an environment variable.

    Returns:
        True if the variable is set to "1", "true", or "yes" (case insensitive)
    """
    value = os.environ.get(env_var, "").lower()
    return value in ("1", "true", "yes") if value else default


def configure_logging(debug: bool = False) -> None:
    """Configure logging for all modules.

    Args:
        debug: Whether to enable debug logging (also enabled by OAUTHX_DEBUG)
    """
    if not debug:
        debug = get_env_flag("OAUTHX_DEBUG")

    log_level = logging.DEBUG if debug else logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove any existing handlers to avoid duplicate messages
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))
    root_logger.addHandler(handler)

    # httpx logs full request URLs at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)


def load_runtime(
    config_path: str | None, timeout: float | None = None
) -> tuple[OAuthxConfigModel, TokenExchangeEngine]:
    """Load configuration, configure telemetry and build an engine."""
    config = load_config(Path(config_path) if config_path else None)
    if config.telemetry.enabled:
        configure_telemetry(TelemetryConfig.from_dict(config.telemetry.model_dump()))
    engine = TokenExchangeEngine(
        build_registry(config),
        timeout=timeout if timeout is not None else config.transport.timeout,
    )
    return config, engine


def format_error(error: Exception, debug: bool = False) -> dict[str, Any]:
    """Format an error for output.

    Exchange errors contribute their kind, provider and (redacted) upstream
    details.
    """
    error_info: dict[str, Any] = {"error": str(error)}

    if isinstance(error, ExchangeError):
        error_info.update(error.to_dict())
        error_info["error"] = str(error)

    if debug:
        error_info["traceback"] = traceback.format_exc()
        error_info["type"] = error.__class__.__name__

    return error_info


def output_result(result: Any, json_output: bool = False, debug: bool = False) -> None:
    """Output a result in either JSON or human-readable format."""
    if json_output:
        click.echo(json.dumps({"status": "ok", "result": result}, indent=2, default=str))
    elif isinstance(result, list):
        for row in result:
            click.echo(row)
    else:
        click.echo(result)


def output_error(error: Exception, json_output: bool = False, debug: bool = False) -> None:
    """Output an error in either JSON or human-readable format and abort."""
    error_info = format_error(error, debug)

    if json_output:
        click.echo(json.dumps({"status": "error", **error_info}, indent=2, default=str))
    else:
        click.echo(f"Error: {error_info['error']}", err=True)
        if debug and "traceback" in error_info:
            click.echo("\nTraceback:", err=True)
            click.echo(error_info["traceback"], err=True)

    raise click.Abort()
