import asyncio
import json
from typing import Any

import click
from pydantic import SecretStr

from oauthx.cli.utils import configure_logging, load_runtime, output_error, output_result
from oauthx.exchange import ExchangeError, ExchangeRequest, GrantType
from oauthx.exchange.payloads import PayloadOperation, run_payload
from oauthx.telemetry import shutdown_telemetry


def _parse_meta(values: tuple[str, ...]) -> dict[str, Any]:
    meta: dict[str, Any] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got '{item}'", param_hint="--meta")
        meta[key] = value
    return meta


@click.command(name="exchange")
@click.argument("provider")
@click.option(
    "--grant-type",
    type=click.Choice([grant.value for grant in GrantType]),
    help="Grant type (defaults to authorization_code when --code is given, else refresh_token)",
)
@click.option("--client-id", envvar="OAUTHX_CLIENT_ID", required=True, help="OAuth client id")
@click.option(
    "--client-secret",
    envvar="OAUTHX_CLIENT_SECRET",
    required=True,
    help="OAuth client secret (or OAUTHX_CLIENT_SECRET)",
)
@click.option("--code", help="Authorization code")
@click.option("--redirect-uri", help="Redirect URI used to obtain the code")
@click.option("--refresh-token", envvar="OAUTHX_REFRESH_TOKEN", help="Refresh token")
@click.option("--scope", help="Scope to request, where the provider accepts one")
@click.option("--meta", multiple=True, help="Request metadata as KEY=VALUE (repeatable)")
@click.option("--timeout", type=float, help="Request timeout in seconds")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Config file path")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def exchange(
    provider: str,
    grant_type: str | None,
    client_id: str,
    client_secret: str,
    code: str | None,
    redirect_uri: str | None,
    refresh_token: str | None,
    scope: str | None,
    meta: tuple[str, ...],
    timeout: float | None,
    config_path: str | None,
    json_output: bool,
    debug: bool,
) -> None:
    """Exchange an authorization code or refresh token with PROVIDER.

    \b
    Examples:
        oauthx exchange apollo --client-id ID --client-secret S --refresh-token RT
        oauthx exchange quickbooks --client-id ID --client-secret S \\
            --code CODE --redirect-uri https://app/callback --meta realmId=123
    """
    configure_logging(debug)

    metadata = _parse_meta(meta)
    resolved_grant = GrantType(grant_type) if grant_type else (
        GrantType.AUTHORIZATION_CODE if code else GrantType.REFRESH_TOKEN
    )

    try:
        _, engine = load_runtime(config_path, timeout)
        request = ExchangeRequest(
            client_id=client_id,
            client_secret=SecretStr(client_secret),
            grant_type=resolved_grant,
            code=SecretStr(code) if code else None,
            redirect_uri=redirect_uri,
            refresh_token=SecretStr(refresh_token) if refresh_token else None,
            scope=scope,
            metadata=metadata,
        )
        result = asyncio.run(engine.exchange(provider, request))
    except (ExchangeError, OSError, ValueError) as e:
        output_error(e, json_output, debug)
        return
    finally:
        # Flush batched spans before the process exits
        shutdown_telemetry()

    output_result(result.model_dump(), json_output, debug)


@click.command(name="payload")
@click.argument("provider")
@click.argument("operation", type=click.Choice([op.value for op in PayloadOperation]))
@click.argument("payload_file", type=click.File("r"), default="-")
@click.option("--timeout", type=float, help="Request timeout in seconds")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Config file path")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def payload(
    provider: str,
    operation: str,
    payload_file: Any,
    timeout: float | None,
    config_path: str | None,
    debug: bool,
) -> None:
    """Run a platform init/refresh PAYLOAD_FILE (JSON, '-' for stdin) against PROVIDER.

    Prints the camelCase response (accessToken, refreshToken, expiresIn,
    tokenType, meta).

    \b
    Examples:
        oauthx payload teams refresh body.json
        cat init.json | oauthx payload quickbooks init
    """
    configure_logging(debug)

    try:
        body = json.load(payload_file)
    except json.JSONDecodeError as e:
        output_error(ValueError(f"Payload is not valid JSON: {e}"), True, debug)
        return

    try:
        _, engine = load_runtime(config_path, timeout)
        response = asyncio.run(run_payload(engine, provider, operation, body))
    except (ExchangeError, OSError, ValueError) as e:
        output_error(e, True, debug)
        return
    finally:
        # Flush batched spans before the process exits
        shutdown_telemetry()

    click.echo(json.dumps(response, indent=2))


__all__ = ["exchange", "payload"]
