import click

from oauthx.cli.utils import configure_logging, load_runtime, output_error, output_result


@click.command(name="providers")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Config file path")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
def list_providers(config_path: str | None, json_output: bool, debug: bool) -> None:
    """List the registered OAuth providers.

    \b
    Examples:
        oauthx providers                    # Built-in and configured providers
        oauthx providers --json-output      # Output in JSON format
    """
    configure_logging(debug)

    try:
        _, engine = load_runtime(config_path)
    except (OSError, ValueError) as e:
        output_error(e, json_output, debug)
        return

    rows = [
        {
            "id": adapter.provider_id,
            "name": adapter.name,
            "token_url": adapter.token_url,
            "content_type": adapter.content_type.value,
            "auth_strategy": adapter.auth_strategy.value,
            "grant_types": [grant.value for grant in adapter.grant_types],
            "rotates_refresh_token": adapter.rotates_refresh_token,
        }
        for adapter in engine.registry
    ]

    if json_output:
        output_result(rows, json_output, debug)
        return

    click.echo(f"\n{click.style('OAuth providers', fg='cyan', bold=True)}")
    for row in rows:
        grants = ", ".join(row["grant_types"])
        click.echo(f"  {click.style(row['id'], fg='green')}  {row['name']}")
        click.echo(f"      {row['token_url']}")
        click.echo(f"      {row['auth_strategy']}, {row['content_type']}, grants: {grants}")
