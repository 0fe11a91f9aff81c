import click

from oauthx.cli.exchange import exchange, payload
from oauthx.cli.providers import list_providers


@click.group(invoke_without_command=True)
@click.version_option(package_name="oauthx")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """oauthx - OAuth2 token exchange CLI"""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(list_providers)
cli.add_command(exchange)
cli.add_command(payload)


if __name__ == "__main__":
    cli()
