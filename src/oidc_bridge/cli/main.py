"""Main CLI entry point for oidc-bridge.

Defines the CLI group and registers all subcommands.

Commands:
    claims    - Claim translation (extract, sets)
    config    - Configuration management (path, validate)
    metadata  - Show OIDC provider discovery metadata

Subcommand help:
    oidc-bridge COMMAND -h         Show help for a specific command
"""

from __future__ import annotations

__all__ = ["cli"]

import sys

import click

from oidc_bridge import __version__

from .commands.claims import claims
from .commands.config import config
from .commands.metadata import metadata


class ReorderedGroup(click.Group):
    """Custom group that shows commands before custom help text."""

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        """Add extra help after commands section."""
        formatter.write(
            """
Examples:
  oidc-bridge config validate --config ./config.json
  oidc-bridge claims sets
  oidc-bridge claims extract attributes.json --scope openid --scope profile
  echo '{"uid": ["u1"]}' | oidc-bridge claims extract - --scope openid
"""
        )


@click.group(
    cls=ReorderedGroup,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.pass_context
def cli(ctx: click.Context, version: bool) -> None:
    """oidc-bridge: SAML attribute to OIDC claim bridge."""
    if version:
        click.echo(f"oidc-bridge {__version__}")
        sys.exit(0)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Register commands
cli.add_command(claims)
cli.add_command(config)
cli.add_command(metadata)


def main() -> None:
    """CLI entry point."""
    cli()
