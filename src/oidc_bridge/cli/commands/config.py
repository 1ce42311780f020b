"""Config command group for oidc-bridge CLI.

Provides configuration management subcommands.
"""

from __future__ import annotations

__all__ = ["config"]

import json
import sys
from pathlib import Path

import click

from oidc_bridge.bridge.authproc import create_authproc_service
from oidc_bridge.claims.extractor import create_claim_extractor
from oidc_bridge.config import AppConfig
from oidc_bridge.exceptions import ConfigurationError
from oidc_bridge.utils.cli import resolve_config_path

from ..styling import style_error, style_label, style_success


@click.group()
def config() -> None:
    """Configuration management commands."""
    pass


@config.command("path")
def config_path_cmd() -> None:
    """Show the default config file location."""
    path = resolve_config_path(None)
    status = "" if path.exists() else click.style(" (not found)", dim=True)
    click.echo(f"{style_label('Config')} {path}{status}")


@config.command("validate")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Validate file at this path (default: OS config location)",
)
def config_validate(config_path: Path | None) -> None:
    """Validate configuration file.

    Checks the config file for:
    - Valid JSON syntax
    - Schema validation (required fields, types)
    - Claim sets (duplicate or reserved scope names)
    - Attribute processing filters (known names, valid options)

    Exit codes:
        0: Config is valid
        1: Config is invalid or not found
    """
    config_file_path = resolve_config_path(config_path)

    try:
        app_config = AppConfig.load_from_files(config_file_path)
        create_claim_extractor(app_config.oidc)
        create_authproc_service(app_config.oidc.authproc)
    except json.JSONDecodeError as e:
        click.echo(style_error(f"Invalid JSON: {e}"), err=True)
        sys.exit(1)
    except (FileNotFoundError, ValueError, ConfigurationError) as e:
        click.echo(style_error(str(e)), err=True)
        sys.exit(1)

    click.echo(style_success(f"Config valid: {config_file_path}"))
