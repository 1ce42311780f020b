"""Metadata command for oidc-bridge CLI."""

from __future__ import annotations

__all__ = ["metadata"]

import json
from pathlib import Path

import click

from oidc_bridge.claims.extractor import create_claim_extractor
from oidc_bridge.exceptions import ConfigurationError
from oidc_bridge.metadata import OidcProviderMetadataService
from oidc_bridge.utils.cli import load_config_or_exit


@click.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: OS config location)",
)
def metadata(config_path: Path | None) -> None:
    """Print OIDC provider discovery metadata as JSON."""
    app_config = load_config_or_exit(config_path)
    try:
        extractor = create_claim_extractor(app_config.oidc)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    service = OidcProviderMetadataService(app_config.oidc, extractor.scopes)
    click.echo(json.dumps(service.get_metadata(), indent=2))
