"""Claims command group for oidc-bridge CLI.

Runs the claim extractor from a shell, for checking translation tables and
custom scopes before deploying them.
"""

from __future__ import annotations

__all__ = ["claims"]

import json
from pathlib import Path
from typing import IO

import click

from oidc_bridge.claims.extractor import ClaimTranslatorExtractor, create_claim_extractor
from oidc_bridge.exceptions import ConfigurationError
from oidc_bridge.utils.cli import load_config_or_exit, resolve_config_path

from ..styling import style_dim, style_header

_config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (default: OS config location; built-in claims if absent)",
)


def _load_extractor(config_path: Path | None) -> ClaimTranslatorExtractor:
    """Extractor from config, or the built-in defaults when no config exists."""
    if config_path is None and not resolve_config_path(None).exists():
        return ClaimTranslatorExtractor.build()

    app_config = load_config_or_exit(config_path)
    try:
        return create_claim_extractor(app_config.oidc)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


@click.group()
def claims() -> None:
    """Claim translation commands."""
    pass


@claims.command("extract")
@click.argument("attributes_json", type=click.File("r", encoding="utf-8"))
@click.option(
    "--scope",
    "-s",
    "scopes",
    multiple=True,
    default=("openid",),
    show_default=True,
    help="Requested scope (repeatable)",
)
@_config_option
def claims_extract(attributes_json: IO[str], scopes: tuple[str, ...], config_path: Path | None) -> None:
    """Print the claims released for ATTRIBUTES_JSON.

    ATTRIBUTES_JSON is a file (or - for stdin) holding a JSON object of
    source attributes, e.g. {"uid": ["u1"], "mail": ["u1@example.org"]}.
    """
    try:
        attributes = json.load(attributes_json)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid attributes JSON: {e}") from e
    if not isinstance(attributes, dict):
        raise click.ClickException("Attributes JSON must be an object of attribute name -> values")

    extractor = _load_extractor(config_path)
    released = extractor.extract(scopes, attributes)
    click.echo(json.dumps(released, indent=2))


@claims.command("sets")
@_config_option
def claims_sets(config_path: Path | None) -> None:
    """List claim sets and the claims each scope releases."""
    extractor = _load_extractor(config_path)

    click.echo(style_header("Claim sets"))
    for scope, claim_set in extractor.claim_sets.items():
        multi = [c for c in claim_set.claims if c in extractor.multi_value_claims]
        suffix = style_dim(f" (multi-valued: {', '.join(multi)})") if multi else ""
        click.echo(f"  {scope}: {', '.join(claim_set.claims)}{suffix}")
