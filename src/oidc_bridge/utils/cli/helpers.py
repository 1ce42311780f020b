"""Shared helpers for CLI commands."""

from __future__ import annotations

__all__ = [
    "load_config_or_exit",
    "resolve_config_path",
]

from pathlib import Path

import click

from oidc_bridge.config import AppConfig, get_config_path


def resolve_config_path(path: Path | None) -> Path:
    """Explicit --config path, or the OS default location."""
    return path if path is not None else get_config_path()


def load_config_or_exit(path: Path | None) -> AppConfig:
    """Load configuration, exiting on failure.

    Args:
        path: Value of the --config option (None for the default location).

    Returns:
        Loaded AppConfig.

    Raises:
        click.ClickException: If config not found or invalid.
    """
    config_path = resolve_config_path(path)

    if not config_path.exists():
        raise click.ClickException(
            f"Configuration not found at {config_path}\n" "Pass --config PATH to use another file."
        )

    try:
        return AppConfig.load_from_files(config_path)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Failed to load configuration: {e}") from e
