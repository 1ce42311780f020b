"""Command-line interface for oidc-bridge."""

from .main import cli, main

__all__ = ["cli", "main"]
