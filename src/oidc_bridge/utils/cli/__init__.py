"""CLI utility functions.

Re-exports helpers for convenient importing.
"""

from .helpers import load_config_or_exit, resolve_config_path

__all__ = [
    "load_config_or_exit",
    "resolve_config_path",
]
