"""Logging utilities and helpers.

This package provides logging infrastructure for oidc-bridge:
- iso_formatter: ISO 8601 timestamp formatting for JSONL logs
- logger_setup: Factory function for creating configured JSONL loggers
- logging_helpers: Event serialization and sensitive ID hashing

Import directly from submodules to avoid circular imports:
    from oidc_bridge.utils.logging.logger_setup import setup_jsonl_logger
"""

__all__: list[str] = []  # Direct submodule imports required (see docstring)
