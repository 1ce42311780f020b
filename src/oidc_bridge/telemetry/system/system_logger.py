"""System logger for operational events.

This module provides a singleton system logger for operational events that
aren't part of the audit trail (e.g., claim set registration, filter chain
construction, repository failures).

Logging strategy:
- Console (stderr): ALL operational messages (INFO, WARNING, ERROR, CRITICAL)
- File (system.jsonl): Only issues (WARNING, ERROR, CRITICAL) - no INFO to save disk space

The file handler is configured separately via configure_system_logger_file() once
the user's log_dir from config is available.
"""

from __future__ import annotations

__all__ = [
    "ConsoleFormatter",
    "configure_system_logger_file",
    "get_system_logger",
    "set_system_log_level",
]

import logging
import sys
from pathlib import Path

from oidc_bridge.constants import APP_NAME
from oidc_bridge.utils.logging.iso_formatter import ISO8601Formatter
from oidc_bridge.utils.logging.logger_setup import ensure_secure_log_directory


class ConsoleFormatter(logging.Formatter):
    """Human-readable formatter for console output.

    Extracts 'message' or 'event' field from dict messages for cleaner stderr output.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record for human-readable console output.

        Args:
            record: The log record to format.

        Returns:
            str: Formatted log message with level prefix.
        """
        if isinstance(record.msg, dict):
            msg = record.msg.get("message") or record.msg.get("event", "")
            return f"{record.levelname}: {msg}"
        return f"{record.levelname}: {record.getMessage()}"


# Module-level singleton logger
_system_logger: logging.Logger | None = None
_console_handler: logging.Handler | None = None
_file_handler_configured: bool = False


def get_system_logger() -> logging.Logger:
    """Get the singleton system logger instance.

    Creates the logger on first call with stderr handler only.
    File handler is added later via configure_system_logger_file().

    Returns:
        logging.Logger: Configured system logger instance.

    Example:
        >>> logger = get_system_logger()
        >>> logger.warning({"event": "auth_source_unresolved", "client_id": "..."})
    """
    global _system_logger, _console_handler

    if _system_logger is not None:
        return _system_logger

    _system_logger = logging.getLogger(f"{APP_NAME}.system")
    _system_logger.setLevel(logging.INFO)
    _system_logger.propagate = False  # Don't propagate to root logger

    for handler in _system_logger.handlers:
        handler.close()
    _system_logger.handlers.clear()

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.INFO)
    stderr_handler.setFormatter(ConsoleFormatter())
    _system_logger.addHandler(stderr_handler)
    _console_handler = stderr_handler

    return _system_logger


def configure_system_logger_file(log_path: Path) -> None:
    """Configure the system logger's file handler with the user's log path.

    Should be called once after config is loaded. The file handler logs
    WARNING, ERROR, CRITICAL only (persistent issues).

    Args:
        log_path: Path to the system log file.
    """
    global _file_handler_configured

    if _file_handler_configured:
        return

    logger = get_system_logger()

    try:
        ensure_secure_log_directory(log_path)
    except OSError:
        return  # If we can't create log dir, stderr will still work

    file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    file_handler.setLevel(logging.WARNING)
    file_handler.setFormatter(ISO8601Formatter())
    logger.addHandler(file_handler)

    _file_handler_configured = True


def set_system_log_level(level: int) -> None:
    """Set the level of the system logger and its console handler.

    The file handler stays at WARNING; DEBUG output only goes to stderr.

    Args:
        level: logging level (e.g., logging.DEBUG).
    """
    logger = get_system_logger()
    logger.setLevel(level)
    if _console_handler is not None:
        _console_handler.setLevel(level)
