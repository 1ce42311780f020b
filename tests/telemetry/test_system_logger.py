"""Tests for the system logger and its formatters."""

import io
import json
import logging

from oidc_bridge.telemetry.system.system_logger import (
    ConsoleFormatter,
    get_system_logger,
    set_system_log_level,
)
from oidc_bridge.utils.logging.iso_formatter import ISO8601Formatter


def _record(msg: object, level: int = logging.WARNING) -> logging.LogRecord:
    return logging.LogRecord("test", level, __file__, 1, msg, None, None)


class TestConsoleFormatter:
    def test_dict_message_uses_message_field(self) -> None:
        output = ConsoleFormatter().format(_record({"event": "x", "message": "Something happened"}))

        assert output == "WARNING: Something happened"

    def test_dict_without_message_uses_event(self) -> None:
        assert ConsoleFormatter().format(_record({"event": "user_created"})) == "WARNING: user_created"


class TestISO8601Formatter:
    def test_dict_message_merged(self) -> None:
        data = json.loads(ISO8601Formatter().format(_record({"event": "x", "count": 2})))

        assert data["event"] == "x"
        assert data["count"] == 2
        assert data["level"] == "WARNING"
        assert data["time"].endswith("Z")

    def test_plain_message_wrapped(self) -> None:
        data = json.loads(ISO8601Formatter().format(_record("plain text")))

        assert data["message"] == "plain text"


class TestGetSystemLogger:
    def test_singleton(self) -> None:
        assert get_system_logger() is get_system_logger()
        assert get_system_logger().name == "oidc-bridge.system"


class TestSetSystemLogLevel:
    def test_console_handler_follows_level(self) -> None:
        """Lowering the level also lowers the console handler."""
        logger = get_system_logger()
        console = next(h for h in logger.handlers if type(h) is logging.StreamHandler)
        stream = io.StringIO()
        original = console.setStream(stream)
        try:
            # Act
            set_system_log_level(logging.DEBUG)
            logger.debug({"event": "cache_rebuilt", "message": "debug-visible"})
        finally:
            set_system_log_level(logging.INFO)
            console.setStream(original)

        # Assert
        assert "debug-visible" in stream.getvalue()
