"""Tests for the authentication audit logger.

Verifies behavior through actual JSONL output in temp directories.
"""

import json
import logging
from pathlib import Path
from unittest.mock import Mock, patch

from oidc_bridge.telemetry.audit.auth_logger import AuthLogger, create_auth_logger
from oidc_bridge.utils.logging.logging_helpers import hash_sensitive_id


def _read_events(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text().splitlines()]


class TestAuthLogger:
    """Tests for AuthLogger JSONL output."""

    def test_success_event_written_with_hashed_subject(self, tmp_path: Path) -> None:
        # Arrange
        log_path = tmp_path / "audit" / "auth.jsonl"
        logger = create_auth_logger(log_path)

        # Act
        logged = logger.log_authentication_succeeded(
            subject_id="u1@example.org",
            client_id="app",
            auth_source="default-sp",
            user_created=True,
            attribute_count=3,
        )

        # Assert
        assert logged is True
        (event,) = _read_events(log_path)
        assert event["event_type"] == "authentication_succeeded"
        assert event["status"] == "Success"
        assert event["subject_id"] == hash_sensitive_id("u1@example.org")
        assert event["client_id"] == "app"
        assert event["user_created"] is True
        assert event["attribute_count"] == 3
        assert event["time"].endswith("Z")

    def test_failure_event_omits_unset_fields(self, tmp_path: Path) -> None:
        log_path = tmp_path / "auth.jsonl"
        logger = create_auth_logger(log_path)

        logger.log_authentication_failed(
            client_id="app",
            error_type="invalid_client",
            error_message="Client 'app' is disabled",
        )

        (event,) = _read_events(log_path)
        assert event["status"] == "Failure"
        assert event["error_type"] == "invalid_client"
        assert "subject_id" not in event
        assert "user_created" not in event

    def test_write_failure_reported_not_raised(self) -> None:
        """A failing handler returns False and reports on the system logger."""
        broken = Mock(spec=logging.Logger)
        broken.info.side_effect = OSError("disk full")
        system_logger = Mock()

        with patch(
            "oidc_bridge.telemetry.audit.auth_logger.get_system_logger",
            return_value=system_logger,
        ):
            logged = AuthLogger(broken).log_authentication_failed(error_type="x")

        assert logged is False
        assert system_logger.error.call_args.args[0]["event"] == "auth_audit_write_failed"


class TestHashSensitiveId:
    def test_deterministic_prefix(self) -> None:
        assert hash_sensitive_id("u1") == hash_sensitive_id("u1")
        assert hash_sensitive_id("u1").startswith("sha256:")
        assert len(hash_sensitive_id("u1")) == len("sha256:") + 8

    def test_empty(self) -> None:
        assert hash_sensitive_id("") == "sha256:empty"
