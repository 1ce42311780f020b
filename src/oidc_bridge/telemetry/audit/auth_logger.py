"""Authentication audit logger.

Logs authentication events to audit/auth.jsonl:
- Successful authentications (user created or updated)
- Failed authentications (invalid client, upstream failure,
  missing identifying attribute, repository failure)

User identifiers are hashed before they reach the log file.
"""

from __future__ import annotations

__all__ = [
    "AuthLogger",
    "create_auth_logger",
]

import logging
from pathlib import Path

from oidc_bridge.constants import APP_NAME
from oidc_bridge.telemetry.models.audit import AuthEvent
from oidc_bridge.telemetry.system.system_logger import get_system_logger
from oidc_bridge.utils.logging.logger_setup import setup_jsonl_logger
from oidc_bridge.utils.logging.logging_helpers import (
    hash_auth_event_ids,
    serialize_audit_event,
)


class AuthLogger:
    """Audit logger for authentication events.

    Provides typed methods for logging auth events. A failed write is
    reported on the system logger and does not abort the authentication.

    Usage:
        logger = create_auth_logger(log_path=Path("logs/audit/auth.jsonl"))
        logger.log_authentication_succeeded(subject_id="u1", client_id="app", ...)
    """

    def __init__(self, logger: logging.Logger) -> None:
        """Initialize auth logger.

        Args:
            logger: Configured JSONL logger.
        """
        self._logger = logger

    def _log_event(self, event: AuthEvent) -> bool:
        """Serialize, hash and write one event.

        Returns:
            True if logged, False if the write failed.
        """
        event_data = hash_auth_event_ids(serialize_audit_event(event))
        try:
            self._logger.info(event_data)
        except Exception as e:
            get_system_logger().error(
                {
                    "event": "auth_audit_write_failed",
                    "message": f"Failed to write auth audit event: {e}",
                    "event_type": event.event_type,
                }
            )
            return False
        return True

    def log_authentication_succeeded(
        self,
        *,
        subject_id: str,
        client_id: str | None = None,
        auth_source: str | None = None,
        user_created: bool = False,
        attribute_count: int | None = None,
        message: str | None = None,
    ) -> bool:
        """Log a completed authentication.

        Args:
            subject_id: Resolved user identifier (hashed in output).
            client_id: Relying party that requested authentication.
            auth_source: Upstream auth source that was used.
            user_created: True if this was the first login for the user.
            attribute_count: Number of released source attributes.
            message: Optional human-readable message.

        Returns:
            True if logged successfully.
        """
        event = AuthEvent(
            event_type="authentication_succeeded",
            status="Success",
            subject_id=subject_id,
            client_id=client_id,
            auth_source=auth_source,
            user_created=user_created,
            attribute_count=attribute_count,
            message=message,
        )
        return self._log_event(event)

    def log_authentication_failed(
        self,
        *,
        client_id: str | None = None,
        auth_source: str | None = None,
        error_type: str | None = None,
        error_message: str | None = None,
        message: str | None = None,
    ) -> bool:
        """Log an aborted authentication attempt.

        Args:
            client_id: Relying party that requested authentication, if known.
            auth_source: Upstream auth source, if resolved.
            error_type: Error category (BridgeError.error_type) or class name.
            error_message: Human-readable error description.
            message: Optional human-readable message.

        Returns:
            True if logged successfully.
        """
        event = AuthEvent(
            event_type="authentication_failed",
            status="Failure",
            client_id=client_id,
            auth_source=auth_source,
            error_type=error_type,
            error_message=error_message,
            message=message,
        )
        return self._log_event(event)


def create_auth_logger(log_path: Path) -> AuthLogger:
    """Create an auth audit logger writing to log_path.

    Args:
        log_path: Path to auth.jsonl.

    Returns:
        AuthLogger: Configured logger for authentication events.
    """
    logger = setup_jsonl_logger(f"{APP_NAME}.audit.auth", log_path, log_level=logging.INFO)
    return AuthLogger(logger)
