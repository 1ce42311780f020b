"""Authentication audit logging."""

from oidc_bridge.telemetry.audit.auth_logger import AuthLogger, create_auth_logger

__all__ = [
    "AuthLogger",
    "create_auth_logger",
]
