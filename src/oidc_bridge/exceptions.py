"""Custom exceptions for oidc-bridge.

This module contains all custom exceptions used throughout the package.
Exceptions are organized into two categories:

Construction Failures (service must not start):
    - ConfigurationError: Claim sets, auth source or identity config invalid

Per-Attempt Failures (single authentication aborted, caller renders error):
    - AuthenticationError: Upstream mechanism cannot establish a session
    - InvalidClientError: Relying party missing, unknown or disabled
    - AttributeMissingError: Identifying attribute not released
    - RepositoryError: Persistence collaborator failed

Claim extraction never raises; missing input produces omitted claims.

Usage:
    from oidc_bridge.exceptions import AttributeMissingError, ConfigurationError
"""

from __future__ import annotations

__all__ = [
    "AttributeMissingError",
    "AuthenticationError",
    "BridgeError",
    "ConfigurationError",
    "InvalidClientError",
    "RepositoryError",
]

from collections.abc import Iterable


class BridgeError(Exception):
    """Base exception for all oidc-bridge failures.

    Attributes:
        error_type: Category string for audit logging.
    """

    error_type: str = "unknown"


# =============================================================================
# Construction Failures
# =============================================================================


class ConfigurationError(BridgeError):
    """Configuration is invalid or incomplete.

    Raised when:
    - A claim set name is registered twice
    - A caller registers the reserved 'openid' claim set
    - No auth source is configured on the client or globally
    - The identifying attribute name is not configured
    - An attribute processing filter name is unknown
    - The config file fails JSON parsing or Pydantic validation

    These errors are fatal at service construction and must not be swallowed.
    """

    error_type = "configuration_failure"


# =============================================================================
# Per-Attempt Failures
# =============================================================================


class AuthenticationError(BridgeError):
    """Authentication failed - upstream mechanism could not establish a session.

    Raised when:
    - The auth source rejects or aborts the login
    - The auth source returns no session data

    Aborts the in-flight attempt. Not retried by the bridge.
    """

    error_type = "authentication_failure"


class InvalidClientError(AuthenticationError):
    """The relying party for the request cannot be resolved.

    Raised when:
    - The request carries no client_id parameter
    - No client is registered under that client_id
    - The client exists but is disabled
    """

    error_type = "invalid_client"


class AttributeMissingError(BridgeError):
    """Configured identifying attribute is absent from released attributes.

    User-visible error. The message lists the attributes that were released
    so operators can fix the attribute release policy.

    Attributes:
        attribute: Name of the configured identifying attribute.
        available: Sorted names of the attributes that were present.
    """

    error_type = "attribute_missing"

    def __init__(self, attribute: str, available: Iterable[str]) -> None:
        """Initialize AttributeMissingError.

        Args:
            attribute: Configured identifying attribute name.
            available: Attribute names present after attribute processing.
        """
        self.attribute = attribute
        self.available = sorted(available)
        super().__init__(
            f"Attribute '{attribute}' does not exist in claims. "
            f"Available attributes are: {', '.join(self.available)}"
        )


class RepositoryError(BridgeError):
    """Persistence layer failed to read or write a record.

    Propagated unchanged through the authentication bridge.
    """

    error_type = "repository_failure"
