"""Protocols for the bridge's external collaborators.

The bridge never implements these itself (except the in-package repositories
and the attribute processing chain). Anything structurally matching a
protocol can be plugged in: a SAML SP session wrapper, a database-backed
repository, a consent-page driven processor.

All calls are synchronous and may block. AuthSource.require_auth() and
AuthProcessor.process_state() can wait on human interaction.
"""

from __future__ import annotations

__all__ = [
    "AuthProcessor",
    "AuthSource",
    "AuthSourceFactory",
    "ClientRepository",
    "MetadataService",
    "UserRepository",
]

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from oidc_bridge.entities import ClientRecord, UserRecord


@runtime_checkable
class AuthSource(Protocol):
    """Upstream authentication mechanism bound to one auth source name."""

    def require_auth(self) -> None:
        """Block until the end user holds an authenticated session.

        Raises:
            AuthenticationError: If no session can be established.
        """
        ...

    def get_auth_data(self) -> dict[str, Any]:
        """Return session data.

        Must contain "Attributes" (attribute name -> list of values). Other
        keys are session metadata and are passed through to processing.
        """
        ...


@runtime_checkable
class AuthSourceFactory(Protocol):
    """Creates AuthSource instances by name."""

    def build(self, auth_source: str) -> AuthSource:
        ...


@runtime_checkable
class AuthProcessor(Protocol):
    """Attribute release / authentication processing pipeline."""

    def process_state(self, state: dict[str, Any]) -> dict[str, Any]:
        """Run the pipeline on a state dict and return the resulting state.

        May enrich or filter state["Attributes"]. May block pending user
        interaction (e.g., consent).
        """
        ...


@runtime_checkable
class MetadataService(Protocol):
    """Static metadata provider (OIDC provider or upstream IdP)."""

    def get_metadata(self) -> dict[str, Any]:
        ...


@runtime_checkable
class ClientRepository(Protocol):
    """Read-only client lookup."""

    def find_by_id(self, client_id: str) -> "ClientRecord | None":
        ...


@runtime_checkable
class UserRepository(Protocol):
    """User persistence with simple CRUD semantics.

    Implementations own their locking. Callers get no atomicity across
    separate calls.
    """

    def get_by_identifier(self, identifier: str) -> "UserRecord | None":
        ...

    def add(self, user: "UserRecord") -> None:
        ...

    def update(self, user: "UserRecord") -> None:
        ...
