"""User reconciliation: create or update the stored user after login.

The stored claims are the last-seen source attributes, replaced wholesale on
every login. The read and the write are separate repository calls; two
concurrent first logins for the same identifier both take the create path
and the later add() wins.
"""

from __future__ import annotations

__all__ = [
    "ReconcileResult",
    "UserReconciler",
]

from collections.abc import Mapping, Sequence
from typing import NamedTuple

from oidc_bridge.bridge.protocols import UserRepository
from oidc_bridge.entities import UserRecord
from oidc_bridge.telemetry.system.system_logger import get_system_logger


class ReconcileResult(NamedTuple):
    """Outcome of reconcile_with_status()."""

    user: UserRecord
    created: bool


class UserReconciler:
    """Keeps the user repository in sync with upstream attributes.

    Usage:
        reconciler = UserReconciler(InMemoryUserRepository())
        user = reconciler.reconcile("u1", {"uid": ["u1"], "mail": ["u1@example.org"]})
    """

    def __init__(self, user_repository: UserRepository) -> None:
        self._user_repository = user_repository

    @property
    def user_repository(self) -> UserRepository:
        return self._user_repository

    def reconcile(self, user_id: str, attributes: Mapping[str, Sequence[str]]) -> UserRecord:
        """Create or update the user identified by user_id.

        Args:
            user_id: Stable user identifier.
            attributes: Released source attributes; become the stored claims.

        Returns:
            The persisted user record.

        Raises:
            RepositoryError: Propagated unchanged from the repository.
        """
        return self.reconcile_with_status(user_id, attributes).user

    def reconcile_with_status(
        self, user_id: str, attributes: Mapping[str, Sequence[str]]
    ) -> ReconcileResult:
        """Like reconcile(), also reporting whether the user was created."""
        claims = {name: list(values) for name, values in attributes.items()}

        user = self._user_repository.get_by_identifier(user_id)
        if user is None:
            user = UserRecord.from_data(user_id, claims)
            self._user_repository.add(user)
            get_system_logger().debug(
                {"event": "user_created", "message": "Created user record", "claim_count": len(claims)}
            )
            return ReconcileResult(user, True)

        user.set_claims(claims)
        self._user_repository.update(user)
        get_system_logger().debug(
            {"event": "user_updated", "message": "Updated user record", "claim_count": len(claims)}
        )
        return ReconcileResult(user, False)
