"""Tests for UserReconciler."""

import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import Mock

import pytest

from oidc_bridge.bridge.reconciliation import UserReconciler
from oidc_bridge.entities import UserRecord
from oidc_bridge.exceptions import RepositoryError
from oidc_bridge.repositories import InMemoryUserRepository


@pytest.fixture
def repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def reconciler(repository: InMemoryUserRepository) -> UserReconciler:
    return UserReconciler(repository)


class TestReconcile:
    """Tests for reconcile()."""

    def test_first_login_creates_user(
        self, reconciler: UserReconciler, repository: InMemoryUserRepository
    ) -> None:
        """An unknown identifier is added to the repository."""
        # Act
        result = reconciler.reconcile_with_status("u1", {"uid": ["u1"]})

        # Assert
        assert result.created is True
        assert result.user.identifier == "u1"
        stored = repository.get_by_identifier("u1")
        assert stored is not None
        assert stored.claims == {"uid": ["u1"]}

    def test_repeat_login_is_idempotent(
        self, reconciler: UserReconciler, repository: InMemoryUserRepository
    ) -> None:
        """Reconciling twice with the same attributes leaves one identical user."""
        reconciler.reconcile("u1", {"uid": ["u1"], "mail": ["u1@example.org"]})
        second = reconciler.reconcile_with_status("u1", {"uid": ["u1"], "mail": ["u1@example.org"]})

        assert second.created is False
        assert repository.count() == 1
        stored = repository.get_by_identifier("u1")
        assert stored is not None
        assert stored.claims == {"uid": ["u1"], "mail": ["u1@example.org"]}

    def test_second_login_fully_replaces_claims(
        self, reconciler: UserReconciler, repository: InMemoryUserRepository
    ) -> None:
        """Stored claims are replaced, not merged."""
        reconciler.reconcile("u1", {"uid": ["u1"], "mail": ["old@example.org"]})
        reconciler.reconcile("u1", {"uid": ["u1"], "cn": ["User One"]})

        stored = repository.get_by_identifier("u1")
        assert stored is not None
        assert stored.claims == {"uid": ["u1"], "cn": ["User One"]}

    def test_update_bumps_updated_at_only(
        self, reconciler: UserReconciler, repository: InMemoryUserRepository
    ) -> None:
        first = reconciler.reconcile("u1", {"uid": ["u1"]})
        second = reconciler.reconcile("u1", {"uid": ["u1"]})

        assert second.created_at == first.created_at
        assert second.updated_at >= first.updated_at

    def test_repository_error_propagates(self) -> None:
        """Repository failures reach the caller unchanged."""
        repository = Mock()
        repository.get_by_identifier.return_value = None
        repository.add.side_effect = RepositoryError("disk full")

        with pytest.raises(RepositoryError, match="disk full"):
            UserReconciler(repository).reconcile("u1", {"uid": ["u1"]})

    def test_existing_user_goes_through_update(self) -> None:
        repository = Mock()
        repository.get_by_identifier.return_value = UserRecord.from_data("u1", {"uid": ["u1"]})

        UserReconciler(repository).reconcile("u1", {"uid": ["u1"], "cn": ["One"]})

        repository.add.assert_not_called()
        updated = repository.update.call_args.args[0]
        assert updated.claims == {"uid": ["u1"], "cn": ["One"]}


class _BarrierRepository(InMemoryUserRepository):
    """Holds every reader until all racing readers have read."""

    def __init__(self, parties: int) -> None:
        super().__init__()
        self._barrier = threading.Barrier(parties, timeout=5)

    def get_by_identifier(self, identifier: str) -> UserRecord | None:
        user = super().get_by_identifier(identifier)
        self._barrier.wait()
        return user


class TestConcurrentFirstLogin:
    """Two first logins for the same identifier racing read-read-write-write."""

    def test_lost_create_race_is_last_write_wins(self) -> None:
        """Both take the create path; one record remains, holding one caller's claims."""
        # Arrange
        repository = _BarrierRepository(parties=2)
        reconciler = UserReconciler(repository)
        attribute_sets = [{"uid": ["u1"], "cn": ["First"]}, {"uid": ["u1"], "cn": ["Second"]}]

        # Act
        with ThreadPoolExecutor(max_workers=2) as pool:
            results = list(pool.map(lambda attrs: reconciler.reconcile_with_status("u1", attrs), attribute_sets))

        # Assert
        assert [result.created for result in results] == [True, True]
        assert repository.count() == 1
        stored = InMemoryUserRepository.get_by_identifier(repository, "u1")
        assert stored is not None
        assert stored.claims in attribute_sets
