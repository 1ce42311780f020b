"""User repositories.

Each operation is atomic on its own (guarded by a threading.Lock). A
sequence of operations is not: two callers may both miss on
get_by_identifier() and both add(). add() therefore inserts or replaces,
so a lost create race ends with the last writer's record.

Records are copied on the way in and out; mutating a returned record has no
effect until it is passed to update().
"""

from __future__ import annotations

__all__ = [
    "InMemoryUserRepository",
    "JsonFileUserRepository",
]

import json
import threading
from pathlib import Path

from pydantic import ValidationError

from oidc_bridge.entities import UserRecord
from oidc_bridge.exceptions import RepositoryError
from oidc_bridge.utils.file_helpers import write_json_atomic


class InMemoryUserRepository:
    """Dict-backed user store."""

    def __init__(self) -> None:
        self._users: dict[str, UserRecord] = {}
        self._lock = threading.Lock()

    def get_by_identifier(self, identifier: str) -> UserRecord | None:
        with self._lock:
            user = self._users.get(identifier)
            return user.model_copy(deep=True) if user is not None else None

    def add(self, user: UserRecord) -> None:
        """Insert or replace a user."""
        with self._lock:
            self._users[user.identifier] = user.model_copy(deep=True)

    def update(self, user: UserRecord) -> None:
        """Replace an existing user.

        Raises:
            RepositoryError: If the user was never added.
        """
        with self._lock:
            if user.identifier not in self._users:
                raise RepositoryError(f"User '{user.identifier}' does not exist")
            self._users[user.identifier] = user.model_copy(deep=True)

    def count(self) -> int:
        with self._lock:
            return len(self._users)


class JsonFileUserRepository:
    """User store persisted as one JSON object keyed by identifier.

    Every write rewrites the file atomically (temp file + os.replace).
    Suitable for small installations; a process-local lock serializes
    access, cross-process writers are not coordinated.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, UserRecord]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return {identifier: UserRecord.model_validate(raw) for identifier, raw in data.items()}
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError, AttributeError) as e:
            raise RepositoryError(f"Could not read user store {self._path}: {e}") from e

    def _save(self, users: dict[str, UserRecord]) -> None:
        data = {identifier: user.model_dump(mode="json") for identifier, user in users.items()}
        try:
            write_json_atomic(self._path, data)
        except OSError as e:
            raise RepositoryError(f"Could not write user store {self._path}: {e}") from e

    def get_by_identifier(self, identifier: str) -> UserRecord | None:
        with self._lock:
            return self._load().get(identifier)

    def add(self, user: UserRecord) -> None:
        """Insert or replace a user."""
        with self._lock:
            users = self._load()
            users[user.identifier] = user
            self._save(users)

    def update(self, user: UserRecord) -> None:
        """Replace an existing user.

        Raises:
            RepositoryError: If the user was never added or the file fails.
        """
        with self._lock:
            users = self._load()
            if user.identifier not in users:
                raise RepositoryError(f"User '{user.identifier}' does not exist")
            users[user.identifier] = user
            self._save(users)

    def count(self) -> int:
        with self._lock:
            return len(self._load())
