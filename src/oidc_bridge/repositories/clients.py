"""Client repositories (read-only from the bridge's point of view)."""

from __future__ import annotations

__all__ = [
    "InMemoryClientRepository",
    "JsonFileClientRepository",
]

import json
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from oidc_bridge.entities import ClientRecord
from oidc_bridge.exceptions import RepositoryError


class InMemoryClientRepository:
    """Clients held in a dict keyed by client_id."""

    def __init__(self, clients: Iterable[ClientRecord] = ()) -> None:
        self._clients = {client.identifier: client for client in clients}

    def find_by_id(self, client_id: str) -> ClientRecord | None:
        return self._clients.get(client_id)

    def all(self) -> list[ClientRecord]:
        return list(self._clients.values())


class JsonFileClientRepository(InMemoryClientRepository):
    """Clients loaded once from a JSON list of client objects.

    Raises:
        RepositoryError: If the file cannot be read or a client is invalid.
    """

    def __init__(self, path: Path) -> None:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            clients = [ClientRecord.model_validate(raw) for raw in data]
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError, TypeError) as e:
            raise RepositoryError(f"Could not load clients from {path}: {e}") from e
        super().__init__(clients)
