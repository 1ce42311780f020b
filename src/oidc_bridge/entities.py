"""Persisted entities: users and relying-party clients.

UserRecord is owned by this package (created and updated by reconciliation).
ClientRecord is consumed read-only; client registration lives elsewhere.
"""

from __future__ import annotations

__all__ = [
    "ClientRecord",
    "UserRecord",
]

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UserRecord(BaseModel):
    """A user known to the OIDC provider.

    Attributes:
        identifier: Stable user id (first value of the identifying attribute).
        claims: Last-seen source attributes (name -> list of values).
        created_at: First successful authentication (UTC).
        updated_at: Most recent claims update (UTC).
    """

    identifier: str = Field(min_length=1)
    claims: dict[str, list[str]] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)

    @classmethod
    def from_data(cls, identifier: str, claims: dict[str, list[str]]) -> "UserRecord":
        """Create a new record for a first-time user."""
        now = _utc_now()
        return cls(identifier=identifier, claims=dict(claims), created_at=now, updated_at=now)

    def set_claims(self, claims: dict[str, list[str]]) -> None:
        """Replace stored claims wholesale (no merge) and bump updated_at."""
        self.claims = dict(claims)
        self.updated_at = _utc_now()


class ClientRecord(BaseModel):
    """A registered relying party (OIDC client).

    Attributes:
        identifier: OAuth client_id.
        secret: Client secret. Stripped before metadata reaches release filters.
        name: Display name.
        description: Free text description.
        auth_source: Upstream auth source override for this client.
        redirect_uri: Registered redirect URIs.
        scopes: Scopes the client may request.
        is_enabled: Disabled clients cannot authenticate users.
    """

    identifier: str = Field(min_length=1)
    secret: str = ""
    name: str = ""
    description: str = ""
    auth_source: str | None = None
    redirect_uri: list[str] = Field(default_factory=list)
    scopes: list[str] = Field(default_factory=list)
    is_enabled: bool = True

    model_config = ConfigDict(frozen=True)

    def get_auth_source(self) -> str | None:
        return self.auth_source

    def to_dict(self) -> dict[str, Any]:
        """Serialize the client, secret included."""
        return self.model_dump(mode="json")
