"""User and client repositories.

In-memory implementations for tests and single-process deployments;
JSON-file implementations for small persistent deployments. Larger
deployments plug in their own objects matching the protocols in
oidc_bridge.bridge.protocols.
"""

from oidc_bridge.repositories.clients import InMemoryClientRepository, JsonFileClientRepository
from oidc_bridge.repositories.users import InMemoryUserRepository, JsonFileUserRepository

__all__ = [
    "InMemoryClientRepository",
    "InMemoryUserRepository",
    "JsonFileClientRepository",
    "JsonFileUserRepository",
]
