"""Authentication bridge between an upstream identity session and the OIDC provider.

- authentication: AuthenticationService (one login attempt end to end)
- reconciliation: UserReconciler (create or update the stored user)
- state: AuthenticationState (per-attempt state and its wire dict)
- authproc: Attribute processing filters
- protocols: Seams for external collaborators
"""

from oidc_bridge.bridge.authentication import AuthenticationService, AuthorizationRequest
from oidc_bridge.bridge.authproc import (
    AttributeAdd,
    AttributeLimit,
    AttributeMap,
    AuthProcService,
    create_authproc_service,
)
from oidc_bridge.bridge.protocols import (
    AuthProcessor,
    AuthSource,
    AuthSourceFactory,
    ClientRepository,
    MetadataService,
    UserRepository,
)
from oidc_bridge.bridge.reconciliation import ReconcileResult, UserReconciler
from oidc_bridge.bridge.state import AuthenticationState, normalize_attributes

__all__ = [
    "AttributeAdd",
    "AttributeLimit",
    "AttributeMap",
    "AuthProcService",
    "AuthProcessor",
    "AuthSource",
    "AuthSourceFactory",
    "AuthenticationService",
    "AuthenticationState",
    "AuthorizationRequest",
    "ClientRepository",
    "MetadataService",
    "ReconcileResult",
    "UserReconciler",
    "UserRepository",
    "create_authproc_service",
    "normalize_attributes",
]
