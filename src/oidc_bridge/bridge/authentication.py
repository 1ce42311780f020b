"""Authentication bridge: one authorization request -> one reconciled user.

Flow of authenticate():
1. Resolve the relying party from the request's client_id
2. Resolve the auth source (client override, else configured default)
3. Require an upstream session (may block on user interaction)
4. Assemble the per-attempt state and run attribute processing
5. Read the identifying attribute from the released attributes
6. Create or update the stored user

Every attempt ends in exactly one audit event when an AuthLogger is set.
"""

from __future__ import annotations

__all__ = [
    "AuthenticationService",
    "AuthorizationRequest",
]

from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from oidc_bridge.bridge.protocols import (
    AuthProcessor,
    AuthSourceFactory,
    ClientRepository,
    MetadataService,
)
from oidc_bridge.bridge.reconciliation import UserReconciler
from oidc_bridge.bridge.state import AuthenticationState
from oidc_bridge.entities import ClientRecord, UserRecord
from oidc_bridge.exceptions import (
    AttributeMissingError,
    AuthenticationError,
    BridgeError,
    ConfigurationError,
    InvalidClientError,
)
from oidc_bridge.telemetry.system.system_logger import get_system_logger

if TYPE_CHECKING:
    from oidc_bridge.config import OIDCConfig
    from oidc_bridge.telemetry.audit.auth_logger import AuthLogger


class AuthorizationRequest(BaseModel):
    """Incoming authorization request, reduced to its query parameters."""

    query_params: dict[str, str] = Field(default_factory=dict)

    @property
    def client_id(self) -> str | None:
        return self.query_params.get("client_id") or None


class AuthenticationService:
    """Authenticates the end user for an authorization request.

    Collaborators are injected; see oidc_bridge.services.create_services()
    for the standard wiring.

    Usage:
        service = AuthenticationService(config, clients, factory, processor, ...)
        user = service.authenticate(AuthorizationRequest(query_params=params))
    """

    def __init__(
        self,
        config: "OIDCConfig",
        client_repository: ClientRepository,
        auth_source_factory: AuthSourceFactory,
        auth_processor: AuthProcessor,
        oidc_provider_metadata_service: MetadataService,
        idp_metadata_service: MetadataService,
        user_reconciler: UserReconciler,
        auth_logger: "AuthLogger | None" = None,
    ) -> None:
        """Initialize the service.

        Raises:
            ConfigurationError: If no identifying attribute is configured.
        """
        if not config.user_id_attribute:
            raise ConfigurationError("user_id_attribute must name the identifying source attribute")

        self._config = config
        self._client_repository = client_repository
        self._auth_source_factory = auth_source_factory
        self._auth_processor = auth_processor
        self._oidc_provider_metadata_service = oidc_provider_metadata_service
        self._idp_metadata_service = idp_metadata_service
        self._user_reconciler = user_reconciler
        self._auth_logger = auth_logger

    @property
    def user_id_attribute(self) -> str:
        return self._config.user_id_attribute

    def resolve_client(self, request: AuthorizationRequest) -> ClientRecord:
        """Look up the enabled client named by the request.

        Raises:
            InvalidClientError: If client_id is missing, unknown or disabled.
        """
        client_id = request.client_id
        if client_id is None:
            raise InvalidClientError("Authorization request has no client_id")

        client = self._client_repository.find_by_id(client_id)
        if client is None:
            raise InvalidClientError(f"Client '{client_id}' is not registered")
        if not client.is_enabled:
            raise InvalidClientError(f"Client '{client_id}' is disabled")
        return client

    def resolve_auth_source(self, client: ClientRecord) -> str:
        """Client's auth source if set, otherwise the configured default.

        Raises:
            ConfigurationError: If neither is configured.
        """
        auth_source = client.get_auth_source() or self._config.default_auth_source
        if not auth_source:
            raise ConfigurationError(
                f"No auth source for client '{client.identifier}': "
                "set one on the client or configure default_auth_source"
            )
        return auth_source

    def authenticate(self, request: AuthorizationRequest) -> UserRecord:
        """Run one authentication attempt end to end.

        Args:
            request: The authorization request being served.

        Returns:
            The created or updated user record.

        Raises:
            InvalidClientError: Client missing, unknown or disabled.
            ConfigurationError: No auth source could be resolved.
            AuthenticationError: Upstream session could not be established.
            AttributeMissingError: Identifying attribute not released.
            RepositoryError: User store failed.
        """
        client_id = request.client_id
        auth_source: str | None = None
        try:
            client = self.resolve_client(request)
            auth_source = self.resolve_auth_source(client)
            state = self._authenticate_upstream(auth_source, client, request)
            user_id = self._get_user_id(state)
            result = self._user_reconciler.reconcile_with_status(user_id, state.attributes)
        except Exception as e:
            self._log_failure(e, client_id=client_id, auth_source=auth_source)
            raise

        if self._auth_logger is not None:
            self._auth_logger.log_authentication_succeeded(
                subject_id=result.user.identifier,
                client_id=client_id,
                auth_source=auth_source,
                user_created=result.created,
                attribute_count=len(state.attributes),
            )
        return result.user

    def _authenticate_upstream(
        self,
        auth_source: str,
        client: ClientRecord,
        request: AuthorizationRequest,
    ) -> AuthenticationState:
        """Require the upstream session and run attribute processing."""
        source = self._auth_source_factory.build(auth_source)
        try:
            source.require_auth()
            auth_data = source.get_auth_data()
        except AuthenticationError:
            raise
        except Exception as e:
            raise AuthenticationError(f"Auth source '{auth_source}' failed: {e}") from e

        if auth_data is None:
            raise AuthenticationError(f"Auth source '{auth_source}' returned no session data")

        state = AuthenticationState.assemble(
            auth_source=auth_source,
            auth_data=auth_data,
            oidc_provider_metadata=self._oidc_provider_metadata_service.get_metadata(),
            relying_party_metadata=client.to_dict(),
            request_parameters=request.query_params,
            idp_metadata=self._idp_metadata_service.get_metadata(),
        )
        processed = self._auth_processor.process_state(state.to_state_dict())
        return state.with_processed(processed)

    def _get_user_id(self, state: AuthenticationState) -> str:
        """First value of the identifying attribute.

        Raises:
            AttributeMissingError: If the attribute is absent or has no values.
        """
        values = state.attributes.get(self.user_id_attribute)
        if not values:
            available = [name for name in state.attributes if name != self.user_id_attribute]
            raise AttributeMissingError(self.user_id_attribute, available)
        return values[0]

    def _log_failure(self, error: Exception, *, client_id: str | None, auth_source: str | None) -> None:
        error_type = error.error_type if isinstance(error, BridgeError) else type(error).__name__
        get_system_logger().warning(
            {
                "event": "authentication_failed",
                "message": f"Authentication failed: {error}",
                "error_type": error_type,
                "client_id": client_id,
                "auth_source": auth_source,
            }
        )
        if self._auth_logger is not None:
            self._auth_logger.log_authentication_failed(
                client_id=client_id,
                auth_source=auth_source,
                error_type=error_type,
                error_message=str(error),
            )
