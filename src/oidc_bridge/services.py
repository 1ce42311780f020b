"""Service wiring: build the bridge's object graph from AppConfig.

Construction is explicit. Everything that can fail on bad configuration
(claim sets, filter chain, repository files) fails here, before any
authentication attempt is served.
"""

from __future__ import annotations

__all__ = [
    "BridgeServices",
    "create_services",
]

import logging
from dataclasses import dataclass
from pathlib import Path

from oidc_bridge.bridge.authentication import AuthenticationService
from oidc_bridge.bridge.authproc import create_authproc_service
from oidc_bridge.bridge.protocols import (
    AuthProcessor,
    AuthSourceFactory,
    ClientRepository,
    UserRepository,
)
from oidc_bridge.bridge.reconciliation import UserReconciler
from oidc_bridge.claims.extractor import ClaimTranslatorExtractor, create_claim_extractor
from oidc_bridge.config import AppConfig, get_auth_log_path, get_system_log_path
from oidc_bridge.metadata import IdProviderMetadataService, OidcProviderMetadataService
from oidc_bridge.repositories import (
    InMemoryClientRepository,
    InMemoryUserRepository,
    JsonFileClientRepository,
    JsonFileUserRepository,
)
from oidc_bridge.telemetry.audit.auth_logger import AuthLogger, create_auth_logger
from oidc_bridge.telemetry.system.system_logger import (
    configure_system_logger_file,
    get_system_logger,
    set_system_log_level,
)


@dataclass
class BridgeServices:
    """Wired services for one deployment.

    Attributes:
        claim_extractor: Used by token issuance to release claims.
        authentication: Runs authentication attempts.
        oidc_provider_metadata: OP discovery metadata.
        idp_metadata: Upstream IdP metadata.
        user_repository: Store of reconciled users.
        client_repository: Registered relying parties.
        auth_logger: Audit logger, None when disabled.
    """

    claim_extractor: ClaimTranslatorExtractor
    authentication: AuthenticationService
    oidc_provider_metadata: OidcProviderMetadataService
    idp_metadata: IdProviderMetadataService
    user_repository: UserRepository
    client_repository: ClientRepository
    auth_logger: AuthLogger | None


def _create_user_repository(app_config: AppConfig) -> UserRepository:
    if app_config.storage.users_path:
        return JsonFileUserRepository(Path(app_config.storage.users_path).expanduser())
    return InMemoryUserRepository()


def _create_client_repository(app_config: AppConfig) -> ClientRepository:
    if app_config.storage.clients_path:
        return JsonFileClientRepository(Path(app_config.storage.clients_path).expanduser())
    return InMemoryClientRepository()


def create_services(
    app_config: AppConfig,
    auth_source_factory: AuthSourceFactory,
    *,
    auth_processor: AuthProcessor | None = None,
    user_repository: UserRepository | None = None,
    client_repository: ClientRepository | None = None,
    enable_audit_log: bool = True,
) -> BridgeServices:
    """Build all services from configuration.

    Args:
        app_config: Loaded application configuration.
        auth_source_factory: Creates upstream auth sources by name.
        auth_processor: Replaces the configured authproc chain if given.
        user_repository: Replaces the configured user store if given.
        client_repository: Replaces the configured client registry if given.
        enable_audit_log: Write auth.jsonl under the configured log_dir.

    Returns:
        BridgeServices with every service constructed.

    Raises:
        ConfigurationError: If claim sets or the authproc chain are invalid.
        RepositoryError: If a configured repository file cannot be loaded.
    """
    configure_system_logger_file(get_system_log_path(app_config))
    set_system_log_level(logging.DEBUG if app_config.logging.log_level == "DEBUG" else logging.INFO)

    oidc = app_config.oidc
    claim_extractor = create_claim_extractor(oidc)
    oidc_provider_metadata = OidcProviderMetadataService(oidc, claim_extractor.scopes)
    idp_metadata = IdProviderMetadataService(oidc.idp_metadata)

    if auth_processor is None:
        auth_processor = create_authproc_service(oidc.authproc)
    if user_repository is None:
        user_repository = _create_user_repository(app_config)
    if client_repository is None:
        client_repository = _create_client_repository(app_config)

    auth_logger = create_auth_logger(get_auth_log_path(app_config)) if enable_audit_log else None

    authentication = AuthenticationService(
        config=oidc,
        client_repository=client_repository,
        auth_source_factory=auth_source_factory,
        auth_processor=auth_processor,
        oidc_provider_metadata_service=oidc_provider_metadata,
        idp_metadata_service=idp_metadata,
        user_reconciler=UserReconciler(user_repository),
        auth_logger=auth_logger,
    )

    get_system_logger().info(
        {
            "event": "services_created",
            "message": f"oidc-bridge services ready (issuer {oidc.issuer})",
            "scopes": list(claim_extractor.scopes),
        }
    )

    return BridgeServices(
        claim_extractor=claim_extractor,
        authentication=authentication,
        oidc_provider_metadata=oidc_provider_metadata,
        idp_metadata=idp_metadata,
        user_repository=user_repository,
        client_repository=client_repository,
        auth_logger=auth_logger,
    )
