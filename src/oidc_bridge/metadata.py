"""Metadata services.

OidcProviderMetadataService publishes the OIDC provider's discovery document
(the subset the bridge knows about). IdProviderMetadataService hands out the
upstream identity provider's static metadata. Both are exposed to attribute
processing through the authentication state.
"""

from __future__ import annotations

__all__ = [
    "IdProviderMetadataService",
    "OidcProviderMetadataService",
]

import copy
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from oidc_bridge.constants import (
    CODE_CHALLENGE_METHODS_SUPPORTED,
    ID_TOKEN_SIGNING_ALGS_SUPPORTED,
    RESPONSE_TYPES_SUPPORTED,
    SUBJECT_TYPES_SUPPORTED,
)

if TYPE_CHECKING:
    from oidc_bridge.config import OIDCConfig


def _endpoint(issuer: str, path: str) -> str:
    return f"{issuer.rstrip('/')}/{path.lstrip('/')}"


class OidcProviderMetadataService:
    """OIDC provider (OP) discovery metadata, built once at construction.

    Args:
        config: OIDC configuration (issuer and endpoint paths).
        scopes: Supported scope names, usually ClaimTranslatorExtractor.scopes.
    """

    def __init__(self, config: "OIDCConfig", scopes: Iterable[str]) -> None:
        self._metadata: dict[str, Any] = {
            "issuer": config.issuer,
            "authorization_endpoint": _endpoint(config.issuer, config.authorization_path),
            "token_endpoint": _endpoint(config.issuer, config.token_path),
            "userinfo_endpoint": _endpoint(config.issuer, config.userinfo_path),
            "jwks_uri": _endpoint(config.issuer, config.jwks_path),
            "scopes_supported": list(scopes),
            "response_types_supported": list(RESPONSE_TYPES_SUPPORTED),
            "subject_types_supported": list(SUBJECT_TYPES_SUPPORTED),
            "id_token_signing_alg_values_supported": list(ID_TOKEN_SIGNING_ALGS_SUPPORTED),
            "code_challenge_methods_supported": list(CODE_CHALLENGE_METHODS_SUPPORTED),
        }

    def get_metadata(self) -> dict[str, Any]:
        return copy.deepcopy(self._metadata)


class IdProviderMetadataService:
    """Static upstream IdP metadata from configuration."""

    def __init__(self, metadata: Mapping[str, Any] | None = None) -> None:
        self._metadata = dict(metadata or {})

    def get_metadata(self) -> dict[str, Any]:
        return copy.deepcopy(self._metadata)
