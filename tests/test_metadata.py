"""Tests for metadata services."""

from oidc_bridge.config import OIDCConfig
from oidc_bridge.metadata import IdProviderMetadataService, OidcProviderMetadataService


class TestOidcProviderMetadataService:
    """Tests for OP discovery metadata."""

    def test_metadata_document(self) -> None:
        # Arrange
        config = OIDCConfig(issuer="https://op.example.org/", token_path="oauth/token")

        # Act
        metadata = OidcProviderMetadataService(config, ["openid", "profile"]).get_metadata()

        # Assert
        assert metadata == {
            "issuer": "https://op.example.org/",
            "authorization_endpoint": "https://op.example.org/authorize",
            "token_endpoint": "https://op.example.org/oauth/token",
            "userinfo_endpoint": "https://op.example.org/userinfo",
            "jwks_uri": "https://op.example.org/jwks",
            "scopes_supported": ["openid", "profile"],
            "response_types_supported": ["code", "token"],
            "subject_types_supported": ["public"],
            "id_token_signing_alg_values_supported": ["RS256"],
            "code_challenge_methods_supported": ["plain", "S256"],
        }

    def test_returns_copy(self, oidc_config: OIDCConfig) -> None:
        service = OidcProviderMetadataService(oidc_config, ["openid"])

        service.get_metadata()["scopes_supported"].append("extra")

        assert service.get_metadata()["scopes_supported"] == ["openid"]


class TestIdProviderMetadataService:
    def test_returns_copy_of_static_metadata(self) -> None:
        service = IdProviderMetadataService({"entityid": "https://idp.example.org", "contacts": []})

        metadata = service.get_metadata()
        metadata["contacts"].append("admin")

        assert service.get_metadata() == {"entityid": "https://idp.example.org", "contacts": []}

    def test_defaults_to_empty(self) -> None:
        assert IdProviderMetadataService().get_metadata() == {}
