"""Shared fixtures for oidc-bridge tests."""

from unittest.mock import Mock

import pytest

from oidc_bridge.config import OIDCConfig
from oidc_bridge.entities import ClientRecord


@pytest.fixture
def oidc_config() -> OIDCConfig:
    """Minimal OIDC configuration with a default auth source."""
    return OIDCConfig(
        issuer="https://op.example.org",
        default_auth_source="default-sp",
        idp_metadata={"entityid": "https://idp.example.org"},
    )


@pytest.fixture
def client() -> ClientRecord:
    """Enabled client without an auth source override."""
    return ClientRecord(
        identifier="app",
        secret="s3cret",
        name="Test App",
        redirect_uri=["https://app.example.org/callback"],
        scopes=["openid", "profile"],
    )


@pytest.fixture
def user_attributes() -> dict[str, list[str]]:
    """Released attributes for a typical user."""
    return {
        "uid": ["u1"],
        "eduPersonPrincipalName": ["u1@example.org"],
        "cn": ["User One"],
        "mail": ["u1@example.org"],
    }


@pytest.fixture
def auth_source(user_attributes: dict[str, list[str]]) -> Mock:
    """AuthSource mock whose session carries user_attributes."""
    source = Mock()
    source.get_auth_data.return_value = {
        "Attributes": user_attributes,
        "AuthnInstant": 1700000000,
    }
    return source


@pytest.fixture
def auth_source_factory(auth_source: Mock) -> Mock:
    """AuthSourceFactory mock building auth_source for any name."""
    factory = Mock()
    factory.build.return_value = auth_source
    return factory
