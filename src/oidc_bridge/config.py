"""Application configuration for oidc-bridge.

Defines configuration models for the OIDC provider, claim translation,
attribute processing, storage and logging. Config is stored as JSON at the
OS-appropriate location (via platformdirs), or at a path passed explicitly.

Example usage:
    # Load from config file
    config = AppConfig.load_from_files(config_path)

    # Save new configuration
    config.save_to_file(config_path)
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_LOG_DIR",
    "AppConfig",
    "AuthProcFilterConfig",
    "LoggingConfig",
    "OIDCConfig",
    "ScopeConfig",
    "StorageConfig",
    "get_auth_log_path",
    "get_config_path",
    "get_system_log_path",
]

import json
from pathlib import Path
from typing import Any, Literal

from platformdirs import user_log_dir
from pydantic import BaseModel, Field

from oidc_bridge.constants import (
    APP_NAME,
    DEFAULT_AUTHPROC_PRIORITY,
    DEFAULT_USER_ID_ATTRIBUTE,
)
from oidc_bridge.utils.file_helpers import (
    get_app_dir,
    load_validated_json,
    require_file_exists,
    set_secure_permissions,
)

# Default base log directory (platform-specific, follows OS conventions)
DEFAULT_LOG_DIR = user_log_dir(APP_NAME)


# =============================================================================
# Claims Configuration
# =============================================================================


class ScopeConfig(BaseModel):
    """A custom (non-standard) scope and the claims it releases.

    Attributes:
        description: Human-readable description shown on consent screens.
        claims: Claim names released when this scope is requested. Each claim
            needs a translation table entry to ever carry a value.
        are_multiple_claim_values_allowed: If True, all claims of this scope
            keep every value of their source attribute.
    """

    description: str = ""
    claims: list[str] = Field(default_factory=list)
    are_multiple_claim_values_allowed: bool = False


class AuthProcFilterConfig(BaseModel):
    """One attribute processing filter in the release pipeline.

    Attributes:
        filter: Registered filter name (e.g., "attribute_limit").
        priority: Lower runs first. Equal priorities keep config order.
        config: Filter-specific options.
    """

    filter: str = Field(min_length=1)
    priority: int = DEFAULT_AUTHPROC_PRIORITY
    config: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# OIDC Provider Configuration
# =============================================================================


class OIDCConfig(BaseModel):
    """OIDC provider configuration.

    Attributes:
        issuer: Issuer URL advertised in discovery metadata.
        authorization_path: Path of the authorization endpoint under issuer.
        token_path: Path of the token endpoint under issuer.
        userinfo_path: Path of the userinfo endpoint under issuer.
        jwks_path: Path of the JWKS document under issuer.
        default_auth_source: Auth source used when a client has no override.
        user_id_attribute: Source attribute whose first value identifies the user.
        translate: Claim -> ordered source attributes, merged over the defaults.
        scopes: Custom scopes keyed by scope name.
        authproc: Attribute processing filters run on every authentication.
        idp_metadata: Static metadata of the upstream identity provider.
    """

    issuer: str = Field(min_length=1, pattern=r"^https?://")
    authorization_path: str = "/authorize"
    token_path: str = "/token"
    userinfo_path: str = "/userinfo"
    jwks_path: str = "/jwks"
    default_auth_source: str | None = None
    user_id_attribute: str = Field(default=DEFAULT_USER_ID_ATTRIBUTE, min_length=1)
    translate: dict[str, list[str]] = Field(default_factory=dict)
    scopes: dict[str, ScopeConfig] = Field(default_factory=dict)
    authproc: list[AuthProcFilterConfig] = Field(default_factory=list)
    idp_metadata: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# Storage and Logging Configuration
# =============================================================================


class StorageConfig(BaseModel):
    """Repository backends.

    Attributes:
        users_path: JSON file for user records. In-memory store when unset.
        clients_path: JSON file with registered clients. In-memory when unset.
    """

    users_path: str | None = None
    clients_path: str | None = None


class LoggingConfig(BaseModel):
    """Logging configuration settings.

    Logs are stored in <log_dir> with this structure:
        <log_dir>/
        ├── system/
        │   └── system.jsonl
        └── audit/
            └── auth.jsonl

    Attributes:
        log_dir: Base directory for logs (platform-specific default).
        log_level: Logging level (DEBUG or INFO).
    """

    log_dir: str = Field(default=DEFAULT_LOG_DIR, min_length=1)
    log_level: Literal["DEBUG", "INFO"] = "INFO"


# =============================================================================
# Application Configuration
# =============================================================================


class AppConfig(BaseModel):
    """Main application configuration for oidc-bridge.

    Attributes:
        oidc: OIDC provider, claims and attribute processing configuration.
        storage: Repository backends.
        logging: Logging configuration.
    """

    oidc: OIDCConfig
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "ignore"}  # Ignore unknown fields for forward compat

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to JSON file.

        Creates parent directories if they don't exist.
        Sets secure permissions (0o700 dir, 0o600 file).

        Args:
            config_path: Path where the config JSON file should be saved.
        """
        config_path.parent.mkdir(parents=True, exist_ok=True)
        set_secure_permissions(config_path.parent, is_directory=True)

        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(), f, indent=2)
            f.write("\n")

        set_secure_permissions(config_path)

    @classmethod
    def load_from_files(cls, config_path: Path) -> "AppConfig":
        """Load configuration from JSON file.

        Args:
            config_path: Path to the config JSON file.

        Returns:
            AppConfig instance with loaded configuration.

        Raises:
            FileNotFoundError: If config file doesn't exist.
            ValueError: If config file is invalid or missing required fields.
        """
        require_file_exists(config_path, file_type="configuration")
        return load_validated_json(
            config_path,
            cls,
            file_type="config",
            recovery_hint="Fix the fields above and run 'oidc-bridge config validate'.",
        )


# =============================================================================
# Path Helpers
# =============================================================================


def get_config_path() -> Path:
    """Default config file location (<app_dir>/config.json)."""
    return get_app_dir() / "config.json"


def get_system_log_path(config: AppConfig) -> Path:
    """Path of system.jsonl under the configured log_dir."""
    return Path(config.logging.log_dir).expanduser() / "system" / "system.jsonl"


def get_auth_log_path(config: AppConfig) -> Path:
    """Path of auth.jsonl under the configured log_dir."""
    return Path(config.logging.log_dir).expanduser() / "audit" / "auth.jsonl"
