"""Application-wide constants for oidc-bridge.

Constants that define application behavior.
For user-configurable settings per deployment, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    # Identity
    "DEFAULT_USER_ID_ATTRIBUTE",
    # Claim sets
    "OPENID_SCOPE",
    "SUBJECT_CLAIM",
    "STANDARD_CLAIM_SETS",
    # Authorization request filtering
    "RELEVANT_AUTHZ_PARAMS",
    "CLIENT_SECRET_KEY",
    # State dictionary keys
    "STATE_ATTRIBUTES",
    "STATE_SOURCE",
    "STATE_IDP_METADATA",
    "STATE_OIDC_PROVIDER_METADATA",
    "STATE_OIDC_RELYING_PARTY_METADATA",
    "STATE_OIDC_AUTHZ_REQUEST_PARAMETERS",
    "STATE_AUTH_SOURCE",
    # Provider metadata
    "RESPONSE_TYPES_SUPPORTED",
    "SUBJECT_TYPES_SUPPORTED",
    "ID_TOKEN_SIGNING_ALGS_SUPPORTED",
    "CODE_CHALLENGE_METHODS_SUPPORTED",
    # Auth processing
    "DEFAULT_AUTHPROC_PRIORITY",
]

# ============================================================================
# Application Identity
# ============================================================================

# Application name used for directory names, logger names, etc.
APP_NAME: str = "oidc-bridge"

# ============================================================================
# Identity
# ============================================================================

# Source attribute whose first value becomes the stable user identifier
DEFAULT_USER_ID_ATTRIBUTE: str = "uid"

# ============================================================================
# Claim Sets
# ============================================================================

# Reserved scope seeded by the extractor; cannot be registered by callers
OPENID_SCOPE: str = "openid"
SUBJECT_CLAIM: str = "sub"

# Standard claim sets from OpenID Connect Core 1.0, section 5.4
STANDARD_CLAIM_SETS: dict[str, tuple[str, ...]] = {
    "profile": (
        "name",
        "family_name",
        "given_name",
        "middle_name",
        "nickname",
        "preferred_username",
        "profile",
        "picture",
        "website",
        "gender",
        "birthdate",
        "zoneinfo",
        "locale",
        "updated_at",
    ),
    "email": ("email", "email_verified"),
    "address": ("address",),
    "phone": ("phone_number", "phone_number_verified"),
}

# ============================================================================
# Authorization Request Filtering
# ============================================================================

# Authorization request parameters exposed to attribute release filters
RELEVANT_AUTHZ_PARAMS: frozenset[str] = frozenset(
    {
        "response_type",
        "client_id",
        "redirect_uri",
        "scope",
        "code_challenge_method",
    }
)

# Client field stripped before relying-party metadata leaves the repository
CLIENT_SECRET_KEY: str = "secret"

# ============================================================================
# State Dictionary Keys
# ============================================================================

# Wire keys of the state dict handed to the attribute processing pipeline
STATE_ATTRIBUTES: str = "Attributes"
STATE_SOURCE: str = "Source"
STATE_IDP_METADATA: str = "IdPMetadata"
STATE_OIDC_PROVIDER_METADATA: str = "OidcProviderMetadata"
STATE_OIDC_RELYING_PARTY_METADATA: str = "OidcRelyingPartyMetadata"
STATE_OIDC_AUTHZ_REQUEST_PARAMETERS: str = "OidcAuthorizationRequestParameters"
STATE_AUTH_SOURCE: str = "AuthSource"

# ============================================================================
# Provider Metadata
# ============================================================================

RESPONSE_TYPES_SUPPORTED: tuple[str, ...] = ("code", "token")
SUBJECT_TYPES_SUPPORTED: tuple[str, ...] = ("public",)
ID_TOKEN_SIGNING_ALGS_SUPPORTED: tuple[str, ...] = ("RS256",)
CODE_CHALLENGE_METHODS_SUPPORTED: tuple[str, ...] = ("plain", "S256")

# ============================================================================
# Auth Processing
# ============================================================================

# Filters without an explicit priority run in the middle of the chain
DEFAULT_AUTHPROC_PRIORITY: int = 50
