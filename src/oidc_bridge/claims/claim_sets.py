"""Claim sets: named bundles of claims released together for one scope."""

from __future__ import annotations

__all__ = [
    "ClaimSet",
    "build_claim_sets",
    "standard_claim_sets",
]

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field

from oidc_bridge.constants import OPENID_SCOPE, STANDARD_CLAIM_SETS, SUBJECT_CLAIM
from oidc_bridge.exceptions import ConfigurationError


class ClaimSet(BaseModel):
    """Claims released when a scope is requested.

    Attributes:
        scope: Scope name that unlocks this set (also the set name).
        claims: Claim names in the set.
    """

    scope: str = Field(min_length=1)
    claims: tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)


def standard_claim_sets() -> list[ClaimSet]:
    """Built-in sets: the reserved 'openid' set and the OIDC Core standard scopes."""
    return [ClaimSet(scope=OPENID_SCOPE, claims=(SUBJECT_CLAIM,))] + [
        ClaimSet(scope=scope, claims=claims) for scope, claims in STANDARD_CLAIM_SETS.items()
    ]


def build_claim_sets(custom: Iterable[ClaimSet] = ()) -> Mapping[str, ClaimSet]:
    """Validate caller claim sets and merge them with the built-in ones.

    Args:
        custom: Caller-registered claim sets.

    Returns:
        Read-only mapping of scope name -> ClaimSet.

    Raises:
        ConfigurationError: If a caller set is named 'openid', or if a set
            name is registered twice (including clashes with built-in sets).
    """
    registry: dict[str, ClaimSet] = {claim_set.scope: claim_set for claim_set in standard_claim_sets()}

    for claim_set in custom:
        if claim_set.scope == OPENID_SCOPE:
            raise ConfigurationError(
                f"'{OPENID_SCOPE}' is a reserved claim set and is pre-defined by the extractor"
            )
        if claim_set.scope in registry:
            raise ConfigurationError(f"Claim set '{claim_set.scope}' is already registered")
        registry[claim_set.scope] = claim_set

    return MappingProxyType(registry)
