"""Claim extraction: source attributes -> OIDC claims released for scopes.

Two passes:
1. Translate: for every claim in the translation table, the first source
   attribute present supplies the value (all values for multi-valued claims,
   the first value otherwise). Claims with no present source are omitted.
2. Filter: keep only claims belonging to a claim set whose scope was
   requested.

The extractor holds only immutable state after construction, so one instance
is shared by all requests and threads.
"""

from __future__ import annotations

__all__ = [
    "Claims",
    "ClaimTranslatorExtractor",
    "SourceAttributes",
    "create_claim_extractor",
]

from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, Union

from oidc_bridge.claims.claim_sets import ClaimSet, build_claim_sets
from oidc_bridge.claims.translation import TranslationTable, build_translation_table
from oidc_bridge.telemetry.system.system_logger import get_system_logger

if TYPE_CHECKING:
    from oidc_bridge.config import OIDCConfig

SourceAttributes = Mapping[str, Sequence[str]]
Claims = dict[str, Union[str, list[str]]]


def _attribute_values(raw: Any) -> list[str]:
    """Normalize one attribute's raw value to a list of values."""
    if raw is None:
        return []
    if isinstance(raw, str):
        return [raw]
    if isinstance(raw, Sequence):
        return list(raw)
    return [raw]


class ClaimTranslatorExtractor:
    """Translates source attributes into claims and filters them by scope.

    Build instances with ClaimTranslatorExtractor.build() (or
    create_claim_extractor() from config). The constructor accepts an
    already-validated claim set mapping.

    Usage:
        extractor = ClaimTranslatorExtractor.build(
            claim_sets=[ClaimSet(scope="private", claims=("national_id",))],
            translation_table={"national_id": ["schacPersonalUniqueID"]},
        )
        claims = extractor.extract(["openid", "profile"], user.claims)
    """

    def __init__(
        self,
        claim_sets: Mapping[str, ClaimSet],
        translation_table: TranslationTable,
        multi_value_claims: frozenset[str] = frozenset(),
    ) -> None:
        """Initialize the extractor.

        Args:
            claim_sets: Validated scope -> ClaimSet mapping (see build_claim_sets).
            translation_table: Claim -> ordered source attribute names.
            multi_value_claims: Claims that keep every source value.
        """
        self._claim_sets = claim_sets
        self._translation_table = translation_table
        self._multi_value_claims = multi_value_claims

    @classmethod
    def build(
        cls,
        claim_sets: Iterable[ClaimSet] = (),
        translation_table: Mapping[str, Sequence[str]] | None = None,
        multi_value_claims: Iterable[str] = (),
    ) -> "ClaimTranslatorExtractor":
        """Validate configuration and build an extractor.

        Args:
            claim_sets: Caller claim sets, added to the built-in ones.
            translation_table: Caller entries merged over the default table.
            multi_value_claims: Claims that keep every source value.

        Returns:
            Ready-to-use extractor.

        Raises:
            ConfigurationError: On duplicate claim set names or an attempt to
                register the reserved 'openid' set.
        """
        return cls(
            claim_sets=build_claim_sets(claim_sets),
            translation_table=build_translation_table(translation_table),
            multi_value_claims=frozenset(multi_value_claims),
        )

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def claim_sets(self) -> Mapping[str, ClaimSet]:
        """Read-only scope -> ClaimSet mapping."""
        return self._claim_sets

    @property
    def scopes(self) -> list[str]:
        """Names of all scopes that release claims."""
        return list(self._claim_sets)

    @property
    def translation_table(self) -> TranslationTable:
        return self._translation_table

    @property
    def multi_value_claims(self) -> frozenset[str]:
        return self._multi_value_claims

    def get_claim_set(self, scope: str) -> ClaimSet | None:
        return self._claim_sets.get(scope)

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def translate(self, attributes: SourceAttributes) -> Claims:
        """Apply the translation table and multi-value policy.

        Args:
            attributes: Source attribute name -> list of values.

        Returns:
            Every claim that has a present source, regardless of scope.
        """
        claims: Claims = {}
        if not isinstance(attributes, Mapping):
            return claims

        for claim, sources in self._translation_table.items():
            for source in sources:
                if source not in attributes:
                    continue
                values = _attribute_values(attributes[source])
                if claim in self._multi_value_claims:
                    claims[claim] = values
                elif values:
                    claims[claim] = values[0]
                break

        return claims

    def extract(self, scopes: Iterable[str], attributes: SourceAttributes) -> Claims:
        """Translate attributes and release only claims of requested scopes.

        Unknown scopes are ignored. Never raises for malformed input.

        Args:
            scopes: Requested scope names, or a space-delimited scope string.
            attributes: Source attribute name -> list of values.

        Returns:
            Released claims in translation table order.
        """
        if isinstance(scopes, str):
            scopes = scopes.split()  # space-delimited OAuth scope parameter
        elif not isinstance(scopes, Iterable):
            return {}

        allowed: set[str] = set()
        for scope in scopes:
            if not isinstance(scope, str):
                continue
            claim_set = self._claim_sets.get(scope)
            if claim_set is not None:
                allowed.update(claim_set.claims)

        if not allowed:
            return {}

        return {claim: value for claim, value in self.translate(attributes).items() if claim in allowed}


def create_claim_extractor(config: "OIDCConfig") -> ClaimTranslatorExtractor:
    """Build the extractor from OIDC configuration.

    Each configured custom scope becomes a claim set. Scopes with
    are_multiple_claim_values_allowed add their claims to the multi-value
    policy.

    Args:
        config: OIDC configuration (translate, scopes).

    Returns:
        Configured extractor.

    Raises:
        ConfigurationError: On duplicate or reserved scope names.
    """
    claim_sets: list[ClaimSet] = []
    multi_value_claims: set[str] = set()

    for scope, scope_config in config.scopes.items():
        claim_sets.append(ClaimSet(scope=scope, claims=tuple(scope_config.claims)))
        if scope_config.are_multiple_claim_values_allowed:
            multi_value_claims.update(scope_config.claims)

    extractor = ClaimTranslatorExtractor.build(
        claim_sets=claim_sets,
        translation_table=config.translate,
        multi_value_claims=multi_value_claims,
    )

    get_system_logger().debug(
        {
            "event": "claim_extractor_built",
            "message": f"Claim extractor built with scopes: {', '.join(extractor.scopes)}",
            "custom_scopes": [claim_set.scope for claim_set in claim_sets],
            "multi_value_claims": sorted(multi_value_claims),
        }
    )
    return extractor
