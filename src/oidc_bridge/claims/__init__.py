"""Attribute-to-claim translation engine.

- translation: Default translation table and override merging
- claim_sets: Scope-bound claim bundles and registration checks
- extractor: ClaimTranslatorExtractor (translate + scope filter)
"""

from oidc_bridge.claims.claim_sets import ClaimSet, build_claim_sets, standard_claim_sets
from oidc_bridge.claims.extractor import (
    Claims,
    ClaimTranslatorExtractor,
    SourceAttributes,
    create_claim_extractor,
)
from oidc_bridge.claims.translation import DEFAULT_TRANSLATION_TABLE, build_translation_table

__all__ = [
    "DEFAULT_TRANSLATION_TABLE",
    "ClaimSet",
    "ClaimTranslatorExtractor",
    "Claims",
    "SourceAttributes",
    "build_claim_sets",
    "build_translation_table",
    "create_claim_extractor",
    "standard_claim_sets",
]
