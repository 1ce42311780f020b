"""Attribute translation table.

Maps each OIDC claim to the ordered list of source (SAML) attribute names
that may supply it. The first listed attribute present in an assertion
decides the claim value.

Caller entries are merged over the defaults by claim name: an entry for
'sub' replaces the whole default 'sub' list, it is not appended to it.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_TRANSLATION_TABLE",
    "TranslationTable",
    "build_translation_table",
]

from collections.abc import Mapping, Sequence
from types import MappingProxyType

TranslationTable = Mapping[str, tuple[str, ...]]

# Claims with an empty source list are never populated unless overridden
DEFAULT_TRANSLATION_TABLE: TranslationTable = MappingProxyType(
    {
        "sub": ("eduPersonPrincipalName", "eduPersonTargetedID", "eduPersonUniqueId"),
        "name": ("cn", "displayName"),
        "family_name": ("sn",),
        "given_name": ("givenName",),
        "middle_name": (),
        "nickname": ("eduPersonNickname",),
        "preferred_username": ("uid",),
        "profile": ("labeledURI", "description"),
        "picture": ("jpegPhoto",),
        "website": (),
        "gender": (),
        "birthdate": (),
        "zoneinfo": (),
        "locale": ("preferredLanguage",),
        "updated_at": (),
        "email": ("mail",),
        "email_verified": (),
        "address": ("postalAddress",),
        "phone_number": ("mobile", "telephoneNumber", "homePhone"),
        "phone_number_verified": (),
    }
)


def build_translation_table(
    overrides: Mapping[str, Sequence[str]] | None = None,
) -> TranslationTable:
    """Merge caller entries over the default table.

    Default claim order is preserved; claims only present in overrides are
    appended in the order given.

    Args:
        overrides: Claim -> ordered source attribute names. A bare string
            names a single source.

    Returns:
        Read-only merged table.
    """
    table: dict[str, tuple[str, ...]] = dict(DEFAULT_TRANSLATION_TABLE)
    for claim, sources in (overrides or {}).items():
        table[claim] = (sources,) if isinstance(sources, str) else tuple(sources)
    return MappingProxyType(table)
