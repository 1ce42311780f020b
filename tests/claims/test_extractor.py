"""Tests for ClaimTranslatorExtractor.

Covers first-match translation, the multi-value policy, scope filtering and
tolerance of malformed attribute input.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from oidc_bridge.claims.claim_sets import ClaimSet
from oidc_bridge.claims.extractor import ClaimTranslatorExtractor, create_claim_extractor
from oidc_bridge.config import OIDCConfig, ScopeConfig
from oidc_bridge.exceptions import ConfigurationError


@pytest.fixture
def extractor() -> ClaimTranslatorExtractor:
    """Extractor with the built-in table and claim sets."""
    return ClaimTranslatorExtractor.build()


class TestTranslate:
    """Tests for translate() (no scope filtering)."""

    def test_first_present_source_wins(self, extractor: ClaimTranslatorExtractor) -> None:
        """sub comes from eduPersonPrincipalName when both sources are present."""
        # Arrange
        attributes = {
            "eduPersonTargetedID": ["tid"],
            "eduPersonPrincipalName": ["u1@example.org"],
        }

        # Act
        claims = extractor.translate(attributes)

        # Assert
        assert claims["sub"] == "u1@example.org"

    def test_falls_back_to_later_source(self, extractor: ClaimTranslatorExtractor) -> None:
        """When the first source is absent, the next present one is used."""
        claims = extractor.translate({"eduPersonUniqueId": ["unique-1"], "displayName": ["Display"]})

        assert claims["sub"] == "unique-1"
        assert claims["name"] == "Display"

    def test_claim_without_source_is_omitted(self, extractor: ClaimTranslatorExtractor) -> None:
        """Claims with no present source are absent, never None or empty."""
        claims = extractor.translate({"cn": ["User One"]})

        assert claims == {"name": "User One"}

    def test_single_valued_claim_takes_first_value(self, extractor: ClaimTranslatorExtractor) -> None:
        claims = extractor.translate({"mail": ["first@example.org", "second@example.org"]})

        assert claims["email"] == "first@example.org"

    def test_multi_valued_claim_keeps_all_values_in_order(self) -> None:
        """A multi-valued claim releases the full ordered list."""
        # Arrange
        extractor = ClaimTranslatorExtractor.build(multi_value_claims=["email"])
        values = ["a@example.org", "b@example.org", "c@example.org"]

        # Act
        claims = extractor.translate({"mail": values})

        # Assert
        assert claims["email"] == values
        assert claims["email"] is not values

    def test_empty_values_single_valued_omitted(self, extractor: ClaimTranslatorExtractor) -> None:
        """A present source with no values yields no single-valued claim."""
        claims = extractor.translate({"mail": []})

        assert "email" not in claims

    def test_empty_values_multi_valued_is_empty_list(self) -> None:
        extractor = ClaimTranslatorExtractor.build(multi_value_claims=["email"])

        claims = extractor.translate({"mail": []})

        assert claims["email"] == []

    def test_empty_present_source_stops_the_scan(self, extractor: ClaimTranslatorExtractor) -> None:
        """The first present source decides even when it has no values."""
        claims = extractor.translate({"cn": [], "displayName": ["Display"]})

        assert "name" not in claims

    def test_bare_string_treated_as_single_value(self, extractor: ClaimTranslatorExtractor) -> None:
        claims = extractor.translate({"mail": "u1@example.org"})

        assert claims["email"] == "u1@example.org"

    def test_non_mapping_input_yields_no_claims(self, extractor: ClaimTranslatorExtractor) -> None:
        assert extractor.translate(["not", "a", "mapping"]) == {}  # type: ignore[arg-type]

    def test_custom_translation_entry(self) -> None:
        """Caller table entries are used for translation."""
        extractor = ClaimTranslatorExtractor.build(translation_table={"sub": ["uid"]})

        claims = extractor.translate({"uid": ["u1"], "eduPersonPrincipalName": ["ignored"]})

        assert claims["sub"] == "u1"


class TestExtract:
    """Tests for extract() (translation + scope filtering)."""

    def test_openid_profile_scenario(self, extractor: ClaimTranslatorExtractor) -> None:
        """Default table with openid + profile releases sub, name and family_name."""
        # Arrange
        attributes = {
            "eduPersonPrincipalName": ["u1@example.org"],
            "cn": ["User One"],
            "sn": ["One"],
        }

        # Act
        claims = extractor.extract(["openid", "profile"], attributes)

        # Assert
        assert claims == {"sub": "u1@example.org", "name": "User One", "family_name": "One"}

    def test_claims_outside_requested_scopes_absent(self, extractor: ClaimTranslatorExtractor) -> None:
        """email is not released when only openid is requested."""
        attributes = {"eduPersonPrincipalName": ["u1@example.org"], "mail": ["u1@example.org"]}

        claims = extractor.extract(["openid"], attributes)

        assert claims == {"sub": "u1@example.org"}

    def test_sub_not_released_without_openid(self, extractor: ClaimTranslatorExtractor) -> None:
        attributes = {"eduPersonPrincipalName": ["u1@example.org"], "mail": ["u1@example.org"]}

        claims = extractor.extract(["email"], attributes)

        assert claims == {"email": "u1@example.org"}

    def test_unknown_scope_ignored(self, extractor: ClaimTranslatorExtractor) -> None:
        claims = extractor.extract(["openid", "no-such-scope"], {"eduPersonPrincipalName": ["u1"]})

        assert claims == {"sub": "u1"}

    def test_no_scopes_releases_nothing(self, extractor: ClaimTranslatorExtractor) -> None:
        assert extractor.extract([], {"eduPersonPrincipalName": ["u1"]}) == {}

    def test_none_scopes_releases_nothing(self, extractor: ClaimTranslatorExtractor) -> None:
        """A missing scopes argument is treated as no scopes."""
        assert extractor.extract(None, {"eduPersonPrincipalName": ["u1"]}) == {}  # type: ignore[arg-type]

    def test_non_string_scope_entries_skipped(self, extractor: ClaimTranslatorExtractor) -> None:
        """Unhashable or non-string scope entries are ignored, valid ones still apply."""
        # Arrange
        scopes = [["openid"], 42, None, "openid"]

        # Act
        claims = extractor.extract(scopes, {"eduPersonPrincipalName": ["u1"]})  # type: ignore[arg-type]

        # Assert
        assert claims == {"sub": "u1"}

    def test_space_delimited_scope_string(self, extractor: ClaimTranslatorExtractor) -> None:
        claims = extractor.extract("openid profile", {"eduPersonPrincipalName": ["u1"], "cn": ["One"]})

        assert claims == {"sub": "u1", "name": "One"}

    def test_custom_scope_releases_custom_claim(self) -> None:
        """A custom claim set plus translation entry releases the custom claim."""
        # Arrange
        extractor = ClaimTranslatorExtractor.build(
            claim_sets=[ClaimSet(scope="private", claims=("national_id",))],
            translation_table={"national_id": ["schacPersonalUniqueID"]},
        )

        # Act
        claims = extractor.extract(["private"], {"schacPersonalUniqueID": ["urn:id:123"]})

        # Assert
        assert claims == {"national_id": "urn:id:123"}

    def test_concurrent_extraction_is_consistent(self, extractor: ClaimTranslatorExtractor) -> None:
        """Many threads sharing one extractor get identical results."""
        attributes = {"eduPersonPrincipalName": ["u1"], "cn": ["User One"]}

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: extractor.extract(["openid", "profile"], attributes), range(50)))

        assert all(result == {"sub": "u1", "name": "User One"} for result in results)


class TestBuild:
    """Tests for construction and introspection."""

    def test_duplicate_claim_set_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            ClaimTranslatorExtractor.build(
                claim_sets=[ClaimSet(scope="x", claims=()), ClaimSet(scope="x", claims=())]
            )

    def test_extra_openid_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            ClaimTranslatorExtractor.build(claim_sets=[ClaimSet(scope="openid", claims=("sub",))])

    def test_scopes_and_get_claim_set(self, extractor: ClaimTranslatorExtractor) -> None:
        assert extractor.scopes == ["openid", "profile", "email", "address", "phone"]
        assert extractor.get_claim_set("phone") is not None
        assert extractor.get_claim_set("missing") is None


class TestCreateClaimExtractor:
    """Tests for create_claim_extractor() from OIDCConfig."""

    def test_custom_scopes_from_config(self) -> None:
        """Configured scopes become claim sets; multi-value flag feeds the policy."""
        # Arrange
        config = OIDCConfig(
            issuer="https://op.example.org",
            translate={"groups": ["isMemberOf"]},
            scopes={
                "groups": ScopeConfig(
                    description="Group memberships",
                    claims=["groups"],
                    are_multiple_claim_values_allowed=True,
                ),
            },
        )

        # Act
        extractor = create_claim_extractor(config)
        claims = extractor.extract(["groups"], {"isMemberOf": ["staff", "admins"]})

        # Assert
        assert claims == {"groups": ["staff", "admins"]}
        assert "groups" in extractor.multi_value_claims

    def test_reserved_scope_in_config_raises(self) -> None:
        config = OIDCConfig(
            issuer="https://op.example.org",
            scopes={"openid": ScopeConfig(claims=["sub"])},
        )

        with pytest.raises(ConfigurationError):
            create_claim_extractor(config)
