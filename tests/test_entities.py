"""Tests for UserRecord and ClientRecord."""

from oidc_bridge.entities import ClientRecord, UserRecord


class TestUserRecord:
    def test_from_data_sets_both_timestamps(self) -> None:
        user = UserRecord.from_data("u1", {"uid": ["u1"]})

        assert user.created_at == user.updated_at
        assert user.created_at.tzinfo is not None

    def test_set_claims_replaces(self) -> None:
        user = UserRecord.from_data("u1", {"uid": ["u1"], "mail": ["a@b.org"]})

        user.set_claims({"cn": ["One"]})

        assert user.claims == {"cn": ["One"]}
        assert user.updated_at >= user.created_at


class TestClientRecord:
    def test_to_dict_contains_all_fields(self, client: ClientRecord) -> None:
        data = client.to_dict()

        assert data["identifier"] == "app"
        assert data["secret"] == "s3cret"
        assert data["redirect_uri"] == ["https://app.example.org/callback"]
        assert data["is_enabled"] is True

    def test_get_auth_source_defaults_to_none(self, client: ClientRecord) -> None:
        assert client.get_auth_source() is None
