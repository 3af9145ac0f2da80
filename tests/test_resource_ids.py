"""Tests for User Assigned Identity ID parsing."""

import pytest

from azure_identity_map import (
    ResourceIdParseError,
    UserAssignedIdentityId,
    parse_user_assigned_identity_id,
    parse_user_assigned_identity_id_insensitively,
)


class TestUserAssignedIdentityId:
    def test_render(self, identity_id):
        parsed = UserAssignedIdentityId(
            subscription_id="00000000-0000-0000-0000-000000000000",
            resource_group_name="rg1",
            user_assigned_identity_name="identity1",
        )

        assert parsed.id() == identity_id

    def test_parse(self, identity_id):
        parsed = parse_user_assigned_identity_id(identity_id)

        assert parsed.subscription_id == "00000000-0000-0000-0000-000000000000"
        assert parsed.resource_group_name == "rg1"
        assert parsed.user_assigned_identity_name == "identity1"
        assert parsed.id() == identity_id

    def test_parse_rejects_wrong_casing(self, lowercase_identity_id):
        with pytest.raises(ResourceIdParseError, match="resourceGroups"):
            parse_user_assigned_identity_id(lowercase_identity_id)

    def test_parse_insensitively(self, lowercase_identity_id, identity_id):
        parsed = parse_user_assigned_identity_id_insensitively(lowercase_identity_id)

        assert parsed.id() == identity_id

    def test_user_values_keep_their_casing(self):
        parsed = UserAssignedIdentityId.parse_insensitively(
            "/SUBSCRIPTIONS/Sub/RESOURCEGROUPS/My-RG/PROVIDERS"
            "/MICROSOFT.MANAGEDIDENTITY/USERASSIGNEDIDENTITIES/My-Identity"
        )

        assert parsed.id() == (
            "/subscriptions/Sub/resourceGroups/My-RG/providers"
            "/Microsoft.ManagedIdentity/userAssignedIdentities/My-Identity"
        )

    def test_trailing_slash(self, identity_id):
        parsed = UserAssignedIdentityId.parse_insensitively(identity_id + "/")

        assert parsed.id() == identity_id

    @pytest.mark.parametrize(
        "resource_id,reason",
        [
            ("", "empty"),
            ("subscriptions/sub/resourceGroups/rg", "must start with"),
            ("/subscriptions/sub/resourceGroups/rg", "expected 8 segments"),
            (
                "/subscriptions/sub/resourceGroups/rg/providers"
                "/Microsoft.ManagedIdentity/userAssignedIdentities/id/extra/segments",
                "expected 8 segments",
            ),
            (
                "/subscriptions//resourceGroups/rg/providers"
                "/Microsoft.ManagedIdentity/userAssignedIdentities/id",
                "subscription_id",
            ),
            (
                "/subscriptions/sub/resourceGroups/rg/providers"
                "/Microsoft.ManagedIdentity/identities/id",
                "userAssignedIdentities",
            ),
        ],
    )
    def test_invalid_ids(self, resource_id, reason):
        with pytest.raises(ResourceIdParseError, match=reason):
            UserAssignedIdentityId.parse_insensitively(resource_id)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            UserAssignedIdentityId.parse_insensitively("/nope")
