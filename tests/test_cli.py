"""Tests for the azure-identity-map command line."""

import json

from click.testing import CliRunner

from azure_identity_map.cli import cli


def _write_json(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(json.dumps(data))
    return str(path)


class TestExpandCommand:
    def test_expand_user_assigned(self, tmp_path, identity_id):
        path = _write_json(
            tmp_path,
            "identity.json",
            [{"type": "UserAssigned", "identity_ids": [identity_id]}],
        )

        result = CliRunner().invoke(cli, ["expand", path])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {
            "type": "UserAssigned",
            "userAssignedIdentities": {identity_id: {}},
        }

    def test_expand_yaml_typed(self, tmp_path):
        path = tmp_path / "identity.yaml"
        path.write_text("- type: SystemAssigned\n  identity_ids: []\n")

        result = CliRunner().invoke(cli, ["expand", "--typed", str(path)])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {
            "type": "SystemAssigned",
            "userAssignedIdentities": None,
        }

    def test_expand_invalid_block(self, tmp_path, identity_id):
        path = _write_json(
            tmp_path,
            "identity.json",
            [{"type": "SystemAssigned", "identity_ids": [identity_id]}],
        )

        result = CliRunner().invoke(cli, ["expand", path])

        assert result.exit_code == 1
        assert "can only be specified when `type` is set to UserAssigned" in (
            result.output
        )

    def test_expand_invalid_yaml(self, tmp_path):
        path = tmp_path / "identity.yaml"
        path.write_text("- type: [unclosed\n")

        result = CliRunner().invoke(cli, ["expand", str(path)])

        assert result.exit_code != 0
        assert "Invalid YAML/JSON" in result.output


class TestFlattenCommand:
    def test_flatten_response(self, tmp_path, lowercase_identity_id, identity_id):
        path = _write_json(
            tmp_path,
            "response.json",
            {
                "type": "UserAssigned",
                "principalId": "p",
                "tenantId": "t",
                "userAssignedIdentities": {lowercase_identity_id: {}},
            },
        )

        result = CliRunner().invoke(cli, ["flatten", path])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == [
            {
                "type": "UserAssigned",
                "identity_ids": [identity_id],
                "principal_id": "p",
                "tenant_id": "t",
            }
        ]

    def test_flatten_typed_none(self, tmp_path):
        path = _write_json(tmp_path, "response.json", {"type": "None"})

        result = CliRunner().invoke(cli, ["flatten", "--typed", path])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == []

    def test_flatten_bad_identity_id(self, tmp_path):
        path = _write_json(
            tmp_path,
            "response.json",
            {"type": "UserAssigned", "userAssignedIdentities": {"bogus": {}}},
        )

        result = CliRunner().invoke(cli, ["flatten", path])

        assert result.exit_code == 1
        assert 'parsing "bogus" as a User Assigned Identity ID' in result.output


def test_invalid_log_level(tmp_path):
    path = _write_json(tmp_path, "identity.json", [])

    result = CliRunner().invoke(cli, ["--log-level", "LOUD", "expand", path])

    assert result.exit_code != 0
    assert "Log level must be one of" in result.output
