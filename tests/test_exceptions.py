"""Tests for the identity error hierarchy."""

from azure_identity_map import (
    IdentityIdParseError,
    IdentityMapError,
    InvalidIdentityError,
    ResourceIdParseError,
)


def test_invalid_identity_error_context():
    error = InvalidIdentityError("bad identity", identity_type="UserAssigned")

    assert isinstance(error, IdentityMapError)
    assert str(error) == "bad identity"
    assert error.error_code == "INVALID_IDENTITY"
    assert error.context == {"type": "UserAssigned"}
    assert error.describe() == (
        "[INVALID_IDENTITY] bad identity (context: type=UserAssigned)"
    )


def test_identity_id_parse_error_wraps_cause():
    cause = ResourceIdParseError("bad-id", "the resource ID must start with a '/'")
    error = IdentityIdParseError("bad-id", cause)

    assert error.raw_id == "bad-id"
    assert error.cause is cause
    assert str(error) == (
        'parsing "bad-id" as a User Assigned Identity ID: '
        "parsing 'bad-id': the resource ID must start with a '/'"
    )

    data = error.to_dict()
    assert data["error_type"] == "IdentityIdParseError"
    assert data["error_code"] == "IDENTITY_ID_PARSE_FAILED"
    assert data["context"] == {"identity_id": "bad-id"}
    assert data["cause"] == str(cause)
    assert data["recovery_suggestion"]
