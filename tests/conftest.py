"""Shared fixtures for identity conversion tests."""

import pytest

IDENTITY_ID = (
    "/subscriptions/00000000-0000-0000-0000-000000000000/resourceGroups/rg1"
    "/providers/Microsoft.ManagedIdentity/userAssignedIdentities/identity1"
)
OTHER_IDENTITY_ID = (
    "/subscriptions/00000000-0000-0000-0000-000000000000/resourceGroups/rg1"
    "/providers/Microsoft.ManagedIdentity/userAssignedIdentities/identity2"
)
# As returned by some API versions: static segments lower-cased
LOWERCASE_IDENTITY_ID = (
    "/subscriptions/00000000-0000-0000-0000-000000000000/resourcegroups/rg1"
    "/providers/microsoft.managedidentity/userassignedidentities/identity1"
)


@pytest.fixture
def identity_id():
    return IDENTITY_ID


@pytest.fixture
def other_identity_id():
    return OTHER_IDENTITY_ID


@pytest.fixture
def lowercase_identity_id():
    return LOWERCASE_IDENTITY_ID


@pytest.fixture(autouse=True)
def quiet_logging_env(monkeypatch):
    """Keep CLI log output off stdout-bound streams unless a test opts in."""
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    monkeypatch.delenv("LOG_FILE", raising=False)
    monkeypatch.delenv("AZIM_JSON_INDENT", raising=False)
    monkeypatch.delenv("AZIM_SORT_KEYS", raising=False)
