"""
Identity models.

Covers the three shapes an identity passes through:

- ``IdentityBlock`` / ``ModelSystemAssignedUserAssigned``: the provider schema
  side (untyped block and typed model respectively)
- ``SystemOrSingleUserAssignedIdentity``: the canonical in-memory value
- ``WireIdentity``: the management API payload as returned by the server
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)


class IdentityType(str, Enum):
    """Managed identity types as spelled on the wire."""

    NONE = "None"
    SYSTEM_ASSIGNED = "SystemAssigned"
    USER_ASSIGNED = "UserAssigned"
    # Only valid for resources supporting several identities; never produced here
    SYSTEM_ASSIGNED_USER_ASSIGNED = "SystemAssigned, UserAssigned"


_COMBINED_SPELLINGS = {
    "systemassigned, userassigned",
    "systemassigned,userassigned",
}


def normalize_type(value: Union[IdentityType, str, None]) -> IdentityType:
    """Fold any identity type onto NONE, SYSTEM_ASSIGNED or USER_ASSIGNED.

    Matching is case-insensitive. The combined type and unknown values are
    treated as neither system nor user assigned.
    """
    if value is None:
        return IdentityType.NONE

    raw = value.value if isinstance(value, IdentityType) else str(value)
    folded = raw.strip().lower()

    if folded == IdentityType.SYSTEM_ASSIGNED.value.lower():
        return IdentityType.SYSTEM_ASSIGNED
    if folded == IdentityType.USER_ASSIGNED.value.lower():
        return IdentityType.USER_ASSIGNED

    if folded in _COMBINED_SPELLINGS:
        logger.debug(f"Identity type {raw!r} is not supported here, treating as None")
    elif folded and folded != IdentityType.NONE.value.lower():
        logger.debug(f"Unrecognised identity type {raw!r}, treating as None")
    return IdentityType.NONE


@dataclass
class SystemOrSingleUserAssignedIdentity:
    """Canonical identity value: system assigned or exactly one user assigned.

    ``principal_id`` and ``tenant_id`` are assigned by the server and only
    carry values when built from an API response. ``type`` may hold a raw
    string when decoded from the wire; it is normalized when flattened.
    """

    type: Union[IdentityType, str] = IdentityType.NONE
    principal_id: str = ""
    tenant_id: str = ""
    identity_ids: Set[str] = field(default_factory=set)


class IdentityBlock(BaseModel):
    """Schema-validated view of an untyped ``identity`` block.

    Terraform sets ``identity_ids`` as a set; lists and tuples are accepted
    too. Computed attributes (``principal_id``, ``tenant_id``) are ignored.
    """

    type: str = ""
    identity_ids: Set[str] = Field(default_factory=set)

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def convert_none_to_empty(cls, data: Any) -> Any:
        """Treat missing/None attributes as their empty values."""
        if data is None:
            return {}
        if isinstance(data, dict):
            data = dict(data)
            if data.get("type") is None:
                data["type"] = ""
            if data.get("identity_ids") is None:
                data["identity_ids"] = set()
        return data


class ModelSystemAssignedUserAssigned(BaseModel):
    """Typed schema model for a system or single user assigned identity."""

    type: IdentityType = IdentityType.NONE
    identity_ids: List[str] = Field(default_factory=list)
    principal_id: str = ""
    tenant_id: str = ""

    @field_validator("identity_ids", mode="before")
    @classmethod
    def none_to_empty_list(cls, v: Any) -> Any:
        return [] if v is None else v


class UserAssignedIdentityDetails(BaseModel):
    """Server-populated details for one user assigned identity."""

    principal_id: Optional[str] = Field(None, alias="principalId")
    client_id: Optional[str] = Field(None, alias="clientId")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class WireIdentity(BaseModel):
    """Identity payload as returned by the management API."""

    type: str = IdentityType.NONE.value
    principal_id: Optional[str] = Field(None, alias="principalId")
    tenant_id: Optional[str] = Field(None, alias="tenantId")
    user_assigned_identities: Optional[Dict[str, UserAssignedIdentityDetails]] = (
        Field(None, alias="userAssignedIdentities")
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("type", mode="before")
    @classmethod
    def null_type_to_none(cls, v: Any) -> Any:
        return IdentityType.NONE.value if v is None else v

    @field_validator("user_assigned_identities", mode="before")
    @classmethod
    def null_details_to_empty(cls, v: Any) -> Any:
        """Some API versions return ``null`` for an identity's details."""
        if isinstance(v, dict):
            return {k: (d if d is not None else {}) for k, d in v.items()}
        return v
