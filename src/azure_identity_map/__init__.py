"""Conversion between provider-schema and wire forms of a managed identity."""

from .converter import (
    expand_system_or_single_user_assigned_map,
    expand_system_or_single_user_assigned_map_from_model,
    flatten_system_or_single_user_assigned_map,
    flatten_system_or_single_user_assigned_map_to_model,
    validate_identity,
)
from .encoder import (
    deserialize_identity,
    identity_from_json,
    identity_to_json,
    serialize_identity,
)
from .exceptions import (
    IdentityIdParseError,
    IdentityMapError,
    InvalidIdentityError,
    ResourceIdParseError,
)
from .models import (
    IdentityBlock,
    IdentityType,
    ModelSystemAssignedUserAssigned,
    SystemOrSingleUserAssignedIdentity,
    UserAssignedIdentityDetails,
    WireIdentity,
    normalize_type,
)
from .resource_ids import (
    UserAssignedIdentityId,
    parse_user_assigned_identity_id,
    parse_user_assigned_identity_id_insensitively,
)

__all__ = [
    "IdentityBlock",
    "IdentityIdParseError",
    "IdentityMapError",
    "IdentityType",
    "InvalidIdentityError",
    "ModelSystemAssignedUserAssigned",
    "ResourceIdParseError",
    "SystemOrSingleUserAssignedIdentity",
    "UserAssignedIdentityDetails",
    "UserAssignedIdentityId",
    "WireIdentity",
    "deserialize_identity",
    "expand_system_or_single_user_assigned_map",
    "expand_system_or_single_user_assigned_map_from_model",
    "flatten_system_or_single_user_assigned_map",
    "flatten_system_or_single_user_assigned_map_to_model",
    "identity_from_json",
    "identity_to_json",
    "normalize_type",
    "parse_user_assigned_identity_id",
    "parse_user_assigned_identity_id_insensitively",
    "serialize_identity",
    "validate_identity",
]
