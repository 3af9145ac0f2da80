"""User Assigned Identity resource IDs.

Azure user assigned identities are addressed by IDs of the form:

    /subscriptions/{subscription_id}/resourceGroups/{resource_group_name}
        /providers/Microsoft.ManagedIdentity/userAssignedIdentities/{name}

IDs returned by the management API do not always preserve the casing of the
static segments (``resourcegroups``, ``microsoft.managedidentity`` ...), so
``parse_insensitively`` accepts any casing for those segments and ``id()``
re-renders the canonical form.
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

from .exceptions import ResourceIdParseError

logger = logging.getLogger(__name__)

PROVIDER_NAMESPACE = "Microsoft.ManagedIdentity"
RESOURCE_TYPE = "userAssignedIdentities"

# (position, static value) for the fixed segments; the remaining positions are
# the user-specified values, in order.
_STATIC_SEGMENTS: Tuple[Tuple[int, str], ...] = (
    (0, "subscriptions"),
    (2, "resourceGroups"),
    (4, "providers"),
    (5, PROVIDER_NAMESPACE),
    (6, RESOURCE_TYPE),
)
_VALUE_SEGMENTS: Tuple[Tuple[int, str], ...] = (
    (1, "subscription_id"),
    (3, "resource_group_name"),
    (7, "user_assigned_identity_name"),
)
_SEGMENT_COUNT = 8


@dataclass(frozen=True)
class UserAssignedIdentityId:
    """A parsed User Assigned Identity resource ID."""

    subscription_id: str
    resource_group_name: str
    user_assigned_identity_name: str

    def id(self) -> str:
        """Render the ID with canonical segment casing."""
        return (
            f"/subscriptions/{self.subscription_id}"
            f"/resourceGroups/{self.resource_group_name}"
            f"/providers/{PROVIDER_NAMESPACE}/{RESOURCE_TYPE}"
            f"/{self.user_assigned_identity_name}"
        )

    def __str__(self) -> str:
        return (
            f"User Assigned Identity (Subscription: {self.subscription_id!r}, "
            f"Resource Group Name: {self.resource_group_name!r}, "
            f"User Assigned Identity Name: {self.user_assigned_identity_name!r})"
        )

    @classmethod
    def parse(cls, resource_id: str) -> "UserAssignedIdentityId":
        """Parse ``resource_id`` requiring exact casing for static segments."""
        return cls(*_parse_segments(resource_id, insensitive=False))

    @classmethod
    def parse_insensitively(cls, resource_id: str) -> "UserAssignedIdentityId":
        """Parse ``resource_id`` ignoring the casing of static segments."""
        return cls(*_parse_segments(resource_id, insensitive=True))


def parse_user_assigned_identity_id(resource_id: str) -> UserAssignedIdentityId:
    return UserAssignedIdentityId.parse(resource_id)


def parse_user_assigned_identity_id_insensitively(
    resource_id: str,
) -> UserAssignedIdentityId:
    return UserAssignedIdentityId.parse_insensitively(resource_id)


def _parse_segments(resource_id: str, insensitive: bool) -> List[str]:
    if not isinstance(resource_id, str) or not resource_id:
        raise ResourceIdParseError(str(resource_id), "the resource ID is empty")

    if not resource_id.startswith("/"):
        raise ResourceIdParseError(
            resource_id, "the resource ID must start with a '/'"
        )

    # Tolerate a single trailing slash
    segments = resource_id[1:].rstrip("/").split("/")
    if len(segments) != _SEGMENT_COUNT:
        raise ResourceIdParseError(
            resource_id,
            f"expected {_SEGMENT_COUNT} segments but got {len(segments)}",
        )

    for position, expected in _STATIC_SEGMENTS:
        actual = segments[position]
        matches = (
            actual.lower() == expected.lower() if insensitive else actual == expected
        )
        if not matches:
            raise ResourceIdParseError(
                resource_id,
                f"expected the segment {expected!r} at position {position} "
                f"but got {actual!r}",
            )

    values = []
    for position, name in _VALUE_SEGMENTS:
        value = segments[position]
        if not value:
            raise ResourceIdParseError(
                resource_id, f"the segment {name!r} must not be empty"
            )
        values.append(value)

    logger.debug(f"Parsed User Assigned Identity ID {resource_id}")
    return values
