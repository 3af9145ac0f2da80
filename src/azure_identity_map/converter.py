"""Expand and flatten a "system assigned or single user assigned" identity.

Expand turns the provider schema representation (an untyped ``identity``
block or the typed ``ModelSystemAssignedUserAssigned``) into the canonical
``SystemOrSingleUserAssignedIdentity``. Flatten goes the other way, re-rendering
each identity ID in its canonical casing.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Union

from pydantic import ValidationError

from .exceptions import IdentityIdParseError, InvalidIdentityError
from .models import (
    IdentityBlock,
    IdentityType,
    ModelSystemAssignedUserAssigned,
    SystemOrSingleUserAssignedIdentity,
    normalize_type,
)
from .resource_ids import parse_user_assigned_identity_id_insensitively

logger = logging.getLogger(__name__)

_FLATTENABLE_TYPES = (IdentityType.SYSTEM_ASSIGNED, IdentityType.USER_ASSIGNED)


def expand_system_or_single_user_assigned_map(
    input: Optional[Sequence[Any]],
) -> SystemOrSingleUserAssignedIdentity:
    """Expand an untyped ``identity`` block list into the canonical identity.

    Raises:
        InvalidIdentityError: if the block is malformed or breaks the
            type/identity_ids rules
    """
    identity_type = IdentityType.NONE
    identity_ids: Set[str] = set()

    block = _single_block(input)
    if block is not None:
        try:
            decoded = IdentityBlock.model_validate(block)
        except ValidationError as e:
            raise InvalidIdentityError(
                f"decoding the `identity` block: {e}", cause=e
            ) from e
        identity_type = _expand_type(decoded.type)
        identity_ids = set(decoded.identity_ids)

    return _build_identity(identity_type, identity_ids)


def expand_system_or_single_user_assigned_map_from_model(
    input: Optional[
        Sequence[Union[ModelSystemAssignedUserAssigned, Dict[str, Any]]]
    ],
) -> SystemOrSingleUserAssignedIdentity:
    """Expand the typed schema model into the canonical identity.

    Raises:
        InvalidIdentityError: if the model breaks the type/identity_ids rules
    """
    model = _single_block(input)
    if model is None:
        return SystemOrSingleUserAssignedIdentity(type=IdentityType.NONE)

    if not isinstance(model, ModelSystemAssignedUserAssigned):
        try:
            model = ModelSystemAssignedUserAssigned.model_validate(model)
        except ValidationError as e:
            raise InvalidIdentityError(
                f"decoding the `identity` model: {e}", cause=e
            ) from e

    return _build_identity(_expand_type(model.type), set(model.identity_ids))


def flatten_system_or_single_user_assigned_map(
    input: Optional[SystemOrSingleUserAssignedIdentity],
) -> List[Dict[str, Any]]:
    """Flatten the canonical identity into an untyped ``identity`` block list.

    Raises:
        IdentityIdParseError: if an identity ID is not a User Assigned Identity ID
    """
    if input is None:
        return []

    identity_type = normalize_type(input.type)
    if identity_type not in _FLATTENABLE_TYPES:
        return []

    return [
        {
            "type": identity_type.value,
            "identity_ids": _flatten_identity_ids(input.identity_ids),
            "principal_id": input.principal_id,
            "tenant_id": input.tenant_id,
        }
    ]


def flatten_system_or_single_user_assigned_map_to_model(
    input: Optional[SystemOrSingleUserAssignedIdentity],
) -> List[ModelSystemAssignedUserAssigned]:
    """Flatten the canonical identity into the typed schema model."""
    if input is None:
        return []

    identity_type = normalize_type(input.type)
    if identity_type not in _FLATTENABLE_TYPES:
        return []

    return [
        ModelSystemAssignedUserAssigned(
            type=identity_type,
            identity_ids=_flatten_identity_ids(input.identity_ids),
            principal_id=input.principal_id,
            tenant_id=input.tenant_id,
        )
    ]


def validate_identity(identity_type: IdentityType, identity_ids: Set[str]) -> None:
    """Check the identity_ids rules for ``identity_type``, first failure wins."""
    user_assigned = IdentityType.USER_ASSIGNED.value

    if identity_type == IdentityType.USER_ASSIGNED:
        if len(identity_ids) == 0:
            raise InvalidIdentityError(
                f"`identity_ids` must be specified when `type` is set to {user_assigned}",
                identity_type=identity_type.value,
            )

        if len(identity_ids) > 1:
            raise InvalidIdentityError(
                "`identity_ids` can only contain a single identity ID when "
                f"`type` is set to {user_assigned}",
                identity_type=identity_type.value,
                context={"identity_ids": len(identity_ids)},
            )

    if len(identity_ids) > 0 and identity_type == IdentityType.SYSTEM_ASSIGNED:
        raise InvalidIdentityError(
            f"`identity_ids` can only be specified when `type` is set to {user_assigned}",
            identity_type=identity_type.value,
        )


def _single_block(input: Optional[Sequence[Any]]) -> Any:
    if input is None:
        return None
    if not isinstance(input, (list, tuple)):
        raise InvalidIdentityError(
            f"expected a list of `identity` blocks but got {type(input).__name__}"
        )
    if len(input) == 0:
        return None
    if len(input) > 1:
        raise InvalidIdentityError(
            f"only a single `identity` block can be specified, got {len(input)}"
        )
    # An empty block in configuration arrives as None
    return input[0] if input[0] is not None else {}


def _expand_type(raw: Union[IdentityType, str]) -> IdentityType:
    value = raw.value if isinstance(raw, IdentityType) else raw
    if value == IdentityType.SYSTEM_ASSIGNED.value:
        return IdentityType.SYSTEM_ASSIGNED
    if value == IdentityType.USER_ASSIGNED.value:
        return IdentityType.USER_ASSIGNED
    return IdentityType.NONE


def _build_identity(
    identity_type: IdentityType, identity_ids: Set[str]
) -> SystemOrSingleUserAssignedIdentity:
    validate_identity(identity_type, identity_ids)

    if identity_type == IdentityType.NONE and identity_ids:
        # Without a type there is nothing to attach the IDs to
        logger.debug(
            f"Discarding {len(identity_ids)} identity ID(s) since `type` is None"
        )
        identity_ids = set()

    logger.debug(
        f"Expanded identity of type {identity_type.value} with "
        f"{len(identity_ids)} identity ID(s)"
    )
    return SystemOrSingleUserAssignedIdentity(
        type=identity_type, identity_ids=identity_ids
    )


def _flatten_identity_ids(raw_ids: Optional[Iterable[str]]) -> List[str]:
    identity_ids: List[str] = []
    for raw in raw_ids or ():
        try:
            parsed = parse_user_assigned_identity_id_insensitively(raw)
        except ValueError as e:
            raise IdentityIdParseError(raw, e) from e
        identity_ids.append(parsed.id())
    return identity_ids
