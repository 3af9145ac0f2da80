"""Wire encoding for the canonical identity.

Outbound, only ``type`` and ``userAssignedIdentities`` are ever sent: the
principal and tenant IDs are assigned by the server and must not be echoed
back. Inbound, the full payload is decoded so those server fields can be
flattened into state.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

from .exceptions import InvalidIdentityError
from .models import IdentityType, SystemOrSingleUserAssignedIdentity, WireIdentity

logger = logging.getLogger(__name__)


def serialize_identity(
    identity: Optional[SystemOrSingleUserAssignedIdentity],
) -> Dict[str, Any]:
    """Build the request payload for ``identity``.

    The result always has exactly the keys ``type`` and
    ``userAssignedIdentities``; the latter is ``None`` unless there are
    identity IDs to send, in which case each ID maps to an empty object.
    """
    identity_type = IdentityType.NONE
    user_assigned_identities: Dict[str, Dict[str, Any]] = {}

    if identity is not None:
        if identity.type == IdentityType.SYSTEM_ASSIGNED:
            identity_type = IdentityType.SYSTEM_ASSIGNED
        if identity.type == IdentityType.USER_ASSIGNED:
            identity_type = IdentityType.USER_ASSIGNED

        if identity_type != IdentityType.NONE:
            user_assigned_identities = {
                identity_id: {} for identity_id in sorted(identity.identity_ids)
            }

    return {
        "type": identity_type.value,
        "userAssignedIdentities": user_assigned_identities or None,
    }


def identity_to_json(
    identity: Optional[SystemOrSingleUserAssignedIdentity],
    indent: Optional[int] = None,
    sort_keys: bool = False,
) -> str:
    """Serialize ``identity`` to a JSON request body."""
    return json.dumps(serialize_identity(identity), indent=indent, sort_keys=sort_keys)


def deserialize_identity(
    payload: Optional[Union[Mapping[str, Any], WireIdentity]],
) -> Optional[SystemOrSingleUserAssignedIdentity]:
    """Decode an identity returned by the management API.

    ``type`` is kept as returned; flattening normalizes it. Only the keys of
    ``userAssignedIdentities`` are kept.

    Raises:
        InvalidIdentityError: if the payload does not have the identity shape
    """
    if payload is None:
        return None

    if isinstance(payload, WireIdentity):
        wire = payload
    else:
        try:
            wire = WireIdentity.model_validate(payload)
        except ValidationError as e:
            raise InvalidIdentityError(
                f"decoding the identity payload: {e}", cause=e
            ) from e

    identity_ids = set((wire.user_assigned_identities or {}).keys())
    logger.debug(
        f"Decoded identity payload of type {wire.type!r} with "
        f"{len(identity_ids)} identity ID(s)"
    )
    return SystemOrSingleUserAssignedIdentity(
        type=wire.type,
        principal_id=wire.principal_id or "",
        tenant_id=wire.tenant_id or "",
        identity_ids=identity_ids,
    )


def identity_from_json(text: str) -> Optional[SystemOrSingleUserAssignedIdentity]:
    """Decode a JSON identity payload; ``null`` decodes to ``None``."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidIdentityError(f"decoding the identity payload: {e}", cause=e) from e

    if payload is not None and not isinstance(payload, dict):
        raise InvalidIdentityError(
            f"expected a JSON object for the identity payload but got {type(payload).__name__}"
        )
    return deserialize_identity(payload)
