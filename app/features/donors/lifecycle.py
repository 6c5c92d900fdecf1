"""Donor status state machine.

``active`` and ``inactive`` move freely between each other and either can
become ``deleted``. Nothing leaves ``deleted``; records are never removed.
"""

from typing import Any

from app.features.donors.errors import InvalidStatusTransitionError
from app.features.donors.models import Donor
from app.features.donors.schemas import DonorStatus
from app.features.donors.validation import RULES_BY_NAME

ALLOWED_TRANSITIONS: dict[DonorStatus, frozenset[DonorStatus]] = {
    DonorStatus.ACTIVE: frozenset({DonorStatus.INACTIVE, DonorStatus.DELETED}),
    DonorStatus.INACTIVE: frozenset({DonorStatus.ACTIVE, DonorStatus.DELETED}),
    DonorStatus.DELETED: frozenset(),
}


def can_transition(current: DonorStatus, target: DonorStatus) -> bool:
    return current == target or target in ALLOWED_TRANSITIONS[current]


def change_status(identity: Donor, target: Any) -> bool:
    """Move ``identity`` to ``target`` status.

    ``target`` goes through the status field rule first, so legacy values
    such as ``"eliminado"`` are accepted.

    Returns:
        True if the status changed, False if it already had that value.

    Raises:
        ValidationError: If ``target`` is not a known status.
        InvalidStatusTransitionError: If the lifecycle forbids the move.
    """
    new_status: DonorStatus = RULES_BY_NAME["status"].apply(target)
    current = DonorStatus(identity.status)

    if not can_transition(current, new_status):
        raise InvalidStatusTransitionError(current.value, new_status.value)

    if current == new_status:
        return False

    identity.status = new_status
    return True
