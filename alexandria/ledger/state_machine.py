"""
Payment status state machine.

A payment log and all of its split rows move together::

    pending -> success | failed | cancelled
    success -> refunded

Re-applying the status a payment already has is a no-op reported with
``changed=False``; that is what makes repeated verify callbacks and webhook
redeliveries safe. Every other move raises ``InvalidTransitionError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from alexandria.core.database.entities.payments import PaymentLog, PaymentSplit
from alexandria.core.errors import InvalidTransitionError
from alexandria.core.models.domain import PaymentStatus

StatusLike = Union[PaymentStatus, str]

ALLOWED_TRANSITIONS: dict[PaymentStatus, frozenset[PaymentStatus]] = {
    PaymentStatus.pending: frozenset({PaymentStatus.success, PaymentStatus.failed, PaymentStatus.cancelled}),
    PaymentStatus.success: frozenset({PaymentStatus.refunded}),
    PaymentStatus.failed: frozenset(),
    PaymentStatus.cancelled: frozenset(),
    PaymentStatus.refunded: frozenset(),
}


@dataclass(frozen=True)
class Transition:
    """Outcome of applying a target status."""

    from_status: PaymentStatus
    to_status: PaymentStatus
    changed: bool


def _coerce(status: StatusLike) -> PaymentStatus:
    return status if isinstance(status, PaymentStatus) else PaymentStatus(status)


def can_transition(current: StatusLike, target: StatusLike) -> bool:
    current_s, target_s = _coerce(current), _coerce(target)
    return current_s == target_s or target_s in ALLOWED_TRANSITIONS[current_s]


def check_transition(current: StatusLike, target: StatusLike) -> Transition:
    """Validate a move without touching any record.

    Args:
        current: Status the payment has
        target: Status requested

    Returns:
        Transition describing the move

    Raises:
        InvalidTransitionError: If the move is not allowed
    """
    current_s, target_s = _coerce(current), _coerce(target)
    if current_s == target_s:
        return Transition(current_s, target_s, changed=False)
    if target_s not in ALLOWED_TRANSITIONS[current_s]:
        raise InvalidTransitionError(current_s.value, target_s.value)
    return Transition(current_s, target_s, changed=True)


def apply_transition(log: PaymentLog, splits: Iterable[PaymentSplit], target: StatusLike) -> Transition:
    """Move a payment log and its splits to ``target``.

    Args:
        log: Payment log to update in place
        splits: Split rows of the payment
        target: Requested status

    Returns:
        Transition; ``changed`` is False when the log already had ``target``
    """
    transition = check_transition(log.status, target)
    if transition.changed:
        log.status = transition.to_status.value
        for split in splits:
            split.status = transition.to_status.value
    return transition
