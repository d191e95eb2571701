"""
Revenue ledger.

- splits: platform/educator split arithmetic
- state_machine: allowed payment status transitions
- service: ``PaymentLedgerService``, the split payment lifecycle
"""

from .service import PaymentLedgerService, ReconcileResult
from .splits import SplitBreakdown, allocate_refund, calculate_split_amount, compute_split
from .state_machine import ALLOWED_TRANSITIONS, Transition, apply_transition, can_transition, check_transition

__all__ = [
    "ALLOWED_TRANSITIONS",
    "PaymentLedgerService",
    "ReconcileResult",
    "SplitBreakdown",
    "Transition",
    "allocate_refund",
    "apply_transition",
    "calculate_split_amount",
    "can_transition",
    "check_transition",
    "compute_split",
]
