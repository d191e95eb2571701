"""
Payment gateway integration.

- base: the ``PaymentGateway`` port and its result models
- http: the REST adapter used in production
- signature: webhook signature verification
"""

from .base import (
    InitializedTransaction,
    PaymentGateway,
    RefundResult,
    ResolvedAccount,
    SplitConfigResult,
    SubaccountResult,
    VerifiedTransaction,
)
from .http import HttpPaymentGateway
from .signature import compute_signature, verify_signature

__all__ = [
    "HttpPaymentGateway",
    "InitializedTransaction",
    "PaymentGateway",
    "RefundResult",
    "ResolvedAccount",
    "SplitConfigResult",
    "SubaccountResult",
    "VerifiedTransaction",
    "compute_signature",
    "verify_signature",
]
