"""Domain enums used across the platform.

The values are persisted verbatim in status columns and returned verbatim
by the API, so they double as the wire format.
"""

from .enums import (
    ApprovalStatus,
    EnrollmentStatus,
    GatewayEventType,
    HireRequestStatus,
    PaymentStatus,
    PaymentType,
    RecipientType,
    RefundProcessor,
    RefundStatus,
    RelatedType,
    UserRole,
)

__all__ = [
    "ApprovalStatus",
    "EnrollmentStatus",
    "GatewayEventType",
    "HireRequestStatus",
    "PaymentStatus",
    "PaymentType",
    "RecipientType",
    "RefundProcessor",
    "RefundStatus",
    "RelatedType",
    "UserRole",
]
