"""Domain enums shared by entities, services and API schemas."""

from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    """Platform role of an account."""

    learner = "learner"
    educator = "educator"
    admin = "admin"


class PaymentStatus(str, Enum):
    """
    Lifecycle status of a payment log and its split rows.

    Transitions are governed by ``alexandria.ledger.state_machine``.
    """

    pending = "pending"
    success = "success"
    failed = "failed"
    cancelled = "cancelled"
    refunded = "refunded"


class PaymentType(str, Enum):
    """What a payment pays for."""

    course_enrollment = "course_enrollment"
    tutoring = "tutoring"


class RecipientType(str, Enum):
    """Who receives one share of a split payment."""

    platform = "platform"
    user = "user"


class RelatedType(str, Enum):
    """Kind of record a payment split settles."""

    enrollment = "enrollment"
    hire_request = "hire_request"


class EnrollmentStatus(str, Enum):
    """Lifecycle status of a course enrollment."""

    pending = "pending"
    active = "active"
    completed = "completed"
    cancelled = "cancelled"
    refunded = "refunded"


class HireRequestStatus(str, Enum):
    """Lifecycle status of a tutoring hire request."""

    pending = "pending"
    paid = "paid"
    cancelled = "cancelled"
    refunded = "refunded"


class ApprovalStatus(str, Enum):
    """Curation status of a library."""

    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class RefundStatus(str, Enum):
    """Processing status of a refund record."""

    pending = "pending"
    processed = "processed"
    failed = "failed"


class RefundProcessor(str, Enum):
    """Who initiated a refund."""

    admin = "admin"
    system = "system"
    api = "api"


class GatewayEventType(str, Enum):
    """Webhook events the ledger understands."""

    charge_success = "charge.success"
    charge_failed = "charge.failed"
