"""
Payment ledger entity models.

This module contains the revenue ledger tables:
- payment_logs: one row per gateway transaction, keyed by its reference
- payment_splits: the platform and educator shares of a payment
- gateway_events: webhook deliveries already processed, for de-duplication
- refunds: refunds issued against successful payments
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import JSON, UniqueConstraint
from sqlmodel import Field

from ..base import Base, utc_now


class PaymentLog(Base, table=True):
    """A payment attempt at the gateway.

    The transaction reference is the idempotency key of every ledger
    operation: verify callbacks, webhooks, cancellation and refunds all
    address the payment through it.

    Table: payment_logs
    """

    __tablename__ = "payment_logs"

    # Primary identifiers
    id: Optional[int] = Field(default=None, primary_key=True)
    transaction_reference: str = Field(max_length=64, unique=True, index=True)
    user_id: int = Field(foreign_key="users.id", index=True)

    # Payment data
    amount: Decimal = Field(max_digits=12, decimal_places=2)
    refunded_amount: Decimal = Field(default=Decimal("0"), max_digits=12, decimal_places=2)
    status: str = Field(default="pending", max_length=16, index=True)
    payment_type: str = Field(max_length=32, index=True)
    payment_url: Optional[str] = Field(default=None, max_length=2048)

    # Settled records
    course_id: Optional[int] = Field(default=None, foreign_key="courses.id", index=True)
    enrollment_id: Optional[int] = Field(default=None, foreign_key="enrollments.id")
    hire_request_id: Optional[int] = Field(default=None, foreign_key="hire_requests.id")

    # Gateway payloads
    meta: dict[str, Any] = Field(default_factory=dict, sa_type=JSON)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def retained_amount(self) -> Decimal:
        return self.amount - (self.refunded_amount or Decimal("0"))

    def __repr__(self) -> str:
        return f"PaymentLog(reference={self.transaction_reference}, amount={self.amount}, status={self.status})"


class PaymentSplit(Base, table=True):
    """One recipient's share of a payment.

    A split payment always has exactly two rows: the platform fee
    (``recipient_type="platform"``, no recipient id) and the educator share.

    Table: payment_splits
    """

    __tablename__ = "payment_splits"

    # Primary identifiers
    id: Optional[int] = Field(default=None, primary_key=True)
    payment_log_id: int = Field(foreign_key="payment_logs.id", index=True)
    transaction_reference: str = Field(max_length=64, index=True)

    # Recipient
    recipient_type: str = Field(max_length=16, index=True)
    recipient_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)

    # Share
    amount: Decimal = Field(max_digits=12, decimal_places=2)
    refunded_amount: Decimal = Field(default=Decimal("0"), max_digits=12, decimal_places=2)
    percentage: Decimal = Field(max_digits=5, decimal_places=2)
    status: str = Field(default="pending", max_length=16, index=True)
    meta: dict[str, Any] = Field(default_factory=dict, sa_type=JSON)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def payment_type(self) -> Optional[str]:
        return (self.meta or {}).get("payment_type")

    @property
    def retained_amount(self) -> Decimal:
        """Share kept after refunds."""
        return self.amount - (self.refunded_amount or Decimal("0"))

    def __repr__(self) -> str:
        return (
            f"PaymentSplit(reference={self.transaction_reference}, recipient={self.recipient_type}:"
            f"{self.recipient_id}, amount={self.amount}, status={self.status})"
        )


class GatewayEvent(Base, table=True):
    """A processed webhook delivery.

    The unique ``(reference, event)`` pair makes redelivered webhooks
    detectable before any ledger change is applied.

    Table: gateway_events
    """

    __tablename__ = "gateway_events"
    __table_args__ = (UniqueConstraint("reference", "event", name="uq_gateway_events_reference_event"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    reference: str = Field(max_length=64, index=True)
    event: str = Field(max_length=64)
    payload: dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    received_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"GatewayEvent(reference={self.reference}, event={self.event})"


class Refund(Base, table=True):
    """A refund issued against a successful payment.

    Table: refunds
    """

    __tablename__ = "refunds"

    # Primary identifiers
    id: Optional[int] = Field(default=None, primary_key=True)
    payment_log_id: int = Field(foreign_key="payment_logs.id", index=True)
    transaction_reference: str = Field(max_length=64, index=True)

    # Refund data
    reason: Optional[str] = Field(default=None)
    amount: Decimal = Field(max_digits=12, decimal_places=2)
    status: str = Field(default="pending", max_length=16, index=True)
    processor: str = Field(default="admin", max_length=16)
    processor_id: Optional[int] = Field(default=None, foreign_key="users.id")
    gateway_refund_id: Optional[str] = Field(default=None, max_length=64)

    # Timestamps
    refunded_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True)

    def __repr__(self) -> str:
        return f"Refund(reference={self.transaction_reference}, amount={self.amount}, status={self.status})"
