"""
Payment, split and refund I/O models.

These schemas are the contract of the split payment endpoints: initializing
a course or tutoring payment, reading its split rows, the verify callback,
the gateway webhook acknowledgement and admin refunds.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CourseSplitRequest(BaseModel):
    """Schema for paying for a course."""

    course_id: int = Field(ge=1, description="Course to enroll in")


class HireSplitRequest(BaseModel):
    """Schema for paying an educator for tutoring."""

    educator_id: int = Field(ge=1, description="Educator to hire")
    amount: float = Field(ge=1, description="Total amount paid, in major currency units")
    hours: int = Field(ge=1, description="Number of tutoring hours")
    message: Optional[str] = Field(default=None, max_length=2000)


class SplitBreakdownRead(BaseModel):
    total_amount: float
    platform_fee: float
    educator_amount: float
    platform_percentage: float
    educator_percentage: float


class SplitInitResponse(BaseModel):
    """Result of initializing a split payment.

    Free courses are enrolled immediately: ``payment_url`` and
    ``split_details`` are then null and ``enrollment_id`` is set.
    """

    message: str
    reference: str
    payment_url: Optional[str] = Field(default=None, description="Gateway checkout URL")
    split_details: Optional[SplitBreakdownRead] = None
    enrollment_id: Optional[int] = None
    hire_request_id: Optional[int] = None


class PaymentSplitRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    transaction_reference: str
    recipient_type: str = Field(description="'platform' or 'user'")
    recipient_id: Optional[int] = None
    amount: float
    refunded_amount: float = 0
    percentage: float
    status: str
    meta: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime


class PaymentSplitDetails(BaseModel):
    payment_reference: str
    total_amount: float
    status: str
    payment_type: str
    splits: List[PaymentSplitRead]


class ReconcileResponse(BaseModel):
    message: str
    reference: str
    status: str
    previous_status: str
    already_processed: bool


class WebhookAck(BaseModel):
    """Acknowledgement returned to the gateway."""

    message: str
    processed: bool
    duplicate: bool = False
    reference: Optional[str] = None
    status: Optional[str] = None


class RefundCreate(BaseModel):
    """Schema for refunding a payment."""

    reference: str = Field(min_length=1, description="Transaction reference of the payment")
    reason: Optional[str] = Field(default=None, max_length=500)
    amount: Optional[float] = Field(default=None, gt=0, description="Partial amount; defaults to the full payment")


class RefundRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    payment_log_id: int
    transaction_reference: str
    reason: Optional[str] = None
    amount: float
    status: str
    processor: str
    processor_id: Optional[int] = None
    gateway_refund_id: Optional[str] = None
    refunded_at: Optional[datetime] = None
    created_at: datetime
