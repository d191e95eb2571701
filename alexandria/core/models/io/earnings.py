"""
Educator earnings and bank detail I/O models.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class EarningItem(BaseModel):
    id: int
    amount: float = Field(description="Share kept after refunds")
    refunded_amount: float = 0
    date: datetime
    transaction_reference: str
    payment_type: str
    description: str
    platform_fee: float
    related_id: Optional[int] = None
    related_type: Optional[str] = None


class MonthlyEarning(BaseModel):
    month: str = Field(description="YYYY-MM")
    total: float


class EarningsSummary(BaseModel):
    start_date: date
    end_date: date
    total_earnings: float
    course_earnings: float
    tutoring_earnings: float
    earnings_breakdown: List[EarningItem]
    monthly_earnings: List[MonthlyEarning]


class EarningDetail(BaseModel):
    id: int
    amount: float
    refunded_amount: float = 0
    percentage: float
    date: datetime
    transaction_reference: str
    status: str
    payment_type: str
    description: str
    platform_fee: float
    additional_data: Dict[str, Any] = Field(default_factory=dict)


class BankInfoUpdate(BaseModel):
    """Schema for setting an educator's payout account."""

    bank_code: str = Field(min_length=1, max_length=16)
    account_number: str = Field(pattern=r"^\d{10}$", description="10-digit account number")
    account_name: Optional[str] = Field(default=None, max_length=255)
    bank_name: Optional[str] = Field(default=None, max_length=128)


class BankInfoRead(BaseModel):
    bank_name: Optional[str] = None
    bank_code: str
    account_number: str = Field(description="Masked account number")
    account_name: Optional[str] = None
    is_verified: bool
    has_subaccount: bool
    subaccount_code: Optional[str] = None


class BankInfoResponse(BaseModel):
    has_bank_info: bool
    bank_info: Optional[BankInfoRead] = None


class BankInfoUpdated(BaseModel):
    message: str
    bank_info: BankInfoRead
