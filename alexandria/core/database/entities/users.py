"""
User entity models.

This module contains the account entity, including the running AlexPoints
counters, and the educator payout details used to route split payments.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class User(Base, table=True):
    """Platform account.

    Carries the role used for authorization, the digest of the bearer token
    and the denormalized AlexPoints counters maintained by the points service.

    Table: users
    """

    __tablename__ = "users"

    # Primary identifiers
    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(max_length=64, unique=True, index=True)
    email: str = Field(max_length=255, unique=True, index=True)

    # Profile
    first_name: Optional[str] = Field(default=None, max_length=128)
    last_name: Optional[str] = Field(default=None, max_length=128)
    bio: Optional[str] = Field(default=None)
    role: str = Field(default="learner", max_length=16, index=True)
    is_verified: bool = Field(default=False)

    # Authentication
    api_token_hash: Optional[str] = Field(default=None, max_length=64, unique=True, index=True)

    # AlexPoints counters
    alex_points: int = Field(default=0, index=True)
    point_level: int = Field(default=1)
    points_to_next_level: int = Field(default=0)

    # Timestamps
    last_login_at: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    @property
    def is_educator(self) -> bool:
        return self.role == "educator"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def __repr__(self) -> str:
        return f"User(id={self.id}, username={self.username}, role={self.role})"


class EducatorPaymentInfo(Base, table=True):
    """Bank and gateway sub-account details of an educator.

    The sub-account code is what the gateway needs to settle the educator
    share of a split payment.

    Table: educator_payment_info
    """

    __tablename__ = "educator_payment_info"

    # Primary identifiers
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", unique=True, index=True)

    # Bank details
    bank_code: str = Field(max_length=16)
    bank_name: Optional[str] = Field(default=None, max_length=128)
    account_number: str = Field(max_length=10)
    account_name: Optional[str] = Field(default=None, max_length=255)

    # Gateway routing
    subaccount_code: Optional[str] = Field(default=None, max_length=64, index=True)
    is_verified: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def masked_account_number(self) -> str:
        """Hide the middle four digits of the account number."""
        acct = self.account_number or ""
        if len(acct) <= 3:
            return acct
        return acct[:3] + "****" + acct[7:]

    def __repr__(self) -> str:
        return f"EducatorPaymentInfo(user_id={self.user_id}, subaccount={self.subaccount_code})"
