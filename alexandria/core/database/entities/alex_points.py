"""
AlexPoints entity models.

Rules price each action type, levels map point totals to named tiers, and
transactions are the append-only history behind a user's running counter.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON
from sqlmodel import Field

from ..base import Base, utc_now


class AlexPointsRule(Base, table=True):
    """Points awarded for one action type.

    ``daily_limit`` of 0 means unlimited. One-time rules are honoured once
    per user regardless of the daily limit.

    Table: alex_points_rules
    """

    __tablename__ = "alex_points_rules"

    id: Optional[int] = Field(default=None, primary_key=True)
    action_type: str = Field(max_length=64, unique=True, index=True)
    points: int = Field()
    description: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = Field(default=True)
    is_one_time: bool = Field(default=False)
    daily_limit: int = Field(default=0, ge=0)
    meta: dict[str, Any] = Field(default_factory=dict, sa_type=JSON)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"AlexPointsRule(action={self.action_type}, points={self.points})"


class AlexPointsLevel(Base, table=True):
    """A named tier reached at a points threshold.

    Table: alex_points_levels
    """

    __tablename__ = "alex_points_levels"

    id: Optional[int] = Field(default=None, primary_key=True)
    level: int = Field(unique=True, index=True)
    name: str = Field(max_length=64)
    points_required: int = Field(unique=True)
    description: Optional[str] = Field(default=None, max_length=255)
    rewards: dict[str, Any] = Field(default_factory=dict, sa_type=JSON)

    # Timestamps
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"AlexPointsLevel(level={self.level}, name={self.name}, required={self.points_required})"


class AlexPointsTransaction(Base, table=True):
    """One entry of a user's points history.

    Table: alex_points_transactions
    """

    __tablename__ = "alex_points_transactions"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    points: int = Field()
    action_type: str = Field(max_length=64, index=True)
    description: Optional[str] = Field(default=None, max_length=255)
    reference_id: Optional[str] = Field(default=None, max_length=64)
    reference_type: Optional[str] = Field(default=None, max_length=64)
    meta: dict[str, Any] = Field(default_factory=dict, sa_type=JSON)
    created_at: datetime = Field(default_factory=utc_now, index=True)

    def __repr__(self) -> str:
        return f"AlexPointsTransaction(user={self.user_id}, action={self.action_type}, points={self.points})"
