"""
AlexPoints I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RuleRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    action_type: str
    points: int
    description: Optional[str] = None
    is_active: bool
    is_one_time: bool
    daily_limit: int = Field(description="Awards per UTC day; 0 means unlimited")
    meta: Dict[str, Any] = Field(default_factory=dict)


class RuleCreate(BaseModel):
    action_type: str = Field(min_length=1, max_length=64)
    points: int
    description: Optional[str] = Field(default=None, max_length=255)
    is_active: bool = True
    is_one_time: bool = False
    daily_limit: int = Field(default=0, ge=0)
    meta: Dict[str, Any] = Field(default_factory=dict)


class RuleUpdate(BaseModel):
    action_type: Optional[str] = Field(default=None, min_length=1, max_length=64)
    points: Optional[int] = None
    description: Optional[str] = Field(default=None, max_length=255)
    is_active: Optional[bool] = None
    is_one_time: Optional[bool] = None
    daily_limit: Optional[int] = Field(default=None, ge=0)
    meta: Optional[Dict[str, Any]] = None


class LevelRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    level: int
    name: str
    points_required: int
    description: Optional[str] = None
    rewards: Dict[str, Any] = Field(default_factory=dict)


class LevelCreate(BaseModel):
    level: int = Field(ge=1)
    name: str = Field(min_length=1, max_length=64)
    points_required: int = Field(ge=0)
    description: Optional[str] = Field(default=None, max_length=255)
    rewards: Dict[str, Any] = Field(default_factory=dict)


class LevelUpdate(BaseModel):
    level: Optional[int] = Field(default=None, ge=1)
    name: Optional[str] = Field(default=None, min_length=1, max_length=64)
    points_required: Optional[int] = Field(default=None, ge=0)
    description: Optional[str] = Field(default=None, max_length=255)
    rewards: Optional[Dict[str, Any]] = None


class TransactionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    points: int
    action_type: str
    description: Optional[str] = None
    reference_id: Optional[str] = None
    reference_type: Optional[str] = None
    meta: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime


class TransactionPage(BaseModel):
    items: List[TransactionRead]
    total: int
    page: int
    per_page: int
    last_page: int


class PointsSummary(BaseModel):
    user_id: int
    username: str
    alex_points: int
    current_level: Optional[LevelRead] = None
    next_level: Optional[LevelRead] = None
    points_to_next_level: int
    progress_percentage: int
    recent_transactions: List[TransactionRead]


class LevelProgress(BaseModel):
    level: LevelRead
    is_current: bool
    is_achieved: bool
    progress_percentage: int


class LeaderboardEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    alex_points: int
    point_level: int


class PointsAdjustment(BaseModel):
    """Manual adjustment by an admin; negative points remove points."""

    user_id: int = Field(ge=1)
    points: int
    description: Optional[str] = Field(default=None, max_length=255)


class SeedResult(BaseModel):
    rules_created: int
    rules_updated: int
    levels_created: int
    levels_updated: int
