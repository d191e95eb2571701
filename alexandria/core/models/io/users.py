"""
User I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Schema for registering an account."""

    username: str = Field(min_length=3, max_length=64, pattern=r"^[A-Za-z0-9_.-]+$")
    email: str = Field(max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    role: Literal["learner", "educator"] = Field(default="learner", description="Account role")
    first_name: Optional[str] = Field(default=None, max_length=128)
    last_name: Optional[str] = Field(default=None, max_length=128)
    bio: Optional[str] = None


class UserPublic(BaseModel):
    """Public view of an account."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    bio: Optional[str] = None
    role: str
    is_verified: bool
    alex_points: int
    point_level: int


class UserRead(UserPublic):
    """The authenticated user's own account."""

    email: str
    points_to_next_level: int
    created_at: datetime


class UserRegistered(BaseModel):
    """Registration result; the token is shown only here."""

    message: str
    user: UserRead
    token: str = Field(description="Bearer token for the Authorization header")


class UserProfile(BaseModel):
    user: UserPublic
    followers_count: int
    following_count: int


class VerificationUpdate(BaseModel):
    is_verified: bool = True
