"""
Social graph I/O models.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from .users import UserPublic


class FollowResult(BaseModel):
    message: str
    is_following: bool


class FollowStatus(BaseModel):
    username: str
    is_following: bool = Field(description="Whether the caller follows the user")
    is_followed_by: bool = Field(description="Whether the user follows the caller")


class UserList(BaseModel):
    users: List[UserPublic]
    count: int


class RelationCreate(BaseModel):
    """Body of block and mute requests."""

    user_id: int = Field(ge=1)


class RelationResult(BaseModel):
    message: str
    user_id: int
