"""
Social graph entity models.

Follows, blocks and mutes are plain join rows between two users. Each pair
is unique so a duplicate relation can be detected by existence.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import Base, utc_now


class Follow(Base, table=True):
    """A user following another user.

    Table: follows
    """

    __tablename__ = "follows"
    __table_args__ = (UniqueConstraint("follower_id", "following_id", name="uq_follows_pair"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    follower_id: int = Field(foreign_key="users.id", index=True)
    following_id: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"Follow(follower={self.follower_id}, following={self.following_id})"


class BlockedUser(Base, table=True):
    """A user blocking another user.

    Table: blocked_users
    """

    __tablename__ = "blocked_users"
    __table_args__ = (UniqueConstraint("user_id", "blocked_user_id", name="uq_blocked_users_pair"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    blocked_user_id: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"BlockedUser(user={self.user_id}, blocked={self.blocked_user_id})"


class MutedUser(Base, table=True):
    """A user muting another user.

    Table: muted_users
    """

    __tablename__ = "muted_users"
    __table_args__ = (UniqueConstraint("user_id", "muted_user_id", name="uq_muted_users_pair"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    muted_user_id: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utc_now)

    def __repr__(self) -> str:
        return f"MutedUser(user={self.user_id}, muted={self.muted_user_id})"
