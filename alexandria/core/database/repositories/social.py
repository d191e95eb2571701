"""
Social graph repository implementations.

Follows, blocks and mutes share the same shape: a row linking an owner to a
target user. ``UserRelationRepository`` implements the pair queries once and
each relation names its two columns.
"""

from __future__ import annotations

from typing import ClassVar, List, Optional, Type

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.social import BlockedUser, Follow, MutedUser
from ..entities.users import User
from .base import EntityType, SqlRepository


class UserRelationRepository(SqlRepository[EntityType]):
    """Pair queries over a user-to-user join table."""

    entity: ClassVar[Type]
    owner_column: ClassVar[str]
    target_column: ClassVar[str]

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, self.entity)

    def _owner(self):
        return getattr(self.model, self.owner_column)

    def _target(self):
        return getattr(self.model, self.target_column)

    async def get_pair(self, owner_id: int, target_id: int) -> Optional[EntityType]:
        stmt = select(self.model).where(self._owner() == owner_id, self._target() == target_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def add_pair(self, owner_id: int, target_id: int) -> EntityType:
        entity = self.model(**{self.owner_column: owner_id, self.target_column: target_id})
        return await self.create(entity)

    async def remove_pair(self, owner_id: int, target_id: int) -> bool:
        entity = await self.get_pair(owner_id, target_id)
        if entity is None:
            return False
        await self.session.delete(entity)
        await self.session.flush()
        return True

    async def targets_of(self, owner_id: int) -> List[User]:
        """Users the owner points at, most recent relation first."""
        stmt = (
            select(User)
            .join(self.model, self._target() == User.id)
            .where(self._owner() == owner_id)
            .order_by(self.model.created_at.desc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def owners_of(self, target_id: int) -> List[User]:
        """Users pointing at the target, most recent relation first."""
        stmt = (
            select(User)
            .join(self.model, self._owner() == User.id)
            .where(self._target() == target_id)
            .order_by(self.model.created_at.desc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_targets(self, owner_id: int) -> int:
        stmt = select(func.count()).select_from(self.model).where(self._owner() == owner_id)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def count_owners(self, target_id: int) -> int:
        stmt = select(func.count()).select_from(self.model).where(self._target() == target_id)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())


class FollowRepository(UserRelationRepository[Follow]):
    entity = Follow
    owner_column = "follower_id"
    target_column = "following_id"


class BlockedUserRepository(UserRelationRepository[BlockedUser]):
    entity = BlockedUser
    owner_column = "user_id"
    target_column = "blocked_user_id"


class MutedUserRepository(UserRelationRepository[MutedUser]):
    entity = MutedUser
    owner_column = "user_id"
    target_column = "muted_user_id"
