"""
User repository implementations.

Data access for accounts, including lookups used by authentication and the
AlexPoints leaderboard, and for educator payout details.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.users import EducatorPaymentInfo, User
from .base import SqlRepository


class UserRepository(SqlRepository[User]):
    """Repository for user accounts."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, User)

    async def get_by_username(self, username: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.username == username))
        return result.scalars().first()

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def get_by_token_hash(self, token_hash: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.api_token_hash == token_hash))
        return result.scalars().first()

    async def get_by_identifier(self, identifier: str) -> Optional[User]:
        """Resolve a user from either a username or a numeric id.

        Args:
            identifier: Username, or the decimal id of the user

        Returns:
            User instance or None
        """
        if identifier.isdigit():
            user = await self.get_by_id(int(identifier))
            if user is not None:
                return user
        return await self.get_by_username(identifier)

    async def exists_with(self, username: str, email: str) -> bool:
        stmt = select(func.count()).select_from(User).where(or_(User.username == username, User.email == email))
        result = await self.session.execute(stmt)
        return int(result.scalar_one()) > 0

    async def count_created_since(self, since: datetime) -> int:
        stmt = select(func.count()).select_from(User).where(User.created_at >= since)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def count_active_since(self, since: datetime) -> int:
        stmt = select(func.count()).select_from(User).where(User.last_login_at >= since)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def leaderboard(self, limit: int) -> List[User]:
        """Users with a positive points balance, highest first.

        Args:
            limit: Maximum number of users to return

        Returns:
            Ordered list of users
        """
        stmt = (
            select(User)
            .where(User.alex_points > 0)
            .order_by(User.alex_points.desc(), User.id.asc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class EducatorPaymentInfoRepository(SqlRepository[EducatorPaymentInfo]):
    """Repository for educator bank and sub-account details."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, EducatorPaymentInfo)

    async def get_by_user_id(self, user_id: int) -> Optional[EducatorPaymentInfo]:
        result = await self.session.execute(
            select(EducatorPaymentInfo).where(EducatorPaymentInfo.user_id == user_id)
        )
        return result.scalars().first()
