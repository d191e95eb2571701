"""
AlexPoints repository implementations.

Data access for point rules, levels and the per-user transaction history,
including the counting queries behind daily limits and one-time rules.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.alex_points import AlexPointsLevel, AlexPointsRule, AlexPointsTransaction
from .base import SqlRepository


class AlexPointsRuleRepository(SqlRepository[AlexPointsRule]):
    """Repository for point rules."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AlexPointsRule)

    async def get_by_action(self, action_type: str) -> Optional[AlexPointsRule]:
        result = await self.session.execute(select(AlexPointsRule).where(AlexPointsRule.action_type == action_type))
        return result.scalars().first()

    async def list_rules(self, active_only: bool = True) -> List[AlexPointsRule]:
        stmt = select(AlexPointsRule).order_by(AlexPointsRule.id.asc())  # type: ignore[attr-defined]
        if active_only:
            stmt = stmt.where(AlexPointsRule.is_active == True)  # noqa: E712
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class AlexPointsLevelRepository(SqlRepository[AlexPointsLevel]):
    """Repository for point levels."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AlexPointsLevel)

    async def list_ordered(self) -> List[AlexPointsLevel]:
        stmt = select(AlexPointsLevel).order_by(AlexPointsLevel.points_required.asc())  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_level(self, level: int) -> Optional[AlexPointsLevel]:
        result = await self.session.execute(select(AlexPointsLevel).where(AlexPointsLevel.level == level))
        return result.scalars().first()

    async def get_by_points_required(self, points_required: int) -> Optional[AlexPointsLevel]:
        result = await self.session.execute(
            select(AlexPointsLevel).where(AlexPointsLevel.points_required == points_required)
        )
        return result.scalars().first()


class AlexPointsTransactionRepository(SqlRepository[AlexPointsTransaction]):
    """Repository for the points history."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AlexPointsTransaction)

    async def count_for_action(self, user_id: int, action_type: str, since: Optional[datetime] = None) -> int:
        """Count a user's transactions for an action, optionally since a moment.

        Args:
            user_id: User id
            action_type: Rule action type
            since: Inclusive lower bound on ``created_at``

        Returns:
            Number of matching transactions
        """
        stmt = (
            select(func.count())
            .select_from(AlexPointsTransaction)
            .where(AlexPointsTransaction.user_id == user_id, AlexPointsTransaction.action_type == action_type)
        )
        if since is not None:
            stmt = stmt.where(AlexPointsTransaction.created_at >= since)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def list_for_user(self, user_id: int, limit: int, offset: int) -> List[AlexPointsTransaction]:
        stmt = (
            select(AlexPointsTransaction)
            .where(AlexPointsTransaction.user_id == user_id)
            .order_by(AlexPointsTransaction.created_at.desc(), AlexPointsTransaction.id.desc())  # type: ignore[attr-defined]
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
