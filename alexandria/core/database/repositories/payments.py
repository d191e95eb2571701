"""
Payment ledger repository implementations.

This module provides data access for payment logs, their split rows, the
webhook de-duplication table and refunds, including the aggregate queries
behind educator earnings and revenue analytics.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.payments import GatewayEvent, PaymentLog, PaymentSplit, Refund
from .base import QueryBuilder, SqlRepository


class PaymentLogRepository(SqlRepository[PaymentLog]):
    """Repository for payment logs."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, PaymentLog)

    async def get_by_reference(self, reference: str, for_update: bool = False) -> Optional[PaymentLog]:
        """Get a payment log by its transaction reference.

        Args:
            reference: Gateway transaction reference
            for_update: Lock the row until the surrounding transaction ends

        Returns:
            PaymentLog instance or None
        """
        stmt = select(PaymentLog).where(PaymentLog.transaction_reference == reference)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def totals_by_status(self) -> Dict[str, Tuple[int, Decimal]]:
        """Payment count and volume grouped by status.

        Returns:
            Mapping of status to ``(count, amount)``
        """
        stmt = select(PaymentLog.status, func.count(), func.coalesce(func.sum(PaymentLog.amount), 0)).group_by(
            PaymentLog.status
        )
        result = await self.session.execute(stmt)
        return {status: (int(count), Decimal(str(amount))) for status, count, amount in result.all()}

    async def retained_volume(self, statuses: Sequence[str]) -> Decimal:
        """Amount kept after refunds across payments in the given statuses."""
        stmt = select(func.coalesce(func.sum(PaymentLog.amount - PaymentLog.refunded_amount), 0)).where(
            PaymentLog.status.in_(statuses)  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return Decimal(str(result.scalar_one()))


class PaymentSplitRepository(SqlRepository[PaymentSplit]):
    """Repository for payment split rows."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, PaymentSplit)

    async def list_for_payment(self, payment_log_id: int) -> List[PaymentSplit]:
        stmt = (
            select(PaymentSplit)
            .where(PaymentSplit.payment_log_id == payment_log_id)
            .order_by(PaymentSplit.id.asc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_recipient(
        self,
        recipient_id: int,
        statuses: Sequence[str],
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[PaymentSplit]:
        """Educator split rows in the given statuses inside a creation window.

        Args:
            recipient_id: Educator user id
            statuses: Split statuses to match
            start: Inclusive lower bound on ``created_at``
            end: Exclusive upper bound on ``created_at``

        Returns:
            Split rows, newest first
        """
        stmt = select(PaymentSplit).where(
            PaymentSplit.recipient_type == "user",
            PaymentSplit.recipient_id == recipient_id,
            PaymentSplit.status.in_(statuses),  # type: ignore[attr-defined]
        )
        if start is not None:
            stmt = stmt.where(PaymentSplit.created_at >= start)
        if end is not None:
            stmt = stmt.where(PaymentSplit.created_at < end)
        stmt = stmt.order_by(PaymentSplit.created_at.desc(), PaymentSplit.id.desc())  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_for_recipient(self, split_id: int, recipient_id: int) -> Optional[PaymentSplit]:
        stmt = select(PaymentSplit).where(
            PaymentSplit.id == split_id,
            PaymentSplit.recipient_type == "user",
            PaymentSplit.recipient_id == recipient_id,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def sum_retained_by_recipient_type(self, statuses: Sequence[str]) -> Dict[str, Decimal]:
        """Shares kept after refunds, per recipient type, over splits in the given statuses."""
        retained = PaymentSplit.amount - PaymentSplit.refunded_amount
        stmt = (
            select(PaymentSplit.recipient_type, func.coalesce(func.sum(retained), 0))
            .where(PaymentSplit.status.in_(statuses))  # type: ignore[attr-defined]
            .group_by(PaymentSplit.recipient_type)
        )
        result = await self.session.execute(stmt)
        return {recipient_type: Decimal(str(amount)) for recipient_type, amount in result.all()}


class GatewayEventRepository(SqlRepository[GatewayEvent]):
    """Repository for processed webhook deliveries."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, GatewayEvent)

    async def get_delivery(self, reference: str, event: str) -> Optional[GatewayEvent]:
        stmt = select(GatewayEvent).where(GatewayEvent.reference == reference, GatewayEvent.event == event)
        result = await self.session.execute(stmt)
        return result.scalars().first()


class RefundRepository(SqlRepository[Refund]):
    """Repository for refunds."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Refund)

    async def search(
        self,
        status: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Refund]:
        """List refunds filtered by status and creation window.

        Args:
            status: Refund status to match
            start: Inclusive lower bound on ``created_at``
            end: Exclusive upper bound on ``created_at``
            limit: Maximum records to return
            offset: Records to skip

        Returns:
            Refunds, newest first
        """
        stmt = select(Refund).order_by(Refund.created_at.desc(), Refund.id.desc())  # type: ignore[attr-defined]
        stmt = QueryBuilder.apply_filters(stmt, Refund, {"status": status})
        if start is not None:
            stmt = stmt.where(Refund.created_at >= start)
        if end is not None:
            stmt = stmt.where(Refund.created_at < end)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def total_amount(self, status: str) -> Decimal:
        stmt = select(func.coalesce(func.sum(Refund.amount), 0)).where(Refund.status == status)
        result = await self.session.execute(stmt)
        return Decimal(str(result.scalar_one()))
