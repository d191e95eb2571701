"""Admin analytics over users, content and the revenue ledger."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from typing import Any

from alexandria.core.database.base import utc_now
from alexandria.core.database.repositories.bundle import SqlRepoBundle
from alexandria.core.models.domain import ApprovalStatus, EnrollmentStatus, PaymentStatus, RecipientType, RefundStatus

ZERO = Decimal("0")


class AnalyticsService:
    """Aggregate read models for the admin dashboard."""

    def __init__(self, repos: SqlRepoBundle) -> None:
        self.repos = repos

    async def overview(self) -> dict[str, Any]:
        now = utc_now()
        today = now.replace(hour=0, minute=0, second=0, microsecond=0)
        week_ago = now - timedelta(days=7)

        by_status = await self.repos.libraries.count_by_status()
        libraries = {status.value: by_status.get(status.value, 0) for status in ApprovalStatus}

        enrollments = 0
        for status in (EnrollmentStatus.active, EnrollmentStatus.completed):
            enrollments += await self.repos.enrollments.count({"status": status.value})

        return {
            "total_users": await self.repos.users.count(),
            "new_users_today": await self.repos.users.count_created_since(today),
            "new_users_week": await self.repos.users.count_created_since(week_ago),
            "active_users_week": await self.repos.users.count_active_since(week_ago),
            "total_libraries": sum(by_status.values()),
            "libraries_by_status": libraries,
            "total_courses": await self.repos.courses.count(),
            "total_enrollments": enrollments,
        }

    async def revenue(self) -> dict[str, Any]:
        """Ledger totals.

        Gross volume, platform fees and educator payouts count what the
        platform kept: successful payments plus the unrefunded share of
        refunded ones. ``refunded_volume`` is the total of processed refunds.
        """
        kept = [PaymentStatus.success.value, PaymentStatus.refunded.value]
        totals = await self.repos.payment_logs.totals_by_status()
        shares = await self.repos.payment_splits.sum_retained_by_recipient_type(kept)
        return {
            "gross_volume": await self.repos.payment_logs.retained_volume(kept),
            "platform_fees": shares.get(RecipientType.platform.value, ZERO),
            "educator_payouts": shares.get(RecipientType.user.value, ZERO),
            "refunded_volume": await self.repos.refunds.total_amount(RefundStatus.processed.value),
            "payments_by_status": {
                status.value: totals.get(status.value, (0, ZERO))[0] for status in PaymentStatus
            },
        }
