"""
Educator earnings service.

Read models over the educator rows of the split ledger, and the bank details
that route an educator's share of a split payment to their gateway
sub-account.
"""

from __future__ import annotations

import re
from collections import OrderedDict
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Optional

from alexandria.core.database.base import utc_now
from alexandria.core.database.entities.payments import PaymentSplit
from alexandria.core.database.entities.users import EducatorPaymentInfo, User
from alexandria.core.database.repositories.bundle import SqlRepoBundle
from alexandria.core.errors import BusinessRuleError, GatewayError, NotFoundError, PermissionDeniedError
from alexandria.core.logging_config import get_logger
from alexandria.core.models.domain import PaymentStatus, PaymentType
from alexandria.gateway.base import PaymentGateway

logger = get_logger(__name__)

# Refunded payments keep the share that was not given back.
EARNING_STATUSES = (PaymentStatus.success.value, PaymentStatus.refunded.value)

ACCOUNT_NUMBER_PATTERN = re.compile(r"^\d{10}$")
MONTHS_OF_HISTORY = 12


def _require_educator(user: User, feature: str = "earnings") -> None:
    if not user.is_educator:
        raise PermissionDeniedError(f"Only educators can access {feature}")


def _full_name(user: Optional[User]) -> Optional[str]:
    if user is None:
        return None
    name = " ".join(part for part in (user.first_name, user.last_name) if part)
    return name or user.username


class EducatorEarningsService:
    """Earnings summaries and payout details for educators."""

    def __init__(self, repos: SqlRepoBundle, gateway: Optional[PaymentGateway] = None) -> None:
        self.repos = repos
        self.gateway = gateway

    # =====================================================================
    # Earnings
    # =====================================================================

    async def summary(
        self,
        educator: User,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> dict[str, Any]:
        """Educator splits inside a date window, net of refunds.

        Args:
            educator: Educator whose earnings are summarised
            start_date: First day of the window, defaults to the first day of this month
            end_date: Last day of the window (inclusive), defaults to today

        Returns:
            Totals split by payment type, the per-split breakdown and monthly
            totals over the past year

        Raises:
            PermissionDeniedError: The user is not an educator
            BusinessRuleError: The window ends before it starts
        """
        _require_educator(educator)
        today = utc_now().date()
        start_date = start_date or today.replace(day=1)
        end_date = end_date or today
        if end_date < start_date:
            raise BusinessRuleError("end_date must not be before start_date")

        splits = await self.repos.payment_splits.list_for_recipient(
            educator.id,
            EARNING_STATUSES,
            start=datetime.combine(start_date, time.min),
            end=datetime.combine(end_date + timedelta(days=1), time.min),
        )
        splits = [s for s in splits if s.retained_amount > 0]

        total = sum((s.retained_amount for s in splits), Decimal("0"))
        course = sum(
            (s.retained_amount for s in splits if s.payment_type == PaymentType.course_enrollment.value), Decimal("0")
        )
        tutoring = sum(
            (s.retained_amount for s in splits if s.payment_type == PaymentType.tutoring.value), Decimal("0")
        )

        return {
            "start_date": start_date,
            "end_date": end_date,
            "total_earnings": total,
            "course_earnings": course,
            "tutoring_earnings": tutoring,
            "earnings_breakdown": [self._breakdown_item(s) for s in splits],
            "monthly_earnings": await self._monthly_totals(educator.id),
        }

    async def _monthly_totals(self, educator_id: int) -> list[dict[str, Any]]:
        since = utc_now() - timedelta(days=365)
        splits = await self.repos.payment_splits.list_for_recipient(educator_id, EARNING_STATUSES, start=since)
        months: "OrderedDict[str, Decimal]" = OrderedDict()
        for split in sorted(splits, key=lambda s: s.created_at):
            key = split.created_at.strftime("%Y-%m")
            months[key] = months.get(key, Decimal("0")) + split.retained_amount
        return [{"month": month, "total": total} for month, total in list(months.items())[-MONTHS_OF_HISTORY:]]

    @staticmethod
    def _breakdown_item(split: PaymentSplit) -> dict[str, Any]:
        meta = split.meta or {}
        return {
            "id": split.id,
            "amount": split.retained_amount,
            "refunded_amount": split.refunded_amount,
            "date": split.created_at,
            "transaction_reference": split.transaction_reference,
            "payment_type": meta.get("payment_type", "unknown"),
            "description": meta.get("description", "Payment"),
            "platform_fee": meta.get("platform_fee", 0),
            "related_id": meta.get("related_id"),
            "related_type": meta.get("related_type"),
        }

    async def detail(self, educator: User, split_id: int) -> dict[str, Any]:
        """One educator split with the course or tutoring request it paid for.

        Raises:
            PermissionDeniedError: The user is not an educator
            NotFoundError: The split does not exist or belongs to someone else
        """
        _require_educator(educator)
        split = await self.repos.payment_splits.get_for_recipient(split_id, educator.id)
        if split is None:
            raise NotFoundError("Earning record not found")

        meta = split.meta or {}
        payment_type = meta.get("payment_type", "unknown")
        related_id = meta.get("related_id")
        additional: dict[str, Any] = {}

        if payment_type == PaymentType.course_enrollment.value and related_id:
            enrollment = await self.repos.enrollments.get_by_id(related_id)
            if enrollment is not None:
                course = await self.repos.courses.get_by_id(enrollment.course_id)
                student = await self.repos.users.get_by_id(enrollment.user_id)
                if course is not None:
                    additional["course"] = {"id": course.id, "title": course.title, "price": course.price}
                if student is not None:
                    additional["student"] = {"id": student.id, "name": _full_name(student)}
        elif payment_type == PaymentType.tutoring.value and related_id:
            hire_request = await self.repos.hire_requests.get_by_id(related_id)
            if hire_request is not None:
                student = await self.repos.users.get_by_id(hire_request.client_id)
                additional["tutoring_session"] = {
                    "id": hire_request.id,
                    "hours": hire_request.hours,
                    "total_amount": hire_request.amount,
                    "status": hire_request.status,
                    "student": {"id": hire_request.client_id, "name": _full_name(student)},
                }

        return {
            "id": split.id,
            "amount": split.amount,
            "refunded_amount": split.refunded_amount,
            "percentage": split.percentage,
            "date": split.created_at,
            "transaction_reference": split.transaction_reference,
            "status": split.status,
            "payment_type": payment_type,
            "description": meta.get("description", "Payment"),
            "platform_fee": meta.get("platform_fee", 0),
            "additional_data": additional,
        }

    # =====================================================================
    # Bank details
    # =====================================================================

    @staticmethod
    def _bank_info(info: EducatorPaymentInfo) -> dict[str, Any]:
        return {
            "bank_name": info.bank_name,
            "bank_code": info.bank_code,
            "account_number": info.masked_account_number(),
            "account_name": info.account_name,
            "is_verified": info.is_verified,
            "has_subaccount": bool(info.subaccount_code),
        }

    async def get_bank_info(self, educator: User) -> dict[str, Any]:
        _require_educator(educator, "this feature")
        info = await self.repos.payment_info.get_by_user_id(educator.id)
        if info is None:
            return {"has_bank_info": False, "bank_info": None}
        return {
            "has_bank_info": bool(info.account_number and info.bank_code),
            "bank_info": self._bank_info(info),
        }

    async def update_bank_info(
        self,
        educator: User,
        bank_code: str,
        account_number: str,
        account_name: Optional[str] = None,
        bank_name: Optional[str] = None,
    ) -> dict[str, Any]:
        """Verify a bank account and open the educator's settlement sub-account.

        Raises:
            PermissionDeniedError: The user is not an educator
            BusinessRuleError: Malformed account number or the gateway cannot resolve it
            GatewayError: The sub-account could not be created
        """
        _require_educator(educator, "this feature")
        if not ACCOUNT_NUMBER_PATTERN.match(account_number or ""):
            raise BusinessRuleError("Account number must be exactly 10 digits")
        if self.gateway is None:
            raise GatewayError("Payment gateway is not configured")

        try:
            resolved = await self.gateway.resolve_account(account_number, bank_code)
        except GatewayError as e:
            logger.warning(f"Could not resolve bank account for educator {educator.id}: {e.message}")
            raise BusinessRuleError("Unable to verify bank account", error=e.error) from e

        try:
            subaccount = await self.gateway.create_subaccount(
                business_name=_full_name(educator) or educator.username,
                bank_code=bank_code,
                account_number=account_number,
                percentage_charge=Decimal("0"),
            )
        except GatewayError as e:
            logger.error(f"Could not create sub-account for educator {educator.id}: {e.message}")
            raise GatewayError("Failed to create payment account", error=e.error) from e

        info = await self.repos.payment_info.get_by_user_id(educator.id)
        if info is None:
            info = EducatorPaymentInfo(user_id=educator.id, bank_code=bank_code, account_number=account_number)
        info.bank_code = bank_code
        info.account_number = account_number
        info.account_name = resolved.account_name or account_name
        info.bank_name = bank_name or info.bank_name
        info.subaccount_code = subaccount.subaccount_code
        info.is_verified = True

        try:
            info = await self.repos.payment_info.update(info)
            await self.repos.session.commit()
        except Exception:
            await self.repos.session.rollback()
            raise

        logger.info(f"Updated bank details for educator {educator.id}")
        bank_info = self._bank_info(info)
        bank_info["subaccount_code"] = info.subaccount_code
        return {"message": "Banking information updated successfully", "bank_info": bank_info}
