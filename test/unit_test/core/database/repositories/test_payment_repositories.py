"""Tests for the payment ledger repositories against an in-memory database."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from alexandria.core.database.base import utc_now
from alexandria.core.database.entities import GatewayEvent, PaymentLog, PaymentSplit, Refund


async def _payment(repos, user, reference: str, amount: str, status: str = "pending") -> PaymentLog:
    payment = await repos.payment_logs.create(
        PaymentLog(
            transaction_reference=reference,
            user_id=user.id,
            amount=Decimal(amount),
            status=status,
            payment_type="course_purchase",
        )
    )
    await repos.session.commit()
    return payment


async def _split(
    repos, payment, recipient_type, amount, *, recipient_id=None, status="pending", created_at=None, refunded="0"
):
    split = PaymentSplit(
        payment_log_id=payment.id,
        transaction_reference=payment.transaction_reference,
        recipient_type=recipient_type,
        recipient_id=recipient_id,
        amount=Decimal(amount),
        refunded_amount=Decimal(refunded),
        percentage=Decimal("50.00"),
        status=status,
    )
    if created_at is not None:
        split.created_at = created_at
    split = await repos.payment_splits.create(split)
    await repos.session.commit()
    return split


class TestPaymentLogRepository:
    @pytest.mark.asyncio
    async def test_get_by_reference(self, repos, make_user):
        ada = await make_user("ada")
        payment = await _payment(repos, ada, "ALX_REF_1", "100.00")

        found = await repos.payment_logs.get_by_reference("ALX_REF_1")

        assert found is not None
        assert found.id == payment.id
        assert await repos.payment_logs.get_by_reference("ALX_MISSING") is None

    @pytest.mark.asyncio
    async def test_timestamps_are_naive_utc(self, repos, make_user):
        ada = await make_user("ada")
        before = utc_now()
        await _payment(repos, ada, "ALX_TS_1", "10.00")

        found = await repos.payment_logs.get_by_reference("ALX_TS_1")

        assert before.tzinfo is None
        assert found.created_at.tzinfo is None
        assert found.created_at >= before - timedelta(seconds=1)

    @pytest.mark.asyncio
    async def test_get_by_reference_for_update(self, repos, make_user):
        ada = await make_user("ada")
        await _payment(repos, ada, "ALX_REF_2", "50.00")

        found = await repos.payment_logs.get_by_reference("ALX_REF_2", for_update=True)

        assert found is not None
        assert found.amount == Decimal("50.00")

    @pytest.mark.asyncio
    async def test_totals_by_status(self, repos, make_user):
        ada = await make_user("ada")
        await _payment(repos, ada, "ALX_A", "100.00", "success")
        await _payment(repos, ada, "ALX_B", "250.50", "success")
        await _payment(repos, ada, "ALX_C", "75.00", "failed")

        totals = await repos.payment_logs.totals_by_status()

        assert totals["success"] == (2, Decimal("350.50"))
        assert totals["failed"] == (1, Decimal("75.00"))
        assert "pending" not in totals

    @pytest.mark.asyncio
    async def test_retained_volume(self, repos, make_user):
        ada = await make_user("ada")
        await _payment(repos, ada, "ALX_K1", "100.00", "success")
        partly = await _payment(repos, ada, "ALX_K2", "300.00", "refunded")
        partly.refunded_amount = Decimal("120.00")
        await repos.payment_logs.update(partly)
        await repos.session.commit()
        await _payment(repos, ada, "ALX_K3", "75.00", "failed")

        assert await repos.payment_logs.retained_volume(["success", "refunded"]) == Decimal("280.00")
        assert await repos.payment_logs.retained_volume(["pending"]) == Decimal("0")


class TestPaymentSplitRepository:
    @pytest.mark.asyncio
    async def test_list_for_payment_in_insertion_order(self, repos, make_user):
        ada = await make_user("ada")
        grace = await make_user("grace", "educator")
        payment = await _payment(repos, ada, "ALX_S1", "1000.00")
        platform = await _split(repos, payment, "platform", "50.00")
        educator = await _split(repos, payment, "user", "950.00", recipient_id=grace.id)

        splits = await repos.payment_splits.list_for_payment(payment.id)

        assert [s.id for s in splits] == [platform.id, educator.id]

    @pytest.mark.asyncio
    async def test_list_for_recipient_filters_status_and_window(self, repos, make_user):
        ada = await make_user("ada")
        grace = await make_user("grace", "educator")
        payment = await _payment(repos, ada, "ALX_S2", "1000.00")
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        old = await _split(
            repos, payment, "user", "100.00", recipient_id=grace.id, status="success", created_at=now - timedelta(days=40)
        )
        recent = await _split(repos, payment, "user", "200.00", recipient_id=grace.id, status="success", created_at=now)
        await _split(repos, payment, "user", "300.00", recipient_id=grace.id, status="pending")
        await _split(repos, payment, "platform", "10.00", status="success")

        everything = await repos.payment_splits.list_for_recipient(grace.id, ["success"])
        last_month = await repos.payment_splits.list_for_recipient(
            grace.id, ["success"], start=now - timedelta(days=30), end=now + timedelta(days=1)
        )

        assert [s.id for s in everything] == [recent.id, old.id]
        assert [s.id for s in last_month] == [recent.id]
        with_pending = await repos.payment_splits.list_for_recipient(grace.id, ["success", "pending"])
        assert len(with_pending) == 3

    @pytest.mark.asyncio
    async def test_get_for_recipient_hides_other_users_splits(self, repos, make_user):
        ada = await make_user("ada")
        grace = await make_user("grace", "educator")
        alan = await make_user("alan", "educator")
        payment = await _payment(repos, ada, "ALX_S3", "500.00")
        split = await _split(repos, payment, "user", "475.00", recipient_id=grace.id)

        assert (await repos.payment_splits.get_for_recipient(split.id, grace.id)).id == split.id
        assert await repos.payment_splits.get_for_recipient(split.id, alan.id) is None

    @pytest.mark.asyncio
    async def test_sum_retained_by_recipient_type(self, repos, make_user):
        ada = await make_user("ada")
        grace = await make_user("grace", "educator")
        payment = await _payment(repos, ada, "ALX_S4", "1000.00")
        await _split(repos, payment, "platform", "50.00", status="success")
        await _split(repos, payment, "user", "950.00", recipient_id=grace.id, status="success")
        await _split(repos, payment, "user", "400.00", recipient_id=grace.id, status="refunded", refunded="400.00")
        await _split(repos, payment, "platform", "20.00", status="refunded", refunded="5.00")
        await _split(repos, payment, "user", "80.00", recipient_id=grace.id, status="failed")

        settled = await repos.payment_splits.sum_retained_by_recipient_type(["success"])
        kept = await repos.payment_splits.sum_retained_by_recipient_type(["success", "refunded"])

        assert settled == {"platform": Decimal("50.00"), "user": Decimal("950.00")}
        assert kept == {"platform": Decimal("65.00"), "user": Decimal("950.00")}


class TestGatewayEventRepository:
    @pytest.mark.asyncio
    async def test_get_delivery_matches_reference_and_event(self, repos):
        await repos.gateway_events.create(
            GatewayEvent(reference="ALX_W1", event="charge.success", payload={"event": "charge.success"})
        )
        await repos.session.commit()

        assert await repos.gateway_events.get_delivery("ALX_W1", "charge.success") is not None
        assert await repos.gateway_events.get_delivery("ALX_W1", "charge.failed") is None
        assert await repos.gateway_events.get_delivery("ALX_W2", "charge.success") is None


class TestRefundRepository:
    @pytest.mark.asyncio
    async def test_search_by_status_and_window(self, repos, make_user):
        ada = await make_user("ada")
        payment = await _payment(repos, ada, "ALX_R1", "300.00", "refunded")
        now = datetime.now(timezone.utc).replace(tzinfo=None)
        rows = [
            Refund(
                payment_log_id=payment.id,
                transaction_reference=payment.transaction_reference,
                amount=Decimal("100.00"),
                status=status,
                created_at=created_at,
            )
            for status, created_at in (
                ("processed", now - timedelta(days=10)),
                ("failed", now - timedelta(days=5)),
                ("processed", now),
            )
        ]
        for row in rows:
            await repos.refunds.create(row)
        await repos.session.commit()

        processed = await repos.refunds.search(status="processed")
        recent = await repos.refunds.search(start=now - timedelta(days=7))
        paged = await repos.refunds.search(limit=1, offset=1)

        assert [r.id for r in processed] == [rows[2].id, rows[0].id]
        assert [r.id for r in recent] == [rows[2].id, rows[1].id]
        assert [r.id for r in paged] == [rows[1].id]

    @pytest.mark.asyncio
    async def test_total_amount_by_status(self, repos, make_user):
        ada = await make_user("ada")
        payment = await _payment(repos, ada, "ALX_R2", "300.00", "refunded")
        for amount, status in (("100.00", "processed"), ("50.00", "processed"), ("75.00", "failed")):
            await repos.refunds.create(
                Refund(
                    payment_log_id=payment.id,
                    transaction_reference=payment.transaction_reference,
                    amount=Decimal(amount),
                    status=status,
                )
            )
        await repos.session.commit()

        assert await repos.refunds.total_amount("processed") == Decimal("150.00")
        assert await repos.refunds.total_amount("pending") == Decimal("0")
