"""Unit tests for the payment status state machine."""

from decimal import Decimal

import pytest

from alexandria.core.database.entities import PaymentLog, PaymentSplit
from alexandria.core.errors import InvalidTransitionError
from alexandria.core.models.domain import PaymentStatus
from alexandria.ledger.state_machine import ALLOWED_TRANSITIONS, apply_transition, can_transition, check_transition


def _log(status: str = "pending") -> PaymentLog:
    return PaymentLog(
        transaction_reference="ALX_TEST",
        user_id=1,
        amount=Decimal("100.00"),
        status=status,
        payment_type="course_enrollment",
    )


def _split(status: str = "pending") -> PaymentSplit:
    return PaymentSplit(
        payment_log_id=1,
        transaction_reference="ALX_TEST",
        recipient_type="platform",
        amount=Decimal("5.00"),
        percentage=Decimal("5"),
        status=status,
    )


class TestTransitions:
    @pytest.mark.parametrize("target", ["success", "failed", "cancelled"])
    def test_pending_moves_to_terminal_outcomes(self, target):
        """Test every move allowed out of pending."""
        transition = check_transition("pending", target)
        assert transition.changed is True
        assert transition.to_status == PaymentStatus(target)

    def test_success_can_be_refunded(self):
        """Test that only successful payments can be refunded."""
        assert can_transition(PaymentStatus.success, PaymentStatus.refunded)
        assert not can_transition(PaymentStatus.pending, PaymentStatus.refunded)

    @pytest.mark.parametrize(
        "current,target",
        [
            ("success", "failed"),
            ("success", "pending"),
            ("failed", "success"),
            ("cancelled", "success"),
            ("refunded", "success"),
            ("failed", "cancelled"),
        ],
    )
    def test_disallowed_moves_raise(self, current, target):
        """Test that moves outside the graph raise InvalidTransitionError."""
        with pytest.raises(InvalidTransitionError) as exc_info:
            check_transition(current, target)
        assert exc_info.value.current == current
        assert exc_info.value.target == target
        assert exc_info.value.status_code == 409

    @pytest.mark.parametrize("status", [s.value for s in PaymentStatus])
    def test_reapplying_current_status_is_a_noop(self, status):
        """Test that the same status is accepted without change."""
        transition = check_transition(status, status)
        assert transition.changed is False

    def test_terminal_states_have_no_exits(self):
        """Test the terminal states of the graph."""
        for status in (PaymentStatus.failed, PaymentStatus.cancelled, PaymentStatus.refunded):
            assert ALLOWED_TRANSITIONS[status] == frozenset()


class TestApplyTransition:
    def test_updates_log_and_all_splits(self):
        """Test that the log and its splits move together."""
        log, splits = _log(), [_split(), _split()]
        transition = apply_transition(log, splits, PaymentStatus.success)

        assert transition.changed is True
        assert log.status == "success"
        assert [s.status for s in splits] == ["success", "success"]

    def test_noop_leaves_records_untouched(self):
        """Test that re-applying a status does not rewrite split rows."""
        log, split = _log("success"), _split("pending")
        transition = apply_transition(log, [split], "success")

        assert transition.changed is False
        assert split.status == "pending"

    def test_invalid_move_leaves_records_untouched(self):
        """Test that a rejected move changes nothing."""
        log, split = _log("failed"), _split("failed")
        with pytest.raises(InvalidTransitionError):
            apply_transition(log, [split], "success")
        assert log.status == "failed"
        assert split.status == "failed"
