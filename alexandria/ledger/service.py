"""
Payment ledger service.

Owns the lifecycle of split payments: opening them at the gateway,
persisting the payment log with its platform and educator split rows,
reconciling them from verify callbacks and webhooks, cancellation and
refunds.

Every payment is addressed by its transaction reference. Reconciliation is
idempotent on that reference: applying a status the payment already has
reports ``already_processed`` and changes nothing, and webhook deliveries
are de-duplicated on ``(reference, event)`` before any change is applied.

Gateway calls happen before any local write, and the local writes of one
operation are committed together or rolled back together.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional
from uuid import uuid4

from sqlalchemy.exc import IntegrityError

from alexandria.core.database.base import utc_now
from alexandria.core.database.entities.courses import Enrollment, HireRequest
from alexandria.core.database.entities.payments import GatewayEvent, PaymentLog, PaymentSplit, Refund
from alexandria.core.database.entities.users import User
from alexandria.core.database.repositories.bundle import SqlRepoBundle
from alexandria.core.errors import (
    AlexandriaError,
    BusinessRuleError,
    ConflictError,
    GatewayError,
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
    SignatureError,
)
from alexandria.core.logging_config import get_logger
from alexandria.core.models.domain import (
    EnrollmentStatus,
    GatewayEventType,
    HireRequestStatus,
    PaymentStatus,
    PaymentType,
    RecipientType,
    RefundProcessor,
    RefundStatus,
    RelatedType,
)
from alexandria.core.monitoring import log_payment_transition
from alexandria.gateway.base import InitializedTransaction, PaymentGateway
from alexandria.gateway.signature import verify_signature
from alexandria.points.service import AlexPointsService
from alexandria.server.core.config import settings

from .splits import SplitBreakdown, allocate_refund, compute_split, to_decimal
from .state_machine import apply_transition

logger = get_logger(__name__)

WEBHOOK_TARGETS: dict[str, PaymentStatus] = {
    GatewayEventType.charge_success.value: PaymentStatus.success,
    GatewayEventType.charge_failed.value: PaymentStatus.failed,
}


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of reconciling one payment."""

    reference: str
    status: str
    previous_status: str
    already_processed: bool


@dataclass(frozen=True)
class _SplitTarget:
    """Who receives the educator share and what the payment settles."""

    educator: User
    subaccount_code: str
    payment_type: PaymentType
    related_type: RelatedType
    split_name: str


class PaymentLedgerService:
    """Revenue ledger operations for course enrollments and tutoring."""

    def __init__(
        self,
        repos: SqlRepoBundle,
        gateway: PaymentGateway,
        *,
        platform_fee_percentage: Optional[float] = None,
        secret_key: Optional[str] = None,
        points: Optional[AlexPointsService] = None,
    ) -> None:
        self.repos = repos
        self.gateway = gateway
        pct = settings.ledger.platform_fee_percentage if platform_fee_percentage is None else platform_fee_percentage
        self.platform_percentage = to_decimal(pct)
        self.secret_key = settings.gateway.secret_key if secret_key is None else secret_key
        self.points = points or AlexPointsService(repos)

    @staticmethod
    def new_reference(prefix: Optional[str] = None) -> str:
        return f"{prefix or settings.ledger.reference_prefix}_{uuid4().hex[:16].upper()}"

    # =====================================================================
    # Initialization
    # =====================================================================

    async def initialize_course_split(self, payer: User, course_id: int) -> dict[str, Any]:
        """Start paying for a course, or enroll directly when it is free.

        Args:
            payer: Learner paying for the course
            course_id: Course to enroll in

        Returns:
            Payment URL, reference and split details; free courses return the
            active enrollment instead of a payment URL

        Raises:
            NotFoundError: Unknown course
            BusinessRuleError: Already enrolled, or the educator cannot be paid
            GatewayError: The gateway refused to open the transaction
        """
        course = await self.repos.courses.get_by_id(course_id)
        if course is None:
            raise NotFoundError("Course not found")

        already = await self.repos.enrollments.find(
            payer.id, course.id, [EnrollmentStatus.active.value, EnrollmentStatus.completed.value]
        )
        if already is not None:
            raise BusinessRuleError("You are already enrolled in this course")

        if course.is_free:
            return await self._enroll_free(payer, course.id)

        target = await self._split_target(
            course.user_id,
            payment_type=PaymentType.course_enrollment,
            related_type=RelatedType.enrollment,
            split_name=f"Course_{course.id}_Split",
        )
        breakdown = compute_split(course.price, self.platform_percentage)
        reference = self.new_reference()
        init = await self._open_transaction(
            payer,
            target,
            breakdown,
            reference,
            extra_metadata={"course_id": course.id},
        )

        try:
            enrollment = await self.repos.enrollments.create(
                Enrollment(
                    user_id=payer.id,
                    course_id=course.id,
                    status=EnrollmentStatus.pending.value,
                    transaction_reference=reference,
                )
            )
            await self._persist_split(
                payer,
                target,
                breakdown,
                init,
                related_id=enrollment.id,
                course_id=course.id,
                enrollment_id=enrollment.id,
            )
            await self.repos.session.commit()
        except Exception:
            await self.repos.session.rollback()
            logger.error(f"Failed to persist course split payment {reference}", exc_info=True)
            raise

        logger.info(f"Initialized course split payment {reference} for user {payer.id} and course {course.id}")
        return self._initialized_response(init, breakdown)

    async def initialize_hire_split(
        self,
        payer: User,
        educator_id: int,
        amount: Any,
        hours: int,
        message: Optional[str] = None,
    ) -> dict[str, Any]:
        """Start paying an educator for tutoring hours.

        Raises:
            NotFoundError: Unknown educator
            BusinessRuleError: Target is not a verified educator or cannot be paid
            GatewayError: The gateway refused to open the transaction
        """
        total = to_decimal(amount)
        if total < 1 or hours < 1:
            raise BusinessRuleError("Amount and hours must be at least 1")

        educator = await self.repos.users.get_by_id(educator_id)
        if educator is None:
            raise NotFoundError("Educator not found")
        if not educator.is_educator:
            raise BusinessRuleError("Selected user is not an educator")
        if not educator.is_verified:
            raise BusinessRuleError("This educator is not verified yet and cannot be hired")
        if educator.id == payer.id:
            raise BusinessRuleError("You cannot hire yourself")

        target = await self._split_target(
            educator.id,
            payment_type=PaymentType.tutoring,
            related_type=RelatedType.hire_request,
            split_name=f"Hire_{educator.id}_Split",
        )
        breakdown = compute_split(total, self.platform_percentage)
        reference = self.new_reference()
        init = await self._open_transaction(payer, target, breakdown, reference, extra_metadata={"hours": hours})

        try:
            hire_request = await self.repos.hire_requests.create(
                HireRequest(
                    client_id=payer.id,
                    tutor_id=educator.id,
                    hours=hours,
                    amount=breakdown.total_amount,
                    message=message,
                    status=HireRequestStatus.pending.value,
                    transaction_reference=reference,
                )
            )
            await self._persist_split(
                payer,
                target,
                breakdown,
                init,
                related_id=hire_request.id,
                hire_request_id=hire_request.id,
            )
            await self.repos.session.commit()
        except Exception:
            await self.repos.session.rollback()
            logger.error(f"Failed to persist hire split payment {reference}", exc_info=True)
            raise

        logger.info(f"Initialized hire split payment {reference} for user {payer.id} and educator {educator.id}")
        response = self._initialized_response(init, breakdown)
        response["hire_request_id"] = hire_request.id
        return response

    async def _enroll_free(self, payer: User, course_id: int) -> dict[str, Any]:
        reference = self.new_reference("FREE")
        try:
            enrollment = await self.repos.enrollments.create(
                Enrollment(
                    user_id=payer.id,
                    course_id=course_id,
                    status=EnrollmentStatus.active.value,
                    transaction_reference=reference,
                    enrolled_at=utc_now(),
                )
            )
            await self.repos.payment_logs.create(
                PaymentLog(
                    transaction_reference=reference,
                    user_id=payer.id,
                    amount=Decimal("0"),
                    status=PaymentStatus.success.value,
                    payment_type=PaymentType.course_enrollment.value,
                    course_id=course_id,
                    enrollment_id=enrollment.id,
                    meta={"free_course": True},
                )
            )
            await self.points.award(payer, "enroll_course", "enrollment", enrollment.id)
            await self.repos.session.commit()
        except Exception:
            await self.repos.session.rollback()
            raise
        logger.info(f"User {payer.id} enrolled in free course {course_id}")
        return {
            "message": "Successfully enrolled in free course",
            "reference": reference,
            "payment_url": None,
            "enrollment_id": enrollment.id,
            "split_details": None,
        }

    async def _split_target(
        self,
        educator_id: int,
        *,
        payment_type: PaymentType,
        related_type: RelatedType,
        split_name: str,
    ) -> _SplitTarget:
        educator = await self.repos.users.get_by_id(educator_id)
        if educator is None:
            raise NotFoundError("Educator not found")
        info = await self.repos.payment_info.get_by_user_id(educator.id)
        if info is None or not info.subaccount_code:
            raise BusinessRuleError("The educator has not set up payment details yet")
        return _SplitTarget(
            educator=educator,
            subaccount_code=info.subaccount_code,
            payment_type=payment_type,
            related_type=related_type,
            split_name=split_name,
        )

    async def _open_transaction(
        self,
        payer: User,
        target: _SplitTarget,
        breakdown: SplitBreakdown,
        reference: str,
        extra_metadata: dict[str, Any],
    ) -> InitializedTransaction:
        split_config = await self.gateway.create_split(
            name=target.split_name,
            subaccounts=[{"subaccount": target.subaccount_code, "share": float(breakdown.educator_percentage)}],
            split_type="percentage",
            currency=settings.gateway.currency,
        )
        metadata = {
            "user_id": payer.id,
            "payment_type": target.payment_type.value,
            "is_split": True,
            "platform_fee_percentage": float(breakdown.platform_percentage),
            "educator_id": target.educator.id,
            **extra_metadata,
        }
        return await self.gateway.initialize_transaction(
            email=payer.email,
            amount=breakdown.total_amount,
            reference=reference,
            metadata=metadata,
            split_code=split_config.split_code,
            callback_url=settings.gateway.callback_url,
        )

    async def _persist_split(
        self,
        payer: User,
        target: _SplitTarget,
        breakdown: SplitBreakdown,
        init: InitializedTransaction,
        *,
        related_id: Optional[int],
        course_id: Optional[int] = None,
        enrollment_id: Optional[int] = None,
        hire_request_id: Optional[int] = None,
    ) -> PaymentLog:
        log = await self.repos.payment_logs.create(
            PaymentLog(
                transaction_reference=init.reference,
                user_id=payer.id,
                amount=breakdown.total_amount,
                status=PaymentStatus.pending.value,
                payment_type=target.payment_type.value,
                payment_url=init.authorization_url,
                course_id=course_id,
                enrollment_id=enrollment_id,
                hire_request_id=hire_request_id,
                meta={"access_code": init.access_code, "split": breakdown.as_dict()},
            )
        )
        await self.repos.payment_splits.create(
            PaymentSplit(
                payment_log_id=log.id,
                transaction_reference=init.reference,
                recipient_type=RecipientType.platform.value,
                recipient_id=None,
                amount=breakdown.platform_fee,
                percentage=breakdown.platform_percentage,
                status=PaymentStatus.pending.value,
                meta={"description": "Platform fee", "payment_type": target.payment_type.value},
            )
        )
        await self.repos.payment_splits.create(
            PaymentSplit(
                payment_log_id=log.id,
                transaction_reference=init.reference,
                recipient_type=RecipientType.user.value,
                recipient_id=target.educator.id,
                amount=breakdown.educator_amount,
                percentage=breakdown.educator_percentage,
                status=PaymentStatus.pending.value,
                meta={
                    "description": "Educator payment",
                    "subaccount_code": target.subaccount_code,
                    "payment_type": target.payment_type.value,
                    "related_id": related_id,
                    "related_type": target.related_type.value,
                    "platform_fee": float(breakdown.platform_fee),
                },
            )
        )
        return log

    @staticmethod
    def _initialized_response(init: InitializedTransaction, breakdown: SplitBreakdown) -> dict[str, Any]:
        return {
            "message": "Split payment initialized",
            "payment_url": init.authorization_url,
            "reference": init.reference,
            "split_details": breakdown.as_dict(),
        }

    # =====================================================================
    # Queries
    # =====================================================================

    async def get_split_details(self, reference: str, viewer: Optional[User] = None) -> dict[str, Any]:
        """Split rows of a payment.

        Args:
            reference: Transaction reference
            viewer: When given, must be the payer, a split recipient or an admin

        Raises:
            NotFoundError: Unknown payment, a payment without splits, or a viewer
                with no stake in it, so strangers learn nothing about the reference
        """
        log = await self.repos.payment_logs.get_by_reference(reference)
        if log is None:
            raise NotFoundError("Payment not found")
        splits = await self.repos.payment_splits.list_for_payment(log.id)
        if not splits:
            raise NotFoundError("No split details found for this payment")
        if viewer is not None and not viewer.is_admin and viewer.id != log.user_id:
            if all(split.recipient_id != viewer.id for split in splits):
                raise NotFoundError("Payment not found")
        return {
            "payment_reference": log.transaction_reference,
            "total_amount": log.amount,
            "status": log.status,
            "payment_type": log.payment_type,
            "splits": splits,
        }

    # =====================================================================
    # Reconciliation
    # =====================================================================

    async def verify(self, reference: str) -> ReconcileResult:
        """Reconcile a payment from the gateway's view of it.

        Only ``success`` and the definitive failure statuses move the payment.
        While the gateway still reports it in flight (``ongoing``, ``pending``,
        ``processing``, ``queued``) the payment stays pending so a later
        ``charge.success`` webhook can settle it.

        Raises:
            NotFoundError: Unknown payment
            BusinessRuleError: The gateway reports the payment as failed or still in flight
        """
        log = await self.repos.payment_logs.get_by_reference(reference)
        if log is None:
            raise NotFoundError("Payment not found")

        verified = await self.gateway.verify_transaction(reference)
        if not verified.is_success and not verified.is_failed:
            logger.info(f"Payment {reference} still in flight at the gateway ({verified.status})")
            raise BusinessRuleError(
                "Payment is still being processed",
                error={"reference": reference, "status": log.status, "gateway_status": verified.status},
            )

        target = PaymentStatus.success if verified.is_success else PaymentStatus.failed
        result = await self.reconcile(
            reference,
            target,
            payload={"gateway_status": verified.status, "gateway_response": verified.gateway_response},
            source="verify",
        )
        if target is PaymentStatus.failed:
            raise BusinessRuleError(
                "Payment verification failed",
                error={"reference": reference, "status": result.status, "gateway_status": verified.status},
            )
        return result

    async def handle_webhook(self, raw_body: bytes, signature: Optional[str]) -> dict[str, Any]:
        """Process a signed gateway webhook.

        Raises:
            SignatureError: Missing or wrong signature
            BusinessRuleError: Body is not a JSON object
        """
        if not verify_signature(raw_body, signature, self.secret_key):
            logger.warning("Rejected webhook with an invalid signature")
            raise SignatureError()

        try:
            payload = json.loads(raw_body)
        except ValueError as e:
            raise BusinessRuleError("Invalid webhook payload") from e
        if not isinstance(payload, dict):
            raise BusinessRuleError("Invalid webhook payload")

        event = payload.get("event")
        data = payload.get("data") if isinstance(payload.get("data"), dict) else {}
        reference = data.get("reference")
        target = WEBHOOK_TARGETS.get(event or "")
        if target is None or not reference:
            logger.info(f"Ignoring webhook event '{event}'")
            return {"message": "Webhook received", "processed": False}

        if await self.repos.gateway_events.get_delivery(reference, event) is not None:
            logger.info(f"Duplicate webhook delivery {event} for {reference}")
            return {"message": "Event already processed", "processed": False, "duplicate": True}

        try:
            self.repos.session.add(GatewayEvent(reference=reference, event=event, payload=payload))
            await self.repos.session.flush()
            if await self.repos.payment_logs.get_by_reference(reference) is None:
                await self.repos.session.commit()
                logger.warning(f"Webhook {event} references unknown payment {reference}")
                return {"message": "Webhook received", "processed": False}
            result = await self._reconcile(reference, target, {"event": event}, source="webhook")
            await self.repos.session.commit()
        except IntegrityError:
            await self.repos.session.rollback()
            logger.info(f"Concurrent duplicate webhook delivery {event} for {reference}")
            return {"message": "Event already processed", "processed": False, "duplicate": True}
        except InvalidTransitionError as e:
            await self.repos.session.rollback()
            logger.warning(f"Webhook {event} for {reference} ignored: {e.message}")
            return {"message": e.message, "processed": False}
        except Exception:
            await self.repos.session.rollback()
            raise

        return {
            "message": "Webhook processed",
            "processed": not result.already_processed,
            "reference": reference,
            "status": result.status,
        }

    async def reconcile(
        self,
        reference: str,
        target: PaymentStatus,
        payload: Optional[dict[str, Any]] = None,
        source: str = "api",
    ) -> ReconcileResult:
        """Apply ``target`` to a payment and its dependents, then commit.

        Raises:
            NotFoundError: Unknown payment
            InvalidTransitionError: ``target`` is not reachable from the current status
        """
        try:
            result = await self._reconcile(reference, target, payload, source)
            await self.repos.session.commit()
        except Exception:
            await self.repos.session.rollback()
            raise
        return result

    async def _reconcile(
        self,
        reference: str,
        target: PaymentStatus,
        payload: Optional[dict[str, Any]],
        source: str,
    ) -> ReconcileResult:
        log = await self.repos.payment_logs.get_by_reference(reference, for_update=True)
        if log is None:
            raise NotFoundError("Payment not found")
        splits = await self.repos.payment_splits.list_for_payment(log.id)

        transition = apply_transition(log, splits, target)
        if not transition.changed:
            logger.debug(f"Payment {reference} already {log.status}; nothing to do")
            return ReconcileResult(reference, log.status, log.status, already_processed=True)

        history = list((log.meta or {}).get("transitions", []))
        history.append(
            {
                "from": transition.from_status.value,
                "to": transition.to_status.value,
                "source": source,
                "at": utc_now().isoformat(),
                **(payload or {}),
            }
        )
        log.meta = {**(log.meta or {}), "transitions": history}

        await self._settle_dependents(log, transition.to_status)

        await self.repos.payment_logs.update(log)
        for split in splits:
            await self.repos.payment_splits.update(split)

        log_payment_transition(reference, transition.from_status.value, transition.to_status.value, source)
        logger.info(
            f"Payment {reference} moved {transition.from_status.value} -> {transition.to_status.value} via {source}"
        )
        return ReconcileResult(
            reference, transition.to_status.value, transition.from_status.value, already_processed=False
        )

    async def _settle_dependents(self, log: PaymentLog, status: PaymentStatus) -> None:
        if log.enrollment_id is not None:
            enrollment = await self.repos.enrollments.get_by_id(log.enrollment_id)
            if enrollment is not None:
                await self._settle_enrollment(log, enrollment, status)
        if log.hire_request_id is not None:
            hire_request = await self.repos.hire_requests.get_by_id(log.hire_request_id)
            if hire_request is not None:
                hire_request.status = {
                    PaymentStatus.success: HireRequestStatus.paid,
                    PaymentStatus.refunded: HireRequestStatus.refunded,
                }.get(status, HireRequestStatus.cancelled).value
                await self.repos.hire_requests.update(hire_request)

    async def _settle_enrollment(self, log: PaymentLog, enrollment: Enrollment, status: PaymentStatus) -> None:
        if status is PaymentStatus.success:
            enrollment.status = EnrollmentStatus.active.value
            enrollment.enrolled_at = utc_now()
            payer = await self.repos.users.get_by_id(log.user_id)
            if payer is not None:
                await self.points.award(payer, "enroll_course", "enrollment", enrollment.id)
        elif status is PaymentStatus.refunded:
            enrollment.status = EnrollmentStatus.refunded.value
        elif enrollment.status == EnrollmentStatus.pending.value:
            enrollment.status = EnrollmentStatus.cancelled.value
        await self.repos.enrollments.update(enrollment)

    async def cancel(self, payer: User, reference: str) -> ReconcileResult:
        """Cancel a pending payment on behalf of its payer.

        Raises:
            NotFoundError: Unknown payment
            PermissionDeniedError: The caller did not make the payment
            InvalidTransitionError: The payment is no longer pending
        """
        log = await self.repos.payment_logs.get_by_reference(reference)
        if log is None:
            raise NotFoundError("Payment not found")
        if log.user_id != payer.id and not payer.is_admin:
            raise PermissionDeniedError("You can only cancel your own payments")
        return await self.reconcile(reference, PaymentStatus.cancelled, {"cancelled_by": payer.id}, source="cancel")

    # =====================================================================
    # Refunds
    # =====================================================================

    async def refund(
        self,
        admin: User,
        reference: str,
        reason: Optional[str] = None,
        amount: Optional[Any] = None,
    ) -> Refund:
        """Refund a successful payment, in full or in part.

        The payment row stays locked from the first read until the refund is
        committed, so two admins cannot refund the same payment twice. A
        partial refund moves the payment to ``refunded`` but only the refunded
        amount is taken off each split; the rest stays as earnings and fees.

        Raises:
            NotFoundError: Unknown payment or not in a refundable state
            BusinessRuleError: Refund amount is not positive or exceeds the payment
            ConflictError: The payment was refunded while the gateway call was in flight
            GatewayError: The gateway refused the refund (a failed refund row is kept)
        """
        try:
            log = await self.repos.payment_logs.get_by_reference(reference, for_update=True)
            if log is None or log.status != PaymentStatus.success.value:
                raise NotFoundError("Payment not found or not in a refundable state")

            refund_amount = log.amount if amount is None else to_decimal(amount)
            if refund_amount <= 0:
                raise BusinessRuleError("Refund amount must be positive")
            if refund_amount > log.amount:
                raise BusinessRuleError("Refund amount cannot exceed the payment amount")
        except AlexandriaError:
            await self.repos.session.rollback()
            raise

        partial = refund_amount < log.amount
        try:
            gateway_refund = await self.gateway.refund_transaction(reference, refund_amount if partial else None)
        except GatewayError:
            await self._record_failed_refund(admin, log, refund_amount, reason)
            raise

        try:
            result = await self._reconcile(
                reference,
                PaymentStatus.refunded,
                {"refund_amount": float(refund_amount), "refunded_by": admin.id},
                source="refund",
            )
            if result.already_processed:
                raise ConflictError("Payment has already been refunded", error={"reference": reference})
            await self._allocate_refund(log, refund_amount)
            refund = await self.repos.refunds.create(
                Refund(
                    payment_log_id=log.id,
                    transaction_reference=reference,
                    reason=reason,
                    amount=refund_amount,
                    status=RefundStatus.processed.value,
                    processor=RefundProcessor.admin.value,
                    processor_id=admin.id,
                    gateway_refund_id=gateway_refund.refund_id,
                    refunded_at=utc_now(),
                )
            )
            await self.repos.session.commit()
        except Exception:
            await self.repos.session.rollback()
            logger.error(f"Gateway refunded {reference} but the ledger update failed", exc_info=True)
            raise

        logger.info(f"Refunded {refund_amount} of payment {reference} by admin {admin.id}")
        return refund

    async def _allocate_refund(self, log: PaymentLog, refund_amount: Decimal) -> None:
        splits = await self.repos.payment_splits.list_for_payment(log.id)
        log.refunded_amount = refund_amount
        await self.repos.payment_logs.update(log)
        if not splits:
            return
        if refund_amount == log.amount:
            parts = [split.amount for split in splits]
        else:
            parts = allocate_refund(refund_amount, [split.percentage for split in splits])
        for split, part in zip(splits, parts):
            split.refunded_amount = min(part, split.amount)
            await self.repos.payment_splits.update(split)

    async def _record_failed_refund(
        self, admin: User, log: PaymentLog, amount: Decimal, reason: Optional[str]
    ) -> None:
        try:
            await self.repos.refunds.create(
                Refund(
                    payment_log_id=log.id,
                    transaction_reference=log.transaction_reference,
                    reason=reason,
                    amount=amount,
                    status=RefundStatus.failed.value,
                    processor=RefundProcessor.admin.value,
                    processor_id=admin.id,
                )
            )
            await self.repos.session.commit()
        except Exception:
            await self.repos.session.rollback()
            logger.error(f"Could not record failed refund for {log.transaction_reference}", exc_info=True)
        logger.error(f"Gateway refused refund of payment {log.transaction_reference}")

    async def list_refunds(
        self,
        status: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> list[Refund]:
        return await self.repos.refunds.search(status=status, start=start, end=end, limit=limit, offset=offset)

    async def get_refund(self, refund_id: int) -> Refund:
        refund = await self.repos.refunds.get_by_id(refund_id)
        if refund is None:
            raise NotFoundError("Refund not found")
        return refund
