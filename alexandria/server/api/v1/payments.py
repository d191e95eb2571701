"""
Payment Reconciliation Endpoints.

The verify callback and the gateway webhook both move a payment out of
``pending``; applying the same outcome twice is acknowledged without
changing anything.
"""

from typing import Optional

from fastapi import APIRouter, Query, Request

from alexandria.core.models.io import ReconcileResponse, WebhookAck
from alexandria.ledger import ReconcileResult
from alexandria.server.core.config import settings
from alexandria.server.services.deps import CurrentUserDep, LedgerDep

router = APIRouter(tags=["payments"])


def _reconcile_response(result: ReconcileResult, message: str) -> ReconcileResponse:
    return ReconcileResponse(
        message="Payment already processed" if result.already_processed else message,
        reference=result.reference,
        status=result.status,
        previous_status=result.previous_status,
        already_processed=result.already_processed,
    )


@router.get(
    "/verify",
    response_model=ReconcileResponse,
    summary="Verify Payment",
    description="Ask the gateway for the outcome of a transaction and reconcile the payment.",
    responses={
        400: {"description": "The gateway reports the payment as failed or still in flight"},
        404: {"description": "Payment not found"},
        409: {"description": "The payment is in a state the outcome cannot apply to"},
        500: {"description": "Payment gateway error"},
    },
)
async def verify_payment(ledger: LedgerDep, reference: str = Query(..., min_length=1)) -> ReconcileResponse:
    """
    Verify callback.

    - **reference**: Transaction reference returned at initialization.
    """
    return _reconcile_response(await ledger.verify(reference), "Payment verified successfully")


@router.post(
    "/webhook",
    response_model=WebhookAck,
    summary="Gateway Webhook",
    description="Signed event notifications from the payment gateway.",
    responses={400: {"description": "Invalid signature or payload"}},
)
async def gateway_webhook(request: Request, ledger: LedgerDep) -> WebhookAck:
    """
    Receive a gateway event.

    The raw body is authenticated with HMAC-SHA512 against the gateway secret
    key; the signature is read from the header named by
    `GATEWAY__SIGNATURE_HEADER`.
    """
    raw_body = await request.body()
    signature: Optional[str] = request.headers.get(settings.gateway.signature_header)
    return WebhookAck(**await ledger.handle_webhook(raw_body, signature))


@router.post(
    "/{reference}/cancel",
    response_model=ReconcileResponse,
    summary="Cancel Payment",
    description="Cancel one of your own pending payments.",
    responses={
        403: {"description": "Not your payment"},
        404: {"description": "Payment not found"},
        409: {"description": "Payment is no longer pending"},
    },
)
async def cancel_payment(reference: str, payer: CurrentUserDep, ledger: LedgerDep) -> ReconcileResponse:
    return _reconcile_response(await ledger.cancel(payer, reference), "Payment cancelled")
