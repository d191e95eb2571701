"""
Payment Split Endpoints.

Initialize split payments for courses and tutoring and read the split rows
of a payment. The platform keeps ``LEDGER__PLATFORM_FEE_PERCENTAGE`` of each
payment and the educator's gateway sub-account receives the rest.
"""

from fastapi import APIRouter

from alexandria.core.models.io import (
    CourseSplitRequest,
    HireSplitRequest,
    PaymentSplitDetails,
    SplitInitResponse,
)
from alexandria.server.services.deps import CurrentUserDep, LedgerDep

router = APIRouter(tags=["payment-splits"])


@router.post(
    "/test-course",
    response_model=SplitInitResponse,
    summary="Initialize Course Split Payment",
    description="Open a gateway transaction for a course with the platform/educator split attached.",
    responses={
        400: {"description": "Already enrolled, or the educator cannot receive payments"},
        404: {"description": "Course not found"},
        500: {"description": "Payment gateway error"},
    },
)
async def initialize_course_split(
    payload: CourseSplitRequest, payer: CurrentUserDep, ledger: LedgerDep
) -> SplitInitResponse:
    """
    Initialize a course split payment.

    Creates the pending enrollment, the payment log and its two split rows in
    one transaction after the gateway accepted the transaction.

    - **course_id**: Course to pay for.
    """
    return SplitInitResponse.model_validate(await ledger.initialize_course_split(payer, payload.course_id))


@router.post(
    "/test-hire",
    response_model=SplitInitResponse,
    summary="Initialize Tutoring Split Payment",
    description="Open a gateway transaction to hire a verified educator for tutoring hours.",
    responses={
        400: {"description": "Target is not a verified educator, or cannot receive payments"},
        404: {"description": "Educator not found"},
        500: {"description": "Payment gateway error"},
    },
)
async def initialize_hire_split(
    payload: HireSplitRequest, payer: CurrentUserDep, ledger: LedgerDep
) -> SplitInitResponse:
    """
    Initialize a tutoring split payment.

    - **educator_id**: Educator to hire; must be verified.
    - **amount**: Total amount paid.
    - **hours**: Number of tutoring hours.
    - **message**: Optional note for the educator.
    """
    result = await ledger.initialize_hire_split(
        payer, payload.educator_id, payload.amount, payload.hours, payload.message
    )
    return SplitInitResponse.model_validate(result)


@router.get(
    "/{reference}",
    response_model=PaymentSplitDetails,
    summary="Get Split Details",
    description="Split rows of a payment. Visible to the payer, the recipients and admins.",
    responses={
        404: {"description": "Payment not found, has no splits, or the caller has no stake in it"},
    },
)
async def get_split_details(reference: str, viewer: CurrentUserDep, ledger: LedgerDep) -> PaymentSplitDetails:
    details = await ledger.get_split_details(reference, viewer)
    return PaymentSplitDetails.model_validate(details, from_attributes=True)
