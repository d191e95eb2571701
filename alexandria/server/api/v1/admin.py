"""
Admin Endpoints.

Library curation, refunds, analytics and educator verification. Every route
requires the ``admin`` role.
"""

from datetime import date, datetime, time, timedelta
from typing import List, Optional

from fastapi import APIRouter, Query, status

from alexandria.core.models.io import (
    AnalyticsOverview,
    LibraryPage,
    LibraryRead,
    LibraryReject,
    RefundCreate,
    RefundRead,
    RevenueReport,
    UserRead,
    VerificationUpdate,
)
from alexandria.core.models.domain import ApprovalStatus, RefundStatus
from alexandria.server.services.deps import AdminDep, AnalyticsDep, LedgerDep, LibraryDep, UserServiceDep

router = APIRouter(tags=["admin"])


# ---------------------------------------------------------------------------
# Libraries
# ---------------------------------------------------------------------------


@router.get(
    "/libraries",
    response_model=LibraryPage,
    summary="List Libraries",
    description="Libraries filtered by approval status and a name/description search.",
)
async def list_libraries(
    admin: AdminDep,
    libraries: LibraryDep,
    status_filter: Optional[ApprovalStatus] = Query(None, alias="status"),
    search: Optional[str] = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=100),
) -> LibraryPage:
    result = await libraries.admin_list(
        status=status_filter.value if status_filter else None, search=search, page=page, per_page=per_page
    )
    return LibraryPage.model_validate(result, from_attributes=True)


@router.post(
    "/libraries/{library_id}/approve",
    response_model=LibraryRead,
    summary="Approve Library",
    responses={
        400: {"description": "Already approved, or fewer than 5 content items"},
        404: {"description": "Library not found"},
    },
)
async def approve_library(library_id: int, admin: AdminDep, libraries: LibraryDep) -> LibraryRead:
    return LibraryRead.model_validate(await libraries.approve(admin, library_id), from_attributes=True)


@router.post(
    "/libraries/{library_id}/reject",
    response_model=LibraryRead,
    summary="Reject Library",
    responses={400: {"description": "Already rejected"}, 404: {"description": "Library not found"}},
)
async def reject_library(
    library_id: int, admin: AdminDep, libraries: LibraryDep, payload: Optional[LibraryReject] = None
) -> LibraryRead:
    library = await libraries.reject(admin, library_id, payload.reason if payload else None)
    return LibraryRead.model_validate(library, from_attributes=True)


# ---------------------------------------------------------------------------
# Refunds
# ---------------------------------------------------------------------------


@router.post(
    "/refunds",
    response_model=RefundRead,
    status_code=status.HTTP_201_CREATED,
    summary="Refund Payment",
    description="Refund a successful payment through the gateway and record it in the ledger.",
    responses={
        400: {"description": "Refund amount exceeds the payment"},
        404: {"description": "Payment not found or not refundable"},
        500: {"description": "Gateway refused the refund"},
    },
)
async def create_refund(payload: RefundCreate, admin: AdminDep, ledger: LedgerDep) -> RefundRead:
    """
    Refund a payment.

    - **reference**: Transaction reference of a `success` payment.
    - **reason**: Optional reason kept with the refund.
    - **amount**: Optional partial amount; defaults to the full payment.
    """
    refund = await ledger.refund(admin, payload.reference, payload.reason, payload.amount)
    return RefundRead.model_validate(refund, from_attributes=True)


@router.get("/refunds", response_model=List[RefundRead], summary="List Refunds")
async def list_refunds(
    admin: AdminDep,
    ledger: LedgerDep,
    status_filter: Optional[RefundStatus] = Query(None, alias="status"),
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(20, ge=1, le=100),
) -> List[RefundRead]:
    refunds = await ledger.list_refunds(
        status=status_filter.value if status_filter else None,
        start=datetime.combine(start_date, time.min) if start_date else None,
        end=datetime.combine(end_date + timedelta(days=1), time.min) if end_date else None,
        limit=per_page,
        offset=(page - 1) * per_page,
    )
    return [RefundRead.model_validate(r, from_attributes=True) for r in refunds]


@router.get(
    "/refunds/{refund_id}",
    response_model=RefundRead,
    summary="Get Refund",
    responses={404: {"description": "Refund not found"}},
)
async def get_refund(refund_id: int, admin: AdminDep, ledger: LedgerDep) -> RefundRead:
    return RefundRead.model_validate(await ledger.get_refund(refund_id), from_attributes=True)


# ---------------------------------------------------------------------------
# Analytics
# ---------------------------------------------------------------------------


@router.get("/analytics/overview", response_model=AnalyticsOverview, summary="Platform Overview")
async def analytics_overview(admin: AdminDep, analytics: AnalyticsDep) -> AnalyticsOverview:
    return AnalyticsOverview(**await analytics.overview())


@router.get("/analytics/revenue", response_model=RevenueReport, summary="Revenue Report")
async def analytics_revenue(admin: AdminDep, analytics: AnalyticsDep) -> RevenueReport:
    return RevenueReport(**await analytics.revenue())


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@router.post(
    "/users/{user_id}/verify",
    response_model=UserRead,
    summary="Set User Verification",
    description="Verified educators can be hired for tutoring.",
    responses={404: {"description": "User not found"}},
)
async def verify_user(
    user_id: int, admin: AdminDep, users: UserServiceDep, payload: Optional[VerificationUpdate] = None
) -> UserRead:
    user = await users.set_verified(user_id, payload.is_verified if payload else True)
    return UserRead.model_validate(user, from_attributes=True)
