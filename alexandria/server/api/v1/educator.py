"""
Educator Endpoints.

Earnings read from the educator rows of the split ledger, and the bank
details that route the educator share of each payment.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter

from alexandria.core.models.io import (
    BankInfoResponse,
    BankInfoUpdate,
    BankInfoUpdated,
    EarningDetail,
    EarningsSummary,
)
from alexandria.server.services.deps import CurrentUserDep, EarningsDep

router = APIRouter(tags=["educator"])


@router.get(
    "/bank-info",
    response_model=BankInfoResponse,
    summary="Get Bank Info",
    description="The educator's payout account with a masked account number.",
    responses={403: {"description": "Caller is not an educator"}},
)
async def get_bank_info(educator: CurrentUserDep, earnings: EarningsDep) -> BankInfoResponse:
    return BankInfoResponse.model_validate(await earnings.get_bank_info(educator))


@router.put(
    "/bank-info",
    response_model=BankInfoUpdated,
    summary="Update Bank Info",
    description="Verify a bank account with the gateway and open the educator's settlement sub-account.",
    responses={
        400: {"description": "Account could not be verified"},
        403: {"description": "Caller is not an educator"},
        500: {"description": "Sub-account could not be created"},
    },
)
async def update_bank_info(
    payload: BankInfoUpdate, educator: CurrentUserDep, earnings: EarningsDep
) -> BankInfoUpdated:
    """
    Update bank details.

    - **bank_code**: Gateway bank code.
    - **account_number**: 10-digit account number.
    - **account_name**: Used when the gateway does not return the account name.
    - **bank_name**: Display name of the bank.
    """
    result = await earnings.update_bank_info(
        educator,
        bank_code=payload.bank_code,
        account_number=payload.account_number,
        account_name=payload.account_name,
        bank_name=payload.bank_name,
    )
    return BankInfoUpdated.model_validate(result)


@router.get(
    "/earnings",
    response_model=EarningsSummary,
    summary="Earnings Summary",
    description="Successful educator splits in a window, defaulting to the current month.",
    responses={403: {"description": "Caller is not an educator"}},
)
async def earnings_summary(
    educator: CurrentUserDep,
    earnings: EarningsDep,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> EarningsSummary:
    """
    Summarise earnings.

    - **start_date**: First day of the window (default: first day of this month).
    - **end_date**: Last day of the window, inclusive (default: today).
    """
    return EarningsSummary.model_validate(await earnings.summary(educator, start_date, end_date))


@router.get(
    "/earnings/{split_id}",
    response_model=EarningDetail,
    summary="Earning Detail",
    responses={
        403: {"description": "Caller is not an educator"},
        404: {"description": "Earning record not found"},
    },
)
async def earning_detail(split_id: int, educator: CurrentUserDep, earnings: EarningsDep) -> EarningDetail:
    return EarningDetail.model_validate(await earnings.detail(educator, split_id))
