"""
HTTP payment gateway adapter.

Talks to a Paystack-compatible REST API: bearer secret key, JSON envelopes
of the form ``{"status": bool, "message": str, "data": {...}}`` and amounts
in minor units (kobo/cents).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

import httpx

from alexandria.core.errors import GatewayError
from alexandria.core.logging_config import get_logger
from alexandria.core.monitoring import log_gateway_call

from .base import (
    InitializedTransaction,
    PaymentGateway,
    RefundResult,
    ResolvedAccount,
    SplitConfigResult,
    SubaccountResult,
    VerifiedTransaction,
)

logger = get_logger(__name__)

MINOR_UNITS = Decimal("100")


def to_minor_units(amount: Decimal) -> int:
    return int((amount * MINOR_UNITS).to_integral_value())


def from_minor_units(amount: Any) -> Optional[Decimal]:
    if amount is None:
        return None
    return (Decimal(str(amount)) / MINOR_UNITS).quantize(Decimal("0.01"))


class HttpPaymentGateway(PaymentGateway):
    """
    Thin async HTTP client for the payment provider.

    Responsibilities:
    - open and verify checkout transactions
    - refunds
    - settlement sub-accounts and split configurations
    - bank account resolution
    """

    def __init__(
        self,
        base_url: str,
        secret_key: str,
        *,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.secret_key = secret_key
        self._client = client or httpx.AsyncClient(timeout=timeout)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.secret_key}",
            "Content-Type": "application/json",
        }

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.debug(f"HttpPaymentGateway.{operation}: {method} {url}")
        try:
            r = await self._client.request(method, url, headers=self._headers(), json=json, params=params)
            r.raise_for_status()
            body = r.json()
        except httpx.HTTPStatusError as e:
            log_gateway_call(operation, ok=False, context={"status_code": e.response.status_code})
            raise GatewayError(
                f"Payment gateway {operation} failed: {e.response.status_code}",
                error=e.response.text,
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            log_gateway_call(operation, ok=False)
            raise GatewayError(f"Payment gateway {operation} failed", error=str(e)) from e

        if not isinstance(body, dict) or not body.get("status"):
            message = body.get("message") if isinstance(body, dict) else None
            log_gateway_call(operation, ok=False)
            raise GatewayError(f"Payment gateway {operation} was rejected", error=message)

        log_gateway_call(operation, ok=True)
        data = body.get("data")
        return data if isinstance(data, dict) else {}

    async def initialize_transaction(
        self,
        *,
        email: str,
        amount: Decimal,
        reference: str,
        metadata: dict[str, Any],
        split_code: Optional[str] = None,
        callback_url: Optional[str] = None,
    ) -> InitializedTransaction:
        payload: dict[str, Any] = {
            "email": email,
            "amount": to_minor_units(amount),
            "reference": reference,
            "metadata": metadata,
        }
        if split_code:
            payload["split_code"] = split_code
        if callback_url:
            payload["callback_url"] = callback_url
        data = await self._request("initialize_transaction", "POST", "/transaction/initialize", json=payload)
        if not data.get("authorization_url"):
            raise GatewayError("Payment gateway did not return an authorization URL")
        return InitializedTransaction(
            reference=data.get("reference") or reference,
            authorization_url=data["authorization_url"],
            access_code=data.get("access_code"),
        )

    async def verify_transaction(self, reference: str) -> VerifiedTransaction:
        data = await self._request("verify_transaction", "GET", f"/transaction/verify/{reference}")
        return VerifiedTransaction(
            reference=data.get("reference") or reference,
            status=str(data.get("status") or "failed"),
            amount=from_minor_units(data.get("amount")),
            gateway_response=data.get("gateway_response"),
            raw=data,
        )

    async def refund_transaction(self, reference: str, amount: Optional[Decimal] = None) -> RefundResult:
        payload: dict[str, Any] = {"transaction": reference}
        if amount is not None:
            payload["amount"] = to_minor_units(amount)
        data = await self._request("refund_transaction", "POST", "/refund", json=payload)
        refund_id = data.get("id")
        return RefundResult(
            refund_id=str(refund_id) if refund_id is not None else None,
            status=str(data.get("status") or "pending"),
            raw=data,
        )

    async def create_subaccount(
        self,
        *,
        business_name: str,
        bank_code: str,
        account_number: str,
        percentage_charge: Decimal,
    ) -> SubaccountResult:
        payload = {
            "business_name": business_name,
            "settlement_bank": bank_code,
            "account_number": account_number,
            "percentage_charge": float(percentage_charge),
        }
        data = await self._request("create_subaccount", "POST", "/subaccount", json=payload)
        if not data.get("subaccount_code"):
            raise GatewayError("Payment gateway did not return a subaccount code")
        return SubaccountResult(subaccount_code=data["subaccount_code"], raw=data)

    async def create_split(
        self,
        *,
        name: str,
        subaccounts: list[dict[str, Any]],
        split_type: str = "percentage",
        currency: str = "NGN",
    ) -> SplitConfigResult:
        payload = {
            "name": name,
            "type": split_type,
            "currency": currency,
            "subaccounts": subaccounts,
            "bearer_type": "account",
        }
        data = await self._request("create_split", "POST", "/split", json=payload)
        if not data.get("split_code"):
            raise GatewayError("Payment gateway did not return a split code")
        return SplitConfigResult(split_code=data["split_code"], raw=data)

    async def resolve_account(self, account_number: str, bank_code: str) -> ResolvedAccount:
        data = await self._request(
            "resolve_account",
            "GET",
            "/bank/resolve",
            params={"account_number": account_number, "bank_code": bank_code},
        )
        return ResolvedAccount(
            account_number=data.get("account_number") or account_number,
            account_name=data.get("account_name"),
        )

    async def aclose(self) -> None:
        await self._client.aclose()
