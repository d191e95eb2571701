"""
Payment gateway port.

The ledger talks to the payment provider only through ``PaymentGateway``.
Amounts cross this boundary in major currency units as ``Decimal``;
adapters convert to whatever the provider expects.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field

# Gateway statuses after which a transaction can no longer succeed.
FAILED_STATUSES = frozenset({"failed", "abandoned", "reversed"})


class InitializedTransaction(BaseModel):
    """A checkout session opened at the gateway."""

    reference: str
    authorization_url: str
    access_code: Optional[str] = None


class VerifiedTransaction(BaseModel):
    """Gateway view of a transaction."""

    reference: str
    status: str = Field(description="Gateway status, e.g. 'success', 'failed', 'abandoned'")
    amount: Optional[Decimal] = None
    gateway_response: Optional[str] = None
    raw: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.status == "success"

    @property
    def is_failed(self) -> bool:
        """False for in-flight statuses such as ``ongoing`` or ``pending``."""
        return self.status in FAILED_STATUSES


class RefundResult(BaseModel):
    """A refund accepted by the gateway."""

    refund_id: Optional[str] = None
    status: str = "pending"
    raw: dict[str, Any] = Field(default_factory=dict)


class SubaccountResult(BaseModel):
    """A settlement sub-account created for an educator."""

    subaccount_code: str
    raw: dict[str, Any] = Field(default_factory=dict)


class SplitConfigResult(BaseModel):
    """A split configuration created at the gateway."""

    split_code: str
    raw: dict[str, Any] = Field(default_factory=dict)


class ResolvedAccount(BaseModel):
    """Bank account details confirmed by the gateway."""

    account_number: str
    account_name: Optional[str] = None


class PaymentGateway(ABC):
    """Operations the revenue ledger needs from a payment provider."""

    @abstractmethod
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
        """Open a checkout session for ``amount``.

        Raises:
            GatewayError: If the gateway rejects the request or is unreachable
        """

    @abstractmethod
    async def verify_transaction(self, reference: str) -> VerifiedTransaction:
        """Fetch the current gateway status of a transaction."""

    @abstractmethod
    async def refund_transaction(self, reference: str, amount: Optional[Decimal] = None) -> RefundResult:
        """Refund a transaction fully, or partially when ``amount`` is given."""

    @abstractmethod
    async def create_subaccount(
        self,
        *,
        business_name: str,
        bank_code: str,
        account_number: str,
        percentage_charge: Decimal,
    ) -> SubaccountResult:
        """Create a settlement sub-account for an educator."""

    @abstractmethod
    async def create_split(
        self,
        *,
        name: str,
        subaccounts: list[dict[str, Any]],
        split_type: str = "percentage",
        currency: str = "NGN",
    ) -> SplitConfigResult:
        """Create a split configuration routing shares to sub-accounts."""

    @abstractmethod
    async def resolve_account(self, account_number: str, bank_code: str) -> ResolvedAccount:
        """Confirm that a bank account exists and return its holder name."""
