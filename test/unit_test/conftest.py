"""Shared fixtures for unit tests.

Every test gets its own in-memory SQLite database with the full schema, a
repository bundle bound to one session and an in-process payment gateway.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, AsyncGenerator, Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel.pool import StaticPool

from alexandria.core.database import create_all, create_sessionmaker
from alexandria.core.database.entities import EducatorPaymentInfo, User
from alexandria.core.database.repositories.bundle import SqlRepoBundle, build_sql_repos
from alexandria.core.errors import GatewayError
from alexandria.gateway.base import (
    InitializedTransaction,
    PaymentGateway,
    RefundResult,
    ResolvedAccount,
    SplitConfigResult,
    SubaccountResult,
    VerifiedTransaction,
)
from alexandria.points import AlexPointsService
from alexandria.users.tokens import hash_token

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeGateway(PaymentGateway):
    """In-process gateway recording every call.

    Add an operation name to ``fail_on`` to make it raise ``GatewayError``;
    ``verify_statuses`` maps references to the status ``verify_transaction``
    reports (``success`` by default).
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.fail_on: set[str] = set()
        self.verify_statuses: dict[str, str] = {}
        self.account_name: Optional[str] = "Ada Lovelace"

    def _record(self, operation: str, **kwargs: Any) -> None:
        self.calls.append((operation, kwargs))
        if operation in self.fail_on:
            raise GatewayError(f"Payment gateway {operation} failed", error="simulated")

    def calls_to(self, operation: str) -> list[dict[str, Any]]:
        return [kwargs for name, kwargs in self.calls if name == operation]

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
        self._record(
            "initialize_transaction",
            email=email,
            amount=amount,
            reference=reference,
            metadata=metadata,
            split_code=split_code,
        )
        return InitializedTransaction(
            reference=reference,
            authorization_url=f"https://checkout.mock/{reference}",
            access_code=f"ac_{reference.lower()}",
        )

    async def verify_transaction(self, reference: str) -> VerifiedTransaction:
        self._record("verify_transaction", reference=reference)
        status = self.verify_statuses.get(reference, "success")
        return VerifiedTransaction(reference=reference, status=status, gateway_response=status.capitalize())

    async def refund_transaction(self, reference: str, amount: Optional[Decimal] = None) -> RefundResult:
        self._record("refund_transaction", reference=reference, amount=amount)
        return RefundResult(refund_id=f"rf_{len(self.calls)}", status="processed")

    async def create_subaccount(
        self,
        *,
        business_name: str,
        bank_code: str,
        account_number: str,
        percentage_charge: Decimal,
    ) -> SubaccountResult:
        self._record("create_subaccount", business_name=business_name, bank_code=bank_code)
        return SubaccountResult(subaccount_code=f"ACCT_{account_number}")

    async def create_split(
        self,
        *,
        name: str,
        subaccounts: list[dict[str, Any]],
        split_type: str = "percentage",
        currency: str = "NGN",
    ) -> SplitConfigResult:
        self._record("create_split", name=name, subaccounts=subaccounts, split_type=split_type)
        return SplitConfigResult(split_code=f"SPL_{len(self.calls)}")

    async def resolve_account(self, account_number: str, bank_code: str) -> ResolvedAccount:
        self._record("resolve_account", account_number=account_number, bank_code=bank_code)
        return ResolvedAccount(account_number=account_number, account_name=self.account_name)


def token_for(username: str) -> str:
    return f"token-{username}"


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database for one test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    async with create_sessionmaker(test_engine)() as session:
        yield session


@pytest.fixture
def repos(session: AsyncSession) -> SqlRepoBundle:
    return build_sql_repos(session)


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest_asyncio.fixture
async def seeded_points(repos: SqlRepoBundle) -> dict[str, int]:
    """Default AlexPoints rules and levels."""
    return await AlexPointsService(repos).seed_defaults()


@pytest.fixture
def make_user(repos: SqlRepoBundle):
    """Factory creating a committed user whose bearer token is ``token-<username>``."""

    async def _make(
        username: str,
        role: str = "learner",
        *,
        verified: bool = False,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> User:
        user = await repos.users.create(
            User(
                username=username,
                email=f"{username}@example.com",
                role=role,
                is_verified=verified,
                first_name=first_name,
                last_name=last_name,
                api_token_hash=hash_token(token_for(username)),
            )
        )
        await repos.session.commit()
        return user

    return _make


@pytest.fixture
def make_educator(repos: SqlRepoBundle, make_user):
    """Factory creating a verified educator with a settlement sub-account."""

    async def _make(username: str, *, verified: bool = True, with_subaccount: bool = True) -> User:
        educator = await make_user(username, "educator", verified=verified, first_name="Grace", last_name="Hopper")
        if with_subaccount:
            await repos.payment_info.create(
                EducatorPaymentInfo(
                    user_id=educator.id,
                    bank_code="058",
                    bank_name="Mock Bank",
                    account_number="0123456789",
                    account_name="Grace Hopper",
                    subaccount_code=f"ACCT_{username}",
                    is_verified=True,
                )
            )
            await repos.session.commit()
        return educator

    return _make


@pytest.fixture
def auth_headers():
    """Bearer headers for a user created by ``make_user``."""

    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {token_for(user.username)}"}

    return _headers
