"""
Request-scoped repositories and the payment gateway.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from alexandria.core.database import get_session
from alexandria.core.database.repositories.bundle import SqlRepoBundle, build_sql_repos
from alexandria.gateway import HttpPaymentGateway, PaymentGateway
from alexandria.server.core.config import settings


async def get_repos(session: AsyncSession = Depends(get_session)) -> SqlRepoBundle:
    """Repository bundle bound to the request's session."""
    return build_sql_repos(session)


@lru_cache(maxsize=1)
def get_gateway() -> PaymentGateway:
    """
    Process-wide payment gateway client.

    Built lazily from the ``gateway`` settings group; tests override this
    dependency with a fake.
    """
    return HttpPaymentGateway(
        settings.gateway.base_url,
        settings.gateway.secret_key,
        timeout=settings.gateway.timeout,
    )
