from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

SECRET = "sk_test_webhook"


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession, gateway, monkeypatch) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the test session and the fake gateway."""
    from alexandria.core.database import get_session
    from alexandria.server.core.config import settings
    from alexandria.server.main import app
    from alexandria.server.services.repos import get_gateway

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_gateway] = lambda: gateway
    monkeypatch.setattr(settings.gateway, "secret_key", SECRET)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()
