from __future__ import annotations

from pathlib import Path
from typing import Iterable

import httpx
import pytest
from dotenv import load_dotenv

# Settings are read at import time, so the environment must be populated before
# any ``alexandria`` module is collected. test/.env wins over the example file.
TEST_ROOT = Path(__file__).resolve().parent
load_dotenv(TEST_ROOT / ".env", override=False)
load_dotenv(TEST_ROOT.parent / ".env.example", override=False)

# Payment gateway traffic never leaves the process: the gateway tests talk to
# a mock host and the API tests go through ASGITransport.
ALLOWED_URL_PREFIXES: Iterable[str] = (
    "http://mock",
    "https://mock",
    "http://localhost",
    "http://127.0.0.1",
    "http://0.0.0.0",
    "http://testserver",
    "/",
)


def _is_allowed(url: object) -> bool:
    return any(str(url).startswith(prefix) for prefix in ALLOWED_URL_PREFIXES)


@pytest.fixture(autouse=True)
def _global_offline_http_guard(monkeypatch: pytest.MonkeyPatch):
    orig_sync = httpx.Client.send
    orig_async = httpx.AsyncClient.send

    def offline_sync(self, request, *args, **kwargs):
        if _is_allowed(request.url):
            return orig_sync(self, request, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard: {request.url}")

    async def offline_async(self, request, *args, **kwargs):
        if _is_allowed(request.url):
            return await orig_async(self, request, *args, **kwargs)
        raise RuntimeError(f"External HTTP blocked by global offline guard (async): {request.url}")

    monkeypatch.setattr(httpx.Client, "send", offline_sync, raising=True)
    monkeypatch.setattr(httpx.AsyncClient, "send", offline_async, raising=True)
