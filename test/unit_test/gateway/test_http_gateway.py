"""Unit tests for the HTTP payment gateway adapter.

Requests are answered by an ``httpx.MockTransport`` so no traffic leaves the
process.
"""

import json
from decimal import Decimal
from unittest.mock import patch

import httpx
import pytest

from alexandria.core.errors import GatewayError
from alexandria.gateway.http import HttpPaymentGateway, from_minor_units, to_minor_units

pytestmark = pytest.mark.asyncio

BASE_URL = "https://mock.gateway"


def _gateway(handler) -> HttpPaymentGateway:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpPaymentGateway(BASE_URL, "sk_test_secret", client=client)


def _ok(data: dict) -> httpx.Response:
    return httpx.Response(200, json={"status": True, "message": "ok", "data": data})


async def test_minor_unit_conversion():
    """Test conversion between major and minor currency units."""
    assert to_minor_units(Decimal("199.99")) == 19999
    assert from_minor_units(19999) == Decimal("199.99")
    assert from_minor_units(None) is None


async def test_initialize_transaction_sends_minor_units_and_split_code():
    """Test the initialize payload and the parsed result."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return _ok({"authorization_url": "https://checkout.mock/abc", "access_code": "abc", "reference": "ALX_1"})

    gateway = _gateway(handler)
    result = await gateway.initialize_transaction(
        email="ada@example.com",
        amount=Decimal("100.50"),
        reference="ALX_1",
        metadata={"course_id": 3},
        split_code="SPL_1",
        callback_url="http://localhost/callback",
    )

    assert seen["url"] == f"{BASE_URL}/transaction/initialize"
    assert seen["auth"] == "Bearer sk_test_secret"
    assert seen["body"]["amount"] == 10050
    assert seen["body"]["split_code"] == "SPL_1"
    assert seen["body"]["callback_url"] == "http://localhost/callback"
    assert result.authorization_url == "https://checkout.mock/abc"
    assert result.access_code == "abc"
    await gateway.aclose()


async def test_verify_transaction_maps_status_and_amount():
    """Test that verify returns the gateway status and a major-unit amount."""

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/transaction/verify/ALX_2"
        return _ok({"reference": "ALX_2", "status": "success", "amount": 500000, "gateway_response": "Approved"})

    result = await _gateway(handler).verify_transaction("ALX_2")

    assert result.is_success
    assert result.amount == Decimal("5000.00")
    assert result.gateway_response == "Approved"


@pytest.mark.parametrize(
    "status, failed",
    [
        ("failed", True),
        ("abandoned", True),
        ("reversed", True),
        ("ongoing", False),
        ("pending", False),
        ("queued", False),
    ],
)
async def test_verify_transaction_separates_failed_from_in_flight(status, failed):
    """Test that only definitive gateway statuses count as failed."""

    def handler(request: httpx.Request) -> httpx.Response:
        return _ok({"reference": "ALX_9", "status": status, "amount": 100})

    result = await _gateway(handler).verify_transaction("ALX_9")

    assert not result.is_success
    assert result.is_failed is failed


async def test_requests_are_logged_through_module_logger():
    """Test that each outgoing call is logged by the module logger."""

    def handler(request: httpx.Request) -> httpx.Response:
        return _ok({"reference": "ALX_3", "status": "success", "amount": 100})

    with patch("alexandria.gateway.http.logger") as mock_logger:
        await _gateway(handler).verify_transaction("ALX_3")

    mock_logger.debug.assert_called_once()
    assert "verify_transaction" in mock_logger.debug.call_args[0][0]
    assert "/transaction/verify/ALX_3" in mock_logger.debug.call_args[0][0]


async def test_refund_partial_amount():
    """Test that partial refunds send the amount in minor units."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return _ok({"id": 77, "status": "processed"})

    result = await _gateway(handler).refund_transaction("ALX_3", Decimal("25"))

    assert seen["body"] == {"transaction": "ALX_3", "amount": 2500}
    assert result.refund_id == "77"


async def test_resolve_account_passes_query_params():
    """Test bank account resolution."""

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["account_number"] == "0123456789"
        assert request.url.params["bank_code"] == "058"
        return _ok({"account_number": "0123456789", "account_name": "GRACE HOPPER"})

    result = await _gateway(handler).resolve_account("0123456789", "058")
    assert result.account_name == "GRACE HOPPER"


async def test_http_error_raises_gateway_error():
    """Test that non-2xx responses become GatewayError."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"status": False, "message": "Invalid key"})

    with pytest.raises(GatewayError) as exc_info:
        await _gateway(handler).verify_transaction("ALX_4")
    assert "401" in exc_info.value.message
    assert exc_info.value.status_code == 500


async def test_rejected_envelope_raises_gateway_error():
    """Test that a 200 with ``status: false`` is still a failure."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"status": False, "message": "Split not allowed"})

    with pytest.raises(GatewayError) as exc_info:
        await _gateway(handler).create_split(name="Course_1_Split", subaccounts=[])
    assert exc_info.value.error == "Split not allowed"


async def test_missing_subaccount_code_raises():
    """Test that a sub-account response without a code is rejected."""
    gateway = _gateway(lambda request: _ok({}))
    with pytest.raises(GatewayError):
        await gateway.create_subaccount(
            business_name="Grace Hopper", bank_code="058", account_number="0123456789", percentage_charge=Decimal("0")
        )


async def test_transport_error_raises_gateway_error():
    """Test that connection failures become GatewayError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(GatewayError):
        await _gateway(handler).verify_transaction("ALX_5")
