"""
Unit tests for the Logfire monitoring module.
"""

from unittest.mock import MagicMock, patch

import pytest

from alexandria.core import monitoring
from alexandria.core.monitoring import initialize_logfire, log_api_request, log_gateway_call, log_payment_transition
from alexandria.server.core.config import LogfireConfig


@pytest.fixture
def logfire_settings(monkeypatch):
    """Enable Logfire with a token; tests adjust the returned config."""
    config = LogfireConfig(enabled=True, token="lf_test_token", service_name="alexandria-test", environment="test")
    monkeypatch.setattr(monitoring.settings, "logfire", config)
    return config


class TestInitializeLogfire:
    def test_disabled_by_default(self, monkeypatch):
        monkeypatch.setattr(monitoring.settings, "logfire", LogfireConfig(enabled=False))
        with patch("alexandria.core.monitoring.logfire") as mock_logfire:
            assert initialize_logfire() is False
        mock_logfire.configure.assert_not_called()

    def test_enabled_without_token(self, logfire_settings):
        logfire_settings.token = ""
        with patch("alexandria.core.monitoring.logfire") as mock_logfire:
            assert initialize_logfire() is False
        mock_logfire.configure.assert_not_called()

    def test_configures_and_instruments(self, logfire_settings):
        app = MagicMock()
        with patch("alexandria.core.monitoring.logfire") as mock_logfire:
            assert initialize_logfire(app) is True

        mock_logfire.configure.assert_called_once_with(
            token="lf_test_token", service_name="alexandria-test", environment="test"
        )
        mock_logfire.instrument_sqlalchemy.assert_called_once()
        mock_logfire.instrument_httpx.assert_called_once()
        mock_logfire.instrument_fastapi.assert_called_once_with(app=app)

    def test_respects_trace_switches(self, logfire_settings):
        logfire_settings.trace_sqlalchemy = False
        logfire_settings.trace_httpx = False
        with patch("alexandria.core.monitoring.logfire") as mock_logfire:
            assert initialize_logfire(MagicMock()) is True

        mock_logfire.instrument_sqlalchemy.assert_not_called()
        mock_logfire.instrument_httpx.assert_not_called()
        mock_logfire.instrument_fastapi.assert_called_once()

    def test_skips_fastapi_without_app(self, logfire_settings):
        with patch("alexandria.core.monitoring.logfire") as mock_logfire:
            initialize_logfire()
        mock_logfire.instrument_fastapi.assert_not_called()

    def test_instrumentation_failure_is_not_fatal(self, logfire_settings):
        with patch("alexandria.core.monitoring.logfire") as mock_logfire:
            mock_logfire.instrument_httpx.side_effect = RuntimeError("missing extra")
            assert initialize_logfire() is True

    def test_configure_failure(self, logfire_settings):
        with patch("alexandria.core.monitoring.logfire") as mock_logfire:
            mock_logfire.configure.side_effect = ValueError("bad token")
            assert initialize_logfire() is False


class TestLogHelpers:
    def test_log_api_request(self):
        with patch("alexandria.core.monitoring.logfire") as mock_logfire:
            log_api_request("GET", "/api/v1/health", 200, 1.5)

        mock_logfire.info.assert_called_once_with(
            "API request completed",
            method="GET",
            path="/api/v1/health",
            status_code=200,
            duration_ms=1.5,
            request_id=None,
        )

    def test_log_payment_transition(self):
        with patch("alexandria.core.monitoring.logfire") as mock_logfire:
            log_payment_transition("ALX_1", "pending", "success", "webhook")

        mock_logfire.info.assert_called_once_with(
            "Payment transition", reference="ALX_1", from_status="pending", to_status="success", source="webhook"
        )

    def test_log_gateway_call_with_context(self):
        with patch("alexandria.core.monitoring.logfire") as mock_logfire:
            log_gateway_call("verify_transaction", True, {"reference": "ALX_1"})

        mock_logfire.info.assert_called_once_with(
            "Gateway call", operation="verify_transaction", ok=True, reference="ALX_1"
        )

    @pytest.mark.parametrize(
        "call",
        [
            lambda: log_api_request("GET", "/", 200, 1.0),
            lambda: log_payment_transition("ALX_1", "pending", "failed", "verify"),
            lambda: log_gateway_call("refund_transaction", False),
        ],
    )
    def test_logfire_errors_are_swallowed(self, call):
        with patch("alexandria.core.monitoring.logfire") as mock_logfire:
            mock_logfire.info.side_effect = RuntimeError("exporter down")
            call()
