"""
Monitoring and Tracing Configuration Module.

This module provides integration with Pydantic Logfire for monitoring and
tracing of the platform, including:
- API endpoint tracing
- Database operation monitoring
- Outbound payment gateway calls
- Revenue ledger state transitions
"""

import logging
from typing import Any, Optional

import logfire
from fastapi import FastAPI

from alexandria.server.core.config import settings

logger = logging.getLogger(__name__)


def initialize_logfire(app: FastAPI | None = None) -> bool:
    """
    Initialize Logfire for monitoring and tracing.

    Sets up Logfire with instrumentation for SQLAlchemy, HTTPX and FastAPI
    according to the ``logfire`` settings group.

    Args:
        app: FastAPI application instance for FastAPI instrumentation (optional).

    Returns:
        True when Logfire was configured, False when it stays disabled.
    """
    config = settings.logfire
    if not config.enabled:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE__ENABLED=true to enable.")
        return False

    if not config.token:
        logger.warning(
            "Logfire is enabled but LOGFIRE__TOKEN is not set. "
            "Monitoring will not work. Set LOGFIRE__TOKEN to enable Logfire."
        )
        return False

    try:
        logfire.configure(
            token=config.token,
            service_name=config.service_name,
            environment=config.environment,
        )

        if config.trace_sqlalchemy:
            try:
                logfire.instrument_sqlalchemy()
                logger.info("Logfire: SQLAlchemy instrumentation enabled")
            except Exception as e:
                logger.warning(f"Failed to instrument SQLAlchemy: {e}")

        if config.trace_httpx:
            try:
                logfire.instrument_httpx()
                logger.info("Logfire: HTTPX instrumentation enabled")
            except Exception as e:
                logger.warning(f"Failed to instrument HTTPX: {e}")

        if config.trace_fastapi:
            if app is not None:
                try:
                    logfire.instrument_fastapi(app=app)
                    logger.info("Logfire: FastAPI instrumentation enabled")
                except Exception as e:
                    logger.warning(f"Failed to instrument FastAPI: {e}")
            else:
                logger.debug("FastAPI app instance not provided, skipping FastAPI instrumentation")

        logger.info(
            f"Logfire monitoring initialized: environment={config.environment}, service={config.service_name}"
        )
        return True
    except Exception as e:
        logger.error(f"Failed to initialize Logfire: {e}", exc_info=True)
        return False


def log_api_request(
    method: str, path: str, status_code: int, duration_ms: float, request_id: Optional[str] = None
) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
        request_id: Correlation id echoed in the X-Request-ID header
    """
    try:
        logfire.info(
            "API request completed",
            method=method,
            path=path,
            status_code=status_code,
            duration_ms=duration_ms,
            request_id=request_id,
        )
    except Exception:
        logger.debug(f"Could not log API request to Logfire: {method} {path}")


def log_payment_transition(reference: str, from_status: str, to_status: str, source: str) -> None:
    """
    Log a payment ledger state transition.

    Args:
        reference: Gateway transaction reference
        from_status: Status before the transition
        to_status: Status after the transition
        source: What drove the transition (verify, webhook, cancel, refund)
    """
    try:
        logfire.info(
            "Payment transition",
            reference=reference,
            from_status=from_status,
            to_status=to_status,
            source=source,
        )
    except Exception:
        logger.debug(f"Could not log payment transition to Logfire: reference={reference}")


def log_gateway_call(operation: str, ok: bool, context: Optional[dict[str, Any]] = None) -> None:
    """
    Log an outbound payment gateway call.

    Args:
        operation: Gateway operation name
        ok: Whether the gateway accepted the call
        context: Additional context dictionary
    """
    try:
        logfire.info("Gateway call", operation=operation, ok=ok, **(context or {}))
    except Exception:
        logger.debug(f"Could not log gateway call to Logfire: {operation}")
