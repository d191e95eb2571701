"""
Logfire Middleware for FastAPI.

Times every request and reports it through ``log_api_request``. Each request
carries an id, taken from the ``X-Request-ID`` header when the caller sends
one, which is echoed back so gateway callbacks and webhook deliveries can be
matched with the server logs.
"""

import time
import uuid
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from alexandria.core.logging_config import get_logger
from alexandria.core.monitoring import log_api_request

logger = get_logger(__name__)

SLOW_REQUEST_MS = 1000
REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"


class LogfireMiddleware(BaseHTTPMiddleware):
    """Middleware for tracing API requests with Logfire."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.start_time = start_time
        request.state.request_id = request_id
        context = {"method": request.method, "path": request.url.path, "request_id": request_id}

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"API request failed: {context['method']} {context['path']}",
                exc_info=True,
                extra={**context, "duration_ms": duration_ms, "error": str(e)},
            )
            log_api_request(status_code=500, duration_ms=duration_ms, **context)
            raise

        duration_ms = (time.time() - start_time) * 1000
        log_api_request(status_code=response.status_code, duration_ms=duration_ms, **context)
        response.headers[PROCESS_TIME_HEADER] = str(duration_ms)
        response.headers[REQUEST_ID_HEADER] = request_id

        if duration_ms > SLOW_REQUEST_MS:
            logger.warning(
                f"Slow API request: {context['method']} {context['path']} took {duration_ms:.2f}ms",
                extra={**context, "duration_ms": duration_ms, "status_code": response.status_code},
            )
        return response
