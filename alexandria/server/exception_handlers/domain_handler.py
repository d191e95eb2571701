"""
Handlers for expected errors.

Every error body has the shape ``{"message": ..., "error": ...}``; ``error``
is omitted when there are no structured details.
"""

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from alexandria.core.errors import AlexandriaError
from alexandria.core.logging_config import get_logger

logger = get_logger(__name__)


async def domain_exception_handler(request: Request, exc: AlexandriaError) -> JSONResponse:
    """Map a domain error to its HTTP status."""
    if exc.status_code >= 500:
        logger.error(
            f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}",
            extra={"method": request.method, "path": request.url.path, "error": exc.error},
        )
    else:
        logger.info(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Validation failed for {request.method} {request.url.path}")
    return JSONResponse(
        status_code=422,
        content={"message": "The given data was invalid.", "errors": jsonable_encoder(exc.errors())},
    )
