"""
Health Check Endpoints.

Liveness with a database round trip, and the API version.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from alexandria.core.database import get_session
from alexandria.core.logging_config import get_logger
from alexandria.server.core import constant

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Report whether the API server can reach its database.",
    responses={503: {"description": "Database unreachable"}},
)
async def health_check(session: AsyncSession = Depends(get_session)):
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: database unreachable ({e})")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "degraded", "database": "unavailable"},
        )
    return {"status": "ok", "database": "ok"}


@router.get("/version", summary="Get Version")
async def version():
    """API version and schema version."""
    return {"version": constant.VERSION, "schema_version": constant.SCHEMA_VERSION}
