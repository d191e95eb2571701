"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request logging), registers the exception handlers and includes all API
routers. It serves as the root of the web server.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from alexandria.core.database import init_db
from alexandria.core.logging_config import get_logger, setup_logging
from alexandria.core.monitoring import initialize_logfire

from .api.v1 import (
    admin,
    alex_points,
    blocks,
    courses,
    educator,
    follows,
    health,
    libraries,
    payment_splits,
    payments,
    users,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware
from .services.repos import get_gateway

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates the schema on SQLite databases at startup and closes the payment
    gateway client at shutdown.
    """
    try:
        logger.info("Starting up Alexandria Platform API...")
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}", exc_info=True)

    yield

    logger.info("Shutting down Alexandria Platform API...")
    if get_gateway.cache_info().currsize:
        gateway = get_gateway()
        aclose = getattr(gateway, "aclose", None)
        if aclose is not None:
            await aclose()


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Alexandria Platform API

    Backend services for the Alexandria social-learning platform: accounts and
    the social graph, courses, libraries, AlexPoints rewards and the revenue
    ledger that splits course and tutoring payments between the platform and
    educators.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

# Set all CORS enabled origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=settings.cors.allow_methods,
    allow_headers=settings.cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)
initialize_logfire(app)

app.include_router(health.router, prefix=constant.API_V1_STR, tags=["health"])
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users")
app.include_router(follows.router, prefix=f"{constant.API_V1_STR}/follow")
app.include_router(blocks.router, prefix=constant.API_V1_STR)
app.include_router(courses.router, prefix=f"{constant.API_V1_STR}/courses")
app.include_router(payment_splits.router, prefix=f"{constant.API_V1_STR}/payment-splits")
app.include_router(payments.router, prefix=f"{constant.API_V1_STR}/payments")
app.include_router(educator.router, prefix=f"{constant.API_V1_STR}/educator")
app.include_router(alex_points.router, prefix=f"{constant.API_V1_STR}/alex-points")
app.include_router(libraries.router, prefix=f"{constant.API_V1_STR}/libraries")
app.include_router(admin.router, prefix=f"{constant.API_V1_STR}/admin")
