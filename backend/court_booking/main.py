"""
Court Booking API - Main Application Entry Point

Sports court scheduling with two deployment modes:
- exclusive: one booking holds a court for a half-open time interval
- shared: several players join a fixed-start slot up to a capacity

Both modes serialise writes per court with a row lock, cache availability
in Redis when it is reachable, and log every request through structlog.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import court_booking.models  # noqa: F401  registers every table on Base.metadata
from court_booking.api.middleware import RequestLoggingMiddleware
from court_booking.api.router import api_router
from court_booking.core.config import get_settings
from court_booking.core.logging import get_logger, setup_logging
from court_booking.core.metrics import metrics_endpoint
from court_booking.infrastructure import close_redis, get_redis
from court_booking.services.cache_service import get_cache_stats

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()
    logger = get_logger(__name__)

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        scheduling_mode=settings.SCHEDULING_MODE,
    )

    redis_client = await get_redis()
    if redis_client:
        logger.info("redis_ready")
    else:
        logger.warning("redis_unavailable", message="Running without availability cache")

    yield

    await close_redis()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Court booking API with conflict-free scheduling",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    cache_stats = await get_cache_stats()
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "scheduling_mode": settings.SCHEDULING_MODE,
        "cache": cache_stats,
    }


@app.get("/metrics", tags=["Health"], include_in_schema=False)
async def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }
