import logging
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI

from atf_optimizer.api.deps import engine
from atf_optimizer.api.v1.health import router as health_router
from atf_optimizer.api.v1.router import api_router
from atf_optimizer.config import settings
from atf_optimizer.core.database import Base
from atf_optimizer.core.logging_config import configure_logging
from atf_optimizer.middleware.request_id import RequestIDMiddleware
from atf_optimizer.models import AboveTheFold  # noqa: F401  registers the table

# Configure structured logging (must happen before any logger is created)
configure_logging(log_format=settings.LOG_FORMAT, log_level=settings.LOG_LEVEL)

# Initialize Sentry error tracking
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        environment=settings.SENTRY_ENVIRONMENT,
        release=f"atf-optimizer@{settings.APP_VERSION}",
    )

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    Base.metadata.create_all(engine)

    yield

    logger.info("Shutting down...")
    engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="ATF Optimizer - post-processes rendered pages so their Largest "
    "Contentful Paint element loads first, and tells the lazy-loader which "
    "above-the-fold resources must never be deferred.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Request ID middleware (must be added before other middleware)
app.add_middleware(RequestIDMiddleware)

app.include_router(api_router)

# Health & metrics routes (no /v1 prefix)
app.include_router(health_router)


@app.get("/")
async def root():
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "status": "running",
    }
