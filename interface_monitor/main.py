import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from interface_monitor.api.router import api_router
from interface_monitor.config import get_config, get_settings
from interface_monitor.core.datetime_utils import to_utc_isoformat, utc_now
from interface_monitor.core.errors import register_exception_handlers
from interface_monitor.core.logging import get_logger, setup_logging
from interface_monitor.core.rate_limit import limiter, rate_limit_exceeded_handler

logger = get_logger(__name__)

settings = get_settings()

STARTED_AT = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    setup_logging()
    # Fail fast on a bad config.yml
    config = get_config()
    logger.bind(
        default_period=config.dashboard.default_period.value,
        cors_origins=settings.cors_origin_list,
    ).info("application_started")
    yield
    logger.info("application_stopped")


app = FastAPI(
    title="Interface Monitor",
    description="Run history, trends and health for interface integration jobs",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/api/docs" if settings.debug else None,
    redoc_url="/api/redoc" if settings.debug else None,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(GZipMiddleware, minimum_size=1000)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router)


@app.get("/health")
async def health_check() -> dict[str, str | float]:
    """Health check endpoint for load balancers."""
    return {
        "status": "healthy",
        "timestamp": to_utc_isoformat(utc_now()),
        "uptimeSeconds": round(time.monotonic() - STARTED_AT, 1),
    }
