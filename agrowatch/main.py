"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from agrowatch.api.dependencies import build_field_mapping_service
from agrowatch.config import settings
from agrowatch.infrastructure.conditions_client import get_conditions_client
from agrowatch.infrastructure.enrichment_client import get_enrichment_client
from agrowatch.middleware.error_handler import ErrorHandlerMiddleware
from agrowatch.middleware.rate_limit import limiter
from agrowatch.api.v1.routers import mapping, zones

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Logs the effective configuration and builds the application state
    container on startup; closes the shared HTTP clients on shutdown.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Geocoding: {settings.geocoding_base_url}, weather: {settings.weather_base_url}")
    if not settings.weather_api_key:
        logger.warning("No weather API key configured, placed markers will report N/A weather")
    logger.info(f"Placement rate limit: {settings.rate_limit_requests} requests/minute")
    app.state.field_mapping_service = build_field_mapping_service(get_enrichment_client())

    yield

    # Shutdown
    logger.info("Shutting down application...")
    await get_enrichment_client().close()
    await get_conditions_client().close()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Field Mapping API for the AgroWatch crop monitoring dashboard

    This API backs the dashboard's interactive map and zone inventory.

    ## Features

    - **Marker Placement**: Arm placement mode and click the map to drop a marker
    - **Site Enrichment**: Each marker is enriched with its reverse-geocoded place
      and current weather, looked up concurrently, with graceful fallbacks
    - **Zone Reports**: Promote the focused marker into a dashboard zone with a
      placeholder health score and status
    - **Zone Inventory**: List, inspect and delete zones, newest first
    - **Rate Limiting**: Protects the external lookups from abuse

    ## Health Status

    Zone status is derived from the score:
    1. Healthy: score above 85
    2. Moderate: score above 70 up to 85
    3. High-Risk: score of 70 or below
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Add CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add global error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Include routers
app.include_router(mapping.router, prefix="/api/v1")
app.include_router(zones.router, prefix="/api/v1")
app.include_router(zones.dashboard_router, prefix="/api/v1")


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for health check.

    Returns:
        Status message
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["health"])
async def health_check():
    return {
        "status": "healthy",
        "service": settings.app_name,
    }
