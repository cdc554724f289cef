"""FastAPI application entry point with structured logging and health checks."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pharmarisk import __version__
from pharmarisk.api import batches, prices, reference
from pharmarisk.dependencies import get_facade, get_settings, reset
from pharmarisk.health import router as health_router
from pharmarisk.logging_config import get_logger, setup_logging

settings = get_settings()

# Setup structured logging
setup_logging(json_logs=settings.json_logs, log_level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle for the FastAPI application."""
    logger.info("application_startup", version=__version__)
    facade = get_facade()
    logger.info("reference_data_loaded", version=facade.reference_version)
    yield
    reset()
    logger.info("application_shutdown")


app = FastAPI(
    title="PharmaRisk",
    description=(
        "Flags anomalous pharmacy prices against reference price profiles and "
        "scores production batches for recall risk from adverse-event complaints."
    ),
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
)

# Health checks (no versioning)
app.include_router(health_router, tags=["health"])

API_V1_PREFIX = "/api/v1"

app.include_router(prices.router, prefix=f"{API_V1_PREFIX}/prices", tags=["prices"])
app.include_router(batches.router, prefix=f"{API_V1_PREFIX}/batches", tags=["batches"])
app.include_router(reference.router, prefix=f"{API_V1_PREFIX}/reference", tags=["reference"])


@app.get("/")
def root():
    """Root endpoint - API information and available endpoints."""
    logger.info("root_endpoint_accessed")
    return {
        "service": "PharmaRisk API",
        "version": __version__,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "health_detailed": "/health/detailed",
        "api_version": "v1",
        "endpoints": {
            "price_score": "/api/v1/prices/score",
            "price_bulk": "/api/v1/prices/bulk",
            "price_compare": "/api/v1/prices/compare",
            "batch_risk": "/api/v1/batches/{batch_number}",
            "high_risk_batches": "/api/v1/batches/high-risk",
            "reference_version": "/api/v1/reference/version",
        },
    }
