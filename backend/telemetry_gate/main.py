"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from telemetry_gate.api.v1 import events, validate
from telemetry_gate.core.config import settings
from telemetry_gate.core.logging import get_logger, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle hooks."""
    setup_logging(settings.log_level, json_output=settings.LOG_JSON)
    logger = get_logger("startup")
    logger.info(
        "Application starting",
        env=settings.APP_ENV,
        bucket=settings.STORAGE_BUCKET_NAME,
        legacy_field_spelling=settings.LEGACY_FIELD_SPELLING,
    )
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="Telemetry Ingestion Gate",
    description="Validates landing telemetry documents and routes them to staging or rejected",
    version="0.1.0",
    lifespan=lifespan,
)

API_PREFIX = "/api/v1"
app.include_router(events.router, prefix=API_PREFIX)
app.include_router(validate.router, prefix=API_PREFIX)


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Public health-check endpoint."""
    return {"status": "ok", "env": settings.APP_ENV}
