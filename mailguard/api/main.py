"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from mailguard.config import get_settings
from mailguard.api.routes import reputation
from mailguard.api import dependencies

logger = logging.getLogger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    logging.basicConfig(level=settings.log_level)
    logger.info("Starting up MailGuard API...")
    dependencies.get_detector()

    yield

    logger.info("Shutting down MailGuard API...")
    dependencies.cleanup()


app = FastAPI(
    title="MailGuard Reputation API",
    description="API for detecting disposable emails and malicious domains",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(reputation.router, prefix="/api/v1/reputation", tags=["reputation"])


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "healthy", "service": "mailguard"}


@app.get("/health")
async def health():
    """Detailed health check."""
    detector = dependencies.get_detector()
    return {
        "status": "healthy",
        "components": {
            "api": "up",
            "cache": "enabled" if detector.cache_enabled else "disabled",
        },
        "details": {
            "cache_size": detector.cache_size(),
            "dns_timeout": detector.config.dns_timeout,
        },
    }


@app.get("/metrics")
async def metrics():
    """Prometheus metrics."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
