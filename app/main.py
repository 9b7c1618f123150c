"""
Main FastAPI application.

This is the entry point for the API server.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.core.config import settings
from app.core.logging_config import configure_logging
from app.db.session import engine
from app.errors import AppError, app_error_handler
from app.routers import auth, health, orders, stages

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log start-up and release pooled connections on shutdown."""
    logger.info("Starting %s (stage vocabulary: %s)", settings.APP_NAME, settings.STAGE_VOCABULARY)

    yield

    await engine.dispose()
    logger.info("Shutting down %s", settings.APP_NAME)


app = FastAPI(
    title=settings.APP_NAME,
    description="Order tracking API for carpet production clients",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_exception_handler(AppError, app_error_handler)

# Include routers (API endpoints)
app.include_router(health.router, tags=["Health"])
app.include_router(auth.router)
app.include_router(stages.router)
app.include_router(orders.router)


@app.get("/")
async def root():
    """Service banner."""
    return {"app": settings.APP_NAME, "docs": "/docs"}
