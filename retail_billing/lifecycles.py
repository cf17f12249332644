"""Application lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from .core.config import get_settings
from .core.logging import get_logger
from .services.validation import ValidationService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info("application_startup", env=settings.app_env)

    app.state.validation_service = ValidationService()

    try:
        yield
    finally:
        logger.info("application_shutdown")
