"""Versioned API router registration."""

from fastapi import APIRouter

from .bill import router as bill_router
from .health import router as health_router
from .sales import router as sales_router
from .version import router as version_router
from .words import router as words_router


def create_v1_router() -> APIRouter:
    router = APIRouter(prefix="/v1")

    router.include_router(health_router, tags=["health"])
    router.include_router(version_router, tags=["health"])
    router.include_router(bill_router, tags=["billing"])
    router.include_router(words_router, tags=["billing"])
    router.include_router(sales_router, tags=["sales"])

    return router
