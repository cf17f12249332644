"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .api.errors import register_error_handlers
from .api.middleware import LoggingMiddleware, RequestIDMiddleware
from .api.v1.router import create_v1_router
from .core.config import get_settings
from .core.logging import setup_logging
from .lifecycles import lifespan

_LINKS = (
    ("docs", "docs"),
    ("health", "v1/healthz"),
    ("version", "v1/version"),
    ("compute_bill", "v1/compute/bill"),
    ("amount_in_words", "v1/amount-in-words"),
    ("prepare_sale", "v1/sales/prepare"),
)


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_json, service=settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # last added runs first, so the request id is bound before access logging
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"]
    )

    register_error_handlers(app)

    @app.get("/", include_in_schema=False)
    async def root(request: Request) -> dict:
        base_url = str(request.base_url)
        if not base_url.endswith("/"):
            base_url = f"{base_url}/"

        return {
            "status": "available",
            "service": settings.app_name,
            "version": settings.app_version,
            "links": {name: f"{base_url}{path}" for name, path in _LINKS},
        }

    app.include_router(create_v1_router())
    return app
