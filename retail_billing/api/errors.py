"""Error envelope shared by every endpoint.

Bad numbers never reach here: the bill engine and the words converter read
them as zero. What does reach here is a request of the wrong shape, an
amount beyond what can be spelled out, or a submission payload the
transaction schema refuses.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = structlog.get_logger(__name__)


class ErrorBody(BaseModel):
    code: str
    message: str
    request_id: str
    details: Dict[str, Any] = Field(default_factory=dict)


class ErrorEnvelope(BaseModel):
    error: ErrorBody


class APIError(Exception):
    """Raised by endpoints; rendered as an :class:`ErrorEnvelope`."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


def error_response(request: Request, code: str, message: str, status_code: int, details=None) -> JSONResponse:
    envelope = ErrorEnvelope(
        error=ErrorBody(
            code=code,
            message=message,
            request_id=getattr(request.state, "request_id", "unknown"),
            details=jsonable_encoder(details or {}),
        )
    )
    return JSONResponse(status_code=status_code, content=envelope.model_dump())


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    logger.warning("api_error", code=exc.code, path=request.url.path, status_code=exc.status_code)
    return error_response(request, exc.code, exc.message, exc.status_code, exc.details)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    logger.warning("validation_error", path=request.url.path, errors=errors)
    return error_response(
        request,
        "VALIDATION_ERROR",
        "Request validation failed",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        {"errors": errors},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning("http_exception", path=request.url.path, status_code=exc.status_code)
    return error_response(request, "HTTP_ERROR", str(exc.detail), exc.status_code)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_exception", path=request.url.path, exc_info=exc)
    return error_response(
        request,
        "INTERNAL_ERROR",
        "An internal error occurred",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
