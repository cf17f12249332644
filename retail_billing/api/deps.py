"""Request-scoped dependencies"""
from fastapi import Request

from ..services.validation import ValidationService


def get_validation_service(request: Request) -> ValidationService:
    """Payload validator created at startup"""
    return request.app.state.validation_service
