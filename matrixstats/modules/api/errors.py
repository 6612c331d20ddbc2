"""
Boundary mapping from the error taxonomy to HTTP responses.

All handlers render the same body shape: {"success": false, "message": ...}.
Only ServiceError messages reach the client; anything else is logged
server-side and answered with a generic 500.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..errors import InternalError, ServiceError
from .models import ErrorResponse

logger = logging.getLogger(__name__)


def status_for(exc: BaseException) -> int:
    """HTTP status code for an exception; unclassified failures are 500."""
    if isinstance(exc, ServiceError):
        return exc.status_code
    return InternalError.status_code


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error handlers on app."""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        """Handle taxonomy errors with their own status and message."""
        if isinstance(exc, InternalError):
            logger.error(f"Internal error on {request.url.path}: {exc.detail}")
        else:
            logger.info(f"{type(exc).__name__} on {request.url.path}: {exc.detail}")
        return error_response(status_for(exc), exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        """Handle malformed request bodies."""
        logger.info(f"Validation error on {request.url.path}: {exc.errors()}")
        return error_response(400, "Invalid request body")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        """Handle routing errors and explicit HTTP exceptions."""
        if exc.status_code == 404:
            return error_response(404, "Route not found")
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        """Last resort: log everything, tell the client nothing."""
        logger.exception(f"Unhandled error on {request.url.path}: {exc}")
        return error_response(InternalError.status_code, InternalError.message)
