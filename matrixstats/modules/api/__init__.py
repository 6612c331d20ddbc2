"""
API Module - Black Box Interface

Purpose: HTTP request/response models, the stats request pipeline and
the mapping from errors to HTTP responses
Interface: models, StatsPipeline, register_exception_handlers()
Hidden: Stage ordering, error body format

The API module only orchestrates - it contains no business logic.
All logic is delegated to the auth and stats modules.
"""

from .errors import error_response, register_exception_handlers, status_for
from .models import (
    ErrorResponse,
    HealthResponse,
    LoginRequest,
    LoginResponse,
    StatsRequest,
    StatsResponse,
)
from .pipeline import StageResult, StatsContext, StatsPipeline

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "StageResult",
    "StatsContext",
    "StatsPipeline",
    "StatsRequest",
    "StatsResponse",
    "error_response",
    "register_exception_handlers",
    "status_for",
]
