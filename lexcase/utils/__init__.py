from .errors import (
    LexCaseError,
    Unauthenticated,
    InvalidCredentials,
    Unauthorized,
    ValidationError,
    Conflict,
    NotFound,
    InternalError,
)
from .logging import setup_logging, JSONFormatter

__all__ = [
    "LexCaseError",
    "Unauthenticated",
    "InvalidCredentials",
    "Unauthorized",
    "ValidationError",
    "Conflict",
    "NotFound",
    "InternalError",
    "setup_logging",
    "JSONFormatter",
]
