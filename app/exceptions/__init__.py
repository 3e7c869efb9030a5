"""
Domain exceptions.

Services raise these and never HTTPException; app/core/error_handlers.py maps them
to status codes.
"""

from app.exceptions.base import AppException
from app.exceptions.crud import (
    NotFoundError,
    AlreadyExistsError,
    ValidationError,
    InvalidStateError,
)
from app.exceptions.auth import (
    AuthenticationError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    InsufficientPermissionsError,
)

__all__ = [
    "AppException",
    "NotFoundError",
    "AlreadyExistsError",
    "ValidationError",
    "InvalidStateError",
    "AuthenticationError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "TokenExpiredError",
    "InsufficientPermissionsError",
]
