from .base import (
    AccessTokenMissingError,
    AppError,
    DomainError,
    InvalidAccessTokenError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AccessTokenMissingError",
    "AppError",
    "DomainError",
    "InvalidAccessTokenError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
