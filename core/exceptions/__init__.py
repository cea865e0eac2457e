"""Exception handling utilities for the MedPrep API."""

from core.exceptions.app_exceptions import (
    AccessDeniedError,
    AppError,
    ConflictError,
    ExternalServiceError,
    ResourceNotFoundError,
    ValidationFailedError,
)
from core.exceptions.handlers import custom_exception_handler

__all__ = [
    "AccessDeniedError",
    "AppError",
    "ConflictError",
    "ExternalServiceError",
    "ResourceNotFoundError",
    "ValidationFailedError",
    "custom_exception_handler",
]
