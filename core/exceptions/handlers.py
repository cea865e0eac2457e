"""Global exception handler for the MedPrep API."""

import json
import logging
import traceback
from datetime import UTC, datetime
from typing import Any

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.db import IntegrityError
from django.http import Http404

from pydantic import ValidationError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions.app_exceptions import AppError
from core.logging.context import get_request_id

logger = logging.getLogger(__name__)


def custom_exception_handler(
    exc: Exception, context: dict[str, Any]
) -> Response | None:
    """Custom exception handler for Django REST Framework.

    Every error leaves the API in the same envelope:
    ``{success: false, error, request_id, timestamp}``, with ``details``
    added for request validation failures.

    Mapping:
    - AppError subclasses: their own status code and message
    - pydantic ValidationError: 400 with the field errors
    - IntegrityError: 409 (unique constraint hit by a concurrent insert)
    - DRF exceptions: DRF's status code and detail
    - anything else: 500 with a generic message

    Args:
        exc: The exception that was raised.
        context: Context dictionary containing request and view information.

    Returns:
        A Response object with the error details.
    """
    view = context.get("view")
    request = view.request if view else None
    request_id = get_request_id()

    # Let DRF handle its own exceptions first
    response = exception_handler(exc, context)

    if response is not None:
        response.data = _create_error_response(
            message=_drf_detail_message(response.data),
            request_id=request_id,
        )
    elif isinstance(exc, AppError):
        response = Response(
            _create_error_response(message=exc.message, request_id=request_id),
            status=exc.status_code,
        )
    elif isinstance(exc, ValidationError):
        response_data = _create_error_response(
            message="Validation error",
            request_id=request_id,
        )
        response_data["details"] = json.loads(exc.json(include_url=False))
        response = Response(response_data, status=status.HTTP_400_BAD_REQUEST)
    elif isinstance(exc, IntegrityError):
        response = Response(
            _create_error_response(
                message="Resource already exists",
                request_id=request_id,
            ),
            status=status.HTTP_409_CONFLICT,
        )
    elif isinstance(exc, Http404):
        response = Response(
            _create_error_response(
                message="The requested resource was not found.",
                request_id=request_id,
            ),
            status=status.HTTP_404_NOT_FOUND,
        )
    elif isinstance(exc, PermissionDenied):
        response = Response(
            _create_error_response(
                message="You do not have permission to perform this action.",
                request_id=request_id,
            ),
            status=status.HTTP_403_FORBIDDEN,
        )
    else:
        # Unhandled exception - log as error and return 500
        response = Response(
            _create_error_response(
                message="Internal server error",
                request_id=request_id,
            ),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if request_id:
        response["X-Request-ID"] = request_id

    _log_exception(exc, request, response)

    return response


def _create_error_response(message: str, request_id: str | None) -> dict[str, Any]:
    """Create the standard error envelope.

    Args:
        message: The error message to return to the client.
        request_id: The request ID for tracing.

    Returns:
        Dictionary with the standard error response format.
    """
    return {
        "success": False,
        "error": message,
        "request_id": request_id,
        "timestamp": datetime.now(UTC).isoformat(),
    }


def _drf_detail_message(data: Any) -> str:
    """Flatten a DRF error payload into a single message."""
    if isinstance(data, dict) and "detail" in data:
        return str(data["detail"])
    if isinstance(data, list) and data:
        return str(data[0])
    return str(data)


def _log_exception(
    exc: Exception,
    request: Any,
    response: Response,
) -> None:
    """Log exception details, 4xx as warnings and 5xx as errors.

    In DEBUG mode the stack trace and request details are appended.

    Args:
        exc: The exception that was raised.
        request: The HTTP request object.
        response: The response being returned.
    """
    status_code = response.status_code
    log_level = logging.WARNING if 400 <= status_code < 500 else logging.ERROR

    error_type = type(exc).__name__
    request_path = request.path if request else "unknown"
    request_method = request.method if request else "unknown"

    log_message = (
        f"Exception occurred: {error_type}: {exc} | "
        f"Path: {request_method} {request_path} | "
        f"Status: {status_code}"
    )

    if settings.DEBUG or (log_level == logging.ERROR and not isinstance(exc, APIException)):
        stack_trace = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
        log_message += f"\nStack trace:\n{stack_trace}"

    if request and settings.DEBUG:
        log_message += f"\nRequest details: {_get_request_details(request)}"

    logger.log(log_level, log_message)


def _get_request_details(request: Any) -> str:
    """Extract relevant request details for logging.

    Args:
        request: The HTTP request object.

    Returns:
        String with formatted request details.
    """
    details = {
        "method": request.method,
        "path": request.path,
        "ip": request.META.get("REMOTE_ADDR", "unknown"),
    }

    if request.GET:
        details["query_params"] = dict(request.GET)

    return str(details)
