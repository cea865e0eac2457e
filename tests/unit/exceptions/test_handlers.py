"""Unit tests for exception handlers."""

import unittest
from unittest.mock import Mock, patch

from django.db import IntegrityError
from django.http import Http404

from pydantic import ValidationError
from rest_framework import status
from rest_framework.exceptions import MethodNotAllowed
from rest_framework.views import APIView

from core.exceptions import (
    AccessDeniedError,
    ConflictError,
    ExternalServiceError,
    ResourceNotFoundError,
    ValidationFailedError,
)
from core.exceptions.handlers import custom_exception_handler
from core.schemas.subscription import CreateSubscriptionRequest


class TestCustomExceptionHandler(unittest.TestCase):
    """Test cases for custom exception handler."""

    def setUp(self):
        """Set up test fixtures."""
        self.mock_request = Mock()
        self.mock_request.path = "/api/v1/subscriptions"
        self.mock_request.method = "POST"
        self.mock_request.META = {"REMOTE_ADDR": "127.0.0.1"}

        self.mock_view = Mock(spec=APIView)
        self.mock_view.request = self.mock_request

        self.context = {"view": self.mock_view, "request": self.mock_request}

        patcher = patch(
            "core.exceptions.handlers.get_request_id", return_value="req-123"
        )
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_app_errors_keep_status_and_message(self):
        """Each AppError subclass maps to its own status."""
        cases = [
            (ValidationFailedError("Invalid email format"), 400),
            (AccessDeniedError("No active subscription found"), 403),
            (ResourceNotFoundError("Subscription not found"), 404),
            (ConflictError("Email is already subscribed"), 409),
            (ExternalServiceError("Failed to upload file", "supabase_storage"), 500),
        ]
        for exc, expected_status in cases:
            with self.subTest(exc=type(exc).__name__):
                response = custom_exception_handler(exc, self.context)

                self.assertEqual(response.status_code, expected_status)
                self.assertEqual(response.data["error"], exc.message)
                self.assertFalse(response.data["success"])

    def test_error_envelope_has_request_id_and_timestamp(self):
        """Errors carry the request ID in the body and the header."""
        response = custom_exception_handler(
            ResourceNotFoundError("Tutor not found"), self.context
        )

        self.assertEqual(response.data["request_id"], "req-123")
        self.assertIn("timestamp", response.data)
        self.assertEqual(response["X-Request-ID"], "req-123")

    def test_pydantic_validation_error_returns_400_with_details(self):
        """Schema validation failures list the offending fields."""
        try:
            CreateSubscriptionRequest.model_validate({"email": "not-an-email"})
        except ValidationError as e:
            exc = e

        response = custom_exception_handler(exc, self.context)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Validation error")
        self.assertEqual(response.data["details"][0]["loc"], ["email"])

    def test_integrity_error_returns_409(self):
        """A unique constraint hit by a concurrent insert is a conflict."""
        response = custom_exception_handler(
            IntegrityError("duplicate key value"), self.context
        )

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["error"], "Resource already exists")

    def test_drf_exception_uses_drf_status(self):
        """DRF exceptions keep DRF's status and detail message."""
        response = custom_exception_handler(MethodNotAllowed("PATCH"), self.context)

        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
        self.assertIn("PATCH", response.data["error"])

    def test_django_http404_returns_404(self):
        """Django's Http404 is reported in the same envelope."""
        response = custom_exception_handler(Http404("missing"), self.context)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(response.data["success"])

    def test_unexpected_exception_hides_details(self):
        """Unhandled errors answer 500 with a generic message."""
        response = custom_exception_handler(
            RuntimeError("SMTP password is hunter2"), self.context
        )

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["error"], "Internal server error")

    @patch("core.exceptions.handlers.logger")
    def test_client_errors_logged_as_warnings(self, mock_logger):
        """4xx responses are logged at WARNING, 5xx at ERROR."""
        custom_exception_handler(ValidationFailedError("bad"), self.context)
        custom_exception_handler(RuntimeError("boom"), self.context)

        levels = [call.args[0] for call in mock_logger.log.call_args_list]
        self.assertEqual(levels, [30, 40])


if __name__ == "__main__":
    unittest.main()
