"""Component tests for health check endpoints.

This module tests the health check endpoints through the full Django
request/response cycle, including URL routing and HTTP handling.
"""

from unittest.mock import patch

from django.db.utils import OperationalError
from django.test import Client, TestCase

from core.services import health_service


class TestHealthCheckEndpointIntegration(TestCase):
    """Component tests for health check endpoints through HTTP."""

    def setUp(self):
        """Set up test fixtures."""
        self.client = Client()
        health_service._cached.clear()
        self.addCleanup(health_service._cached.clear)

    def test_root_health_endpoint_is_liveness(self):
        """The platform probe at /health answers like /health/live."""
        response = self.client.get("/health")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "alive")

    def test_liveness_endpoint_returns_alive_status(self):
        """Liveness reports the environment and a timestamp."""
        response = self.client.get("/api/v1/health/live")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["status"], "alive")
        self.assertIn("timestamp", data)
        self.assertIn("environment", data)

    def test_readiness_endpoint_returns_ready_when_dependencies_healthy(self):
        """Database and Redis (local cache in tests) are both healthy."""
        response = self.client.get("/api/v1/health/ready")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["status"], "ready")
        self.assertTrue(data["ready"])
        self.assertFalse(data["degraded"])
        self.assertEqual(data["dependencies"]["database"]["status"], "healthy")
        self.assertTrue(data["dependencies"]["redis"]["healthy"])

    @patch("core.services.health_service.connection.ensure_connection")
    def test_readiness_endpoint_returns_degraded_when_database_down(
        self, mock_ensure_connection
    ):
        """A database outage degrades the service but keeps it ready."""
        mock_ensure_connection.side_effect = OperationalError("Connection refused")

        response = self.client.get("/api/v1/health/ready")

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data["status"], "degraded")
        self.assertTrue(data["ready"])
        self.assertTrue(data["degraded"])
        self.assertFalse(data["dependencies"]["database"]["healthy"])
        self.assertIn("Connection refused", data["dependencies"]["database"]["message"])

    @patch("core.services.health_service.cache")
    def test_readiness_reports_redis_error(self, mock_cache):
        """Cache errors show up as an errored Redis dependency."""
        mock_cache.set.side_effect = ConnectionError("Redis is down")

        data = self.client.get("/api/v1/health/ready").json()

        self.assertEqual(data["dependencies"]["redis"]["status"], "error")
        self.assertTrue(data["degraded"])

    def test_responses_carry_request_id_and_security_headers(self):
        """Middleware decorates every response."""
        response = self.client.get("/api/v1/health/live", HTTP_X_REQUEST_ID="abc-123")

        self.assertEqual(response["X-Request-ID"], "abc-123")
        self.assertEqual(response["X-Content-Type-Options"], "nosniff")
        self.assertIn("X-Process-Time", response)
