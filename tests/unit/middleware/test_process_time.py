"""Unit tests for ProcessTimeMiddleware."""

import unittest
from unittest.mock import patch

from django.http import HttpResponse
from django.test import RequestFactory

from core.constants import PROCESS_TIME_HEADER
from core.middleware.process_time import ProcessTimeMiddleware


class TestProcessTimeMiddleware(unittest.TestCase):
    """Test cases for ProcessTimeMiddleware."""

    def setUp(self):
        """Set up test fixtures."""
        self.request = RequestFactory().post("/api/v1/emails/newsletter")
        self.middleware = ProcessTimeMiddleware(lambda _request: HttpResponse("OK"))

    def test_adds_duration_header_with_six_decimals(self):
        """Header holds the elapsed seconds formatted to microseconds."""
        response = self.middleware(self.request)

        value = response[PROCESS_TIME_HEADER]
        self.assertGreaterEqual(float(value), 0)
        self.assertEqual(len(value.split(".")[1]), 6)

    @patch("core.middleware.process_time.logger")
    @patch("core.middleware.process_time.time.perf_counter")
    def test_logs_slow_request_with_path(self, mock_perf_counter, mock_logger):
        """Requests over the threshold are logged as warnings."""
        mock_perf_counter.side_effect = [10.0, 12.5]

        response = self.middleware(self.request)

        self.assertEqual(response[PROCESS_TIME_HEADER], "2.500000")
        mock_logger.warning.assert_called_once()
        kwargs = mock_logger.warning.call_args.kwargs
        self.assertEqual(kwargs["path"], "/api/v1/emails/newsletter")
        self.assertEqual(kwargs["duration_seconds"], 2.5)

    @patch("core.middleware.process_time.logger")
    @patch("core.middleware.process_time.time.perf_counter")
    def test_fast_request_is_not_logged(self, mock_perf_counter, mock_logger):
        """Requests under the threshold produce no warning."""
        mock_perf_counter.side_effect = [10.0, 10.2]

        self.middleware(self.request)

        mock_logger.warning.assert_not_called()


if __name__ == "__main__":
    unittest.main()
