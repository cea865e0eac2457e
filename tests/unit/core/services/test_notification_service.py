"""Tests for NotificationService."""

from unittest.mock import MagicMock, patch

from django.test import SimpleTestCase

from core.enums import EmailCategory
from core.services.notification_service import NotificationService


class TestNotificationService(SimpleTestCase):
    """Test suite for NotificationService."""

    @patch("core.services.notification_service.django_rq.get_queue")
    def test_queue_email_enqueues_job(self, mock_get_queue):
        """The job is enqueued with plain, picklable arguments."""
        service = NotificationService()

        result = service.queue_email(
            EmailCategory.WELCOME, "student@example.com", {"tier_name": "free"}
        )

        self.assertIs(result, True)
        mock_get_queue.assert_called_once_with("default")
        mock_get_queue.return_value.enqueue.assert_called_once_with(
            "core.jobs.email_jobs.send_email_job",
            "WELCOME",
            "student@example.com",
            {"tier_name": "free"},
        )

    @patch("core.services.notification_service.django_rq.get_queue")
    def test_queue_is_resolved_once(self, mock_get_queue):
        """The queue lookup is cached across calls."""
        service = NotificationService()

        service.queue_email(EmailCategory.WELCOME, "a@example.com")
        service.queue_email(EmailCategory.WELCOME, "b@example.com")

        mock_get_queue.assert_called_once()

    def test_enqueue_failure_returns_false(self):
        """A queue outage is logged and reported as False."""
        service = NotificationService()
        service._queue = MagicMock()
        service._queue.enqueue.side_effect = ConnectionError("Redis is down")

        result = service.queue_email(
            EmailCategory.UNSUBSCRIBE_CONFIRMATION, "student@example.com"
        )

        self.assertIs(result, False)
