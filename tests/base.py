"""Base test classes for different test types."""

from unittest.mock import patch

from django.test import Client, TestCase


class BaseUnitTest(TestCase):
    """Base class for unit tests.

    Runs against the SQLite in-memory database from ``settings_test``.
    """


class BaseComponentTest(TestCase):
    """Base class for HTTP component tests.

    Every test gets a Django test client, and the RQ queue behind
    ``notification_service`` is replaced so no Redis is needed. The queue
    double is available as ``self.queue``.
    """

    def setUp(self):
        """Set up the client and the queue double."""
        super().setUp()
        self.client = Client()
        patcher = patch("core.services.notification_service.django_rq.get_queue")
        get_queue = patcher.start()
        self.addCleanup(patcher.stop)
        self.queue = get_queue.return_value

        # The singleton caches its queue on first use
        from core.services.notification_service import (  # noqa: PLC0415
            notification_service,
        )

        notification_service._queue = None
        self.addCleanup(setattr, notification_service, "_queue", None)

    def queued_categories(self) -> list[str]:
        """Categories of every email enqueued during the test."""
        return [call.args[1] for call in self.queue.enqueue.call_args_list]
