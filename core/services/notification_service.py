"""Queueing of transactional emails that follow a primary operation."""

from typing import Any

import django_rq
import structlog

from core.enums import EmailCategory

logger = structlog.get_logger(__name__)


class NotificationService:
    """Enqueues follow-up emails (welcome, confirmations, admin alerts).

    These emails are best effort: the request that triggered them has
    already succeeded, so a queue outage is logged and never surfaces to the
    caller.
    """

    def __init__(self, queue_name: str = "default") -> None:
        """Initialize notification service."""
        self.queue_name = queue_name
        self._queue = None

    @property
    def queue(self):
        """RQ queue, resolved on first use."""
        if self._queue is None:
            self._queue = django_rq.get_queue(self.queue_name)
        return self._queue

    def queue_email(
        self,
        category: EmailCategory,
        to_email: str,
        context: dict[str, Any] | None = None,
    ) -> bool:
        """Queue a transactional email.

        Args:
            category: Template to render
            to_email: Recipient address
            context: Template parameters (must be picklable)

        Returns:
            True if the job was enqueued, False if the queue was unavailable
        """
        try:
            job = self.queue.enqueue(
                "core.jobs.email_jobs.send_email_job",
                category.value,
                to_email,
                context or {},
            )
        except Exception as e:
            logger.warning(
                "email_enqueue_failed",
                category=category.value,
                to_email=to_email,
                error=str(e),
            )
            return False

        logger.info(
            "email_queued",
            category=category.value,
            to_email=to_email,
            job_id=getattr(job, "id", None),
        )
        return True


notification_service = NotificationService()
