"""Sequential batched bulk-email dispatch with per-batch failure accounting."""

from collections.abc import Callable, Iterator, Sequence

import structlog

from core.constants import BATCH_SIZE
from core.schemas.email import DispatchSummary
from core.services.email_service import EmailService

logger = structlog.get_logger(__name__)

# (recipients, subject, html_content) -> anything; raising marks the batch failed
BatchSender = Callable[[list[str], str, str], object]


def chunk_recipients(
    recipients: Sequence[str], batch_size: int = BATCH_SIZE
) -> Iterator[list[str]]:
    """Split recipients into consecutive batches, preserving order.

    Every batch holds ``batch_size`` addresses except possibly the last.

    Args:
        recipients: Addresses to split
        batch_size: Maximum batch length, must be positive

    Yields:
        Consecutive slices of ``recipients``

    Raises:
        ValueError: If ``batch_size`` is not positive
    """
    if batch_size <= 0:
        raise ValueError("batch_size must be positive")
    for start in range(0, len(recipients), batch_size):
        yield list(recipients[start : start + batch_size])


class BatchDispatcher:
    """Sends one bulk message per batch, one batch at a time.

    A batch that raises is counted as failed in full and the loop moves on;
    nothing is retried and later batches are always attempted. The returned
    summary satisfies ``sent + failed == total``.
    """

    def __init__(
        self,
        sender: BatchSender | None = None,
        batch_size: int = BATCH_SIZE,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            sender: Callable sending one batch; defaults to
                ``EmailService().send_bulk_email``
            batch_size: Recipients per message
        """
        self._sender = sender
        self.batch_size = batch_size

    @property
    def sender(self) -> BatchSender:
        """Batch sender, built from SMTP settings on first use."""
        if self._sender is None:
            email_service = EmailService()
            self._sender = lambda batch, subject, html: email_service.send_bulk_email(
                recipients=batch, subject=subject, html_content=html
            )
        return self._sender

    def dispatch(
        self, recipients: Sequence[str], subject: str, html_content: str
    ) -> DispatchSummary:
        """Send ``html_content`` to every recipient in batches.

        Args:
            recipients: Resolved addresses
            subject: Email subject line
            html_content: HTML body

        Returns:
            Counts of recipients in successful and failed batches
        """
        sent = 0
        failed = 0
        batches = list(chunk_recipients(recipients, self.batch_size))

        for index, batch in enumerate(batches, start=1):
            try:
                self.sender(batch, subject, html_content)
            except Exception as e:
                failed += len(batch)
                logger.error(
                    "batch_send_failed",
                    batch_number=index,
                    batch_count=len(batches),
                    batch_size=len(batch),
                    subject=subject,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                continue

            sent += len(batch)
            logger.info(
                "batch_sent",
                batch_number=index,
                batch_count=len(batches),
                batch_size=len(batch),
            )

        summary = DispatchSummary(sent=sent, failed=failed, total=len(recipients))
        logger.info(
            "dispatch_completed",
            subject=subject,
            sent=summary.sent,
            failed=summary.failed,
            total=summary.total,
        )
        return summary
