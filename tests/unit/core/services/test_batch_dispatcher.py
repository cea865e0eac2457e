"""Unit tests for batched bulk-email dispatch."""

import unittest
from unittest.mock import Mock, patch

import pytest

from core.services.batch_dispatcher import BatchDispatcher, chunk_recipients


class TestChunkRecipients(unittest.TestCase):
    """Test cases for chunk_recipients."""

    def test_splits_into_fifties_with_short_tail(self):
        """120 addresses become batches of 50, 50 and 20."""
        recipients = [f"s{i}@example.com" for i in range(120)]

        batches = list(chunk_recipients(recipients))

        self.assertEqual([len(b) for b in batches], [50, 50, 20])

    def test_concatenated_batches_reproduce_input(self):
        """Order is preserved across batch boundaries."""
        recipients = [f"s{i}@example.com" for i in range(101)]

        batches = list(chunk_recipients(recipients, batch_size=50))

        self.assertEqual([email for batch in batches for email in batch], recipients)

    def test_exact_multiple_has_no_empty_batch(self):
        """100 addresses make exactly two full batches."""
        batches = list(chunk_recipients(["a@x.com"] * 100))

        self.assertEqual(len(batches), 2)

    def test_empty_list_yields_nothing(self):
        """No recipients means no batches."""
        self.assertEqual(list(chunk_recipients([])), [])

    def test_non_positive_batch_size_rejected(self):
        """A zero batch size would loop forever, so it raises."""
        with self.assertRaises(ValueError):
            list(chunk_recipients(["a@x.com"], batch_size=0))


class TestBatchDispatcher(unittest.TestCase):
    """Test cases for BatchDispatcher.dispatch."""

    def setUp(self):
        """Set up test fixtures."""
        self.recipients = [f"student{i}@example.com" for i in range(120)]
        self.sender = Mock()

    def test_all_batches_succeed(self):
        """Every recipient is counted as sent."""
        dispatcher = BatchDispatcher(sender=self.sender)

        summary = dispatcher.dispatch(self.recipients, "MMI tips", "<p>Hi</p>")

        self.assertEqual((summary.sent, summary.failed, summary.total), (120, 0, 120))
        self.assertEqual(self.sender.call_count, 3)

    def test_failed_middle_batch_counts_whole_batch(self):
        """Second batch raising gives sent=70, failed=50."""
        self.sender.side_effect = [None, ConnectionError("SMTP timeout"), None]
        dispatcher = BatchDispatcher(sender=self.sender)

        summary = dispatcher.dispatch(self.recipients, "MMI tips", "<p>Hi</p>")

        self.assertEqual(summary.sent, 70)
        self.assertEqual(summary.failed, 50)
        self.assertEqual(summary.total, 120)
        self.assertEqual(self.sender.call_count, 3)

    def test_batches_sent_in_order_without_retry(self):
        """A failed batch is attempted once and later batches still go out."""
        self.sender.side_effect = RuntimeError("rejected")
        dispatcher = BatchDispatcher(sender=self.sender, batch_size=50)

        summary = dispatcher.dispatch(self.recipients, "Subject", "<p>x</p>")

        self.assertEqual(summary.failed, 120)
        sent_batches = [call.args[0] for call in self.sender.call_args_list]
        self.assertEqual(sent_batches[0][0], "student0@example.com")
        self.assertEqual(sent_batches[2][0], "student100@example.com")

    def test_subject_and_content_passed_to_every_batch(self):
        """Each batch receives the same subject and body."""
        dispatcher = BatchDispatcher(sender=self.sender)

        dispatcher.dispatch(self.recipients[:60], "Event update", "<b>body</b>")

        for call in self.sender.call_args_list:
            self.assertEqual(call.args[1:], ("Event update", "<b>body</b>"))

    @patch("core.services.batch_dispatcher.EmailService")
    def test_default_sender_uses_bulk_email(self, mock_email_service):
        """Without an explicit sender the SMTP bulk send is used."""
        dispatcher = BatchDispatcher()

        dispatcher.dispatch(["a@example.com"], "Hello", "<p>Hi</p>")

        mock_email_service.return_value.send_bulk_email.assert_called_once_with(
            recipients=["a@example.com"], subject="Hello", html_content="<p>Hi</p>"
        )


@pytest.mark.parametrize("count", [1, 49, 50, 51, 149, 250])
def test_sent_plus_failed_equals_total(count):
    """Accounting holds whichever batches fail."""
    recipients = [f"p{i}@example.com" for i in range(count)]
    calls = iter(range(10))

    def flaky_sender(batch, subject, html):
        if next(calls) % 2:
            raise OSError("connection reset")

    summary = BatchDispatcher(sender=flaky_sender).dispatch(recipients, "s", "c")

    assert summary.sent + summary.failed == summary.total == count
