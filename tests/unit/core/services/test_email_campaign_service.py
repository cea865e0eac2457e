"""Tests for EmailCampaignService."""

from unittest.mock import Mock, patch

from django.utils import timezone

from core.enums import EmailCategory
from core.exceptions import ResourceNotFoundError
from core.schemas.email import (
    CustomEmailRequest,
    NewsletterRequest,
    PackageEmailRequest,
    WelcomeEmailRequest,
)
from core.services.batch_dispatcher import BatchDispatcher
from core.services.email_campaign_service import EmailCampaignService
from core.services.recipient_resolver import RecipientResolver
from tests.base import BaseUnitTest
from tests.factories import make_booking, make_subscription


class TestEmailCampaignService(BaseUnitTest):
    """Test suite for EmailCampaignService."""

    def setUp(self):
        """Set up test fixtures."""
        self.sender = Mock()
        self.notifications = Mock()
        self.service = EmailCampaignService(
            resolver=RecipientResolver(operator_emails=["ops@nextgenmedprep.com"]),
            dispatcher=BatchDispatcher(sender=self.sender),
            notifications=self.notifications,
        )

    def test_newsletter_wraps_content_and_targets_opted_in(self):
        """Only opted-in, subscribed addresses receive the newsletter."""
        make_subscription(email="in@example.com")
        make_subscription(email="out@example.com", opt_in_newsletter=False)
        make_subscription(email="gone@example.com", unsubscribed_at=timezone.now())

        summary = self.service.send_newsletter(
            NewsletterRequest(subject="News", content="<p>Station bank live</p>")
        )

        self.assertEqual(summary.model_dump(), {"sent": 1, "failed": 0, "total": 1})
        recipients, subject, html = self.sender.call_args.args
        self.assertEqual(recipients, ["in@example.com"])
        self.assertEqual(subject, "News")
        self.assertIn("<p>Station bank live</p>", html)
        self.assertIn("/unsubscribe", html)

    def test_custom_send_to_explicit_list(self):
        """Explicit addresses are used as given."""
        summary = self.service.send_custom(
            CustomEmailRequest(
                subject="Hello",
                content="<p>Hi</p>",
                emails=["a@example.com", "b@example.com"],
            )
        )

        self.assertEqual(summary.total, 2)
        self.assertEqual(self.sender.call_args.args[0], ["a@example.com", "b@example.com"])

    def test_package_send_appends_operators_and_counts_failures(self):
        """A failing batch is counted, and the package is echoed back."""
        make_booking(email="student@example.com", package="mmi_pack")
        self.sender.side_effect = OSError("SMTP down")

        summary = self.service.send_to_package(
            PackageEmailRequest(subject="Update", content="<p>x</p>", package_type="mmi_pack")
        )

        self.assertEqual(summary.package_type, "mmi_pack")
        self.assertEqual((summary.sent, summary.failed, summary.total), (0, 2, 2))
        self.assertEqual(
            self.sender.call_args.args[0],
            ["student@example.com", "ops@nextgenmedprep.com"],
        )

    def test_send_welcome_requires_subscription(self):
        """Welcome emails are only queued for known subscribers."""
        request = WelcomeEmailRequest(email="new@example.com", subscription_tier="free")

        with self.assertRaisesRegex(ResourceNotFoundError, "Subscription not found"):
            self.service.send_welcome(request)

        make_subscription(email="new@example.com")
        self.service.send_welcome(request)
        self.notifications.queue_email.assert_called_once_with(
            EmailCategory.WELCOME, "new@example.com", {"tier_name": "free"}
        )

    def test_subscription_stats(self):
        """Per-tier counts only include active rows."""
        make_subscription(subscription_tier="free")
        make_subscription(subscription_tier="free", opt_in_newsletter=False)
        make_subscription(subscription_tier="medical_free")
        make_subscription(subscription_tier="free", unsubscribed_at=timezone.now())

        stats = self.service.get_subscription_stats()

        self.assertEqual(stats.total_subscriptions, 4)
        self.assertEqual(stats.active_subscriptions, 3)
        self.assertEqual(stats.newsletter_subscribers, 2)
        self.assertEqual(stats.unsubscribed, 1)
        self.assertEqual(
            stats.by_tier, {"free": 2, "medical_free": 1, "dentist_free": 0}
        )

    @patch("core.services.email_campaign_service.STATS_FETCH_LIMIT", 3)
    def test_subscription_stats_total_is_not_capped(self):
        """The total counts the whole table even past the fetch cap."""
        for _ in range(5):
            make_subscription(subscription_tier="free")

        stats = self.service.get_subscription_stats()

        self.assertEqual(stats.total_subscriptions, 5)
        self.assertEqual(stats.active_subscriptions, 3)
