"""Email campaigns: newsletter, custom and package-targeted sends."""

from django.conf import settings
from django.template.loader import render_to_string

import structlog

from core.constants import STATS_FETCH_LIMIT, STATS_TIERS
from core.enums import EmailCategory
from core.exceptions import ResourceNotFoundError
from core.repositories import SubscriptionRepository
from core.schemas.email import (
    CustomEmailRequest,
    DispatchSummary,
    NewsletterRequest,
    PackageDispatchSummary,
    PackageEmailRequest,
    SubscriptionEmailStats,
    WelcomeEmailRequest,
)
from core.services.batch_dispatcher import BatchDispatcher
from core.services.email_service import EmailService
from core.services.notification_service import NotificationService, notification_service
from core.services.recipient_resolver import RecipientResolver, recipient_resolver

logger = structlog.get_logger(__name__)


class EmailCampaignService:
    """Resolves recipients and hands them to the batch dispatcher.

    Campaign sends run inside the request so the caller gets the final
    ``{sent, failed, total}`` counts back.
    """

    def __init__(
        self,
        resolver: RecipientResolver = recipient_resolver,
        dispatcher: BatchDispatcher | None = None,
        notifications: NotificationService = notification_service,
        subscription_repository: type[SubscriptionRepository] = SubscriptionRepository,
    ) -> None:
        """Initialize the campaign service."""
        self.resolver = resolver
        self.dispatcher = dispatcher or BatchDispatcher()
        self.notifications = notifications
        self.subscriptions = subscription_repository

    def send_newsletter(self, request: NewsletterRequest) -> DispatchSummary:
        """Send the newsletter to opted-in subscribers of the target tiers."""
        recipients = self.resolver.for_newsletter(request.target_tiers)
        logger.info("newsletter_dispatch_started", recipient_count=len(recipients))
        return self.dispatcher.dispatch(
            recipients, request.subject, self._wrap(request.content)
        )

    def send_custom(self, request: CustomEmailRequest) -> DispatchSummary:
        """Send to explicit addresses or to active subscribers of some tiers."""
        recipients = self.resolver.for_custom(
            emails=request.emails,
            subscription_tiers=request.subscription_tiers,
        )
        logger.info("custom_dispatch_started", recipient_count=len(recipients))
        return self.dispatcher.dispatch(
            recipients, request.subject, self._wrap(request.content)
        )

    def send_to_package(self, request: PackageEmailRequest) -> PackageDispatchSummary:
        """Send an update to everyone who booked ``package_type``."""
        recipients = self.resolver.for_package(request.package_type)
        logger.info(
            "package_dispatch_started",
            package_type=request.package_type,
            recipient_count=len(recipients),
        )
        summary = self.dispatcher.dispatch(
            recipients, request.subject, self._wrap(request.content)
        )
        return PackageDispatchSummary(
            **summary.model_dump(), package_type=request.package_type
        )

    def send_welcome(self, request: WelcomeEmailRequest) -> None:
        """Queue the welcome email for an existing subscription.

        Raises:
            ResourceNotFoundError: If no subscription exists for the address
        """
        if self.subscriptions.get_by_email(request.email) is None:
            raise ResourceNotFoundError("Subscription not found")

        self.notifications.queue_email(
            EmailCategory.WELCOME,
            request.email,
            {"tier_name": request.subscription_tier},
        )

    def get_subscription_stats(self) -> SubscriptionEmailStats:
        """Count subscribers for the admin dashboard.

        ``total_subscriptions`` is the exact table count. The other figures
        are computed over at most ``STATS_FETCH_LIMIT`` rows, and per-tier
        counts only include rows that have not unsubscribed.
        """
        rows = self.subscriptions.get_all(limit=STATS_FETCH_LIMIT)
        active = [row for row in rows if row.is_active]

        return SubscriptionEmailStats(
            total_subscriptions=self.subscriptions.count(),
            active_subscriptions=len(active),
            newsletter_subscribers=sum(1 for row in active if row.opt_in_newsletter),
            by_tier={
                tier: sum(1 for row in active if row.subscription_tier == tier)
                for tier in STATS_TIERS
            },
            unsubscribed=len(rows) - len(active),
        )

    @staticmethod
    def test_connection() -> bool:
        """Check SMTP connectivity with the configured credentials."""
        return EmailService().verify_connection()

    @staticmethod
    def _wrap(content: str) -> str:
        return render_to_string(
            "emails/newsletter.html",
            {
                "content": content,
                "frontend_url": settings.FRONTEND_URL,
                "unsubscribe_url": f"{settings.FRONTEND_URL}/unsubscribe",
            },
        )


email_campaign_service = EmailCampaignService()
