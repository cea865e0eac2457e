"""Repository for subscription queries."""

from django.db.models import QuerySet

from core.constants import SUBSCRIPTION_FETCH_LIMIT
from core.models import Subscription


class SubscriptionRepository:
    """Encapsulates the subscription queries used for targeting and stats.

    Reads are capped at ``limit`` rows, matching what a single Supabase
    request returns; filtering beyond the opt-in flag happens in Python.
    """

    @staticmethod
    def get_newsletter_subscribers(
        limit: int = SUBSCRIPTION_FETCH_LIMIT,
    ) -> list[Subscription]:
        """Fetch subscriptions that opted in to the newsletter.

        Args:
            limit: Maximum number of rows to read

        Returns:
            Opted-in subscriptions, unsubscribed rows included
        """
        return list(Subscription.objects.filter(opt_in_newsletter=True)[:limit])

    @staticmethod
    def get_all(limit: int = SUBSCRIPTION_FETCH_LIMIT) -> list[Subscription]:
        """Fetch every subscription up to ``limit`` rows."""
        return list(Subscription.objects.all()[:limit])

    @staticmethod
    def count() -> int:
        """Exact number of rows in the table, independent of any fetch cap."""
        return Subscription.objects.count()

    @staticmethod
    def get_by_email(email: str) -> Subscription | None:
        """Return the subscription for ``email`` or None."""
        return Subscription.objects.filter(email=email).first()

    @staticmethod
    def filter_page(
        subscription_tier: str | None = None,
        opt_in_newsletter: bool | None = None,
    ) -> QuerySet[Subscription]:
        """Build the admin listing queryset, newest subscribers first."""
        queryset = Subscription.objects.all().order_by("-subscribed_at")
        if subscription_tier:
            queryset = queryset.filter(subscription_tier=subscription_tier)
        if opt_in_newsletter is not None:
            queryset = queryset.filter(opt_in_newsletter=opt_in_newsletter)
        return queryset
