"""Subscription model."""

from typing import ClassVar

from django.db import models
from django.utils import timezone

from core.enums import SubscriptionTier


class Subscription(models.Model):
    """Mailing-list subscription keyed by email address.

    A subscription is "active" while ``unsubscribed_at`` is NULL. Newsletter
    campaigns additionally require ``opt_in_newsletter``.
    """

    email = models.EmailField(max_length=255, primary_key=True)
    user_id = models.UUIDField(null=True, blank=True)
    subscription_tier = models.CharField(
        max_length=32,
        choices=[(tier.value, tier.value) for tier in SubscriptionTier],
        default=SubscriptionTier.FREE.value,
    )
    opt_in_newsletter = models.BooleanField(default=True)
    stripe_subscription_status = models.CharField(
        max_length=32, null=True, blank=True
    )
    subscribed_at = models.DateTimeField(default=timezone.now)
    unsubscribed_at = models.DateTimeField(null=True, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        """Django model metadata."""

        db_table = "subscriptions"
        managed = False
        ordering: ClassVar[list[str]] = ["-subscribed_at"]

    def __str__(self) -> str:
        """Return string representation of subscription."""
        return f"{self.email} ({self.subscription_tier})"

    @property
    def is_active(self) -> bool:
        """Whether the subscriber has not unsubscribed."""
        return self.unsubscribed_at is None

    def unsubscribe(self) -> None:
        """Stamp the unsubscribe time and drop the newsletter opt-in."""
        self.unsubscribed_at = timezone.now()
        self.opt_in_newsletter = False
        self.save(update_fields=["unsubscribed_at", "opt_in_newsletter", "updated_at"])

    def resubscribe(self) -> None:
        """Clear the unsubscribe time and opt back in to the newsletter."""
        self.unsubscribed_at = None
        self.opt_in_newsletter = True
        self.save(update_fields=["unsubscribed_at", "opt_in_newsletter", "updated_at"])
