"""Subscription lifecycle and tier capability checks."""

from django.db import transaction

import structlog

from core.enums import AccessLevel, EmailCategory, SubscriptionTier
from core.exceptions import ConflictError, ResourceNotFoundError, ValidationFailedError
from core.models import Subscription, User
from core.repositories import SubscriptionRepository
from core.schemas.pagination import Pagination
from core.schemas.subscription import (
    AccessCheckResult,
    CreateSubscriptionRequest,
    SubscriptionListParams,
    UpdateSubscriptionRequest,
)
from core.services.notification_service import NotificationService, notification_service

logger = structlog.get_logger(__name__)

_BASIC = [AccessLevel.BASIC_RESOURCES.value]
_NEWSLETTER = [*_BASIC, AccessLevel.NEWSLETTERS.value]
_PREMIUM_BASIC = [
    *_NEWSLETTER,
    AccessLevel.PREMIUM_CONTENT.value,
    AccessLevel.MOCK_INTERVIEWS.value,
]
_PREMIUM_PLUS = [
    *_PREMIUM_BASIC,
    AccessLevel.TUTORING.value,
    AccessLevel.UNLIMITED_TESTS.value,
]

# Tiers absent from this map (medical_free, dentist_free) unlock nothing
ACCESS_LEVELS: dict[str, list[str]] = {
    SubscriptionTier.FREE.value: _BASIC,
    SubscriptionTier.NEWSLETTER_ONLY.value: _NEWSLETTER,
    SubscriptionTier.PREMIUM_BASIC.value: _PREMIUM_BASIC,
    SubscriptionTier.PREMIUM_PLUS.value: _PREMIUM_PLUS,
}


class SubscriptionService:
    """Create, update and soft-delete mailing list subscriptions.

    Follow-up emails go through the notification queue and never fail the
    operation that triggered them.
    """

    def __init__(self, notifications: NotificationService = notification_service):
        """Initialize the subscription service."""
        self.notifications = notifications

    def create(self, request: CreateSubscriptionRequest) -> Subscription:
        """Create a subscription, linking an existing user with the same email.

        Raises:
            ConflictError: If the email already has a subscription
        """
        if SubscriptionRepository.get_by_email(request.email) is not None:
            raise ConflictError("Email is already subscribed")

        user = User.objects.filter(email=request.email).first()

        with transaction.atomic():
            subscription = Subscription.objects.create(
                email=request.email,
                subscription_tier=request.subscription_tier,
                opt_in_newsletter=request.opt_in_newsletter,
                user_id=user.id if user else None,
            )

        logger.info(
            "subscription_created",
            email=subscription.email,
            subscription_tier=subscription.subscription_tier,
            linked_user=user is not None,
        )

        if subscription.opt_in_newsletter:
            self.notifications.queue_email(
                EmailCategory.WELCOME,
                subscription.email,
                {"tier_name": subscription.subscription_tier},
            )
        return subscription

    def list_subscriptions(
        self, params: SubscriptionListParams
    ) -> tuple[list[Subscription], Pagination]:
        """Return one page of subscriptions with its pagination block."""
        queryset = SubscriptionRepository.filter_page(
            subscription_tier=params.subscription_tier,
            opt_in_newsletter=params.opt_in_newsletter,
        )
        total = queryset.count()
        page = list(queryset[params.offset : params.offset + params.limit])
        return page, Pagination.build(params, total)

    def get(self, email: str) -> Subscription:
        """Return the subscription for ``email``.

        Raises:
            ResourceNotFoundError: If none exists
        """
        subscription = SubscriptionRepository.get_by_email(email)
        if subscription is None:
            raise ResourceNotFoundError("Subscription not found")
        return subscription

    def update(self, email: str, request: UpdateSubscriptionRequest) -> Subscription:
        """Apply the provided fields; a tier change queues the upgrade email."""
        subscription = self.get(email)
        previous_tier = subscription.subscription_tier

        changes = request.model_dump(exclude_none=True)
        if not changes:
            raise ValidationFailedError("No fields to update")

        for field, value in changes.items():
            setattr(subscription, field, value)
        subscription.save(update_fields=[*changes, "updated_at"])

        logger.info("subscription_updated", email=email, fields=sorted(changes))

        new_tier = changes.get("subscription_tier")
        if new_tier and new_tier != previous_tier:
            self.notifications.queue_email(
                EmailCategory.SUBSCRIPTION_UPGRADE,
                email,
                {"tier_name": new_tier},
            )
        return subscription

    def delete(self, email: str) -> None:
        """Hard-delete the subscription row."""
        subscription = self.get(email)
        subscription.delete()
        logger.info("subscription_deleted", email=email)

    def unsubscribe(self, email: str) -> Subscription:
        """Soft-delete: stamp ``unsubscribed_at`` and drop the opt-in.

        Raises:
            ValidationFailedError: If already unsubscribed
        """
        subscription = self.get(email)
        if subscription.unsubscribed_at is not None:
            raise ValidationFailedError("Email is already unsubscribed")

        subscription.unsubscribe()
        logger.info("subscription_unsubscribed", email=email)

        self.notifications.queue_email(EmailCategory.UNSUBSCRIBE_CONFIRMATION, email)
        return subscription

    def resubscribe(self, email: str) -> Subscription:
        """Undo an unsubscribe.

        Raises:
            ValidationFailedError: If the subscription is still active
        """
        subscription = self.get(email)
        if subscription.unsubscribed_at is None:
            raise ValidationFailedError("Email is not unsubscribed")

        subscription.resubscribe()
        logger.info("subscription_resubscribed", email=email)
        return subscription

    @staticmethod
    def check_access(email: str, resource_type: str | None = None) -> AccessCheckResult:
        """Check whether ``email``'s tier unlocks ``resource_type``.

        Missing or unsubscribed rows never have access. Without a
        ``resource_type`` any active subscription grants access.
        """
        subscription = SubscriptionRepository.get_by_email(email)
        if subscription is None or not subscription.is_active:
            return AccessCheckResult(has_access=False)

        levels = ACCESS_LEVELS.get(subscription.subscription_tier, [])
        return AccessCheckResult(
            has_access=not resource_type or resource_type in levels,
            subscription_tier=subscription.subscription_tier,
            access_levels=list(levels),
        )


subscription_service = SubscriptionService()
