"""Resolution of campaign targeting criteria into recipient addresses."""

from collections.abc import Iterable

from django.conf import settings

import structlog

from core.constants import SUBSCRIPTION_FETCH_LIMIT
from core.exceptions import ResourceNotFoundError, ValidationFailedError
from core.models import Subscription
from core.repositories import BookingRepository, SubscriptionRepository

logger = structlog.get_logger(__name__)


class RecipientResolver:
    """Turns newsletter, tier, explicit-list or package criteria into addresses.

    Unsubscribed rows (``unsubscribed_at`` set) never come out of the tier or
    newsletter paths. Package resolution always ends with the operator
    addresses so staff see what students received.
    """

    def __init__(
        self,
        subscription_repository: type[SubscriptionRepository] = SubscriptionRepository,
        booking_repository: type[BookingRepository] = BookingRepository,
        operator_emails: Iterable[str] | None = None,
        fetch_limit: int = SUBSCRIPTION_FETCH_LIMIT,
    ) -> None:
        """Initialize the resolver.

        Args:
            subscription_repository: Source of subscription rows
            booking_repository: Source of booking rows
            operator_emails: Addresses appended to package campaigns
                (defaults to settings.OPERATOR_EMAILS)
            fetch_limit: Maximum subscription rows read per resolution
        """
        self.subscriptions = subscription_repository
        self.bookings = booking_repository
        self._operator_emails = (
            list(operator_emails) if operator_emails is not None else None
        )
        self.fetch_limit = fetch_limit

    @property
    def operator_emails(self) -> list[str]:
        """Addresses copied on every package campaign."""
        if self._operator_emails is not None:
            return self._operator_emails
        return list(settings.OPERATOR_EMAILS)

    def for_newsletter(self, target_tiers: list[str] | None = None) -> list[str]:
        """Resolve newsletter recipients.

        Args:
            target_tiers: Restrict to these tiers; empty or None means all

        Returns:
            Addresses of opted-in, still-subscribed rows

        Raises:
            ValidationFailedError: If nobody matches
        """
        rows = self.subscriptions.get_newsletter_subscribers(limit=self.fetch_limit)
        recipients = [
            row.email
            for row in rows
            if self._is_reachable(row, target_tiers, require_opt_in=False)
        ]

        logger.info(
            "newsletter_recipients_resolved",
            fetched=len(rows),
            resolved=len(recipients),
            target_tiers=target_tiers or [],
        )

        if not recipients:
            raise ValidationFailedError(
                "No subscribers found for the specified criteria"
            )
        return recipients

    def for_custom(
        self,
        emails: list[str] | None = None,
        subscription_tiers: list[str] | None = None,
    ) -> list[str]:
        """Resolve recipients of a custom email.

        Explicit ``emails`` win and are used as given. Otherwise every
        opted-in, still-subscribed row whose tier is listed is selected.

        Raises:
            ValidationFailedError: If neither mode is requested, or the
                resolved list is empty
        """
        if emails:
            recipients = list(emails)
        elif subscription_tiers:
            rows = self.subscriptions.get_all(limit=self.fetch_limit)
            recipients = [
                row.email
                for row in rows
                if self._is_reachable(row, subscription_tiers, require_opt_in=True)
            ]
        else:
            raise ValidationFailedError(
                "Either specific emails or subscription_tiers must be provided"
            )

        logger.info(
            "custom_recipients_resolved",
            mode="explicit" if emails else "tiers",
            resolved=len(recipients),
        )

        if not recipients:
            raise ValidationFailedError("No valid email addresses found")
        return recipients

    def for_package(self, package_type: str) -> list[str]:
        """Resolve recipients of a package (event) update.

        Booking emails are deduplicated in first-seen order, empty values
        dropped, then the operator addresses are appended unconditionally.
        An operator who also booked therefore appears twice.

        Raises:
            ResourceNotFoundError: If the package has no bookings
        """
        bookings = self.bookings.get_by_package(package_type)
        if not bookings:
            raise ResourceNotFoundError(f"No bookings found for package: {package_type}")

        booking_emails = list(dict.fromkeys(b.email for b in bookings if b.email))
        recipients = booking_emails + self.operator_emails

        logger.info(
            "package_recipients_resolved",
            package_type=package_type,
            bookings=len(bookings),
            unique_students=len(booking_emails),
            resolved=len(recipients),
        )
        return recipients

    @staticmethod
    def _is_reachable(
        row: Subscription,
        tiers: list[str] | None,
        require_opt_in: bool,
    ) -> bool:
        if not row.is_active:
            return False
        if require_opt_in and not row.opt_in_newsletter:
            return False
        return not tiers or row.subscription_tier in tiers


recipient_resolver = RecipientResolver()
