"""Email campaign schemas."""

from core.schemas.email.requests import (
    CustomEmailRequest,
    NewsletterRequest,
    PackageEmailRequest,
    WelcomeEmailRequest,
)
from core.schemas.email.responses import (
    DeliveryStats,
    DispatchSummary,
    DomainDeliveryStats,
    PackageDispatchSummary,
    SubscriptionEmailStats,
)

__all__ = [
    "CustomEmailRequest",
    "DeliveryStats",
    "DispatchSummary",
    "DomainDeliveryStats",
    "NewsletterRequest",
    "PackageDispatchSummary",
    "PackageEmailRequest",
    "SubscriptionEmailStats",
    "WelcomeEmailRequest",
]
