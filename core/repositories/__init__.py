"""Query helpers shared by services."""

from core.repositories.booking_repository import BookingRepository
from core.repositories.resource_repository import ResourceRepository
from core.repositories.subscription_repository import SubscriptionRepository

__all__ = ["BookingRepository", "ResourceRepository", "SubscriptionRepository"]
