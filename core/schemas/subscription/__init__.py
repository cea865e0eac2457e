"""Subscription schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field

from core.enums import SubscriptionTier
from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.pagination import PageParams


class CreateSubscriptionRequest(BaseSchemaModel):
    """Body of ``POST /subscriptions``."""

    email: EmailStr
    subscription_tier: SubscriptionTier = SubscriptionTier.FREE
    opt_in_newsletter: bool = True


class UpdateSubscriptionRequest(BaseSchemaModel):
    """Body of ``PUT /subscriptions/{email}``; omitted fields are unchanged."""

    subscription_tier: SubscriptionTier | None = None
    opt_in_newsletter: bool | None = None


class SubscriptionListParams(PageParams):
    """Query parameters of the admin subscription listing."""

    subscription_tier: SubscriptionTier | None = None
    opt_in_newsletter: bool | None = None


class SubscriptionDetail(BaseSchemaModel):
    """Subscription as returned by the API."""

    email: str
    user_id: UUID | None = None
    subscription_tier: str
    opt_in_newsletter: bool
    stripe_subscription_status: str | None = None
    subscribed_at: datetime | None = None
    unsubscribed_at: datetime | None = None
    updated_at: datetime | None = None


class AccessCheckResult(BaseSchemaModel):
    """Outcome of a tier capability check."""

    has_access: bool
    subscription_tier: str | None = None
    access_levels: list[str] = Field(default_factory=list)

    def to_response(self) -> dict:
        """Shape used by the frontend gate: ``hasAccess`` plus snake_case."""
        data = {"hasAccess": self.has_access}
        if self.subscription_tier is not None:
            data["subscription_tier"] = self.subscription_tier
            data["access_levels"] = self.access_levels
        return data


__all__ = [
    "AccessCheckResult",
    "CreateSubscriptionRequest",
    "SubscriptionDetail",
    "SubscriptionListParams",
    "UpdateSubscriptionRequest",
]
