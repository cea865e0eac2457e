"""Response schemas for email campaign endpoints."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class DispatchSummary(BaseSchemaModel):
    """Outcome of a batched send.

    ``sent + failed == total`` always holds; counts are per recipient but a
    batch succeeds or fails as a whole.
    """

    sent: int = Field(default=0, ge=0)
    failed: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)


class PackageDispatchSummary(DispatchSummary):
    """Dispatch summary echoing the package that was targeted."""

    package_type: str


class SubscriptionEmailStats(BaseSchemaModel):
    """Subscriber counts shown on the admin email dashboard."""

    total_subscriptions: int
    active_subscriptions: int
    newsletter_subscribers: int
    by_tier: dict[str, int]
    unsubscribed: int


class DomainDeliveryStats(BaseSchemaModel):
    """Delivery counts for one recipient domain."""

    domain: str
    total: int
    sent: int
    failed: int


class DeliveryStats(BaseSchemaModel):
    """Delivery counts from ``email_logs`` over an optional date range."""

    total: int
    sent: int
    failed: int
    pending: int
    bounced: int
    success_rate: float = Field(..., description="Percentage of sent over total")
    by_domain: list[DomainDeliveryStats] = Field(default_factory=list)
