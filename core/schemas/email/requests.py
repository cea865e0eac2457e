"""Request schemas for email campaign endpoints."""

from pydantic import ConfigDict, EmailStr, Field

from core.enums import SubscriptionTier
from core.schemas.base_schema_model import BaseSchemaModel


class CampaignContent(BaseSchemaModel):
    """Subject and HTML body shared by every campaign request."""

    subject: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1, description="HTML body of the email")


class NewsletterRequest(CampaignContent):
    """Send the newsletter to opted-in subscribers.

    When ``target_tiers`` is empty every opted-in, still-subscribed address
    receives it.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "subject": "MMI season is here",
                "content": "<p>Our new station bank is live.</p>",
                "target_tiers": ["free", "premium_basic"],
            }
        }
    )

    target_tiers: list[str] | None = None


class CustomEmailRequest(CampaignContent):
    """Send to explicit addresses, or to every active subscriber of some tiers."""

    emails: list[EmailStr] | None = None
    subscription_tiers: list[str] | None = None


class PackageEmailRequest(CampaignContent):
    """Send an update to everyone who booked a package."""

    package_type: str = Field(..., min_length=1, max_length=100)


class WelcomeEmailRequest(BaseSchemaModel):
    """Resend the welcome email for an existing subscription."""

    email: EmailStr
    subscription_tier: SubscriptionTier
