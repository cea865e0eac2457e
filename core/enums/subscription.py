"""Subscription tiers and the capabilities each tier unlocks."""

from enum import Enum


class SubscriptionTier(str, Enum):
    """Tier stored in ``subscriptions.subscription_tier``."""

    FREE = "free"
    MEDICAL_FREE = "medical_free"
    DENTIST_FREE = "dentist_free"
    NEWSLETTER_ONLY = "newsletter_only"
    PREMIUM_BASIC = "premium_basic"
    PREMIUM_PLUS = "premium_plus"


class AccessLevel(str, Enum):
    """Capabilities checked by the subscription access endpoint."""

    BASIC_RESOURCES = "basic_resources"
    NEWSLETTERS = "newsletters"
    PREMIUM_CONTENT = "premium_content"
    MOCK_INTERVIEWS = "mock_interviews"
    TUTORING = "tutoring"
    UNLIMITED_TESTS = "unlimited_tests"
