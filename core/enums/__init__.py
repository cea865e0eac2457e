"""Enumerations for the core app."""

from core.enums.availability import AvailabilityType
from core.enums.email import EmailCategory, EmailLogStatus
from core.enums.health_status import HealthStatus
from core.enums.personal_statement import PersonalStatementStatus, StatementType
from core.enums.subscription import AccessLevel, SubscriptionTier
from core.enums.user_role import TutorRole, UserRole

__all__ = [
    "AccessLevel",
    "AvailabilityType",
    "EmailCategory",
    "EmailLogStatus",
    "HealthStatus",
    "PersonalStatementStatus",
    "StatementType",
    "SubscriptionTier",
    "TutorRole",
    "UserRole",
]
