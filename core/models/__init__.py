"""Database models for core application."""

from core.models.availability import StudentAvailability, TutorAvailability
from core.models.booking import Booking
from core.models.email_log import EmailLog
from core.models.interview import Interview
from core.models.new_joiner import NewJoiner
from core.models.personal_statement import PersonalStatement
from core.models.resource import Resource
from core.models.subscription import Subscription
from core.models.tutor import Tutor
from core.models.user import User

__all__ = [
    "Booking",
    "EmailLog",
    "Interview",
    "NewJoiner",
    "PersonalStatement",
    "Resource",
    "StudentAvailability",
    "Subscription",
    "Tutor",
    "TutorAvailability",
    "User",
]
