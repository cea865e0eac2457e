"""Availability slot types shared by tutor and student calendars."""

from enum import Enum


class AvailabilityType(str, Enum):
    """Kind of a calendar slot."""

    AVAILABLE = "available"
    INTERVIEW = "interview"
    BLOCKED = "blocked"
