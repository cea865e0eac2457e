"""Role enumerations for users and tutors."""

from enum import Enum


class UserRole(str, Enum):
    """Role stored in ``users.role``."""

    STUDENT = "student"
    TUTOR = "tutor"
    ADMIN = "admin"


class TutorRole(str, Enum):
    """Role stored in ``tutors.role``.

    Managers own the calendar but never appear on it.
    """

    TUTOR = "tutor"
    MANAGER = "manager"
