"""Personal statement review enumerations."""

from enum import Enum


class PersonalStatementStatus(str, Enum):
    """Review lifecycle of a submitted personal statement."""

    PENDING = "pending"
    IN_REVIEW = "in_review"
    COMPLETE = "complete"


class StatementType(str, Enum):
    """Course the statement is written for."""

    MEDICINE = "medicine"
    DENTISTRY = "dentistry"
