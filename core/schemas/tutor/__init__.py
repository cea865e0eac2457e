"""Tutor and tutor calendar schemas."""

import datetime as dt
from uuid import UUID

from pydantic import EmailStr, Field

from core.enums import AvailabilityType, TutorRole
from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.student import AvailabilitySlot


class CreateTutorRequest(BaseSchemaModel):
    """Register a tutor after their first sign-in."""

    user_id: UUID
    name: str = Field(..., min_length=2)
    email: EmailStr
    subjects: list[str] = Field(default_factory=lambda: ["General"], min_length=1)
    role: TutorRole = TutorRole.TUTOR


class UpdateTutorRequest(BaseSchemaModel):
    """Tutor fields that can be edited; omitted fields are unchanged."""

    name: str | None = Field(default=None, min_length=2)
    subjects: list[str] | None = Field(default=None, min_length=1)
    role: TutorRole | None = None


class TutorSlot(AvailabilitySlot):
    """Calendar slot offered by a tutor."""

    type: AvailabilityType = AvailabilityType.AVAILABLE
    interview_id: UUID | None = None


class BulkAvailabilityRequest(BaseSchemaModel):
    """Several tutor slots added in one request."""

    slots: list[TutorSlot] = Field(..., min_length=1)


class DateRangeParams(BaseSchemaModel):
    """Optional inclusive date range filter."""

    start_date: dt.date | None = None
    end_date: dt.date | None = None


class TutorDetail(BaseSchemaModel):
    """Tutor as returned by the API."""

    id: UUID
    name: str
    email: str
    subjects: list[str] = Field(default_factory=list)
    role: str
    created_at: dt.datetime | None = None


class SlotBooking(BaseSchemaModel):
    """Booking fields shown on a calendar slot."""

    id: UUID
    email: str | None = None
    package: str
    universities: str | None = None


class SlotInterview(BaseSchemaModel):
    """Interview occupying a calendar slot."""

    id: UUID
    scheduled_at: dt.datetime | None = None
    completed: bool
    booking: SlotBooking | None = None


class TutorAvailabilityDetail(BaseSchemaModel):
    """Stored tutor slot with the interview booked into it, if any."""

    id: UUID
    tutor_id: UUID
    date: dt.date
    hour_start: int
    hour_end: int
    type: str
    interview: SlotInterview | None = None
    created_at: dt.datetime | None = None


class TutorWithAvailability(TutorDetail):
    """Tutor plus their slots in the requested range."""

    availability: list[TutorAvailabilityDetail] = Field(default_factory=list)


class UpcomingSession(BaseSchemaModel):
    """Upcoming interview as shown on the tutor dashboard."""

    id: UUID
    scheduled_at: dt.datetime
    student_name: str
    student_email: str
    universities: str | None = None
    package: str
    zoom_join_url: str | None = None
    notes: str | None = None


class SessionStats(BaseSchemaModel):
    """Interview counts for a tutor dashboard.

    Dumped by alias (``totalCompleted``...).
    """

    total_completed: int
    total_upcoming: int
    this_week_completed: int
    this_month_completed: int


__all__ = [
    "BulkAvailabilityRequest",
    "CreateTutorRequest",
    "DateRangeParams",
    "SessionStats",
    "SlotBooking",
    "SlotInterview",
    "TutorAvailabilityDetail",
    "TutorDetail",
    "TutorSlot",
    "TutorWithAvailability",
    "UpcomingSession",
    "UpdateTutorRequest",
]
