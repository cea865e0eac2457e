"""Student dashboard schemas."""

import datetime as dt
from uuid import UUID

from pydantic import Field, model_validator

from core.schemas.base_schema_model import BaseSchemaModel


class AvailabilitySlot(BaseSchemaModel):
    """Hour range on a single day; ``hour_end`` is exclusive."""

    date: dt.date
    hour_start: int = Field(..., ge=0, le=23)
    hour_end: int = Field(..., ge=1, le=24)

    @model_validator(mode="after")
    def validate_hour_range(self):
        """Reject empty or inverted ranges."""
        if self.hour_end <= self.hour_start:
            raise ValueError("hour_end must be after hour_start")
        return self


class SubmitAvailabilityRequest(BaseSchemaModel):
    """Replacement set of a student's future availability."""

    slots: list[AvailabilitySlot] = Field(..., min_length=1)
    notes: str | None = None


class UpdateProfileRequest(BaseSchemaModel):
    """Profile fields a student can edit."""

    full_name: str | None = Field(default=None, max_length=255)
    phone_number: str | None = Field(default=None, max_length=50)


class UpdateUniversityRequest(BaseSchemaModel):
    """University preference attached to a booking."""

    university: str = Field(..., min_length=1)


class UserDetail(BaseSchemaModel):
    """User row as returned by the API."""

    id: UUID
    email: str
    full_name: str | None = None
    phone_number: str | None = None
    role: str
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class BookingDetail(BaseSchemaModel):
    """Booking row as returned by the API."""

    id: UUID
    user_id: UUID | None = None
    tutor_id: UUID | None = None
    email: str | None = None
    package: str
    universities: str | None = None
    field: str | None = None
    notes: str | None = None
    status: str
    payment_status: str | None = None
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


class TutorSummary(BaseSchemaModel):
    """Tutor fields embedded in an interview."""

    id: UUID
    name: str
    email: str


class InterviewDetail(BaseSchemaModel):
    """Interview with its tutor and booking embedded."""

    id: UUID
    booking_id: UUID | None = None
    student_id: UUID | None = None
    tutor_id: UUID | None = None
    scheduled_at: dt.datetime | None = None
    completed: bool
    notes: str | None = None
    zoom_join_url: str | None = None
    created_at: dt.datetime | None = None
    tutor: TutorSummary | None = None
    booking: BookingDetail | None = None


class StudentAvailabilityDetail(BaseSchemaModel):
    """Stored student availability slot."""

    id: UUID
    student_id: UUID
    date: dt.date
    hour_start: int
    hour_end: int
    type: str
    notes: str | None = None
    created_at: dt.datetime | None = None


class StudentDashboard(BaseSchemaModel):
    """Everything the student dashboard renders."""

    user: UserDetail
    bookings: list[BookingDetail] = Field(default_factory=list)
    interviews: list[InterviewDetail] = Field(default_factory=list)
    availability: list[StudentAvailabilityDetail] = Field(default_factory=list)


__all__ = [
    "AvailabilitySlot",
    "BookingDetail",
    "InterviewDetail",
    "StudentAvailabilityDetail",
    "StudentDashboard",
    "SubmitAvailabilityRequest",
    "TutorSummary",
    "UpdateProfileRequest",
    "UpdateUniversityRequest",
    "UserDetail",
]
