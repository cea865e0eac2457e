"""Tutor application schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.pagination import PageParams

REQUIRED_FIELDS = (
    "full_name",
    "email",
    "alevel_subjects_grades",
    "university_year",
    "med_dent_grades",
    "ucat",
    "med_school_offers",
    "subjects_can_tutor",
    "tutoring_experience",
    "why_tutor",
    "availability",
)


class NewJoinerFields(BaseSchemaModel):
    """Every application field, all optional.

    Presence and format rules live in ``NewJoinerService`` so the API can
    answer with the exact field that is wrong.
    """

    full_name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    alevel_subjects_grades: str | None = None
    university_year: str | None = None
    med_dent_grades: str | None = None
    ucat: str | None = None
    med_school_offers: str | None = None
    subjects_can_tutor: list[str] | None = None
    tutoring_experience: str | None = None
    why_tutor: str | None = None
    availability: list[str] | None = None

    @field_validator("subjects_can_tutor", "availability", mode="before")
    @classmethod
    def split_comma_separated(cls, value):
        """Accept ``"Biology, Chemistry"`` as well as a list."""
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value


class NewJoinerDetail(BaseSchemaModel):
    """Application as returned by the API."""

    id: UUID
    full_name: str
    email: str
    phone_number: str | None = None
    alevel_subjects_grades: str
    university_year: str
    med_dent_grades: str
    ucat: str
    med_school_offers: str
    subjects_can_tutor: list[str] = Field(default_factory=list)
    tutoring_experience: str
    why_tutor: str
    availability: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class NewJoinerListParams(PageParams):
    """Query parameters of the admin application listing."""


__all__ = [
    "REQUIRED_FIELDS",
    "NewJoinerDetail",
    "NewJoinerFields",
    "NewJoinerListParams",
]
