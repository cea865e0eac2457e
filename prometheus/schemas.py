"""Request and response schemas for the prometheus API.

Responses are dumped by alias, so clients see ``bookingId`` and
``createdAt``.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any
from uuid import UUID

from pydantic import EmailStr, Field

from core.schemas.base_schema_model import BaseSchemaModel


class ServiceType(str, Enum):
    """How the mock interview is delivered."""

    GENERATED = "generated"
    LIVE = "live"


class GenerationMetadata(BaseSchemaModel):
    """Optional context passed through to the generator."""

    package_type: str | None = None
    service_type: ServiceType | None = None


class GenerateRequest(BaseSchemaModel):
    """Body of ``POST /prometheus/generate``."""

    booking_id: str
    student_email: EmailStr
    universities: list[Annotated[str, Field(min_length=1)]]
    metadata: GenerationMetadata = Field(default_factory=GenerationMetadata)


class GenerationSession(BaseSchemaModel):
    """Session as returned after queueing."""

    id: UUID
    booking_id: str
    status: str
    universities: list[str]
    created_at: datetime


class GenerationSessionDetail(GenerationSession):
    """Session including whatever the generator has produced."""

    results: dict[str, Any] | None = None
