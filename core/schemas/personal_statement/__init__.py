"""Personal statement review schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field

from core.enums import PersonalStatementStatus, StatementType
from core.schemas.base_schema_model import BaseSchemaModel


class SubmitStatementForm(BaseSchemaModel):
    """Multipart form fields sent with the statement upload.

    The frontend posts camelCase names (``firstName``, ``statementType``).
    """

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    statement_type: StatementType


class CheckoutSession(BaseSchemaModel):
    """Stripe Checkout session created for a review payment."""

    checkout_url: str
    session_id: str


class UpdatePersonalStatementRequest(BaseSchemaModel):
    """Reviewer-editable fields; omitted fields are unchanged."""

    notes: str | None = None
    reviewed: bool | None = None
    reviewer_email: EmailStr | None = None
    status: PersonalStatementStatus | None = None
    feedback_url: str | None = None
    feedback_file_path: str | None = None


class FeedbackForm(BaseSchemaModel):
    """Form fields sent with a reviewer's feedback upload."""

    reviewer_email: EmailStr


class DownloadLink(BaseSchemaModel):
    """Time-limited link to a stored document."""

    download_url: str
    expires_in: int


class PersonalStatementDetail(BaseSchemaModel):
    """Personal statement as returned by the API."""

    id: UUID
    email: str
    first_name: str | None = None
    last_name: str | None = None
    statement_type: str | None = None
    personal_statement_file_path: str
    stripe_session_id: str | None = None
    notes: str | None = None
    reviewed: bool
    reviewed_at: datetime | None = None
    reviewer_email: str | None = None
    version: int
    status: str
    feedback_file_path: str | None = None
    feedback_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


__all__ = [
    "CheckoutSession",
    "DownloadLink",
    "FeedbackForm",
    "PersonalStatementDetail",
    "SubmitStatementForm",
    "UpdatePersonalStatementRequest",
]
