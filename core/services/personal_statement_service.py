"""Personal statement review workflow: upload, payment, review, feedback."""

import os
import re
import time
from typing import Any
from uuid import UUID

from django.conf import settings
from django.core.files.uploadedfile import UploadedFile
from django.db import transaction
from django.utils import timezone

import structlog

from core.constants import (
    ALLOWED_DOCUMENT_TYPES,
    FEEDBACK_LINK_EXPIRY_SECONDS,
    FEEDBACK_PREFIX,
    MAX_UPLOAD_SIZE_BYTES,
    STATEMENT_PREFIX,
)
from core.enums import EmailCategory, PersonalStatementStatus
from core.exceptions import ExternalServiceError, ResourceNotFoundError, ValidationFailedError
from core.models import PersonalStatement
from core.schemas.personal_statement import (
    CheckoutSession,
    DownloadLink,
    FeedbackForm,
    SubmitStatementForm,
    UpdatePersonalStatementRequest,
)
from core.services.notification_service import NotificationService, notification_service
from core.services.payment_service import PaymentService, payment_service
from core.services.storage_service import StorageService, storage_service

logger = structlog.get_logger(__name__)

CHECKOUT_TYPE = "personal_statement_review"


def sanitize_for_path(value: str) -> str:
    """Replace every non-alphanumeric character with ``_``."""
    return re.sub(r"[^a-zA-Z0-9]", "_", value)


def _timestamp_ms() -> int:
    return int(time.time() * 1000)


class PersonalStatementService:
    """Handles paid personal statement reviews.

    Submission stores the document and opens a Stripe Checkout session; the
    ``personal_statements`` row is only written once Stripe reports the
    session as completed.
    """

    def __init__(
        self,
        storage: StorageService = storage_service,
        payments: PaymentService = payment_service,
        notifications: NotificationService = notification_service,
    ) -> None:
        """Initialize the personal statement service."""
        self.storage = storage
        self.payments = payments
        self.notifications = notifications

    @property
    def bucket(self) -> str:
        """Bucket holding statements and feedback."""
        return settings.PERSONAL_STATEMENTS_BUCKET

    def submit(
        self, form: SubmitStatementForm, upload: UploadedFile | None
    ) -> CheckoutSession:
        """Upload a statement and create the review payment session.

        Raises:
            ValidationFailedError: If the file is missing, too large or not
                a PDF/DOC/DOCX document
            ExternalServiceError: If storage or Stripe fail
        """
        if upload is None:
            raise ValidationFailedError("Personal statement file is required")
        self._validate_document(upload)

        file_name = (
            f"{sanitize_for_path(form.email)}_{_timestamp_ms()}"
            f"{self._extension(upload)}"
        )
        file_path = self.storage.upload(
            self.bucket,
            f"{STATEMENT_PREFIX}/{file_name}",
            upload.read(),
            upload.content_type,
        )

        checkout = self.payments.create_checkout_payment(
            amount=settings.PERSONAL_STATEMENT_PRICE,
            currency=settings.PERSONAL_STATEMENT_CURRENCY,
            description=f"Personal Statement Review - {form.statement_type}",
            customer_email=form.email,
            metadata={
                "type": CHECKOUT_TYPE,
                "first_name": form.first_name,
                "last_name": form.last_name,
                "statement_type": form.statement_type,
                "personal_statement_file_path": file_path,
            },
        )

        logger.info(
            "personal_statement_submitted",
            email=form.email,
            file_path=file_path,
            session_id=checkout.session_id,
        )
        return checkout

    def record_paid_submission(self, session: dict[str, Any]) -> PersonalStatement | None:
        """Create the statement row for a completed review checkout.

        Sessions of another type are ignored. Stripe retries webhooks, so an
        existing row for the same session id is returned unchanged.

        Args:
            session: ``data.object`` of a ``checkout.session.completed`` event

        Returns:
            The statement row, or None when the session is not a review
        """
        metadata = session.get("metadata") or {}
        if metadata.get("type") != CHECKOUT_TYPE:
            return None

        session_id = session.get("id")
        existing = PersonalStatement.objects.filter(stripe_session_id=session_id).first()
        if existing is not None:
            logger.info("personal_statement_already_recorded", session_id=session_id)
            return existing

        email = session.get("customer_email") or (
            session.get("customer_details") or {}
        ).get("email")
        if not email or not metadata.get("personal_statement_file_path"):
            raise ValidationFailedError("Checkout session is missing statement details")

        with transaction.atomic():
            statement = PersonalStatement.objects.create(
                email=email,
                first_name=metadata.get("first_name"),
                last_name=metadata.get("last_name"),
                statement_type=metadata.get("statement_type"),
                personal_statement_file_path=metadata["personal_statement_file_path"],
                stripe_session_id=session_id,
                status=PersonalStatementStatus.PENDING.value,
            )

        logger.info(
            "personal_statement_recorded",
            personal_statement_id=str(statement.id),
            session_id=session_id,
        )
        return statement

    @staticmethod
    def list_all() -> list[PersonalStatement]:
        """Every statement, newest first."""
        return list(PersonalStatement.objects.order_by("-created_at"))

    @staticmethod
    def list_by_status(status: str) -> list[PersonalStatement]:
        """Statements in one review status.

        Raises:
            ValidationFailedError: If ``status`` is not a known status
        """
        if status not in {s.value for s in PersonalStatementStatus}:
            raise ValidationFailedError("Invalid status parameter")
        return list(
            PersonalStatement.objects.filter(status=status).order_by("-created_at")
        )

    @staticmethod
    def list_by_email(email: str) -> list[PersonalStatement]:
        """Statements submitted by ``email``, newest first."""
        return list(PersonalStatement.objects.filter(email=email).order_by("-created_at"))

    @staticmethod
    def get(statement_id: UUID) -> PersonalStatement:
        """Return one statement.

        Raises:
            ResourceNotFoundError: If it does not exist
        """
        statement = PersonalStatement.objects.filter(id=statement_id).first()
        if statement is None:
            raise ResourceNotFoundError("Personal statement not found")
        return statement

    def update(
        self, statement_id: UUID, request: UpdatePersonalStatementRequest
    ) -> PersonalStatement:
        """Apply reviewer edits; ``reviewed=True`` stamps ``reviewed_at``."""
        statement = self.get(statement_id)
        changes = request.model_dump(exclude_none=True)
        if not changes:
            raise ValidationFailedError("No fields to update")

        for field, value in changes.items():
            setattr(statement, field, value)
        if changes.get("reviewed") is True:
            statement.reviewed_at = timezone.now()
            changes["reviewed_at"] = statement.reviewed_at

        statement.save(update_fields=[*changes, "updated_at"])
        logger.info(
            "personal_statement_updated",
            personal_statement_id=str(statement_id),
            fields=sorted(changes),
        )
        return statement

    def download_link(self, statement_id: UUID) -> DownloadLink:
        """Mint a signed URL for the submitted document."""
        statement = self.get(statement_id)
        expires_in = settings.SIGNED_URL_EXPIRY_SECONDS
        url = self.storage.create_signed_url(
            self.bucket, statement.personal_statement_file_path, expires_in
        )
        return DownloadLink(download_url=url, expires_in=expires_in)

    def upload_feedback(
        self,
        statement_id: UUID,
        form: FeedbackForm,
        upload: UploadedFile | None,
    ) -> PersonalStatement:
        """Store reviewer feedback, complete the review and tell the student.

        Raises:
            ValidationFailedError: If the file is missing or not allowed
            ResourceNotFoundError: If the statement does not exist
        """
        if upload is None:
            raise ValidationFailedError("Feedback file is required")
        statement = self.get(statement_id)
        self._validate_document(upload)

        file_name = (
            f"feedback_{statement.id}_{sanitize_for_path(form.reviewer_email)}_"
            f"{_timestamp_ms()}{self._extension(upload)}"
        )
        feedback_path = self.storage.upload(
            self.bucket,
            f"{FEEDBACK_PREFIX}/{file_name}",
            upload.read(),
            upload.content_type,
        )

        statement.feedback_file_path = feedback_path
        statement.status = PersonalStatementStatus.COMPLETE.value
        statement.mark_reviewed(form.reviewer_email)
        statement.save(
            update_fields=[
                "feedback_file_path",
                "status",
                "reviewed",
                "reviewed_at",
                "reviewer_email",
                "updated_at",
            ]
        )
        logger.info(
            "personal_statement_feedback_uploaded",
            personal_statement_id=str(statement.id),
            feedback_path=feedback_path,
        )

        self._notify_feedback_ready(statement)
        return statement

    def _notify_feedback_ready(self, statement: PersonalStatement) -> None:
        context = {
            "first_name": statement.first_name,
            "expires_hours": FEEDBACK_LINK_EXPIRY_SECONDS // 3600,
        }
        try:
            context["download_url"] = self.storage.create_signed_url(
                self.bucket, statement.feedback_file_path, FEEDBACK_LINK_EXPIRY_SECONDS
            )
        except ExternalServiceError as e:
            # Queued without a link when signing fails
            logger.warning(
                "feedback_link_unavailable",
                personal_statement_id=str(statement.id),
                error=e.message,
            )

        self.notifications.queue_email(
            EmailCategory.PERSONAL_STATEMENT_FEEDBACK, statement.email, context
        )

    @staticmethod
    def _validate_document(upload: UploadedFile) -> None:
        if upload.content_type not in ALLOWED_DOCUMENT_TYPES:
            raise ValidationFailedError("Only PDF, DOC, and DOCX files are allowed")
        if upload.size > MAX_UPLOAD_SIZE_BYTES:
            raise ValidationFailedError("File size exceeds the 10MB limit")

    @staticmethod
    def _extension(upload: UploadedFile) -> str:
        _, extension = os.path.splitext(upload.name or "")
        return extension or ALLOWED_DOCUMENT_TYPES[upload.content_type]


personal_statement_service = PersonalStatementService()
