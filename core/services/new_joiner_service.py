"""Tutor application ("new joiner") management."""

from uuid import UUID

from django.conf import settings

import structlog

from core.enums import EmailCategory
from core.exceptions import ConflictError, ResourceNotFoundError, ValidationFailedError
from core.models import NewJoiner
from core.schemas.new_joiner import REQUIRED_FIELDS, NewJoinerFields, NewJoinerListParams
from core.schemas.pagination import Pagination
from core.services.email_service import EmailService
from core.services.notification_service import NotificationService, notification_service

logger = structlog.get_logger(__name__)


class NewJoinerService:
    """Validates, stores and notifies on tutor applications."""

    def __init__(self, notifications: NotificationService = notification_service):
        """Initialize the new joiner service."""
        self.notifications = notifications

    def create(self, fields: NewJoinerFields) -> NewJoiner:
        """Store a new application and queue the confirmation emails.

        Raises:
            ValidationFailedError: If a required field is missing or malformed
            ConflictError: If an application already exists for the email
        """
        self._validate(fields)

        if NewJoiner.objects.filter(email=fields.email).exists():
            raise ConflictError("Application with this email already exists")

        new_joiner = NewJoiner.objects.create(**fields.model_dump(exclude_none=True))
        logger.info(
            "new_joiner_created",
            new_joiner_id=str(new_joiner.id),
            email=new_joiner.email,
        )

        self.notifications.queue_email(
            EmailCategory.NEW_JOINER_CONFIRMATION,
            new_joiner.email,
            {"full_name": new_joiner.full_name},
        )
        self.notifications.queue_email(
            EmailCategory.NEW_JOINER_ADMIN_NOTIFICATION,
            settings.ADMIN_EMAIL,
            {
                "full_name": new_joiner.full_name,
                "email": new_joiner.email,
                "phone_number": new_joiner.phone_number,
                "university_year": new_joiner.university_year,
                "subjects": list(new_joiner.subjects_can_tutor),
                "availability": list(new_joiner.availability),
            },
        )
        return new_joiner

    def list_applications(
        self, params: NewJoinerListParams
    ) -> tuple[list[NewJoiner], Pagination]:
        """Return one page of applications, newest first."""
        queryset = NewJoiner.objects.order_by("-created_at")
        total = queryset.count()
        page = list(queryset[params.offset : params.offset + params.limit])
        return page, Pagination.build(params, total)

    @staticmethod
    def by_subject(subject: str) -> list[NewJoiner]:
        """Applications whose ``subjects_can_tutor`` contains ``subject``."""
        return [
            joiner
            for joiner in NewJoiner.objects.order_by("-created_at")
            if subject in (joiner.subjects_can_tutor or [])
        ]

    @staticmethod
    def by_availability(slot: str) -> list[NewJoiner]:
        """Applications whose ``availability`` contains ``slot``."""
        return [
            joiner
            for joiner in NewJoiner.objects.order_by("-created_at")
            if slot in (joiner.availability or [])
        ]

    @staticmethod
    def get(new_joiner_id: UUID) -> NewJoiner:
        """Return an application by id.

        Raises:
            ResourceNotFoundError: If none exists
        """
        new_joiner = NewJoiner.objects.filter(id=new_joiner_id).first()
        if new_joiner is None:
            raise ResourceNotFoundError("Application not found")
        return new_joiner

    @staticmethod
    def get_by_email(email: str) -> NewJoiner:
        """Return an application by applicant email.

        Raises:
            ResourceNotFoundError: If none exists
        """
        new_joiner = NewJoiner.objects.filter(email=email).first()
        if new_joiner is None:
            raise ResourceNotFoundError("Application not found")
        return new_joiner

    def update(self, new_joiner_id: UUID, fields: NewJoinerFields) -> NewJoiner:
        """Apply the provided fields to an application.

        Raises:
            ResourceNotFoundError: If the application does not exist
            ConflictError: If the new email belongs to another application
        """
        new_joiner = self.get(new_joiner_id)
        changes = fields.model_dump(exclude_none=True)
        if not changes:
            raise ValidationFailedError("No fields to update")

        new_email = changes.get("email")
        if new_email and new_email != new_joiner.email:
            if not EmailService.is_valid_email(new_email):
                raise ValidationFailedError("Invalid email format")
            if NewJoiner.objects.filter(email=new_email).exists():
                raise ConflictError("Application with this email already exists")

        for field, value in changes.items():
            setattr(new_joiner, field, value)
        new_joiner.save(update_fields=[*changes, "updated_at"])

        logger.info(
            "new_joiner_updated",
            new_joiner_id=str(new_joiner.id),
            fields=sorted(changes),
        )
        return new_joiner

    def delete(self, new_joiner_id: UUID) -> None:
        """Delete an application."""
        new_joiner = self.get(new_joiner_id)
        new_joiner.delete()
        logger.info("new_joiner_deleted", new_joiner_id=str(new_joiner_id))

    @staticmethod
    def _validate(fields: NewJoinerFields) -> None:
        for field in REQUIRED_FIELDS:
            value = getattr(fields, field)
            # Empty lists count as present here and get their own message below
            if value is None or value == "":
                raise ValidationFailedError(f"{field} is required")

        if not EmailService.is_valid_email(fields.email):
            raise ValidationFailedError("Invalid email format")

        if not fields.subjects_can_tutor:
            raise ValidationFailedError("At least one tutoring subject must be selected")
        if not fields.availability:
            raise ValidationFailedError("At least one availability slot must be selected")


new_joiner_service = NewJoinerService()
