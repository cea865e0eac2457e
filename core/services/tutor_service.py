"""Tutor profiles, calendars and dashboard statistics."""

from datetime import timedelta
from uuid import UUID

from django.db import transaction
from django.utils import timezone

import structlog

from core.enums import TutorRole
from core.exceptions import ResourceNotFoundError, ValidationFailedError
from core.models import Interview, Tutor, TutorAvailability
from core.schemas.tutor import (
    BulkAvailabilityRequest,
    CreateTutorRequest,
    DateRangeParams,
    SessionStats,
    TutorAvailabilityDetail,
    TutorSlot,
    TutorWithAvailability,
    UpcomingSession,
    UpdateTutorRequest,
)

logger = structlog.get_logger(__name__)


class TutorService:
    """Manages tutors and the slots they offer for mock interviews."""

    @staticmethod
    def create(request: CreateTutorRequest) -> tuple[Tutor, bool]:
        """Create a tutor keyed by their auth user id.

        Creation is idempotent on email: an existing tutor is returned as is.

        Returns:
            The tutor and whether it was created by this call
        """
        existing = Tutor.objects.filter(email=request.email).first()
        if existing is not None:
            return existing, False

        tutor = Tutor.objects.create(
            id=request.user_id,
            name=request.name,
            email=request.email,
            subjects=request.subjects,
            role=request.role,
        )
        logger.info("tutor_created", tutor_id=str(tutor.id), role=tutor.role)
        return tutor, True

    @staticmethod
    def get(tutor_id: UUID | None = None, email: str | None = None) -> Tutor:
        """Look a tutor up by id, or by email when no id is given.

        Raises:
            ValidationFailedError: If neither is provided
            ResourceNotFoundError: If no tutor matches
        """
        if tutor_id:
            tutor = Tutor.objects.filter(id=tutor_id).first()
        elif email:
            tutor = Tutor.objects.filter(email=email).first()
        else:
            raise ValidationFailedError("Either id or email must be provided")

        if tutor is None:
            raise ResourceNotFoundError("Tutor not found")
        return tutor

    @staticmethod
    def list_tutors() -> list[Tutor]:
        """Every tutor, newest first."""
        return list(Tutor.objects.order_by("-created_at"))

    def update(self, tutor_id: UUID, request: UpdateTutorRequest) -> Tutor:
        """Apply the provided fields to a tutor."""
        tutor = self.get(tutor_id=tutor_id)
        changes = request.model_dump(exclude_none=True)
        if not changes:
            raise ValidationFailedError("No fields to update")

        for field, value in changes.items():
            setattr(tutor, field, value)
        tutor.save(update_fields=list(changes))

        logger.info("tutor_updated", tutor_id=str(tutor_id), fields=sorted(changes))
        return tutor

    def add_availability(self, tutor_id: UUID, slot: TutorSlot) -> TutorAvailabilityDetail:
        """Add one slot, rejecting any that touches an existing slot that day.

        Raises:
            ResourceNotFoundError: If the tutor does not exist
            ValidationFailedError: If the slot overlaps an existing one
        """
        self.get(tutor_id=tutor_id)

        # Shared boundary hours count as overlapping
        overlapping = TutorAvailability.objects.filter(
            tutor_id=tutor_id,
            date=slot.date,
            hour_start__lte=slot.hour_end,
            hour_end__gte=slot.hour_start,
        ).exists()
        if overlapping:
            raise ValidationFailedError("Overlapping availability already exists")

        availability = TutorAvailability.objects.create(
            tutor_id=tutor_id,
            date=slot.date,
            hour_start=slot.hour_start,
            hour_end=slot.hour_end,
            type=slot.type,
            interview_id=slot.interview_id,
        )
        logger.info(
            "tutor_availability_added",
            tutor_id=str(tutor_id),
            date=str(slot.date),
            hour_start=slot.hour_start,
            hour_end=slot.hour_end,
        )
        return TutorAvailabilityDetail.model_validate(availability)

    def add_bulk_availability(
        self, tutor_id: UUID, request: BulkAvailabilityRequest
    ) -> list[TutorAvailabilityDetail]:
        """Insert several slots at once without overlap checks."""
        self.get(tutor_id=tutor_id)

        with transaction.atomic():
            created = TutorAvailability.objects.bulk_create(
                [
                    TutorAvailability(
                        tutor_id=tutor_id,
                        date=slot.date,
                        hour_start=slot.hour_start,
                        hour_end=slot.hour_end,
                        type=slot.type,
                        interview_id=slot.interview_id,
                    )
                    for slot in request.slots
                ]
            )

        logger.info("tutor_availability_bulk_added", tutor_id=str(tutor_id), count=len(created))
        return [TutorAvailabilityDetail.model_validate(slot) for slot in created]

    @staticmethod
    def get_availability(
        tutor_id: UUID | None, date_range: DateRangeParams
    ) -> list[TutorAvailabilityDetail]:
        """Slots in the date range with their interview and booking.

        A ``tutor_id`` of None returns every tutor's slots.
        """
        queryset = TutorAvailability.objects.select_related(
            "interview", "interview__booking"
        ).order_by("date", "hour_start")
        if tutor_id is not None:
            queryset = queryset.filter(tutor_id=tutor_id)
        if date_range.start_date:
            queryset = queryset.filter(date__gte=date_range.start_date)
        if date_range.end_date:
            queryset = queryset.filter(date__lte=date_range.end_date)
        return [TutorAvailabilityDetail.model_validate(slot) for slot in queryset]

    def list_with_availability(
        self, date_range: DateRangeParams
    ) -> list[TutorWithAvailability]:
        """Calendar tutors by name, each with their slots in range.

        Managers are excluded from the calendar.
        """
        tutors = Tutor.objects.exclude(role=TutorRole.MANAGER.value).order_by("name")
        slots = self.get_availability(None, date_range)

        by_tutor: dict[UUID, list[TutorAvailabilityDetail]] = {}
        for slot in slots:
            by_tutor.setdefault(slot.tutor_id, []).append(slot)

        return [
            TutorWithAvailability(
                id=tutor.id,
                name=tutor.name,
                email=tutor.email,
                subjects=tutor.subjects or [],
                role=tutor.role,
                created_at=tutor.created_at,
                availability=by_tutor.get(tutor.id, []),
            )
            for tutor in tutors
        ]

    @staticmethod
    def delete_availability(availability_id: UUID) -> None:
        """Delete a slot; deleting a missing slot is not an error."""
        deleted, _ = TutorAvailability.objects.filter(id=availability_id).delete()
        logger.info(
            "tutor_availability_deleted",
            availability_id=str(availability_id),
            deleted=deleted,
        )

    @staticmethod
    def upcoming_sessions(tutor_id: UUID) -> list[UpcomingSession]:
        """Scheduled, not yet completed interviews from now on, soonest first."""
        interviews = (
            Interview.objects.filter(
                tutor_id=tutor_id,
                completed=False,
                scheduled_at__isnull=False,
                scheduled_at__gte=timezone.now(),
            )
            .select_related("booking")
            .order_by("scheduled_at")
        )

        sessions = []
        for interview in interviews:
            booking = interview.booking
            booking_email = booking.email if booking else None
            sessions.append(
                UpcomingSession(
                    id=interview.id,
                    scheduled_at=interview.scheduled_at,
                    student_name=booking_email.split("@")[0] if booking_email else "Unknown",
                    student_email=booking_email or "No email",
                    universities=booking.universities if booking else None,
                    package=booking.package if booking else "Unknown package",
                    zoom_join_url=interview.zoom_join_url,
                    notes=interview.notes or (booking.notes if booking else None),
                )
            )
        return sessions

    @staticmethod
    def session_stats(tutor_id: UUID) -> SessionStats:
        """Completed totals over all time, 7 and 30 days, plus upcoming count."""
        now = timezone.now()
        week_ago = now - timedelta(days=7)
        month_ago = now - timedelta(days=30)

        completed = list(
            Interview.objects.filter(tutor_id=tutor_id, completed=True).values_list(
                "scheduled_at", flat=True
            )
        )
        upcoming = Interview.objects.filter(
            tutor_id=tutor_id,
            completed=False,
            scheduled_at__isnull=False,
            scheduled_at__gte=now,
        ).count()

        return SessionStats(
            total_completed=len(completed),
            total_upcoming=upcoming,
            this_week_completed=sum(1 for at in completed if at and at >= week_ago),
            this_month_completed=sum(1 for at in completed if at and at >= month_ago),
        )


tutor_service = TutorService()
