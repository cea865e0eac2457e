"""Student dashboard reads and self-service updates."""

from uuid import UUID

from django.db import transaction
from django.utils import timezone

import structlog

from core.enums import AvailabilityType
from core.exceptions import ResourceNotFoundError, ValidationFailedError
from core.models import Booking, Interview, StudentAvailability, Tutor, User
from core.repositories import BookingRepository
from core.schemas.student import (
    BookingDetail,
    InterviewDetail,
    StudentAvailabilityDetail,
    StudentDashboard,
    SubmitAvailabilityRequest,
    TutorSummary,
    UpdateProfileRequest,
    UpdateUniversityRequest,
    UserDetail,
)

logger = structlog.get_logger(__name__)


class StudentService:
    """Backs the student dashboard.

    "Future" availability means dated today or later in the server's
    timezone; past slots are kept as history and never replaced.
    """

    def get_dashboard(self, email: str) -> StudentDashboard:
        """Collect the user, bookings, interviews and future availability.

        Raises:
            ResourceNotFoundError: If no user has this email
        """
        user = User.objects.filter(email=email).first()
        if user is None:
            raise ResourceNotFoundError("User not found")

        return StudentDashboard(
            user=UserDetail.model_validate(user),
            bookings=[
                BookingDetail.model_validate(b)
                for b in BookingRepository.get_for_user(user.id)
            ],
            interviews=self._interviews_for(user.id),
            availability=self.get_availability(user.id),
        )

    @staticmethod
    def get_availability(student_id: UUID) -> list[StudentAvailabilityDetail]:
        """Slots dated today or later, by date then start hour."""
        slots = StudentAvailability.objects.filter(
            student_id=student_id, date__gte=timezone.localdate()
        ).order_by("date", "hour_start")
        return [StudentAvailabilityDetail.model_validate(slot) for slot in slots]

    @staticmethod
    def update_profile(user_id: UUID, request: UpdateProfileRequest) -> UserDetail:
        """Update the editable profile fields.

        Raises:
            ResourceNotFoundError: If the user does not exist
        """
        user = User.objects.filter(id=user_id).first()
        if user is None:
            raise ResourceNotFoundError("User not found")

        changes = request.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(user, field, value)
        user.save(update_fields=[*changes, "updated_at"])

        logger.info("student_profile_updated", user_id=str(user_id), fields=sorted(changes))
        return UserDetail.model_validate(user)

    @staticmethod
    def submit_availability(
        student_id: UUID, request: SubmitAvailabilityRequest
    ) -> list[StudentAvailabilityDetail]:
        """Replace the student's future availability with ``request.slots``."""
        with transaction.atomic():
            deleted, _ = StudentAvailability.objects.filter(
                student_id=student_id, date__gte=timezone.localdate()
            ).delete()
            created = StudentAvailability.objects.bulk_create(
                [
                    StudentAvailability(
                        student_id=student_id,
                        date=slot.date,
                        hour_start=slot.hour_start,
                        hour_end=slot.hour_end,
                        type=AvailabilityType.INTERVIEW.value,
                        notes=request.notes or None,
                    )
                    for slot in request.slots
                ]
            )

        logger.info(
            "student_availability_replaced",
            student_id=str(student_id),
            removed=deleted,
            added=len(created),
        )
        return [StudentAvailabilityDetail.model_validate(slot) for slot in created]

    @staticmethod
    def update_booking_university(
        booking_id: UUID, request: UpdateUniversityRequest
    ) -> BookingDetail:
        """Store the student's university preference on a booking."""
        booking = Booking.objects.filter(id=booking_id).first()
        if booking is None:
            raise ResourceNotFoundError("Booking not found")
        if not request.university:
            raise ValidationFailedError("University is required")

        booking.universities = request.university
        booking.save(update_fields=["universities", "updated_at"])
        logger.info("booking_university_updated", booking_id=str(booking_id))
        return BookingDetail.model_validate(booking)

    @staticmethod
    def _interviews_for(student_id: UUID) -> list[InterviewDetail]:
        interviews = list(
            Interview.objects.filter(student_id=student_id)
            .select_related("booking")
            .order_by("-scheduled_at")
        )
        tutor_ids = {i.tutor_id for i in interviews if i.tutor_id}
        tutors = {t.id: t for t in Tutor.objects.filter(id__in=tutor_ids)}

        details = []
        for interview in interviews:
            tutor = tutors.get(interview.tutor_id)
            details.append(
                InterviewDetail(
                    id=interview.id,
                    booking_id=interview.booking_id,
                    student_id=interview.student_id,
                    tutor_id=interview.tutor_id,
                    scheduled_at=interview.scheduled_at,
                    completed=interview.completed,
                    notes=interview.notes,
                    zoom_join_url=interview.zoom_join_url,
                    created_at=interview.created_at,
                    tutor=TutorSummary.model_validate(tutor) if tutor else None,
                    booking=(
                        BookingDetail.model_validate(interview.booking)
                        if interview.booking
                        else None
                    ),
                )
            )
        return details


student_service = StudentService()
