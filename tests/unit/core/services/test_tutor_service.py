"""Tests for TutorService."""

import datetime as dt
from uuid import uuid4

from django.utils import timezone

from core.exceptions import ResourceNotFoundError, ValidationFailedError
from core.models import Interview, TutorAvailability
from core.schemas.tutor import (
    BulkAvailabilityRequest,
    CreateTutorRequest,
    DateRangeParams,
    TutorSlot,
    UpdateTutorRequest,
)
from core.services.tutor_service import TutorService
from tests.base import BaseUnitTest
from tests.factories import make_booking, make_tutor

DAY = dt.date(2030, 3, 14)


class TestTutorService(BaseUnitTest):
    """Test suite for TutorService."""

    def setUp(self):
        """Set up test fixtures."""
        self.service = TutorService()
        self.tutor = make_tutor(name="Grace Hopper")

    def test_create_is_idempotent_on_email(self):
        """A second create for the same email returns the existing tutor."""
        request = CreateTutorRequest(
            user_id=uuid4(), name="Ada Lovelace", email="ada@example.com"
        )

        tutor, created = self.service.create(request)
        again, created_again = self.service.create(request)

        self.assertTrue(created)
        self.assertFalse(created_again)
        self.assertEqual(tutor.id, again.id)
        self.assertEqual(tutor.id, request.user_id)
        self.assertEqual(tutor.subjects, ["General"])

    def test_get_requires_id_or_email(self):
        """Lookups need at least one key."""
        with self.assertRaisesRegex(ValidationFailedError, "Either id or email"):
            self.service.get()
        with self.assertRaisesRegex(ResourceNotFoundError, "Tutor not found"):
            self.service.get(email="nobody@example.com")
        self.assertEqual(self.service.get(email=self.tutor.email).id, self.tutor.id)

    def test_update(self):
        """Only provided fields change."""
        updated = self.service.update(
            self.tutor.id, UpdateTutorRequest(subjects=["UCAT", "BMAT"])
        )

        self.assertEqual(updated.subjects, ["UCAT", "BMAT"])
        self.assertEqual(updated.name, "Grace Hopper")

    def test_add_availability_rejects_touching_slots(self):
        """Slots sharing a boundary hour count as overlapping."""
        self.service.add_availability(
            self.tutor.id, TutorSlot(date=DAY, hour_start=9, hour_end=11)
        )

        with self.assertRaisesRegex(ValidationFailedError, "Overlapping"):
            self.service.add_availability(
                self.tutor.id, TutorSlot(date=DAY, hour_start=11, hour_end=12)
            )

        other_day = self.service.add_availability(
            self.tutor.id,
            TutorSlot(date=DAY + dt.timedelta(days=1), hour_start=9, hour_end=11),
        )
        self.assertEqual(other_day.type, "available")

    def test_add_availability_for_unknown_tutor(self):
        """Slots cannot be added for a tutor that does not exist."""
        with self.assertRaises(ResourceNotFoundError):
            self.service.add_availability(
                uuid4(), TutorSlot(date=DAY, hour_start=9, hour_end=10)
            )

    def test_bulk_availability_skips_overlap_checks(self):
        """Bulk inserts store every slot as given."""
        slots = self.service.add_bulk_availability(
            self.tutor.id,
            BulkAvailabilityRequest(
                slots=[
                    TutorSlot(date=DAY, hour_start=9, hour_end=11),
                    TutorSlot(date=DAY, hour_start=10, hour_end=12, type="blocked"),
                ]
            ),
        )

        self.assertEqual(len(slots), 2)
        self.assertEqual(TutorAvailability.objects.count(), 2)

    def test_availability_range_and_calendar_excludes_managers(self):
        """Managers are left off the calendar; slots are filtered by date."""
        make_tutor(name="Manager", role="manager")
        TutorAvailability.objects.create(
            tutor_id=self.tutor.id, date=DAY, hour_start=9, hour_end=10
        )
        TutorAvailability.objects.create(
            tutor_id=self.tutor.id, date=DAY + dt.timedelta(days=10), hour_start=9, hour_end=10
        )

        calendar = self.service.list_with_availability(
            DateRangeParams(start_date=DAY, end_date=DAY)
        )

        self.assertEqual([t.name for t in calendar], ["Grace Hopper"])
        self.assertEqual([s.date for s in calendar[0].availability], [DAY])

    def test_delete_missing_availability_is_not_an_error(self):
        """Deleting an unknown slot succeeds silently."""
        self.service.delete_availability(uuid4())

    def test_upcoming_sessions_and_stats(self):
        """Only future, incomplete interviews are upcoming."""
        now = timezone.now()
        booking = make_booking(email="student@example.com", universities="Imperial")
        Interview.objects.create(
            tutor_id=self.tutor.id, booking=booking, scheduled_at=now + dt.timedelta(days=2)
        )
        Interview.objects.create(
            tutor_id=self.tutor.id, scheduled_at=now + dt.timedelta(days=1)
        )
        Interview.objects.create(
            tutor_id=self.tutor.id, completed=True, scheduled_at=now - dt.timedelta(days=3)
        )
        Interview.objects.create(
            tutor_id=self.tutor.id, completed=True, scheduled_at=now - dt.timedelta(days=20)
        )
        Interview.objects.create(
            tutor_id=self.tutor.id, completed=True, scheduled_at=now - dt.timedelta(days=90)
        )

        sessions = self.service.upcoming_sessions(self.tutor.id)

        self.assertEqual(
            [(s.student_name, s.student_email) for s in sessions],
            [("Unknown", "No email"), ("student", "student@example.com")],
        )
        self.assertEqual(sessions[1].universities, "Imperial")

        stats = self.service.session_stats(self.tutor.id)
        self.assertEqual(
            stats.model_dump(by_alias=True),
            {
                "totalCompleted": 3,
                "totalUpcoming": 2,
                "thisWeekCompleted": 1,
                "thisMonthCompleted": 2,
            },
        )
