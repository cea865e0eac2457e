"""Calendar availability models for students and tutors."""

import uuid
from typing import ClassVar

from django.db import models

from core.enums import AvailabilityType

AVAILABILITY_TYPE_CHOICES = [(t.value, t.value) for t in AvailabilityType]


class StudentAvailability(models.Model):
    """Hour range on a date when a student can take an interview."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    student_id = models.UUIDField()
    date = models.DateField()
    hour_start = models.PositiveSmallIntegerField()
    hour_end = models.PositiveSmallIntegerField()
    type = models.CharField(
        max_length=20,
        choices=AVAILABILITY_TYPE_CHOICES,
        default=AvailabilityType.INTERVIEW.value,
    )
    notes = models.TextField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "student_availability"
        managed = False
        ordering: ClassVar[list[str]] = ["date", "hour_start"]


class TutorAvailability(models.Model):
    """Hour range on a date offered, booked or blocked by a tutor."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tutor_id = models.UUIDField()
    date = models.DateField()
    hour_start = models.PositiveSmallIntegerField()
    hour_end = models.PositiveSmallIntegerField()
    type = models.CharField(
        max_length=20,
        choices=AVAILABILITY_TYPE_CHOICES,
        default=AvailabilityType.AVAILABLE.value,
    )
    interview = models.ForeignKey(
        "core.Interview",
        on_delete=models.DO_NOTHING,
        null=True,
        blank=True,
        related_name="availability_slots",
        db_column="interview_id",
        db_constraint=False,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Django model metadata."""

        db_table = "tutor_availability"
        managed = False
        ordering: ClassVar[list[str]] = ["date", "hour_start"]
