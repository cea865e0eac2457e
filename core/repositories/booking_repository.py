"""Repository for booking queries."""

from uuid import UUID

from core.models import Booking


class BookingRepository:
    """Encapsulates booking lookups."""

    @staticmethod
    def get_by_package(package_type: str) -> list[Booking]:
        """Fetch bookings for a package, oldest first.

        Ordering is stable so the resolved recipient list keeps the order
        in which students booked.
        """
        return list(Booking.objects.filter(package=package_type).order_by("created_at"))

    @staticmethod
    def get_for_user(user_id: UUID) -> list[Booking]:
        """Fetch a student's bookings, newest first."""
        return list(Booking.objects.filter(user_id=user_id).order_by("-created_at"))
