"""Repository for resource queries."""

from uuid import UUID

from core.models import Resource


class ResourceRepository:
    """Encapsulates ``resources`` table reads for gating and the storage audit."""

    @staticmethod
    def get_file_paths() -> list[str]:
        """Return every non-empty ``file_path`` recorded in the table."""
        return [
            path
            for path in Resource.objects.values_list("file_path", flat=True)
            if path
        ]

    @staticmethod
    def get_by_id(resource_id: UUID) -> Resource | None:
        """Return the resource with ``resource_id`` or None."""
        return Resource.objects.filter(id=resource_id).first()

    @staticmethod
    def get_all() -> list[Resource]:
        """Every resource, inactive ones included, newest first."""
        return list(Resource.objects.order_by("-created_at"))

    @staticmethod
    def get_for_tier(tier: str) -> list[Resource]:
        """Active resources whose ``allowed_tiers`` contains ``tier``, by name.

        ``allowed_tiers`` is a JSON array, so membership is checked in Python.
        """
        return [
            resource
            for resource in Resource.objects.filter(is_active=True).order_by("name")
            if tier in (resource.allowed_tiers or [])
        ]
