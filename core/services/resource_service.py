"""Tier-gated access to downloadable resources, plus their admin CRUD."""

from uuid import UUID

from django.conf import settings

import structlog

from core.exceptions import (
    AccessDeniedError,
    ConflictError,
    ResourceNotFoundError,
    ValidationFailedError,
)
from core.models import Resource, Subscription
from core.repositories import ResourceRepository, SubscriptionRepository
from core.schemas.resource import (
    CreateResourceRequest,
    ResourceDownload,
    UpdateResourceRequest,
)
from core.services.storage_service import StorageService, storage_service

logger = structlog.get_logger(__name__)


class ResourceService:
    """Checks a subscriber's tier against ``allowed_tiers`` and signs downloads.

    Files live in the ``RESOURCES_BUCKET`` bucket; the row's ``file_path``
    is the object path inside it.
    """

    def __init__(self, storage: StorageService = storage_service) -> None:
        """Initialize the resource service.

        Args:
            storage: Storage wrapper used to sign download URLs
        """
        self.storage = storage

    def download_url(
        self, email: str, resource_id: UUID, source: str | None = None
    ) -> ResourceDownload:
        """Sign a download link if ``email``'s subscription unlocks the resource.

        Raises:
            AccessDeniedError: If there is no active subscription, or its
                tier is not in the resource's ``allowed_tiers``
            ResourceNotFoundError: If the resource is missing or inactive
        """
        subscription = self._active_subscription(email)

        resource = ResourceRepository.get_by_id(resource_id)
        if resource is None or not resource.is_active:
            raise ResourceNotFoundError("Resource not found or inactive")

        if subscription.subscription_tier not in (resource.allowed_tiers or []):
            logger.warning(
                "resource_access_denied",
                email=email,
                resource_id=str(resource_id),
                subscription_tier=subscription.subscription_tier,
            )
            raise AccessDeniedError("Insufficient access level for this resource")

        expires_in = settings.SIGNED_URL_EXPIRY_SECONDS
        url = self.storage.create_signed_url(
            settings.RESOURCES_BUCKET, resource.file_path, expires_in
        )

        logger.info(
            "resource_download_issued",
            email=email,
            resource_id=str(resource.id),
            subscription_tier=subscription.subscription_tier,
            source=source,
        )
        return ResourceDownload(download_url=url, expires_in=expires_in)

    def for_subscriber(self, email: str) -> list[Resource]:
        """Active resources available to ``email``'s tier.

        Raises:
            AccessDeniedError: If there is no active subscription
        """
        subscription = self._active_subscription(email)
        return ResourceRepository.get_for_tier(subscription.subscription_tier)

    @staticmethod
    def list_all() -> list[Resource]:
        """Every resource for the admin listing."""
        return ResourceRepository.get_all()

    @staticmethod
    def get(resource_id: UUID) -> Resource:
        """Return a resource by id.

        Raises:
            ResourceNotFoundError: If none exists
        """
        resource = ResourceRepository.get_by_id(resource_id)
        if resource is None:
            raise ResourceNotFoundError("Resource not found")
        return resource

    @staticmethod
    def create(request: CreateResourceRequest) -> Resource:
        """Create a resource.

        Raises:
            ConflictError: If ``id`` is given and already taken
        """
        values = request.model_dump(exclude_none=True)
        if request.id is not None and ResourceRepository.get_by_id(request.id):
            raise ConflictError("Resource with this id already exists")

        resource = Resource.objects.create(**values)
        logger.info(
            "resource_created",
            resource_id=str(resource.id),
            file_path=resource.file_path,
            allowed_tiers=resource.allowed_tiers,
        )
        return resource

    def update(self, resource_id: UUID, request: UpdateResourceRequest) -> Resource:
        """Apply the provided fields to a resource."""
        resource = self.get(resource_id)
        changes = request.model_dump(exclude_none=True)
        if not changes:
            raise ValidationFailedError("No fields to update")

        for field, value in changes.items():
            setattr(resource, field, value)
        resource.save(update_fields=[*changes, "updated_at"])

        logger.info("resource_updated", resource_id=str(resource_id), fields=sorted(changes))
        return resource

    def delete(self, resource_id: UUID) -> None:
        """Hard-delete a resource row; the stored file is left in place."""
        resource = self.get(resource_id)
        resource.delete()
        logger.info("resource_deleted", resource_id=str(resource_id))

    @staticmethod
    def _active_subscription(email: str) -> Subscription:
        subscription = SubscriptionRepository.get_by_email(email)
        if subscription is None or not subscription.is_active:
            raise AccessDeniedError("No active subscription found")
        return subscription


resource_service = ResourceService()
