"""Django application configuration for core."""

from django.apps import AppConfig
from django.conf import settings

import structlog

logger = structlog.get_logger(__name__)


class CoreConfig(AppConfig):
    """Configuration class for the core application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "core"
    verbose_name = "NextGen MedPrep"

    def ready(self) -> None:
        """Log the storage and payment configuration once at startup."""
        logger.info(
            "core_app_ready",
            environment=settings.ENVIRONMENT,
            storage_configured=bool(settings.SUPABASE_URL and settings.SUPABASE_KEY),
            payments_configured=bool(settings.STRIPE_SECRET_KEY),
        )
