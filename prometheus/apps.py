"""Django application configuration for prometheus."""

from django.apps import AppConfig


class PrometheusConfig(AppConfig):
    """Mock interview question generation service."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "prometheus"
    verbose_name = "Prometheus"
