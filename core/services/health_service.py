"""Health check service with short-lived result caching."""

import time

from django.conf import settings
from django.core.cache import cache
from django.db import connection
from django.db.utils import OperationalError
from django.utils import timezone

import structlog

from core.enums import HealthStatus
from core.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)

logger = structlog.get_logger(__name__)


class HealthService:
    """Liveness and readiness checks for the platform probes."""

    def __init__(self, cache_ttl_seconds: float = 5.0) -> None:
        """Initialize the health service.

        Args:
            cache_ttl_seconds: Time to live for cached dependency results
        """
        self.cache_ttl_seconds = cache_ttl_seconds
        self._cached: dict[str, tuple[float, DependencyHealth]] = {}

    def get_liveness_status(self) -> LivenessResponse:
        """Report the process as alive without touching dependencies."""
        return LivenessResponse(
            status="alive",
            timestamp=timezone.now(),
            environment=settings.ENVIRONMENT,
        )

    def get_readiness_status(self) -> ReadinessResponse:
        """Check Postgres and Redis.

        A failing dependency marks the service degraded but still ready, so
        routes that do not need it keep serving.
        """
        dependencies = {
            "database": self.check_database_health(),
            "redis": self.check_redis_health(),
        }
        degraded = not all(dep.healthy for dep in dependencies.values())

        if degraded:
            logger.warning(
                "service_degraded",
                unhealthy=[name for name, dep in dependencies.items() if not dep.healthy],
            )

        return ReadinessResponse(
            ready=True,
            status="degraded" if degraded else "ready",
            degraded=degraded,
            dependencies=dependencies,
        )

    def check_database_health(self) -> DependencyHealth:
        """Validate the database connection without running a query."""
        cached = self._from_cache("database")
        if cached is not None:
            return cached

        start_time = time.perf_counter()
        try:
            connection.ensure_connection()
            health = DependencyHealth(
                healthy=True,
                status=HealthStatus.HEALTHY,
                message="Database connection successful",
                response_time_ms=self._elapsed_ms(start_time),
            )
        except OperationalError as e:
            health = DependencyHealth(
                healthy=False,
                status=HealthStatus.UNHEALTHY,
                message=f"Database connection failed: {e!s}",
                response_time_ms=self._elapsed_ms(start_time),
            )
            logger.warning("database_health_check_failed", error=str(e))

        return self._store("database", health)

    def check_redis_health(self) -> DependencyHealth:
        """Round-trip a key through the Django cache (Redis in production)."""
        cached = self._from_cache("redis")
        if cached is not None:
            return cached

        start_time = time.perf_counter()
        try:
            cache.set("__health_check__", "ok", timeout=1)
            ok = cache.get("__health_check__") == "ok"
            health = DependencyHealth(
                healthy=ok,
                status=HealthStatus.HEALTHY if ok else HealthStatus.UNHEALTHY,
                message=(
                    "Redis connection successful"
                    if ok
                    else "Redis health check failed: unexpected result"
                ),
                response_time_ms=self._elapsed_ms(start_time),
            )
        except Exception as e:
            health = DependencyHealth(
                healthy=False,
                status=HealthStatus.ERROR,
                message=f"Redis connection failed: {e!s}",
                response_time_ms=self._elapsed_ms(start_time),
            )
            logger.warning("redis_health_check_failed", error=str(e))

        return self._store("redis", health)

    def _from_cache(self, name: str) -> DependencyHealth | None:
        entry = self._cached.get(name)
        if entry is None or time.time() - entry[0] >= self.cache_ttl_seconds:
            return None
        return entry[1]

    def _store(self, name: str, health: DependencyHealth) -> DependencyHealth:
        self._cached[name] = (time.time(), health)
        return health

    @staticmethod
    def _elapsed_ms(start_time: float) -> float:
        return (time.perf_counter() - start_time) * 1000


health_service = HealthService()
