"""Readiness response schema."""

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.health.dependency_health import DependencyHealth


class ReadinessResponse(BaseSchemaModel):
    """Response model for readiness checks.

    The API stays ready while a dependency is down; it only reports itself
    as degraded so the platform keeps routing traffic to it.
    """

    ready: bool = Field(..., description="Service accepts requests")
    status: str = Field(..., description="'ready' or 'degraded'")
    degraded: bool = Field(..., description="At least one dependency is unhealthy")
    dependencies: dict[str, DependencyHealth] = Field(
        ..., description="Database and Redis health"
    )
