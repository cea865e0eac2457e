"""Schemas for the core app."""

from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)
from core.schemas.pagination import PageParams, Pagination

__all__ = [
    "BaseSchemaModel",
    "DependencyHealth",
    "LivenessResponse",
    "PageParams",
    "Pagination",
    "ReadinessResponse",
]
