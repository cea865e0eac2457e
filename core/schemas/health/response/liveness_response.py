"""Liveness response schema."""

from datetime import datetime

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class LivenessResponse(BaseSchemaModel):
    """Response model for liveness checks."""

    status: str = Field(..., description="Liveness status")
    timestamp: datetime = Field(..., description="Server time of the check")
    environment: str = Field(..., description="Deployment environment")
