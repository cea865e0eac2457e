"""Pagination schemas for admin listings."""

import math

from pydantic import Field

from core.schemas.base_schema_model import BaseSchemaModel


class PageParams(BaseSchemaModel):
    """``page``/``limit`` query parameters."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=50, ge=1, le=100)

    @property
    def offset(self) -> int:
        """Row offset of the first item on the page."""
        return (self.page - 1) * self.limit


class Pagination(BaseSchemaModel):
    """Pagination block returned next to a page of results.

    Dumped by alias so ``total_pages`` appears as ``totalPages``.
    """

    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, params: PageParams, total: int) -> "Pagination":
        """Compute the pagination block for ``total`` rows."""
        return cls(
            page=params.page,
            limit=params.limit,
            total=total,
            total_pages=math.ceil(total / params.limit) if total else 0,
        )
