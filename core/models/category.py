# =============================================================================
# core/models/category.py - Category Schemas
# =============================================================================

from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    """
    Schema for creating a category.

    Example:
        {"name": "Productivity", "description": "Apps to help you get things done"}
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Unique category name; the slug is derived from it"
    )
    description: str | None = None
    icon: str | None = Field(
        default=None,
        description="Icon identifier used by clients"
    )
