# =============================================================================
# core/models/app.py - App Schemas
# =============================================================================
# These models define the API contract for catalog apps:
# - AppStatus: Enum for publication states
# - AppCreate / AppUpdate: Input for creating and partially updating apps
# - AppFilters: Listing query (category, search, featured, paging)
# - Pagination / AppListResponse: Listing output
#
# Rows come back from Supabase as plain dicts and are returned as-is,
# enriched with derived rating fields.
# =============================================================================

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class AppStatus(str, Enum):
    """
    Possible states for an app.

    - published: Visible to everyone
    - draft: Only visible to its developer
    - archived: Retired, only visible to its developer
    """
    PUBLISHED = "published"
    DRAFT = "draft"
    ARCHIVED = "archived"


class AppCreate(BaseModel):
    """
    Schema for creating an app.

    Example:
        {
            "name": "Widget",
            "description": "Does widget things",
            "app_url": "https://widget.example.com"
        }
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Display name; the slug is derived from it"
    )

    description: str = Field(
        ...,
        min_length=1,
        description="Long description shown on the detail page"
    )

    app_url: str = Field(
        ...,
        min_length=1,
        description="URL that launches the app"
    )

    short_description: str | None = Field(
        default=None,
        max_length=500,
        description="One-line summary shown on cards"
    )

    icon_url: str | None = None
    screenshot_urls: list[str] | None = None
    category_id: str | None = None

    developer: str | None = Field(
        default=None,
        description="Owning identity; defaults to the caller"
    )

    version: str | None = None
    status: AppStatus = AppStatus.DRAFT
    featured: bool = False


class AppUpdate(BaseModel):
    """
    Schema for partially updating an app.

    Only fields present in the request body are applied.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    short_description: str | None = None
    icon_url: str | None = None
    screenshot_urls: list[str] | None = None
    app_url: str | None = Field(default=None, min_length=1)
    category_id: str | None = None
    developer: str | None = None
    version: str | None = None
    status: AppStatus | None = None
    featured: bool | None = None

    def changes(self) -> dict[str, Any]:
        """Fields the caller actually sent, ready for the update payload."""
        return self.model_dump(exclude_unset=True, mode="json")


class AppFilters(BaseModel):
    """
    Listing query for published apps.

    Pages are 1-indexed.
    """

    category: str | None = None
    search: str | None = None
    featured: bool = False
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=12, ge=1)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Pagination(BaseModel):
    """Paging info attached to listings."""

    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total: int = Field(default=0, ge=0)
    total_pages: int = Field(default=0, ge=0)

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit))


class AppListResponse(BaseModel):
    """
    Schema for GET /apps.

    Example:
        {
            "apps": [...],
            "pagination": {"page": 1, "limit": 12, "total": 30, "total_pages": 3}
        }
    """

    apps: list[dict[str, Any]] = Field(default_factory=list)
    pagination: Pagination

