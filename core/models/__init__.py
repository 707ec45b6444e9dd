# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - app.py: App create/update/filter schemas and listing output
# - category.py: Category create schema
# - rating.py: Rating submission schema and aggregation summary
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# App Models
# -----------------------------------------------------------------------------
from .app import (
    AppCreate,
    AppFilters,
    AppListResponse,
    AppStatus,
    AppUpdate,
    Pagination,
)

# -----------------------------------------------------------------------------
# Category Models
# -----------------------------------------------------------------------------
from .category import CategoryCreate

# -----------------------------------------------------------------------------
# Rating Models
# -----------------------------------------------------------------------------
from .rating import RatingSubmit, RatingSummary, StarRating

# -----------------------------------------------------------------------------
# __all__ - Explicit public API
# -----------------------------------------------------------------------------
__all__ = [
    # App
    "AppCreate",
    "AppFilters",
    "AppListResponse",
    "AppStatus",
    "AppUpdate",
    "Pagination",
    # Category
    "CategoryCreate",
    # Rating
    "RatingSubmit",
    "RatingSummary",
    "StarRating",
]
