# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .app_service import AppService, build_search_filter
from .category_service import CategoryService
from .rating_service import RatingService, attach_rating_summaries, fold_ratings

__all__ = [
    "AppService",
    "CategoryService",
    "RatingService",
    "attach_rating_summaries",
    "build_search_filter",
    "fold_ratings",
]
