# =============================================================================
# core/models/rating.py - Rating Schemas
# =============================================================================
# - RatingSubmit: Input for POST /apps/{id}/rate
# - RatingSummary: Folded (sum, count) for one app, with the derived average
# =============================================================================

from dataclasses import dataclass
from typing import Annotated

from pydantic import BaseModel, Field

# Strict so 4.5 or "4" are rejected instead of coerced
StarRating = Annotated[int, Field(strict=True, ge=1, le=5)]


class RatingSubmit(BaseModel):
    """
    Schema for submitting (or replacing) the caller's rating.

    Example:
        {"rating": 5, "review": "Use it every day"}
    """

    rating: StarRating = Field(..., description="Whole stars, 1 to 5")
    review: str | None = Field(
        default=None,
        max_length=5000,
        description="Optional free-text review"
    )


@dataclass
class RatingSummary:
    """Running totals for one app's ratings."""

    total: int = 0
    count: int = 0

    def add(self, rating: int) -> None:
        self.total += rating
        self.count += 1

    @property
    def average(self) -> float:
        return self.total / self.count
