# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the catalog models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Default values work as expected
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

from core.models import (
    AppCreate,
    AppFilters,
    AppStatus,
    AppUpdate,
    CategoryCreate,
    Pagination,
    RatingSubmit,
    RatingSummary,
)


# =============================================================================
# App Model Tests
# =============================================================================

class TestAppCreate:
    """Tests for AppCreate model."""

    def test_defaults(self):
        """Status defaults to draft and featured to false."""
        app = AppCreate(name="Widget", description="Does things", app_url="https://w.example.com")

        assert app.status == AppStatus.DRAFT
        assert app.featured is False
        assert app.developer is None
        assert app.category_id is None

    @pytest.mark.parametrize("missing", ["name", "description", "app_url"])
    def test_required_fields(self, missing):
        data = {"name": "Widget", "description": "Does things", "app_url": "https://w.example.com"}
        del data[missing]

        with pytest.raises(ValidationError):
            AppCreate(**data)

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            AppCreate(name="", description="Does things", app_url="https://w.example.com")

    def test_invalid_status_rejected(self):
        with pytest.raises(ValidationError):
            AppCreate(
                name="Widget",
                description="Does things",
                app_url="https://w.example.com",
                status="deleted",
            )


class TestAppUpdate:
    """Tests for AppUpdate model."""

    def test_changes_only_contains_sent_fields(self):
        update = AppUpdate(name="New Name", featured=True)

        assert update.changes() == {"name": "New Name", "featured": True}

    def test_changes_serializes_enums(self):
        update = AppUpdate(status=AppStatus.PUBLISHED)

        assert update.changes() == {"status": "published"}

    def test_explicit_null_is_kept(self):
        update = AppUpdate(short_description=None)

        assert update.changes() == {"short_description": None}

    @pytest.mark.parametrize("field", ["name", "description", "app_url"])
    def test_required_text_cannot_be_blanked(self, field):
        with pytest.raises(ValidationError):
            AppUpdate(**{field: ""})


class TestAppFilters:
    """Tests for AppFilters model."""

    def test_offset(self):
        assert AppFilters(page=1, limit=12).offset == 0
        assert AppFilters(page=3, limit=10).offset == 20

    def test_page_must_be_positive(self):
        with pytest.raises(ValidationError):
            AppFilters(page=0)


class TestPagination:
    """Tests for Pagination.build()."""

    @pytest.mark.parametrize(
        "total, limit, expected_pages",
        [(0, 12, 0), (1, 12, 1), (12, 12, 1), (13, 12, 2), (30, 10, 3)],
    )
    def test_total_pages(self, total, limit, expected_pages):
        pagination = Pagination.build(page=1, limit=limit, total=total)

        assert pagination.total == total
        assert pagination.total_pages == expected_pages


# =============================================================================
# Category Model Tests
# =============================================================================

class TestCategoryCreate:
    """Tests for CategoryCreate model."""

    def test_valid(self):
        category = CategoryCreate(name="Productivity", description="Get things done")

        assert category.name == "Productivity"
        assert category.icon is None

    def test_name_too_long(self):
        with pytest.raises(ValidationError):
            CategoryCreate(name="x" * 101)


# =============================================================================
# Rating Model Tests
# =============================================================================

class TestRatingSubmit:
    """Tests for RatingSubmit model."""

    @pytest.mark.parametrize("rating", [1, 2, 3, 4, 5])
    def test_whole_stars_accepted(self, rating):
        assert RatingSubmit(rating=rating).rating == rating

    @pytest.mark.parametrize("rating", [0, 6, -1, 4.5, "4", None])
    def test_out_of_range_or_non_integer_rejected(self, rating):
        with pytest.raises(ValidationError):
            RatingSubmit(rating=rating)

    def test_review_is_optional(self):
        assert RatingSubmit(rating=3).review is None
        assert RatingSubmit(rating=3, review="Fine").review == "Fine"


class TestRatingSummary:
    """Tests for RatingSummary."""

    def test_average(self):
        summary = RatingSummary()
        for rating in (5, 4, 3):
            summary.add(rating)

        assert summary.count == 3
        assert summary.total == 12
        assert summary.average == 4.0
