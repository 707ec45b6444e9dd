# =============================================================================
# tests/test_rating_aggregation.py - Rating Aggregation Tests
# =============================================================================
# Folding raw rating rows into per-app averages, and the single batched
# query used for a page of apps.
#
# Run with: pytest tests/test_rating_aggregation.py -v
# =============================================================================

from uuid import uuid4

from core.services.rating_service import (
    RatingService,
    attach_rating_summaries,
    fold_ratings,
)


class TestFoldRatings:
    """Tests for fold_ratings()."""

    def test_groups_by_app(self):
        rows = [
            {"app_id": "a", "rating": 5},
            {"app_id": "b", "rating": 2},
            {"app_id": "a", "rating": 4},
            {"app_id": "a", "rating": 3},
        ]

        summaries = fold_ratings(rows)

        assert summaries["a"].count == 3
        assert summaries["a"].average == 4.0
        assert summaries["b"].count == 1
        assert summaries["b"].average == 2.0

    def test_empty(self):
        assert fold_ratings([]) == {}

    def test_average_stays_within_star_range(self):
        rows = [{"app_id": "a", "rating": r} for r in (1, 5, 5, 2, 3, 4, 1)]

        average = fold_ratings(rows)["a"].average

        assert 1 <= average <= 5


class TestAttachRatingSummaries:
    """Tests for attach_rating_summaries()."""

    def test_apps_without_ratings_get_no_fields(self):
        apps = [{"id": "a"}, {"id": "b"}]
        summaries = fold_ratings([{"app_id": "a", "rating": 5}, {"app_id": "a", "rating": 4}])

        attach_rating_summaries(apps, summaries)

        assert apps[0]["average_rating"] == 4.5
        assert apps[0]["rating_count"] == 2
        assert "average_rating" not in apps[1]
        assert "rating_count" not in apps[1]

    def test_matches_uuid_ids_against_string_keys(self):
        app_id = uuid4()
        apps = [{"id": app_id}]

        attach_rating_summaries(apps, fold_ratings([{"app_id": str(app_id), "rating": 3}]))

        assert apps[0]["average_rating"] == 3.0


class TestRatingServiceBatching:
    """RatingService reads ratings for a whole page at once."""

    def test_with_ratings_uses_one_query(self, db):
        first = db.add_app("First")
        second = db.add_app("Second")
        db.add_rating(first, uuid4(), 5)
        db.add_rating(first, uuid4(), 4)
        db.add_rating(first, uuid4(), 3)

        apps = RatingService.with_ratings(db, [dict(first), dict(second)])

        assert db.calls.count(("app_ratings", "select")) == 1
        assert apps[0]["average_rating"] == 4.0
        assert apps[0]["rating_count"] == 3
        assert "average_rating" not in apps[1]

    def test_no_apps_no_query(self, db):
        assert RatingService.with_ratings(db, []) == []
        assert db.calls == []
