# =============================================================================
# core/services/rating_service.py - Ratings and Aggregation
# =============================================================================
# Handles rating submission and the application-tier aggregation:
# raw rating rows are fetched in one batch for every app in view and folded
# into (sum, count) per app, from which the average is derived.
#
# Apps with no ratings get no average_rating / rating_count keys at all.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any, Iterable

from supabase import Client

from app.auth.models import AuthUser
from app.exceptions import RatingNotFoundError
from core.models.rating import RatingSubmit, RatingSummary
from core.policies import Action, Resource, authorize
from lib.supabase_client import execute_query, first_row

logger = logging.getLogger(__name__)

RATINGS_TABLE = "app_ratings"
RATING_COLUMNS = "id, app_id, user_id, rating, review, created_at, updated_at"


# =============================================================================
# Aggregation
# =============================================================================

def fold_ratings(rows: Iterable[dict[str, Any]]) -> dict[str, RatingSummary]:
    """
    Fold rating rows into per-app totals.

    Args:
        rows: Rows carrying at least app_id and rating

    Returns:
        Mapping of app_id -> RatingSummary
    """
    summaries: dict[str, RatingSummary] = {}
    for row in rows:
        app_id = str(row["app_id"])
        summaries.setdefault(app_id, RatingSummary()).add(int(row["rating"]))
    return summaries


def attach_rating_summaries(
    apps: list[dict[str, Any]],
    summaries: dict[str, RatingSummary],
) -> list[dict[str, Any]]:
    """Set average_rating and rating_count on every app that has ratings."""
    for app in apps:
        summary = summaries.get(str(app["id"]))
        if summary and summary.count:
            app["average_rating"] = summary.average
            app["rating_count"] = summary.count
    return apps


class RatingService:
    """
    Service for rating reads, writes and aggregation.

    Every method takes the request's Supabase client explicitly.
    """

    @staticmethod
    def fetch_summaries(
        client: Client,
        app_ids: list[str],
    ) -> dict[str, RatingSummary]:
        """
        Fetch every rating for `app_ids` in a single query and fold them.

        Returns:
            Mapping of app_id -> RatingSummary (apps without ratings absent)
        """
        if not app_ids:
            return {}

        response = execute_query(
            client.table(RATINGS_TABLE)
            .select("app_id, rating")
            .in_("app_id", app_ids),
            code="FETCH_RATINGS_FAILED",
            action="fetch ratings",
            details={"app_count": len(app_ids)},
        )
        return fold_ratings(response.data or [])

    @staticmethod
    def with_ratings(client: Client, apps: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """Attach aggregates to a page of apps."""
        summaries = RatingService.fetch_summaries(client, [str(app["id"]) for app in apps])
        return attach_rating_summaries(apps, summaries)

    @staticmethod
    def with_detail_ratings(
        client: Client,
        app: dict[str, Any],
        user: AuthUser | None = None,
    ) -> dict[str, Any]:
        """
        Attach aggregates to a single app, plus the viewer's own rating.

        The viewer's user_rating / user_review are only set when the viewer
        is signed in and has rated this app.
        """
        app_id = str(app["id"])
        response = execute_query(
            client.table(RATINGS_TABLE)
            .select("app_id, rating, user_id, review")
            .eq("app_id", app_id),
            code="FETCH_RATINGS_FAILED",
            action="fetch ratings",
            details={"app_id": app_id},
        )
        rows = response.data or []
        attach_rating_summaries([app], fold_ratings(rows))

        if user is not None:
            own = next((r for r in rows if str(r.get("user_id")) == str(user.id)), None)
            if own is not None:
                app["user_rating"] = own["rating"]
                app["user_review"] = own.get("review")

        return app

    @staticmethod
    def list_ratings(client: Client, app_id: str) -> list[dict[str, Any]]:
        """List an app's ratings and reviews, newest first."""
        response = execute_query(
            client.table(RATINGS_TABLE)
            .select(RATING_COLUMNS)
            .eq("app_id", app_id)
            .order("created_at", desc=True),
            code="LIST_RATINGS_FAILED",
            action="list ratings",
            details={"app_id": app_id},
        )
        return response.data or []

    @staticmethod
    def get_user_rating(
        client: Client,
        app_id: str,
        user: AuthUser,
    ) -> dict[str, Any] | None:
        """Fetch the caller's rating on one app, if any."""
        response = execute_query(
            client.table(RATINGS_TABLE)
            .select(RATING_COLUMNS)
            .eq("app_id", app_id)
            .eq("user_id", str(user.id))
            .limit(1),
            code="FETCH_RATING_FAILED",
            action="fetch rating",
            details={"app_id": app_id},
        )
        return first_row(response)

    @staticmethod
    def submit_rating(
        client: Client,
        app: dict[str, Any],
        user: AuthUser | None,
        submission: RatingSubmit,
    ) -> dict[str, Any]:
        """
        Create or replace the caller's rating on an app.

        The write is an upsert keyed on (app_id, user_id), so a second
        submission overwrites the first.

        Raises:
            AuthenticationRequiredError: If the caller is anonymous
        """
        row = {
            "app_id": str(app["id"]),
            "user_id": str(user.id) if user else None,
            "rating": submission.rating,
            "review": submission.review,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        authorize(user, Resource.RATINGS, Action.CREATE, row)

        response = execute_query(
            client.table(RATINGS_TABLE).upsert(row, on_conflict="app_id,user_id"),
            code="SUBMIT_RATING_FAILED",
            action="submit rating",
            details={"app_id": row["app_id"]},
        )

        saved = first_row(response) or row
        logger.info(f"User {row['user_id']} rated app {row['app_id']}: {submission.rating}")
        return saved

    @staticmethod
    def delete_rating(client: Client, app_id: str, user: AuthUser | None) -> None:
        """
        Remove the caller's own rating on an app.

        Raises:
            AuthenticationRequiredError: If the caller is anonymous
            RatingNotFoundError: If the caller hasn't rated this app
        """
        authorize(user, Resource.RATINGS, Action.DELETE, {"user_id": str(user.id)} if user else None)

        existing = RatingService.get_user_rating(client, app_id, user)
        if existing is None:
            raise RatingNotFoundError(app_id)
        authorize(user, Resource.RATINGS, Action.DELETE, existing)

        execute_query(
            client.table(RATINGS_TABLE).delete().eq("id", existing["id"]),
            code="DELETE_RATING_FAILED",
            action="delete rating",
            details={"app_id": app_id},
        )
        logger.info(f"User {user.id} removed rating on app {app_id}")
