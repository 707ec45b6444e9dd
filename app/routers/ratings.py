# =============================================================================
# app/routers/ratings.py - Rating Endpoints
# =============================================================================
# Submit, remove and list star ratings/reviews for an app.
# Mounted under the /apps prefix alongside apps.py.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path

from app.dependencies import CallerDep, SupabaseDep
from app.exceptions import AuthenticationRequiredError
from core.models.rating import RatingSubmit
from core.services.app_service import AppService
from core.services.rating_service import RatingService

router = APIRouter()


@router.post("/{app_id}/rate")
def rate_app(
    app_id: Annotated[UUID, Path(description="App UUID")],
    request: RatingSubmit,
    client: SupabaseDep,
    user: CallerDep,
):
    """
    Rate an app (1-5 stars) with an optional review.

    Submitting again replaces the caller's previous rating.
    """
    if user is None:
        raise AuthenticationRequiredError()

    app = AppService.get_visible_app(client, str(app_id), user)
    rating = RatingService.submit_rating(client, app, user, request)
    return {"rating": rating}


@router.delete("/{app_id}/rate")
def remove_rating(
    app_id: Annotated[UUID, Path(description="App UUID")],
    client: SupabaseDep,
    user: CallerDep,
):
    """Remove the caller's own rating on an app."""
    RatingService.delete_rating(client, str(app_id), user)
    return {"success": True}


@router.get("/{app_id}/ratings")
def list_ratings(
    app_id: Annotated[UUID, Path(description="App UUID")],
    client: SupabaseDep,
    user: CallerDep,
):
    """List an app's ratings and reviews, newest first."""
    app = AppService.get_visible_app(client, str(app_id), user)
    ratings = RatingService.list_ratings(client, str(app["id"]))
    return {"ratings": ratings}
