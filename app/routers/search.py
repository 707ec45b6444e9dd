# =============================================================================
# app/routers/search.py - Search Endpoint
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Query

from app.config import settings
from app.dependencies import SupabaseDep
from core.services.app_service import AppService

router = APIRouter()


@router.get("")
def search_apps(
    client: SupabaseDep,
    q: Annotated[str | None, Query(description="Search text")] = None,
):
    """
    Search published apps by name, short description and description.

    Returns at most SEARCH_RESULT_LIMIT apps, newest first.
    """
    apps = AppService.search_apps(client, q or "", settings.SEARCH_RESULT_LIMIT)
    return {"apps": apps}
