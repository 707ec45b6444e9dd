# =============================================================================
# app/routers/apps.py - App Catalog Endpoints
# =============================================================================
# Handles listing, detail, create, update and delete for catalog apps.
# Reads are public; writes need a signed-in caller and ownership is
# enforced by core.policies.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query

from app.config import settings
from app.dependencies import CallerDep, SupabaseDep
from core.models.app import AppCreate, AppFilters, AppListResponse, AppUpdate, Pagination
from core.services.app_service import AppService

router = APIRouter()


@router.get("", response_model=AppListResponse)
def list_apps(
    client: SupabaseDep,
    category: Annotated[str | None, Query(description="Category id or slug")] = None,
    search: Annotated[str | None, Query(description="Case-insensitive substring match")] = None,
    featured: Annotated[bool, Query(description="Only featured apps")] = False,
    page: Annotated[int, Query(ge=1, description="Page number (1-indexed)")] = 1,
    limit: Annotated[
        int | None,
        Query(ge=1, le=settings.MAX_PAGE_SIZE, description="Apps per page")
    ] = None,
):
    """
    List published apps.

    Newest first, with average rating and rating count on apps that have
    ratings.
    """
    filters = AppFilters(
        category=category,
        search=search,
        featured=featured,
        page=page,
        limit=limit or settings.DEFAULT_PAGE_SIZE,
    )
    apps, total = AppService.list_apps(client, filters)

    return AppListResponse(
        apps=apps,
        pagination=Pagination.build(filters.page, filters.limit, total),
    )


@router.post("", status_code=201)
def create_app(
    request: AppCreate,
    client: SupabaseDep,
    user: CallerDep,
):
    """
    Create an app.

    Requires name, description and app_url. The app starts as a draft
    owned by the caller unless the body says otherwise.
    """
    app = AppService.create_app(client, user, request)
    return {"app": app}


@router.get("/{app_ref}")
def get_app(
    app_ref: Annotated[str, Path(description="App UUID or slug")],
    client: SupabaseDep,
    user: CallerDep,
):
    """
    Get one app with its rating summary.

    Unpublished apps are only returned to their developer. Each successful
    fetch counts one view. Signed-in callers also get their own rating.
    """
    app = AppService.get_app(client, app_ref, user)
    return {"app": app}


@router.get("/{app_ref}/related")
def get_related_apps(
    app_ref: Annotated[str, Path(description="App UUID or slug")],
    client: SupabaseDep,
    user: CallerDep,
    limit: Annotated[int | None, Query(ge=1, le=50, description="Maximum apps")] = None,
):
    """List published apps from the same category."""
    app = AppService.get_visible_app(client, app_ref, user)
    apps = AppService.related_apps(client, app, limit or settings.RELATED_APPS_LIMIT)
    return {"apps": apps}


@router.put("/{app_id}")
def update_app(
    app_id: Annotated[UUID, Path(description="App UUID")],
    request: AppUpdate,
    client: SupabaseDep,
    user: CallerDep,
):
    """
    Partially update an app.

    Only the developer who owns the app may update it.
    """
    app = AppService.update_app(
        client,
        str(app_id),
        user,
        request,
        rename_policy=settings.SLUG_RENAME_POLICY,
    )
    return {"app": app}


@router.delete("/{app_id}")
def delete_app(
    app_id: Annotated[UUID, Path(description="App UUID")],
    client: SupabaseDep,
    user: CallerDep,
):
    """
    Delete an app and its ratings.

    Only the developer who owns the app may delete it.
    """
    AppService.delete_app(client, str(app_id), user)
    return {"success": True}
