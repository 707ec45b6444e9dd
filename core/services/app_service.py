# =============================================================================
# core/services/app_service.py - App Catalog Business Logic
# =============================================================================
# Handles app listing, search, detail fetch (with view accounting) and
# create/update/delete. Separates HTTP concerns from database/business logic.
#
# Every method takes the request's Supabase client explicitly and checks
# core.policies before touching a row.
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Any, Literal

from supabase import Client

from app.auth.models import AuthUser
from app.exceptions import (
    AppNotFoundError,
    InvalidInputError,
    SlugConflictError,
)
from core.models.app import AppCreate, AppFilters, AppStatus, AppUpdate
from core.policies import Action, Resource, authorize
from core.services.category_service import CategoryService
from core.services.rating_service import RatingService
from lib.supabase_client import (
    RANGE_NOT_SATISFIABLE,
    SupabaseClientError,
    execute_query,
    first_row,
    platform_error_code,
)
from lib.utils import parse_uuid, slugify, unique_slug

logger = logging.getLogger(__name__)

APPS_TABLE = "apps"

# Every app read embeds its category row
APP_SELECT = "*, category:app_categories(*)"

# Matched case-insensitively by ?search= and /search?q=
SEARCH_COLUMNS = ("name", "short_description", "description")

# Columns a partial update may not null out
_REQUIRED_COLUMNS = {"name", "description", "app_url", "status", "featured"}

RenamePolicy = Literal["keep", "suffix", "reject"]


def build_search_filter(term: str | None) -> str | None:
    """
    Build the PostgREST or-filter for a free-text search.

    The term is matched as typed. It is wrapped in a double-quoted value so
    commas, parentheses and repeated spaces stay part of the pattern.
    Returns None for a blank term.

    Example:
        build_search_filter("widg")
        # 'name.ilike."%widg%",short_description.ilike."%widg%",description.ilike."%widg%"'
    """
    if not term or not term.strip():
        return None
    quoted = _quote_filter_value(f"%{term}%")
    return ",".join(f"{column}.ilike.{quoted}" for column in SEARCH_COLUMNS)


def _quote_filter_value(value: str) -> str:
    """Quote a value for a PostgREST logic-tree filter, escaping backslashes and double quotes."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class AppService:
    """
    Service for catalog app operations.

    Provides a clean interface between API routes and database.
    """

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @staticmethod
    def list_apps(
        client: Client,
        filters: AppFilters,
    ) -> tuple[list[dict[str, Any]], int]:
        """
        List published apps with filtering and pagination.

        Args:
            client: Request-scoped Supabase client
            filters: Category, search term, featured flag and paging

        Returns:
            Tuple of (apps with rating aggregates, total matching count)
        """
        if filters.category:
            category_id = AppService._resolve_category_id(client, filters.category)
            if category_id is None:
                return [], 0
        else:
            category_id = None

        query = (
            AppService._listing_query(client, filters, category_id, APP_SELECT)
            .order("created_at", desc=True)
            .range(filters.offset, filters.offset + filters.limit - 1)
        )

        try:
            response = execute_query(
                query,
                code="LIST_APPS_FAILED",
                action="list apps",
                details={"page": filters.page, "limit": filters.limit},
            )
        except SupabaseClientError as e:
            # PostgREST answers a page past the last row with 416 instead of []
            if platform_error_code(e) != RANGE_NOT_SATISFIABLE:
                raise
            total = AppService._count_listing(client, filters, category_id)
            logger.debug(f"Page {filters.page} is past the last of {total} apps")
            return [], total

        apps = response.data or []
        total = response.count or 0

        logger.debug(f"Listed {len(apps)} of {total} apps (page {filters.page})")
        return RatingService.with_ratings(client, apps), total

    @staticmethod
    def search_apps(client: Client, term: str, limit: int) -> list[dict[str, Any]]:
        """
        Substring search across published apps, newest first.

        Raises:
            InvalidInputError: If the term is blank
        """
        search_filter = build_search_filter(term)
        if not search_filter:
            raise InvalidInputError("Search query is required")

        response = execute_query(
            client.table(APPS_TABLE)
            .select(APP_SELECT)
            .eq("status", AppStatus.PUBLISHED.value)
            .or_(search_filter)
            .order("created_at", desc=True)
            .limit(limit),
            code="SEARCH_APPS_FAILED",
            action="search apps",
            details={"q": term},
        )
        return RatingService.with_ratings(client, response.data or [])

    @staticmethod
    def get_visible_app(
        client: Client,
        app_ref: str,
        user: AuthUser | None,
    ) -> dict[str, Any]:
        """
        Resolve an app by id or slug and check the caller may see it.

        A UUID is looked up by id; anything else is treated as a slug.

        Raises:
            AppNotFoundError: If the app doesn't exist or isn't visible
        """
        app_id = parse_uuid(app_ref)
        if app_id is not None:
            app = AppService._fetch_app(client, "id", str(app_id))
        else:
            app = AppService._fetch_app(client, "slug", app_ref)

        if app is None:
            raise AppNotFoundError(app_ref)

        authorize(user, Resource.APPS, Action.READ, app, not_found=AppNotFoundError(app_ref))
        return app

    @staticmethod
    def get_app(
        client: Client,
        app_ref: str,
        user: AuthUser | None,
        count_view: bool = True,
    ) -> dict[str, Any]:
        """
        Fetch an app for its detail view.

        Increments the view/download counter by one, then attaches the
        rating aggregate and, for a signed-in viewer, their own rating.
        """
        app = AppService.get_visible_app(client, app_ref, user)

        if count_view:
            app["download_count"] = AppService._increment_download_count(client, app)

        return RatingService.with_detail_ratings(client, app, user)

    @staticmethod
    def related_apps(
        client: Client,
        app: dict[str, Any],
        limit: int,
    ) -> list[dict[str, Any]]:
        """Published apps in the same category, excluding `app` itself."""
        if not app.get("category_id"):
            return []

        response = execute_query(
            client.table(APPS_TABLE)
            .select(APP_SELECT)
            .eq("status", AppStatus.PUBLISHED.value)
            .eq("category_id", app["category_id"])
            .neq("id", str(app["id"]))
            .order("created_at", desc=True)
            .limit(limit),
            code="RELATED_APPS_FAILED",
            action="fetch related apps",
            details={"app_id": str(app["id"])},
        )
        return RatingService.with_ratings(client, response.data or [])

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @staticmethod
    def create_app(
        client: Client,
        user: AuthUser | None,
        payload: AppCreate,
    ) -> dict[str, Any]:
        """
        Create an app.

        The slug is derived from the name; if it is taken, a millisecond
        timestamp is appended. Status defaults to draft, featured to false
        and developer to the caller.

        Raises:
            AuthenticationRequiredError: If the caller is anonymous
            InvalidInputError: If the name has no usable characters or the
                category doesn't exist
        """
        authorize(user, Resource.APPS, Action.CREATE)

        slug = slugify(payload.name)
        if not slug:
            raise InvalidInputError(
                "App name must contain at least one letter or digit",
                details={"name": payload.name},
            )
        if AppService._slug_taken(client, slug):
            slug = unique_slug(slug)

        if payload.category_id:
            AppService._require_category(client, payload.category_id)

        data = {
            "name": payload.name,
            "slug": slug,
            "description": payload.description,
            "short_description": payload.short_description or None,
            "icon_url": payload.icon_url or None,
            "screenshot_urls": payload.screenshot_urls or None,
            "app_url": payload.app_url,
            "category_id": payload.category_id or None,
            "developer": payload.developer or str(user.id),
            "version": payload.version or None,
            "status": payload.status.value,
            "featured": payload.featured,
        }

        response = execute_query(
            client.table(APPS_TABLE).insert(data),
            code="CREATE_APP_FAILED",
            action="create app",
            details={"slug": slug},
        )
        created = first_row(response)
        if created is None:
            raise SupabaseClientError(message="Insert returned no data", code="INSERT_NO_DATA")

        logger.info(f"Created app: {created['id']} ({slug}) for developer: {data['developer']}")
        return AppService._fetch_app(client, "id", str(created["id"])) or created

    @staticmethod
    def update_app(
        client: Client,
        app_id: str,
        user: AuthUser | None,
        payload: AppUpdate,
        rename_policy: RenamePolicy = "keep",
    ) -> dict[str, Any]:
        """
        Partially update an app owned by the caller.

        Only fields present in the payload are written; updated_at is always
        refreshed. A rename recomputes the slug; when the new slug belongs
        to another app, `rename_policy` decides:
        - keep: leave the current slug
        - suffix: use a timestamp-suffixed slug
        - reject: raise SlugConflictError

        Raises:
            AuthenticationRequiredError: If the caller is anonymous
            ForbiddenError: If the app is missing or owned by someone else
        """
        existing = AppService._fetch_owner_row(client, app_id)
        authorize(user, Resource.APPS, Action.UPDATE, existing)

        changes = {
            key: value
            for key, value in payload.changes().items()
            if not (key in _REQUIRED_COLUMNS and value is None)
        }

        if "name" in changes:
            slug = AppService._slug_for_rename(client, existing, changes["name"], rename_policy)
            if slug is not None:
                changes["slug"] = slug

        if changes.get("category_id"):
            AppService._require_category(client, changes["category_id"])

        changes["updated_at"] = datetime.now(timezone.utc).isoformat()

        execute_query(
            client.table(APPS_TABLE).update(changes).eq("id", app_id),
            code="UPDATE_APP_FAILED",
            action="update app",
            details={"app_id": app_id},
        )

        logger.info(f"Updated app: {app_id} fields={sorted(changes)}")
        app = AppService._fetch_app(client, "id", app_id)
        if app is None:
            raise AppNotFoundError(app_id)
        return app

    @staticmethod
    def delete_app(client: Client, app_id: str, user: AuthUser | None) -> None:
        """
        Permanently delete an app owned by the caller.

        Its ratings are removed by the ON DELETE CASCADE foreign key.

        Raises:
            AuthenticationRequiredError: If the caller is anonymous
            ForbiddenError: If the app is missing or owned by someone else
        """
        existing = AppService._fetch_owner_row(client, app_id)
        authorize(user, Resource.APPS, Action.DELETE, existing)

        execute_query(
            client.table(APPS_TABLE).delete().eq("id", app_id),
            code="DELETE_APP_FAILED",
            action="delete app",
            details={"app_id": app_id},
        )
        logger.info(f"Deleted app: {app_id}")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _fetch_app(client: Client, column: str, value: str) -> dict[str, Any] | None:
        """Fetch one app (with its category) by `column`, or None."""
        response = execute_query(
            client.table(APPS_TABLE).select(APP_SELECT).eq(column, value).limit(1),
            code="FETCH_APP_FAILED",
            action="fetch app",
            details={column: value},
        )
        return first_row(response)

    @staticmethod
    def _listing_query(
        client: Client,
        filters: AppFilters,
        category_id: str | None,
        columns: str,
    ) -> Any:
        """Counted select of published apps with the listing filters applied."""
        query = (
            client.table(APPS_TABLE)
            .select(columns, count="exact")
            .eq("status", AppStatus.PUBLISHED.value)
        )

        if category_id:
            query = query.eq("category_id", category_id)

        if filters.featured:
            query = query.eq("featured", True)

        search_filter = build_search_filter(filters.search)
        if search_filter:
            query = query.or_(search_filter)

        return query

    @staticmethod
    def _count_listing(
        client: Client,
        filters: AppFilters,
        category_id: str | None,
    ) -> int:
        """Total number of apps the listing filters match."""
        response = execute_query(
            AppService._listing_query(client, filters, category_id, "id").limit(1),
            code="LIST_APPS_FAILED",
            action="count apps",
            details={"page": filters.page, "limit": filters.limit},
        )
        return response.count or 0

    @staticmethod
    def _fetch_owner_row(client: Client, app_id: str) -> dict[str, Any] | None:
        """Fetch just enough of an app to check ownership and rename it."""
        if parse_uuid(app_id) is None:
            return None

        response = execute_query(
            client.table(APPS_TABLE)
            .select("id, developer, slug, status")
            .eq("id", app_id)
            .limit(1),
            code="FETCH_APP_FAILED",
            action="fetch app",
            details={"app_id": app_id},
        )
        return first_row(response)

    @staticmethod
    def _slug_taken(client: Client, slug: str, exclude_id: str | None = None) -> bool:
        """Check whether another app already uses `slug`."""
        query = client.table(APPS_TABLE).select("id").eq("slug", slug)
        if exclude_id:
            query = query.neq("id", exclude_id)

        response = execute_query(
            query.limit(1),
            code="SLUG_CHECK_FAILED",
            action="check slug",
            details={"slug": slug},
        )
        return first_row(response) is not None

    @staticmethod
    def _slug_for_rename(
        client: Client,
        existing: dict[str, Any],
        new_name: str,
        rename_policy: RenamePolicy,
    ) -> str | None:
        """
        Decide the slug after a rename.

        Returns None when the current slug should stay.
        """
        slug = slugify(new_name)
        if not slug:
            raise InvalidInputError(
                "App name must contain at least one letter or digit",
                details={"name": new_name},
            )
        if slug == existing.get("slug"):
            return None

        if not AppService._slug_taken(client, slug, exclude_id=str(existing["id"])):
            return slug

        if rename_policy == "reject":
            raise SlugConflictError(slug)
        if rename_policy == "suffix":
            return unique_slug(slug)

        logger.info(f"Slug {slug} taken; app {existing['id']} keeps {existing.get('slug')}")
        return None

    @staticmethod
    def _increment_download_count(client: Client, app: dict[str, Any]) -> int:
        """
        Bump the counter with a single atomic UPDATE in the database.

        Returns:
            The new counter value
        """
        response = execute_query(
            client.rpc("increment_app_download_count", {"target_app_id": str(app["id"])}),
            code="INCREMENT_DOWNLOADS_FAILED",
            action="increment download count",
            details={"app_id": str(app["id"])},
        )
        data = response.data
        if isinstance(data, list):
            data = data[0] if data else None
        if isinstance(data, dict):
            data = next(iter(data.values()), None)
        return int(data) if data is not None else int(app.get("download_count") or 0) + 1

    @staticmethod
    def _resolve_category_id(client: Client, category: str) -> str | None:
        """Accept a category id or slug; None if no such category."""
        if parse_uuid(category) is not None:
            return category
        row = CategoryService.get_category(client, "slug", category)
        return str(row["id"]) if row else None

    @staticmethod
    def _require_category(client: Client, category_id: str) -> None:
        """Reject writes that point at a category that doesn't exist."""
        if parse_uuid(category_id) is None or CategoryService.get_category(client, "id", category_id) is None:
            raise InvalidInputError(
                f"Unknown category: {category_id}",
                details={"category_id": category_id},
            )
