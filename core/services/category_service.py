# =============================================================================
# core/services/category_service.py - Category Business Logic
# =============================================================================

import logging
from typing import Any

from supabase import Client

from app.auth.models import AuthUser
from app.exceptions import InvalidInputError, SlugConflictError
from core.models.category import CategoryCreate
from core.policies import Action, Resource, authorize
from lib.supabase_client import execute_query, first_row
from lib.utils import slugify

logger = logging.getLogger(__name__)

CATEGORIES_TABLE = "app_categories"


class CategoryService:
    """Service for category reads and creation."""

    @staticmethod
    def list_categories(client: Client) -> list[dict[str, Any]]:
        """List all categories ordered by name."""
        response = execute_query(
            client.table(CATEGORIES_TABLE).select("*").order("name"),
            code="LIST_CATEGORIES_FAILED",
            action="list categories",
        )
        return response.data or []

    @staticmethod
    def get_category(
        client: Client,
        column: str,
        value: str,
    ) -> dict[str, Any] | None:
        """Fetch one category by `column` ("id" or "slug"), or None."""
        response = execute_query(
            client.table(CATEGORIES_TABLE).select("*").eq(column, value).limit(1),
            code="FETCH_CATEGORY_FAILED",
            action="fetch category",
            details={column: value},
        )
        return first_row(response)

    @staticmethod
    def create_category(
        client: Client,
        user: AuthUser | None,
        payload: CategoryCreate,
    ) -> dict[str, Any]:
        """
        Create a category with a slug derived from its name.

        Raises:
            AuthenticationRequiredError: If the caller is anonymous
            InvalidInputError: If the name has no usable characters
            SlugConflictError: If a category with the same slug exists
        """
        authorize(user, Resource.CATEGORIES, Action.CREATE)

        slug = slugify(payload.name)
        if not slug:
            raise InvalidInputError(
                "Category name must contain at least one letter or digit",
                details={"name": payload.name},
            )

        if CategoryService.get_category(client, "slug", slug) is not None:
            raise SlugConflictError(slug, resource="category")

        data = {
            "name": payload.name.strip(),
            "slug": slug,
            "description": payload.description,
            "icon": payload.icon,
        }

        response = execute_query(
            client.table(CATEGORIES_TABLE).insert(data),
            code="CREATE_CATEGORY_FAILED",
            action="create category",
            details={"slug": slug},
        )

        category = first_row(response) or data
        logger.info(f"Created category: {slug}")
        return category
