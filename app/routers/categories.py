# =============================================================================
# app/routers/categories.py - Category Endpoints
# =============================================================================

from fastapi import APIRouter

from app.dependencies import CallerDep, SupabaseDep
from core.models.category import CategoryCreate
from core.services.category_service import CategoryService

router = APIRouter()


@router.get("")
def list_categories(client: SupabaseDep):
    """List all categories, alphabetically."""
    return {"categories": CategoryService.list_categories(client)}


@router.post("", status_code=201)
def create_category(
    request: CategoryCreate,
    client: SupabaseDep,
    user: CallerDep,
):
    """Create a category. Requires a signed-in caller."""
    category = CategoryService.create_category(client, user, request)
    return {"category": category}
