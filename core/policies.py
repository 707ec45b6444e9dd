# =============================================================================
# core/policies.py - Row-Level Policy Evaluation
# =============================================================================
# The same per-row rules the database enforces with RLS, evaluated in the
# service layer before every read and write:
#
#   Resource    | read                      | create          | update/delete
#   ------------|---------------------------|-----------------|----------------
#   categories  | anyone                    | authenticated   | service role
#   apps        | published or developer    | authenticated   | developer
#   ratings     | anyone                    | rater           | rater
#
# The service role passes every check.
#
# Usage:
#   authorize(user, Resource.APPS, Action.UPDATE, row=app)
# =============================================================================

from enum import Enum
from typing import Any, Callable

from app.auth.models import AuthUser
from app.exceptions import (
    AppNotFoundError,
    AuthenticationRequiredError,
    CatalogException,
    ForbiddenError,
)
from core.models.app import AppStatus


class Resource(str, Enum):
    """Relations protected by policies."""
    CATEGORIES = "app_categories"
    APPS = "apps"
    RATINGS = "app_ratings"


class Action(str, Enum):
    """Operations a policy can grant."""
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


Row = dict[str, Any] | None
Rule = Callable[[AuthUser | None, Row], bool]


def _anyone(user: AuthUser | None, row: Row) -> bool:
    return True


def _authenticated(user: AuthUser | None, row: Row) -> bool:
    return user is not None


def _nobody(user: AuthUser | None, row: Row) -> bool:
    # Only the service role, which short-circuits before rules run
    return False


def _is_developer(user: AuthUser | None, row: Row) -> bool:
    return user is not None and row is not None and row.get("developer") == str(user.id)


def _is_published_or_developer(user: AuthUser | None, row: Row) -> bool:
    if row is None:
        return False
    return row.get("status") == AppStatus.PUBLISHED.value or _is_developer(user, row)


def _is_rater(user: AuthUser | None, row: Row) -> bool:
    return user is not None and row is not None and str(row.get("user_id")) == str(user.id)


POLICIES: dict[tuple[Resource, Action], Rule] = {
    (Resource.CATEGORIES, Action.READ): _anyone,
    (Resource.CATEGORIES, Action.CREATE): _authenticated,
    (Resource.CATEGORIES, Action.UPDATE): _nobody,
    (Resource.CATEGORIES, Action.DELETE): _nobody,
    (Resource.APPS, Action.READ): _is_published_or_developer,
    (Resource.APPS, Action.CREATE): _authenticated,
    (Resource.APPS, Action.UPDATE): _is_developer,
    (Resource.APPS, Action.DELETE): _is_developer,
    (Resource.RATINGS, Action.READ): _anyone,
    (Resource.RATINGS, Action.CREATE): _is_rater,
    (Resource.RATINGS, Action.UPDATE): _is_rater,
    (Resource.RATINGS, Action.DELETE): _is_rater,
}


def is_allowed(
    user: AuthUser | None,
    resource: Resource,
    action: Action,
    row: Row = None,
) -> bool:
    """Evaluate the policy for (resource, action) without raising."""
    if user is not None and user.is_service_role:
        return True
    return POLICIES[(resource, action)](user, row)


def authorize(
    user: AuthUser | None,
    resource: Resource,
    action: Action,
    row: Row = None,
    not_found: CatalogException | None = None,
) -> None:
    """
    Enforce the policy for (resource, action) on `row`.

    Args:
        user: The caller, or None when anonymous
        resource: Which relation is being touched
        action: What the caller wants to do
        row: The stored row (or the row about to be written)
        not_found: Error raised when a read is denied, so hidden rows
            look the same as missing ones

    Raises:
        AuthenticationRequiredError: Write attempted without an identity
        ForbiddenError: Write attempted by the wrong identity
        CatalogException: `not_found` (or AppNotFoundError) for denied reads
    """
    if is_allowed(user, resource, action, row):
        return

    if action == Action.READ:
        if not_found is not None:
            raise not_found
        raise AppNotFoundError(str((row or {}).get("id", "")))

    if user is None:
        raise AuthenticationRequiredError()

    raise ForbiddenError(details={"resource": resource.value, "action": action.value})
