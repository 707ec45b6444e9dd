# =============================================================================
# tests/test_policies.py - Row-Level Policy Tests
# =============================================================================
# Run with: pytest tests/test_policies.py -v
# =============================================================================

from uuid import uuid4

import pytest

from app.auth.models import SERVICE_USER, AuthUser
from app.exceptions import (
    AppNotFoundError,
    AuthenticationRequiredError,
    ForbiddenError,
    RatingNotFoundError,
)
from core.policies import Action, Resource, authorize, is_allowed


@pytest.fixture
def developer():
    return AuthUser(id=uuid4())


@pytest.fixture
def stranger():
    return AuthUser(id=uuid4())


def app_row(developer: AuthUser, status: str = "published") -> dict:
    return {"id": str(uuid4()), "developer": str(developer.id), "status": status}


class TestAppPolicies:
    """Read, create, update and delete rules for apps."""

    def test_published_apps_readable_by_anyone(self, developer, stranger):
        row = app_row(developer)

        assert is_allowed(None, Resource.APPS, Action.READ, row)
        assert is_allowed(stranger, Resource.APPS, Action.READ, row)

    @pytest.mark.parametrize("status", ["draft", "archived"])
    def test_unpublished_apps_only_readable_by_developer(self, developer, stranger, status):
        row = app_row(developer, status)

        assert is_allowed(developer, Resource.APPS, Action.READ, row)
        assert not is_allowed(stranger, Resource.APPS, Action.READ, row)
        assert not is_allowed(None, Resource.APPS, Action.READ, row)

    def test_create_requires_identity(self, stranger):
        assert is_allowed(stranger, Resource.APPS, Action.CREATE)
        assert not is_allowed(None, Resource.APPS, Action.CREATE)

    @pytest.mark.parametrize("action", [Action.UPDATE, Action.DELETE])
    def test_only_developer_may_modify(self, developer, stranger, action):
        row = app_row(developer)

        assert is_allowed(developer, Resource.APPS, action, row)
        assert not is_allowed(stranger, Resource.APPS, action, row)
        assert not is_allowed(None, Resource.APPS, action, row)

    def test_missing_row_is_never_modifiable(self, developer):
        assert not is_allowed(developer, Resource.APPS, Action.UPDATE, None)


class TestRatingAndCategoryPolicies:
    """Rules for ratings and categories."""

    def test_ratings_readable_by_anyone(self):
        assert is_allowed(None, Resource.RATINGS, Action.READ, {"user_id": "x"})

    def test_rater_owns_their_rating(self, developer, stranger):
        row = {"user_id": str(developer.id)}

        assert is_allowed(developer, Resource.RATINGS, Action.CREATE, row)
        assert not is_allowed(stranger, Resource.RATINGS, Action.UPDATE, row)
        assert not is_allowed(None, Resource.RATINGS, Action.DELETE, row)

    def test_categories(self, stranger):
        assert is_allowed(None, Resource.CATEGORIES, Action.READ)
        assert is_allowed(stranger, Resource.CATEGORIES, Action.CREATE)
        assert not is_allowed(None, Resource.CATEGORIES, Action.CREATE)
        assert not is_allowed(stranger, Resource.CATEGORIES, Action.DELETE)

    def test_service_role_passes_everything(self, developer):
        row = app_row(developer, "draft")

        for resource in Resource:
            for action in Action:
                assert is_allowed(SERVICE_USER, resource, action, row)


class TestAuthorize:
    """Which error a denied check raises."""

    def test_denied_read_looks_like_missing(self, developer):
        row = app_row(developer, "draft")

        with pytest.raises(AppNotFoundError):
            authorize(None, Resource.APPS, Action.READ, row)

    def test_denied_read_raises_given_not_found(self, developer):
        row = app_row(developer, "draft")

        with pytest.raises(RatingNotFoundError):
            authorize(None, Resource.APPS, Action.READ, row, not_found=RatingNotFoundError("x"))

    def test_anonymous_write_is_unauthorized(self, developer):
        with pytest.raises(AuthenticationRequiredError):
            authorize(None, Resource.APPS, Action.UPDATE, app_row(developer))

    def test_wrong_identity_is_forbidden(self, developer, stranger):
        with pytest.raises(ForbiddenError) as exc_info:
            authorize(stranger, Resource.APPS, Action.DELETE, app_row(developer))

        assert exc_info.value.status_code == 403
        assert exc_info.value.details == {"resource": "apps", "action": "delete"}

    def test_allowed_returns_none(self, developer):
        assert authorize(developer, Resource.APPS, Action.UPDATE, app_row(developer)) is None
