# =============================================================================
# tests/test_ratings_api.py - Rating Endpoint Tests
# =============================================================================
# Run with: pytest tests/test_ratings_api.py -v
# =============================================================================

from uuid import uuid4

import pytest

API = "/api/v1"


@pytest.fixture
def published_app(db):
    return db.add_app("Widget")


class TestRateApp:
    """POST /apps/{id}/rate"""

    def test_requires_authentication(self, client, published_app):
        response = client.post(f"{API}/apps/{published_app['id']}/rate", json={"rating": 5})

        assert response.status_code == 401
        assert response.json()["code"] == "UNAUTHORIZED"

    def test_anonymous_rejected_before_lookup(self, client, db):
        response = client.post(f"{API}/apps/{uuid4()}/rate", json={"rating": 5})

        assert response.status_code == 401
        assert ("apps", "select") not in db.calls

    @pytest.mark.parametrize("body", [{"rating": 6}, {"rating": 0}, {"rating": 4.5}, {"rating": "5"}, {}])
    def test_invalid_rating(self, client, caller, owner, published_app, body):
        caller.login(owner)

        response = client.post(f"{API}/apps/{published_app['id']}/rate", json=body)

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_unknown_app(self, client, caller, owner):
        caller.login(owner)

        response = client.post(f"{API}/apps/{uuid4()}/rate", json={"rating": 5})

        assert response.status_code == 404

    def test_hidden_app_cannot_be_rated(self, client, db, caller, owner, other_user):
        draft = db.add_app("Secret", status="draft", developer=str(owner.id))
        caller.login(other_user)

        response = client.post(f"{API}/apps/{draft['id']}/rate", json={"rating": 5})

        assert response.status_code == 404

    def test_submit_with_review(self, client, db, caller, owner, published_app):
        caller.login(owner)

        response = client.post(
            f"{API}/apps/{published_app['id']}/rate",
            json={"rating": 4, "review": "Solid"},
        )

        assert response.status_code == 200
        rating = response.json()["rating"]
        assert rating["rating"] == 4
        assert rating["review"] == "Solid"
        assert rating["user_id"] == str(owner.id)
        assert rating["app_id"] == published_app["id"]

    def test_second_submission_overwrites(self, client, db, caller, owner, published_app):
        caller.login(owner)
        url = f"{API}/apps/{published_app['id']}/rate"

        client.post(url, json={"rating": 2, "review": "Meh"})
        client.post(url, json={"rating": 5})

        rows = db.tables["app_ratings"]
        assert len(rows) == 1
        assert rows[0]["rating"] == 5
        assert rows[0]["review"] is None

        app = client.get(f"{API}/apps/{published_app['id']}").json()["app"]
        assert app["average_rating"] == 5.0
        assert app["rating_count"] == 1
        assert app["user_rating"] == 5

    def test_ratings_from_several_users_aggregate(
        self, client, caller, owner, other_user, published_app
    ):
        url = f"{API}/apps/{published_app['id']}/rate"
        caller.login(owner)
        client.post(url, json={"rating": 5})
        caller.login(other_user)
        client.post(url, json={"rating": 3})

        apps = client.get(f"{API}/apps").json()["apps"]

        assert apps[0]["average_rating"] == 4.0
        assert apps[0]["rating_count"] == 2


class TestRemoveRating:
    """DELETE /apps/{id}/rate"""

    def test_requires_authentication(self, client, published_app):
        assert client.delete(f"{API}/apps/{published_app['id']}/rate").status_code == 401

    def test_nothing_to_remove(self, client, caller, owner, published_app):
        caller.login(owner)

        response = client.delete(f"{API}/apps/{published_app['id']}/rate")

        assert response.status_code == 404
        assert response.json()["code"] == "RATING_NOT_FOUND"

    def test_removes_only_own_rating(self, client, db, caller, owner, other_user, published_app):
        db.add_rating(published_app, owner.id, 5)
        db.add_rating(published_app, other_user.id, 1)
        caller.login(owner)

        response = client.delete(f"{API}/apps/{published_app['id']}/rate")

        assert response.status_code == 200
        assert response.json() == {"success": True}
        remaining = db.tables["app_ratings"]
        assert [row["user_id"] for row in remaining] == [str(other_user.id)]


class TestListRatings:
    """GET /apps/{id}/ratings"""

    def test_newest_first(self, client, db, owner, other_user, published_app):
        db.add_rating(published_app, owner.id, 5, review="First")
        db.add_rating(published_app, other_user.id, 3, review="Second")

        response = client.get(f"{API}/apps/{published_app['id']}/ratings")

        assert response.status_code == 200
        assert [r["review"] for r in response.json()["ratings"]] == ["Second", "First"]

    def test_hidden_app(self, client, db, owner):
        draft = db.add_app("Secret", status="draft", developer=str(owner.id))

        assert client.get(f"{API}/apps/{draft['id']}/ratings").status_code == 404
