# =============================================================================
# tests/test_categories_api.py - Category Endpoint Tests
# =============================================================================
# Run with: pytest tests/test_categories_api.py -v
# =============================================================================

API = "/api/v1"


class TestListCategories:
    """GET /categories"""

    def test_alphabetical(self, client, db):
        db.add_category("Productivity")
        db.add_category("Content")
        db.add_category("Marketing")

        response = client.get(f"{API}/categories")

        assert response.status_code == 200
        names = [c["name"] for c in response.json()["categories"]]
        assert names == ["Content", "Marketing", "Productivity"]

    def test_empty(self, client):
        assert client.get(f"{API}/categories").json() == {"categories": []}


class TestCreateCategory:
    """POST /categories"""

    def test_requires_authentication(self, client):
        response = client.post(f"{API}/categories", json={"name": "Games"})

        assert response.status_code == 401

    def test_create(self, client, db, caller, owner):
        caller.login(owner)

        response = client.post(
            f"{API}/categories",
            json={"name": "Data Tools", "description": "Crunch numbers", "icon": "chart"},
        )

        assert response.status_code == 201
        category = response.json()["category"]
        assert category["slug"] == "data-tools"
        assert category["icon"] == "chart"
        assert db.find("app_categories", "slug", "data-tools") is not None

    def test_duplicate_slug(self, client, db, caller, owner):
        db.add_category("Games")
        caller.login(owner)

        response = client.post(f"{API}/categories", json={"name": "  GAMES "})

        assert response.status_code == 409
        assert response.json()["code"] == "SLUG_CONFLICT"

    def test_name_without_slug_characters(self, client, caller, owner):
        caller.login(owner)

        response = client.post(f"{API}/categories", json={"name": "???"})

        assert response.status_code == 400
