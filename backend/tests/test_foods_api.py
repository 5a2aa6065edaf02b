"""
FoodShelf Backend — Foods Endpoint Tests
==========================================

What:  End-to-end tests of the /foods routes against an in-memory SQLite
       database (see conftest.test_client).
How:   HTTPX AsyncClient through ASGITransport; users and foods are seeded
       directly in the database, then exercised over HTTP.

What we test:
    ✅ Public reads: list (empty and populated), show, 404s
    ✅ Create: token required, owner forced to the caller, schema errors
    ✅ Update: blank fields ignored, owner immutable, owner-only
    ✅ Destroy: owner-only, second delete is 404
    ✅ Error bodies carry the request ID
"""

import uuid

import pytest

from foodshelf.models import User


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {user.token}"}


class TestListFoods:

    @pytest.mark.asyncio
    async def test_empty_store_returns_empty_list(self, test_client):
        response = await test_client.get("/foods")

        assert response.status_code == 200
        assert response.json() == {"foods": []}

    @pytest.mark.asyncio
    async def test_owners_are_populated(self, test_client, alice, bob, make_food):
        await make_food(alice, title="Soup")
        await make_food(bob, title="Bread")

        response = await test_client.get("/foods")

        assert response.status_code == 200
        foods = response.json()["foods"]
        assert {f["title"] for f in foods} == {"Soup", "Bread"}
        owners = {f["title"]: f["owner"] for f in foods}
        assert owners["Soup"]["id"] == str(alice.id)
        assert owners["Soup"]["email"] == "alice@example.com"
        assert owners["Bread"]["id"] == str(bob.id)
        assert "token" not in owners["Soup"]


class TestShowFood:

    @pytest.mark.asyncio
    async def test_existing_id_returns_food(self, test_client, alice, make_food):
        food = await make_food(alice)

        response = await test_client.get(f"/foods/{food.id}")

        assert response.status_code == 200
        body = response.json()["food"]
        assert body["id"] == str(food.id)
        assert body["title"] == "Soup"
        assert body["owner"]["id"] == str(alice.id)

    @pytest.mark.asyncio
    async def test_unknown_id_returns_404(self, test_client):
        response = await test_client.get(f"/foods/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_malformed_id_returns_404(self, test_client):
        response = await test_client.get("/foods/5a7db6c74d55bc51bdf39793")

        assert response.status_code == 404


class TestCreateFood:

    @pytest.mark.asyncio
    async def test_requires_token(self, test_client):
        response = await test_client.post("/foods", json={"food": {"title": "Soup"}})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["error"] == "unauthorized"

    @pytest.mark.asyncio
    async def test_rejects_unknown_token(self, test_client):
        response = await test_client.post(
            "/foods",
            json={"food": {"title": "Soup"}},
            headers={"Authorization": "Bearer not-a-real-token"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_owner_is_caller(self, test_client, alice):
        response = await test_client.post(
            "/foods", json={"food": {"title": "Soup"}}, headers=auth_headers(alice)
        )

        assert response.status_code == 201
        body = response.json()["food"]
        assert body["owner"] == str(alice.id)
        assert body["title"] == "Soup"
        assert body["text"] is None

    @pytest.mark.asyncio
    async def test_client_supplied_owner_is_ignored(self, test_client, alice, bob, fetch_food):
        response = await test_client.post(
            "/foods",
            json={"food": {"title": "Soup", "owner": str(bob.id)}},
            headers=auth_headers(alice),
        )

        assert response.status_code == 201
        body = response.json()["food"]
        assert body["owner"] == str(alice.id)
        stored = await fetch_food(uuid.UUID(body["id"]))
        assert stored.owner_id == alice.id

    @pytest.mark.asyncio
    async def test_created_food_is_readable(self, test_client, alice):
        created = await test_client.post(
            "/foods", json={"food": {"title": "Soup", "text": "Hot"}}, headers=auth_headers(alice)
        )
        food_id = created.json()["food"]["id"]

        response = await test_client.get(f"/foods/{food_id}")

        assert response.status_code == 200
        assert response.json()["food"]["text"] == "Hot"

    @pytest.mark.asyncio
    async def test_missing_title_is_422(self, test_client, alice):
        response = await test_client.post(
            "/foods", json={"food": {"text": "no title"}}, headers=auth_headers(alice)
        )

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_empty_title_is_422(self, test_client, alice):
        response = await test_client.post(
            "/foods", json={"food": {"title": ""}}, headers=auth_headers(alice)
        )

        assert response.status_code == 422


class TestUpdateFood:

    @pytest.mark.asyncio
    async def test_requires_token(self, test_client, alice, make_food):
        food = await make_food(alice)

        response = await test_client.patch(f"/foods/{food.id}", json={"food": {"title": "Stew"}})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_blank_fields_leave_values_unchanged(self, test_client, alice, make_food, fetch_food):
        food = await make_food(alice, title="Soup", text="Hot")

        response = await test_client.patch(
            f"/foods/{food.id}",
            json={"food": {"title": "", "text": "ok"}},
            headers=auth_headers(alice),
        )

        assert response.status_code == 204
        assert response.content == b""
        stored = await fetch_food(food.id)
        assert stored.title == "Soup"
        assert stored.text == "ok"

    @pytest.mark.asyncio
    async def test_owner_cannot_be_reassigned(self, test_client, alice, bob, make_food, fetch_food):
        food = await make_food(alice)

        response = await test_client.patch(
            f"/foods/{food.id}",
            json={"food": {"owner": str(bob.id)}},
            headers=auth_headers(alice),
        )

        assert response.status_code == 204
        stored = await fetch_food(food.id)
        assert stored.owner_id == alice.id

    @pytest.mark.asyncio
    async def test_non_owner_is_forbidden(self, test_client, alice, bob, make_food, fetch_food):
        food = await make_food(alice, title="Soup")

        response = await test_client.patch(
            f"/foods/{food.id}",
            json={"food": {"title": "Stolen"}},
            headers=auth_headers(bob),
        )

        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"
        stored = await fetch_food(food.id)
        assert stored.title == "Soup"

    @pytest.mark.asyncio
    async def test_unknown_id_returns_404(self, test_client, alice):
        response = await test_client.patch(
            f"/foods/{uuid.uuid4()}",
            json={"food": {"title": "Stew"}},
            headers=auth_headers(alice),
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_null_title_is_422(self, test_client, alice, make_food, fetch_food):
        food = await make_food(alice)

        response = await test_client.patch(
            f"/foods/{food.id}",
            json={"food": {"title": None}},
            headers=auth_headers(alice),
        )

        assert response.status_code == 422
        stored = await fetch_food(food.id)
        assert stored.title == "Soup"

    @pytest.mark.asyncio
    async def test_missing_envelope_is_422(self, test_client, alice, make_food):
        food = await make_food(alice)

        response = await test_client.patch(
            f"/foods/{food.id}", json={"title": "Stew"}, headers=auth_headers(alice)
        )

        assert response.status_code == 422


class TestDeleteFood:

    @pytest.mark.asyncio
    async def test_requires_token(self, test_client, alice, make_food):
        food = await make_food(alice)

        response = await test_client.delete(f"/foods/{food.id}")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_owner_deletes_then_404(self, test_client, alice, make_food, fetch_food):
        food = await make_food(alice)

        first = await test_client.delete(f"/foods/{food.id}", headers=auth_headers(alice))
        second = await test_client.delete(f"/foods/{food.id}", headers=auth_headers(alice))

        assert first.status_code == 204
        assert second.status_code == 404
        assert await fetch_food(food.id) is None

    @pytest.mark.asyncio
    async def test_non_owner_is_forbidden(self, test_client, alice, bob, make_food, fetch_food):
        food = await make_food(alice)

        response = await test_client.delete(f"/foods/{food.id}", headers=auth_headers(bob))

        assert response.status_code == 403
        assert await fetch_food(food.id) is not None


class TestCrossCutting:

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/foods", headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, test_client):
        response = await test_client.get(
            f"/foods/{uuid.uuid4()}", headers={"X-Request-ID": "trace-me"}
        )

        assert response.json()["request_id"] == "trace-me"

    @pytest.mark.asyncio
    async def test_health_reports_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
