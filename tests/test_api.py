"""
HTTP-level tests: routes, status codes and the error envelope.
"""

import httpx
import pytest
from fastapi import FastAPI

from auth.tokens import TokenCodec
from conftest import bearer, register
from main import create_app


class TestAuthRoutes:
    @pytest.mark.asyncio
    async def test_register_hides_password(self, client):
        body = await register(client, "alice", "alice@x.com", "secret1")
        assert body["success"] is True
        assert set(body["user"]) == {"id", "username", "email"}
        assert "secret1" not in str(body)

    @pytest.mark.asyncio
    async def test_register_missing_field(self, client):
        resp = await client.post("/api/auth/register", json={"username": "a", "email": "a@x.com"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "All fields are required"

    @pytest.mark.asyncio
    async def test_duplicate_email_or_username_conflicts(self, client):
        await register(client, "alice", "alice@x.com", "secret1")
        same_email = await client.post(
            "/api/auth/register",
            json={"username": "alice2", "email": "alice@x.com", "password": "pw"},
        )
        same_username = await client.post(
            "/api/auth/register",
            json={"username": "alice", "email": "other@x.com", "password": "pw"},
        )
        assert same_email.status_code == same_username.status_code == 409
        assert same_email.json()["message"] == same_username.json()["message"] == "User already exists"

    @pytest.mark.asyncio
    async def test_login_failures_are_indistinguishable(self, client):
        await register(client, "alice", "alice@x.com", "secret1")
        wrong = await client.post("/api/auth/login", json={"email": "alice@x.com", "password": "bad"})
        unknown = await client.post("/api/auth/login", json={"email": "nobody@x.com", "password": "bad"})
        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json() == unknown.json()

    @pytest.mark.asyncio
    async def test_long_password_registers_and_logs_in(self, client):
        password = "p" * 100
        await register(client, "longpw", "longpw@x.com", password)
        resp = await client.post(
            "/api/auth/login", json={"email": "longpw@x.com", "password": password}
        )
        assert resp.status_code == 200
        assert resp.json()["user"]["username"] == "longpw"

    @pytest.mark.asyncio
    async def test_login_missing_fields(self, client):
        resp = await client.post("/api/auth/login", json={"email": "alice@x.com"})
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_malformed_body(self, client):
        resp = await client.post(
            "/api/auth/login",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json()["success"] is False


class TestQRRoutes:
    @pytest.mark.asyncio
    async def test_requires_token(self, client):
        resp = await client.get("/api/qr/history")
        assert resp.status_code == 401
        assert resp.json()["message"] == "Authorization header is missing"

    @pytest.mark.asyncio
    async def test_generate_missing_url(self, client):
        token = (await register(client, "alice", "alice@x.com", "secret1"))["token"]
        resp = await client.post("/api/qr/generate", json={"name": "x"}, headers=bearer(token))
        assert resp.status_code == 400
        assert resp.json()["message"] == "URL is required"

    @pytest.mark.asyncio
    async def test_end_to_end_scenario(self, client, settings):
        registered = await register(client, "alice", "alice@x.com", "secret1")
        alice_id = registered["user"]["id"]

        login = await client.post(
            "/api/auth/login", json={"email": "alice@x.com", "password": "secret1"}
        )
        assert login.status_code == 200
        token = login.json()["token"]
        codec = TokenCodec.from_settings(settings)
        assert codec.verify(token)["id"] == alice_id

        created = await client.post(
            "/api/qr/generate", json={"url": "https://example.com"}, headers=bearer(token)
        )
        assert created.status_code == 201
        record = created.json()
        assert record["user_id"] == alice_id
        assert record["name"] == "Untitled QR"
        assert record["image_url"].startswith("data:image/png;base64,")

        history = await client.get("/api/qr/history", headers=bearer(token))
        assert history.status_code == 200
        assert [r["id"] for r in history.json()] == [record["id"]]

        bob_token = (await register(client, "bob", "bob@x.com", "hunter2"))["token"]
        stolen = await client.delete(f"/api/qr/{record['id']}", headers=bearer(bob_token))
        assert stolen.status_code == 404
        assert stolen.json()["message"] == "QR not found or not authorized"

        removed = await client.delete(f"/api/qr/{record['id']}", headers=bearer(token))
        assert removed.status_code == 200
        assert removed.json() == {"success": True, "id": record["id"]}

        history = await client.get("/api/qr/history", headers=bearer(token))
        assert history.json() == []

    @pytest.mark.asyncio
    async def test_delete_nonexistent_matches_foreign(self, client):
        token = (await register(client, "alice", "alice@x.com", "secret1"))["token"]
        resp = await client.delete("/api/qr/not-a-real-id", headers=bearer(token))
        assert resp.status_code == 404
        assert resp.json()["message"] == "QR not found or not authorized"


class TestServiceRoutes:
    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/api/health")
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["message"] == "Backend is running"
        assert body["timestamp"]

    @pytest.mark.asyncio
    async def test_root(self, client):
        resp = await client.get("/")
        assert resp.text == "Backend is running"

    @pytest.mark.asyncio
    async def test_cors_allows_any_localhost_port(self, client):
        resp = await client.get("/api/health", headers={"Origin": "http://localhost:5173"})
        assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"
        resp = await client.get("/api/health", headers={"Origin": "https://evil.example"})
        assert "access-control-allow-origin" not in resp.headers


def _app_with_failing_route(settings, database) -> FastAPI:
    app = create_app(settings, database)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("kaboom")

    return app


class TestErrorEnvelope:
    @pytest.mark.asyncio
    async def test_unhandled_error_includes_detail_outside_production(self, settings, database):
        app = _app_with_failing_route(settings, database)
        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
            resp = await ac.get("/boom")
        assert resp.status_code == 500
        assert resp.json() == {"success": False, "message": "Internal server error", "error": "kaboom"}

    @pytest.mark.asyncio
    async def test_production_hides_detail(self, settings, database):
        prod = settings.model_copy(update={"environment": "production"})
        app = _app_with_failing_route(prod, database)
        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
            resp = await ac.get("/boom")
            guarded = await ac.get("/api/qr/history", headers={"Authorization": "Bearer junk"})
        assert resp.json() == {"success": False, "message": "Internal server error"}
        assert guarded.json() == {"success": False, "message": "Invalid or expired token"}
