from __future__ import annotations

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from storerate.api.deps import get_db
from storerate.main import app
from storerate.models.enums import UserRole

NAME = "Alexandra Testington-Smythe"


async def test_register_creates_normal_user(client):
    r = await client.post(
        "/api/auth/register",
        json={"name": NAME, "email": "Alex@Example.com", "password": "Strong#Pass1", "address": "12 High St"},
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["token"]
    assert body["user"]["email"] == "alex@example.com"
    assert body["user"]["role"] == UserRole.normal_user.value
    assert "password_hash" not in body["user"]
    assert "createdAt" in body["user"]


async def test_register_duplicate_email_conflicts(client):
    payload = {"name": NAME, "email": "dup@example.com", "password": "Strong#Pass1"}
    assert (await client.post("/api/auth/register", json=payload)).status_code == 201
    r = await client.post("/api/auth/register", json=payload)
    assert r.status_code == 409


async def test_register_validation(client):
    short_name = {"name": "Too Short", "email": "a@example.com", "password": "Strong#Pass1"}
    assert (await client.post("/api/auth/register", json=short_name)).status_code == 422

    weak = {"name": NAME, "email": "b@example.com", "password": "weakpassword"}
    assert (await client.post("/api/auth/register", json=weak)).status_code == 422

    long_pw = {"name": NAME, "email": "c@example.com", "password": "Strong#Pass1234567"}
    assert (await client.post("/api/auth/register", json=long_pw)).status_code == 422

    bad_email = {"name": NAME, "email": "not-an-email", "password": "Strong#Pass1"}
    assert (await client.post("/api/auth/register", json=bad_email)).status_code == 422


async def test_login_and_me(client, seed):
    u = await seed.user(email="login@example.com")
    r = await client.post("/api/auth/login", json={"email": "login@example.com", "password": seed.password})
    assert r.status_code == 200, r.text
    token = r.json()["token"]

    me = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["user"]["id"] == u.id


async def test_login_rejects_wrong_password(client, seed):
    await seed.user(email="wrong@example.com")
    r = await client.post("/api/auth/login", json={"email": "wrong@example.com", "password": "Other#Pass1"})
    assert r.status_code == 401


async def test_missing_or_bad_token(client):
    assert (await client.get("/api/auth/me")).status_code == 401
    r = await client.get("/api/auth/me", headers={"Authorization": "Bearer nonsense"})
    assert r.status_code == 401


async def test_change_password(client, seed, auth):
    u = await seed.user(email="change@example.com")
    r = await client.put(
        "/api/auth/change-password",
        json={"currentPassword": "Not#Current1", "newPassword": "Fresh#Pass12"},
        headers=auth(u),
    )
    assert r.status_code == 401

    r = await client.put(
        "/api/auth/change-password",
        json={"currentPassword": seed.password, "newPassword": "Fresh#Pass12"},
        headers=auth(u),
    )
    assert r.status_code == 200
    assert r.json() == {"message": "Password updated successfully"}

    r = await client.post("/api/auth/login", json={"email": "change@example.com", "password": "Fresh#Pass12"})
    assert r.status_code == 200


async def test_health(client):
    r = await client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["status"] == "OK"
    assert r.json()["db"] == "connected"


async def test_health_reports_unreachable_database(client):
    engine = create_async_engine("postgresql+asyncpg://u:p@127.0.0.1:1/db")
    unreachable = async_sessionmaker(bind=engine)

    async def _get_db():
        async with unreachable() as s:
            yield s

    app.dependency_overrides[get_db] = _get_db
    try:
        r = await client.get("/api/health")
    finally:
        await engine.dispose()

    assert r.status_code == 200
    assert r.json()["status"] == "OK"
    assert r.json()["db"] == "disconnected"
