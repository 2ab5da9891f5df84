from __future__ import annotations

from datetime import datetime, timedelta, timezone

from storerate.models.enums import UserRole


def days_ago(n: int) -> datetime:
    return datetime.now(timezone.utc) - timedelta(days=n)


async def test_dashboard_for_new_store(client, seed, auth):
    owner = await seed.user(role=UserRole.store_owner.value)
    store = await seed.store(owner)
    for i, value in enumerate([5, 5, 4, 4, 3]):
        rater = await seed.user()
        await seed.rating(rater, store, value, created_at=days_ago(i + 1))

    r = await client.get("/api/store-owner/dashboard", headers=auth(owner))
    assert r.status_code == 200, r.text
    assert r.json() == {"averageRating": 4.2, "totalReviews": 5, "trend": "up"}


async def test_dashboard_rounds_and_detects_decline(client, seed, auth):
    owner = await seed.user(role=UserRole.store_owner.value)
    store = await seed.store(owner)
    for value, age in [(5, 45), (5, 50), (3, 3), (4, 4), (4, 100), (5, 200)]:
        rater = await seed.user()
        await seed.rating(rater, store, value, created_at=days_ago(age))

    r = await client.get("/api/store-owner/dashboard", headers=auth(owner))
    body = r.json()
    # 26 / 6 = 4.333...
    assert body["averageRating"] == 4.3
    assert body["totalReviews"] == 6
    assert body["trend"] == "down"


async def test_dashboard_without_ratings(client, seed, auth):
    owner = await seed.user(role=UserRole.store_owner.value)
    await seed.store(owner)
    r = await client.get("/api/store-owner/dashboard", headers=auth(owner))
    assert r.json() == {"averageRating": 0.0, "totalReviews": 0, "trend": "stable"}


async def test_dashboard_requires_a_store(client, seed, auth):
    owner = await seed.user(role=UserRole.store_owner.value)
    r = await client.get("/api/store-owner/dashboard", headers=auth(owner))
    assert r.status_code == 404


async def test_dashboard_requires_store_owner_role(client, seed, auth):
    user = await seed.user()
    r = await client.get("/api/store-owner/dashboard", headers=auth(user))
    assert r.status_code == 403


async def test_ratings_list_newest_first_with_rater(client, seed, auth):
    owner = await seed.user(role=UserRole.store_owner.value)
    store = await seed.store(owner)
    old_rater = await seed.user(name="Early Bird Reviewer")
    new_rater = await seed.user(name="Late Night Reviewer")
    await seed.rating(old_rater, store, 2, created_at=days_ago(10))
    await seed.rating(new_rater, store, 5, created_at=days_ago(1))

    r = await client.get("/api/store-owner/ratings", headers=auth(owner))
    assert r.status_code == 200
    ratings = r.json()["ratings"]
    assert [x["user"]["name"] for x in ratings] == ["Late Night Reviewer", "Early Bird Reviewer"]
    assert ratings[0]["rating"] == 5
    assert set(ratings[0]["user"]) == {"id", "name", "email"}
