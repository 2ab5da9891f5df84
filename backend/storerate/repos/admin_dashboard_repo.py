from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from storerate.repos.rating_repo import RatingRepo
from storerate.repos.store_repo import StoreRepo
from storerate.repos.user_repo import UserRepo
from storerate.services.activity import (
    RECENT_ACTIVITY_LIMIT,
    Activity,
    RatingEvent,
    StoreEvent,
    UserEvent,
    merge_activities,
)


class AdminDashboardRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def totals(self) -> dict:
        return {
            "totalUsers": await UserRepo(self.db).count(),
            "totalStores": await StoreRepo(self.db).count(),
            "totalRatings": await RatingRepo(self.db).count(),
        }

    async def recent_users(self, limit: int = RECENT_ACTIVITY_LIMIT) -> list[UserEvent]:
        users = await UserRepo(self.db).recent(limit)
        return [UserEvent(id=u.id, name=u.name, email=u.email, role=u.role, created_at=u.created_at) for u in users]

    async def recent_stores(self, limit: int = RECENT_ACTIVITY_LIMIT) -> list[StoreEvent]:
        stores = await StoreRepo(self.db).recent(limit)
        return [
            StoreEvent(id=s.id, name=s.name, email=s.email, owner_name=s.owner.name, created_at=s.created_at)
            for s in stores
        ]

    async def recent_ratings(self, limit: int = RECENT_ACTIVITY_LIMIT) -> list[RatingEvent]:
        ratings = await RatingRepo(self.db).recent(limit)
        return [
            RatingEvent(id=r.id, value=r.value, user_name=r.user.name, store_name=r.store.name, created_at=r.created_at)
            for r in ratings
        ]

    async def recent_activity(self, limit: int = RECENT_ACTIVITY_LIMIT) -> list[Activity]:
        return merge_activities(
            await self.recent_users(limit),
            await self.recent_stores(limit),
            await self.recent_ratings(limit),
            limit=limit,
        )
