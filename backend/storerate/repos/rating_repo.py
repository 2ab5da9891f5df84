from __future__ import annotations

from collections import defaultdict

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from storerate.models.rating import Rating
from storerate.models.store import Store
from storerate.repos.errors import ConflictError, NotFoundError
from storerate.services.trend import RatingSample


class RatingRepo:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, rating_id: int) -> Rating | None:
        res = await self.session.execute(select(Rating).where(Rating.id == rating_id))
        return res.scalar_one_or_none()

    async def get_for_user_and_store(self, user_id: int, store_id: int) -> Rating | None:
        res = await self.session.execute(
            select(Rating).where(Rating.user_id == user_id, Rating.store_id == store_id)
        )
        return res.scalar_one_or_none()

    async def create(self, *, user_id: int, store_id: int, value: int) -> Rating:
        if await self.session.get(Store, store_id) is None:
            raise NotFoundError("Store not found")
        if await self.get_for_user_and_store(user_id, store_id):
            raise ConflictError("You have already rated this store")

        rating = Rating(user_id=user_id, store_id=store_id, value=value)
        self.session.add(rating)
        try:
            await self.session.flush()
        except IntegrityError:
            raise ConflictError("You have already rated this store")
        return rating

    async def update_value(self, rating: Rating, value: int) -> Rating:
        rating.value = value
        await self.session.flush()
        await self.session.refresh(rating)
        return rating

    async def count(self) -> int:
        res = await self.session.execute(select(func.count(Rating.id)))
        return int(res.scalar_one() or 0)

    async def samples_for_store(self, store_id: int) -> list[RatingSample]:
        res = await self.session.execute(
            select(Rating.value, Rating.created_at).where(Rating.store_id == store_id)
        )
        return [RatingSample(value=int(v), created_at=ts) for v, ts in res.all()]

    async def values_for_stores(self, store_ids: list[int]) -> dict[int, list[int]]:
        out: dict[int, list[int]] = defaultdict(list)
        if not store_ids:
            return out
        res = await self.session.execute(
            select(Rating.store_id, Rating.value).where(Rating.store_id.in_(store_ids))
        )
        for sid, v in res.all():
            out[int(sid)].append(int(v))
        return out

    async def values_for_owners(self, owner_ids: list[int]) -> dict[int, list[int]]:
        """All rating values across every store of each owner."""
        out: dict[int, list[int]] = defaultdict(list)
        if not owner_ids:
            return out
        res = await self.session.execute(
            select(Store.owner_id, Rating.value)
            .join(Store, Store.id == Rating.store_id)
            .where(Store.owner_id.in_(owner_ids))
        )
        for oid, v in res.all():
            out[int(oid)].append(int(v))
        return out

    async def user_ratings_by_store(self, user_id: int) -> dict[int, int]:
        res = await self.session.execute(
            select(Rating.store_id, Rating.value).where(Rating.user_id == user_id)
        )
        return {int(sid): int(v) for sid, v in res.all()}

    async def list_for_store(self, store_id: int) -> list[Rating]:
        res = await self.session.execute(
            select(Rating)
            .options(joinedload(Rating.user))
            .where(Rating.store_id == store_id)
            .order_by(Rating.created_at.desc(), Rating.id.desc())
        )
        return list(res.scalars().all())

    async def recent(self, limit: int) -> list[Rating]:
        res = await self.session.execute(
            select(Rating)
            .options(joinedload(Rating.user), joinedload(Rating.store))
            .order_by(Rating.created_at.desc(), Rating.id.desc())
            .limit(limit)
        )
        return list(res.scalars().all())
