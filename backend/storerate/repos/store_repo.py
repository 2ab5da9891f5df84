from __future__ import annotations

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from storerate.models.enums import UserRole
from storerate.models.store import Store
from storerate.models.user import User
from storerate.repos.errors import NotFoundError, OwnerRoleError

STORE_SORT_COLUMNS = {
    "name": Store.name,
    "email": Store.email,
    "createdAt": Store.created_at,
}


def _store_filters(search: str | None) -> list:
    if not search:
        return []
    like = f"%{search}%"
    return [or_(Store.name.ilike(like), Store.address.ilike(like))]


class StoreRepo:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, store_id: int) -> Store | None:
        res = await self.session.execute(select(Store).where(Store.id == store_id))
        return res.scalar_one_or_none()

    async def get_by_owner(self, owner_id: int) -> Store | None:
        """First store of an owner. The product assumes one store per owner."""
        res = await self.session.execute(
            select(Store).where(Store.owner_id == owner_id).order_by(Store.id).limit(1)
        )
        return res.scalar_one_or_none()

    async def create(self, *, owner_id: int, name: str, email: str, address: str) -> Store:
        owner = await self.session.get(User, owner_id)
        if owner is None:
            raise NotFoundError("Owner not found")
        if owner.role != UserRole.store_owner.value:
            raise OwnerRoleError("User must be a store owner")

        store = Store(owner=owner, name=name, email=email, address=address)
        self.session.add(store)
        await self.session.flush()
        return store

    async def count(self, *, search: str | None = None) -> int:
        q = select(func.count(Store.id))
        cond = _store_filters(search)
        if cond:
            q = q.where(*cond)
        res = await self.session.execute(q)
        return int(res.scalar_one() or 0)

    async def list_filtered(
        self,
        *,
        search: str | None = None,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
    ) -> list[Store]:
        col = STORE_SORT_COLUMNS.get(sort_by, Store.created_at)
        order = col.asc() if sort_order == "asc" else col.desc()
        q = select(Store).options(joinedload(Store.owner)).order_by(order, Store.id)
        cond = _store_filters(search)
        if cond:
            q = q.where(*cond)
        res = await self.session.execute(q)
        return list(res.scalars().all())

    async def recent(self, limit: int) -> list[Store]:
        res = await self.session.execute(
            select(Store)
            .options(joinedload(Store.owner))
            .order_by(Store.created_at.desc(), Store.id.desc())
            .limit(limit)
        )
        return list(res.scalars().all())
