from __future__ import annotations

from sqlalchemy import select, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.models.enums import UserRole
from storerate.models.user import User
from storerate.repos.errors import ConflictError

USER_SORT_COLUMNS = {
    "name": User.name,
    "email": User.email,
    "createdAt": User.created_at,
}


def _user_filters(search: str | None, role: str | None) -> list:
    cond = []
    if search:
        like = f"%{search}%"
        cond.append(or_(User.name.ilike(like), User.email.ilike(like), User.address.ilike(like)))
    if role:
        cond.append(User.role == role)
    return cond


class UserRepo:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> User | None:
        res = await self.session.execute(select(User).where(User.email == email))
        return res.scalar_one_or_none()

    async def get(self, user_id: int) -> User | None:
        res = await self.session.execute(select(User).where(User.id == user_id))
        return res.scalar_one_or_none()

    async def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        address: str | None = None,
        role: str = UserRole.normal_user.value,
    ) -> User:
        if await self.get_by_email(email):
            raise ConflictError("User with this email already exists")
        user = User(name=name, email=email, password_hash=password_hash, address=address or None, role=role)
        self.session.add(user)
        try:
            await self.session.flush()
        except IntegrityError:
            raise ConflictError("User with this email already exists")
        return user

    async def set_password(self, user: User, password_hash: str) -> None:
        user.password_hash = password_hash
        await self.session.flush()

    async def count(self, *, search: str | None = None, role: str | None = None) -> int:
        q = select(func.count(User.id))
        cond = _user_filters(search, role)
        if cond:
            q = q.where(*cond)
        res = await self.session.execute(q)
        return int(res.scalar_one() or 0)

    async def list_filtered(
        self,
        *,
        search: str | None = None,
        role: str | None = None,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
    ) -> list[User]:
        col = USER_SORT_COLUMNS.get(sort_by, User.created_at)
        order = col.asc() if sort_order == "asc" else col.desc()
        q = select(User).order_by(order, User.id)
        cond = _user_filters(search, role)
        if cond:
            q = q.where(*cond)
        res = await self.session.execute(q)
        return list(res.scalars().all())

    async def recent(self, limit: int) -> list[User]:
        res = await self.session.execute(select(User).order_by(User.created_at.desc(), User.id.desc()).limit(limit))
        return list(res.scalars().all())
