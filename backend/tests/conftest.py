from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("CORS_ORIGINS", "*")

from datetime import datetime, timezone

import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from storerate.api.deps import get_db
from storerate.core.security import create_user_token, hash_password
from storerate.main import app
from storerate.models import Base, Rating, Store, User
from storerate.models.enums import UserRole

PASSWORD = "Secret#Pass1"


@pytest.fixture
async def session_maker():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def client(session_maker):
    async def _get_db():
        async with session_maker() as s:
            yield s

    app.dependency_overrides[get_db] = _get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


class Seeder:
    """Writes rows straight through the ORM so tests control timestamps."""

    def __init__(self, session_maker):
        self.session_maker = session_maker
        self.password = PASSWORD
        self._n = 0

    async def _add(self, obj):
        async with self.session_maker() as s:
            s.add(obj)
            await s.commit()
        return obj

    async def user(
        self,
        *,
        role: str = UserRole.normal_user.value,
        name: str | None = None,
        email: str | None = None,
        address: str | None = None,
        created_at: datetime | None = None,
    ) -> User:
        self._n += 1
        return await self._add(
            User(
                name=name or f"Seeded Person Number {self._n:03d}",
                email=email or f"user{self._n}@example.com",
                address=address,
                password_hash=hash_password(PASSWORD),
                role=role,
                created_at=created_at or datetime.now(timezone.utc),
            )
        )

    async def store(
        self,
        owner: User,
        *,
        name: str | None = None,
        address: str = "1 Main Street",
        created_at: datetime | None = None,
    ) -> Store:
        self._n += 1
        return await self._add(
            Store(
                owner_id=owner.id,
                name=name or f"Store {self._n}",
                email=f"store{self._n}@example.com",
                address=address,
                created_at=created_at or datetime.now(timezone.utc),
            )
        )

    async def rating(self, user: User, store: Store, value: int, *, created_at: datetime | None = None) -> Rating:
        return await self._add(
            Rating(
                user_id=user.id,
                store_id=store.id,
                value=value,
                created_at=created_at or datetime.now(timezone.utc),
            )
        )


@pytest.fixture
def seed(session_maker) -> Seeder:
    return Seeder(session_maker)


@pytest.fixture
def auth():
    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_user_token(user)}"}

    return _headers
