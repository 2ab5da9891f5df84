from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.api.access import require_system_admin
from storerate.api.deps import get_db
from storerate.core.security import hash_password
from storerate.models.enums import UserRole, ROLE_PATTERN, SORT_BY_PATTERN, SORT_ORDER_PATTERN
from storerate.repos.admin_dashboard_repo import AdminDashboardRepo
from storerate.repos.rating_repo import RatingRepo
from storerate.repos.store_repo import StoreRepo
from storerate.repos.user_repo import UserRepo
from storerate.schemas.dashboard import AdminDashboardOut, ActivityOut, RecentActivityOut
from storerate.schemas.store import (
    AdminStoreItem,
    AdminStoreListOut,
    OwnerBrief,
    StoreCreate,
    StoreEnvelope,
    StoreOut,
    StoreWithOwner,
)
from storerate.schemas.user import UserCreate, UserDetailOut, UserEnvelope, UserListItem, UserListOut, UserOut
from storerate.services.aggregation import summarize_ratings

router = APIRouter()
log = logging.getLogger(__name__)


@router.get("/dashboard", response_model=AdminDashboardOut)
async def dashboard(db: AsyncSession = Depends(get_db), user=Depends(require_system_admin)):
    data = await AdminDashboardRepo(db).totals()
    return AdminDashboardOut(**data)


@router.get("/recent-activity", response_model=RecentActivityOut)
async def recent_activity(db: AsyncSession = Depends(get_db), user=Depends(require_system_admin)):
    activities = await AdminDashboardRepo(db).recent_activity()
    return RecentActivityOut(activities=[ActivityOut.from_activity(a) for a in activities])


@router.get("/users", response_model=UserListOut)
async def list_users(
    search: str | None = Query(None, max_length=255),
    role: str | None = Query(None, pattern=ROLE_PATTERN),
    sortBy: str = Query("createdAt", pattern=SORT_BY_PATTERN),
    sortOrder: str = Query("desc", pattern=SORT_ORDER_PATTERN),
    db: AsyncSession = Depends(get_db),
    user=Depends(require_system_admin),
):
    search = (search or "").strip() or None
    repo = UserRepo(db)
    users = await repo.list_filtered(search=search, role=role, sort_by=sortBy, sort_order=sortOrder)

    owner_ids = [u.id for u in users if u.role == UserRole.store_owner.value]
    by_owner = await RatingRepo(db).values_for_owners(owner_ids)

    items: list[UserListItem] = []
    for u in users:
        base = UserOut.from_user(u).model_dump()
        if u.role == UserRole.store_owner.value:
            summary = summarize_ratings(by_owner.get(u.id, [])).rounded()
            items.append(UserListItem(**base, averageRating=summary.average, totalRatings=summary.count))
        else:
            items.append(UserListItem(**base))

    total = await repo.count(search=search, role=role)
    return UserListOut(users=items, total=total)


@router.post("/users", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserCreate, db: AsyncSession = Depends(get_db), user=Depends(require_system_admin)):
    # Duplicate email -> 409 from UserRepo.create.
    u = await UserRepo(db).create(
        name=payload.name,
        email=payload.email,
        password_hash=hash_password(payload.password),
        address=payload.address,
        role=payload.role.value,
    )
    await db.commit()
    log.info("[admin] user %s created %s user %s", user.id, u.role, u.id)
    return UserEnvelope(user=UserOut.from_user(u))


@router.get("/users/{user_id}", response_model=UserDetailOut)
async def get_user(user_id: int, db: AsyncSession = Depends(get_db), user=Depends(require_system_admin)):
    u = await UserRepo(db).get(user_id)
    if not u:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    # Rating of the user's first store, unrounded; absent when the store has no ratings.
    store_rating: float | None = None
    store = await StoreRepo(db).get_by_owner(u.id)
    if store is not None:
        values = (await RatingRepo(db).values_for_stores([store.id])).get(store.id, [])
        summary = summarize_ratings(values)
        if summary.count > 0:
            store_rating = summary.average

    return UserDetailOut(user=UserOut.from_user(u), storeRating=store_rating)


@router.get("/stores", response_model=AdminStoreListOut)
async def list_stores(
    search: str | None = Query(None, max_length=255),
    sortBy: str = Query("createdAt", pattern=SORT_BY_PATTERN),
    sortOrder: str = Query("desc", pattern=SORT_ORDER_PATTERN),
    db: AsyncSession = Depends(get_db),
    user=Depends(require_system_admin),
):
    search = (search or "").strip() or None
    repo = StoreRepo(db)
    stores = await repo.list_filtered(search=search, sort_by=sortBy, sort_order=sortOrder)
    by_store = await RatingRepo(db).values_for_stores([s.id for s in stores])

    items = []
    for s in stores:
        summary = summarize_ratings(by_store.get(s.id, []))
        items.append(
            AdminStoreItem(
                **StoreOut.fields_of(s),
                owner=OwnerBrief(name=s.owner.name, email=s.owner.email),
                averageRating=summary.average,
                totalRatings=summary.count,
            )
        )
    total = await repo.count(search=search)
    return AdminStoreListOut(stores=items, total=total)


@router.post("/stores", response_model=StoreEnvelope, status_code=status.HTTP_201_CREATED)
async def create_store(payload: StoreCreate, db: AsyncSession = Depends(get_db), user=Depends(require_system_admin)):
    # Missing owner -> 404, non-owner role -> 400 (see exception handlers in main).
    s = await StoreRepo(db).create(owner_id=payload.ownerId, name=payload.name, email=payload.email, address=payload.address)
    await db.commit()
    log.info("[admin] user %s created store %s for owner %s", user.id, s.id, s.owner_id)
    return StoreEnvelope(
        store=StoreWithOwner(**StoreOut.fields_of(s), owner=OwnerBrief(name=s.owner.name, email=s.owner.email))
    )
