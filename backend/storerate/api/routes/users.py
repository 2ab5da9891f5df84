from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.api.deps import get_db, get_current_user
from storerate.repos.rating_repo import RatingRepo
from storerate.repos.store_repo import StoreRepo
from storerate.schemas.rating import RatingCreate, RatingEnvelope, RatingOut, RatingUpdate
from storerate.schemas.store import StoreOut, UserStoreItem, UserStoreListOut
from storerate.schemas.user import UserEnvelope, UserOut
from storerate.services.aggregation import summarize_ratings

router = APIRouter()
log = logging.getLogger(__name__)


@router.get("/stores", response_model=UserStoreListOut)
async def list_stores(
    search: str | None = Query(None, max_length=255),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    search = (search or "").strip() or None
    stores = await StoreRepo(db).list_filtered(search=search, sort_by="createdAt", sort_order="desc")
    ratings = RatingRepo(db)
    by_store = await ratings.values_for_stores([s.id for s in stores])
    mine = await ratings.user_ratings_by_store(user.id)

    items = []
    for s in stores:
        summary = summarize_ratings(by_store.get(s.id, []))
        items.append(
            UserStoreItem(
                **StoreOut.fields_of(s),
                averageRating=summary.average,
                totalRatings=summary.count,
                userRating=mine.get(s.id),
            )
        )
    return UserStoreListOut(stores=items)


@router.post("/ratings", response_model=RatingEnvelope, status_code=status.HTTP_201_CREATED)
async def create_rating(payload: RatingCreate, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    # Unknown store -> 404, second rating for the same store -> 409.
    rating = await RatingRepo(db).create(user_id=user.id, store_id=payload.storeId, value=payload.rating)
    await db.commit()
    log.info("[ratings] user %s rated store %s with %s", user.id, payload.storeId, payload.rating)
    return RatingEnvelope(rating=RatingOut.from_rating(rating))


@router.put("/ratings/{rating_id}", response_model=RatingEnvelope)
async def update_rating(
    rating_id: int,
    payload: RatingUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    repo = RatingRepo(db)
    rating = await repo.get(rating_id)
    if not rating:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rating not found")
    if rating.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You can only update your own ratings")

    rating = await repo.update_value(rating, payload.rating)
    await db.commit()
    log.info("[ratings] user %s updated rating %s to %s", user.id, rating.id, payload.rating)
    return RatingEnvelope(rating=RatingOut.from_rating(rating))


@router.get("/user/profile", response_model=UserEnvelope)
async def profile(user=Depends(get_current_user)):
    return UserEnvelope(user=UserOut.from_user(user))
