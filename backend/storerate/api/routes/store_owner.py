from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.api.access import require_store_owner
from storerate.api.deps import get_db
from storerate.repos.rating_repo import RatingRepo
from storerate.repos.store_repo import StoreRepo
from storerate.schemas.dashboard import StoreOwnerDashboardOut
from storerate.schemas.rating import RaterBrief, RatingOut, StoreRatingItem, StoreRatingListOut
from storerate.services.aggregation import summarize_ratings
from storerate.services.trend import rating_trend

router = APIRouter()


async def _owned_store(db: AsyncSession, user):
    store = await StoreRepo(db).get_by_owner(user.id)
    if not store:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No store found for this owner")
    return store


@router.get("/dashboard", response_model=StoreOwnerDashboardOut)
async def dashboard(db: AsyncSession = Depends(get_db), user=Depends(require_store_owner)):
    store = await _owned_store(db, user)
    samples = await RatingRepo(db).samples_for_store(store.id)

    summary = summarize_ratings(s.value for s in samples).rounded()
    trend = rating_trend(samples, datetime.now(timezone.utc))
    return StoreOwnerDashboardOut(averageRating=summary.average, totalReviews=summary.count, trend=trend)


@router.get("/ratings", response_model=StoreRatingListOut)
async def ratings(db: AsyncSession = Depends(get_db), user=Depends(require_store_owner)):
    store = await _owned_store(db, user)
    rows = await RatingRepo(db).list_for_store(store.id)
    return StoreRatingListOut(
        ratings=[
            StoreRatingItem(
                **RatingOut.fields_of(r),
                user=RaterBrief(id=r.user.id, name=r.user.name, email=r.user.email),
            )
            for r in rows
        ]
    )
