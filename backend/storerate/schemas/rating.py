from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel, Field


class RatingCreate(BaseModel):
    storeId: int
    rating: int = Field(ge=1, le=5)


class RatingUpdate(BaseModel):
    rating: int = Field(ge=1, le=5)


class RatingOut(BaseModel):
    id: int
    userId: int
    storeId: int
    rating: int
    createdAt: datetime
    updatedAt: datetime

    @classmethod
    def fields_of(cls, r) -> dict:
        return {
            "id": r.id,
            "userId": r.user_id,
            "storeId": r.store_id,
            "rating": r.value,
            "createdAt": r.created_at,
            "updatedAt": r.updated_at,
        }

    @classmethod
    def from_rating(cls, r) -> "RatingOut":
        return cls(**cls.fields_of(r))


class RatingEnvelope(BaseModel):
    rating: RatingOut


class RaterBrief(BaseModel):
    id: int
    name: str
    email: str


class StoreRatingItem(RatingOut):
    user: RaterBrief


class StoreRatingListOut(BaseModel):
    ratings: list[StoreRatingItem] = []
