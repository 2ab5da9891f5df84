from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, field_validator

from storerate.schemas.validators import normalize_email, strip_str


class StoreCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    address: str = Field(min_length=1, max_length=400)
    ownerId: int

    @field_validator("name", "address", mode="before")
    @classmethod
    def _strip(cls, v):
        return strip_str(v)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return normalize_email(v)


class OwnerBrief(BaseModel):
    name: str
    email: str


class StoreOut(BaseModel):
    id: int
    name: str
    email: str
    address: str
    ownerId: int
    createdAt: datetime
    updatedAt: datetime

    @classmethod
    def fields_of(cls, s) -> dict:
        return {
            "id": s.id,
            "name": s.name,
            "email": s.email,
            "address": s.address,
            "ownerId": s.owner_id,
            "createdAt": s.created_at,
            "updatedAt": s.updated_at,
        }

    @classmethod
    def from_store(cls, s) -> "StoreOut":
        return cls(**cls.fields_of(s))


class StoreWithOwner(StoreOut):
    owner: OwnerBrief


class StoreEnvelope(BaseModel):
    store: StoreWithOwner


class AdminStoreItem(StoreWithOwner):
    averageRating: float = 0.0
    totalRatings: int = 0


class AdminStoreListOut(BaseModel):
    stores: list[AdminStoreItem] = []
    total: int = 0


class UserStoreItem(StoreOut):
    averageRating: float = 0.0
    totalRatings: int = 0
    userRating: int | None = None


class UserStoreListOut(BaseModel):
    stores: list[UserStoreItem] = []
