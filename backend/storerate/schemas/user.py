from __future__ import annotations

from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, field_validator

from storerate.models.enums import UserRole
from storerate.schemas.validators import check_password, normalize_email, strip_str


class UserOut(BaseModel):
    """Public projection of a user. The password hash never leaves the repo layer."""

    id: int
    name: str
    email: str
    address: str | None = None
    role: UserRole
    createdAt: datetime
    updatedAt: datetime

    @classmethod
    def from_user(cls, u) -> "UserOut":
        return cls(
            id=u.id,
            name=u.name,
            email=u.email,
            address=u.address,
            role=u.role,
            createdAt=u.created_at,
            updatedAt=u.updated_at,
        )


class UserEnvelope(BaseModel):
    user: UserOut


class UserCreate(BaseModel):
    name: str = Field(min_length=20, max_length=60)
    email: EmailStr
    password: str
    address: str | None = Field(default=None, max_length=400)
    role: UserRole

    @field_validator("name", "address", mode="before")
    @classmethod
    def _strip(cls, v):
        return strip_str(v)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def _password(cls, v: str) -> str:
        return check_password(v)


class UserListItem(UserOut):
    # Only store owners carry ratings; everyone else reports 0 / 0.
    averageRating: float = 0.0
    totalRatings: int = 0


class UserListOut(BaseModel):
    users: list[UserListItem] = []
    total: int = 0


class UserDetailOut(BaseModel):
    user: UserOut
    storeRating: float | None = None
