from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field, field_validator

from storerate.schemas.user import UserOut
from storerate.schemas.validators import check_password, normalize_email, strip_str


class RegisterRequest(BaseModel):
    name: str = Field(min_length=20, max_length=60)
    email: EmailStr
    password: str
    address: str | None = Field(default=None, max_length=400)

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


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _email(cls, v: str) -> str:
        return normalize_email(v)


class ChangePasswordRequest(BaseModel):
    currentPassword: str = Field(min_length=1)
    newPassword: str

    @field_validator("newPassword")
    @classmethod
    def _password(cls, v: str) -> str:
        return check_password(v)


class AuthResponse(BaseModel):
    user: UserOut
    token: str


class MessageOut(BaseModel):
    message: str
