from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.api.deps import get_db, get_current_user
from storerate.core.security import hash_password, verify_password, create_user_token
from storerate.models.enums import UserRole
from storerate.repos.user_repo import UserRepo
from storerate.schemas.auth import RegisterRequest, LoginRequest, ChangePasswordRequest, AuthResponse, MessageOut
from storerate.schemas.user import UserOut, UserEnvelope

router = APIRouter()
log = logging.getLogger(__name__)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, db: AsyncSession = Depends(get_db)):
    # Duplicate email -> 409 from UserRepo.create.
    # Self-registration always yields a normal user; other roles are created by an admin.
    user = await UserRepo(db).create(
        name=payload.name,
        email=payload.email,
        password_hash=hash_password(payload.password),
        address=payload.address,
        role=UserRole.normal_user.value,
    )
    await db.commit()
    log.info("[auth] registered user %s", user.id)
    return AuthResponse(user=UserOut.from_user(user), token=create_user_token(user))


@router.post("/login", response_model=AuthResponse)
async def login(payload: LoginRequest, db: AsyncSession = Depends(get_db)):
    user = await UserRepo(db).get_by_email(payload.email)
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    return AuthResponse(user=UserOut.from_user(user), token=create_user_token(user))


@router.put("/change-password", response_model=MessageOut)
async def change_password(
    payload: ChangePasswordRequest,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    if not verify_password(payload.currentPassword, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Current password is incorrect")
    await UserRepo(db).set_password(user, hash_password(payload.newPassword))
    await db.commit()
    log.info("[auth] password changed for user %s", user.id)
    return MessageOut(message="Password updated successfully")


@router.get("/me", response_model=UserEnvelope)
async def me(user=Depends(get_current_user)):
    return UserEnvelope(user=UserOut.from_user(user))
