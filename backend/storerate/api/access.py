from __future__ import annotations

from fastapi import Depends, HTTPException

from storerate.api.deps import get_current_user
from storerate.models.enums import UserRole
from storerate.models.user import User


def require_role(user: User, allowed: set[str]) -> None:
    if getattr(user, "role", None) not in allowed:
        raise HTTPException(status_code=403, detail="Insufficient permissions")


async def require_system_admin(user: User = Depends(get_current_user)) -> User:
    require_role(user, {UserRole.system_admin.value})
    return user


async def require_store_owner(user: User = Depends(get_current_user)) -> User:
    require_role(user, {UserRole.store_owner.value})
    return user
