from __future__ import annotations

from fastapi import APIRouter

from storerate.api.routes import health, auth, admin, users, store_owner

router = APIRouter()
router.include_router(health.router, tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(store_owner.router, prefix="/store-owner", tags=["store-owner"])
router.include_router(users.router, tags=["user"])
