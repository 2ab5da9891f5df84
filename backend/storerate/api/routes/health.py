from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.api.deps import get_db

router = APIRouter()
log = logging.getLogger(__name__)


@router.get("/health")
async def health(db: AsyncSession = Depends(get_db)):
    db_status = "connected"
    try:
        await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        log.warning("[health] database check failed: %s", e)
        db_status = "disconnected"
    return {
        "status": "OK",
        "db": db_status,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
