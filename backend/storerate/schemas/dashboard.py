from __future__ import annotations

from datetime import datetime
from typing import Any
from pydantic import BaseModel

from storerate.services.activity import Activity, ActivityType
from storerate.services.trend import Trend


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(p.capitalize() for p in rest)


class AdminDashboardOut(BaseModel):
    totalUsers: int = 0
    totalStores: int = 0
    totalRatings: int = 0


class ActivityOut(BaseModel):
    type: ActivityType
    id: int
    title: str
    description: str
    timestamp: datetime
    data: dict[str, Any] = {}

    @classmethod
    def from_activity(cls, a: Activity) -> "ActivityOut":
        return cls(
            type=a.type,
            id=a.id,
            title=a.title,
            description=a.description,
            timestamp=a.timestamp,
            data={_camel(k): v for k, v in a.data.items()},
        )


class RecentActivityOut(BaseModel):
    activities: list[ActivityOut] = []


class StoreOwnerDashboardOut(BaseModel):
    """Frontend expects camelCase keys here."""

    averageRating: float = 0.0  # one decimal
    totalReviews: int = 0
    trend: Trend = Trend.stable
