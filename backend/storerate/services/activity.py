from __future__ import annotations

import enum
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, Iterable

from storerate.services.trend import as_utc

RECENT_ACTIVITY_LIMIT = 10


class ActivityType(str, enum.Enum):
    user_created = "user_created"
    store_created = "store_created"
    rating_created = "rating_created"


@dataclass(frozen=True)
class UserEvent:
    id: int
    name: str
    email: str
    role: str
    created_at: datetime


@dataclass(frozen=True)
class StoreEvent:
    id: int
    name: str
    email: str
    owner_name: str
    created_at: datetime


@dataclass(frozen=True)
class RatingEvent:
    id: int
    value: int
    user_name: str
    store_name: str
    created_at: datetime


@dataclass(frozen=True)
class Activity:
    type: ActivityType
    id: int
    title: str
    description: str
    timestamp: datetime
    data: dict[str, Any]


def user_activity(u: UserEvent) -> Activity:
    return Activity(
        type=ActivityType.user_created,
        id=u.id,
        title="New user registered",
        description=f"{u.name} joined the platform",
        timestamp=as_utc(u.created_at),
        data=asdict(u),
    )


def store_activity(s: StoreEvent) -> Activity:
    return Activity(
        type=ActivityType.store_created,
        id=s.id,
        title="Store added",
        description=f"{s.name} was registered by {s.owner_name}",
        timestamp=as_utc(s.created_at),
        data=asdict(s),
    )


def rating_activity(r: RatingEvent) -> Activity:
    return Activity(
        type=ActivityType.rating_created,
        id=r.id,
        title="New rating submitted",
        description=f"{r.user_name} gave {r.value} stars to {r.store_name}",
        timestamp=as_utc(r.created_at),
        data=asdict(r),
    )


def merge_activities(
    users: Iterable[UserEvent],
    stores: Iterable[StoreEvent],
    ratings: Iterable[RatingEvent],
    *,
    limit: int = RECENT_ACTIVITY_LIMIT,
) -> list[Activity]:
    """Newest-first feed across the three streams, at most `limit` long.

    The sort is stable: equal timestamps keep users, stores, ratings order
    (and each stream's own order).
    """
    items = [user_activity(u) for u in users]
    items += [store_activity(s) for s in stores]
    items += [rating_activity(r) for r in ratings]
    items.sort(key=lambda a: a.timestamp, reverse=True)
    return items[:limit]
