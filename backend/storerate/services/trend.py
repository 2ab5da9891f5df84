from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable

from storerate.services.aggregation import summarize_ratings

TREND_WINDOW = timedelta(days=30)
# Dead zone around the previous average; comparisons are strict.
TREND_THRESHOLD = 0.1


class Trend(str, enum.Enum):
    up = "up"
    down = "down"
    stable = "stable"


@dataclass(frozen=True)
class RatingSample:
    value: int
    created_at: datetime


def as_utc(dt: datetime) -> datetime:
    """Naive datetimes (sqlite, legacy rows) are taken to be UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def split_windows(samples: Iterable[RatingSample], now: datetime) -> tuple[list[int], list[int]]:
    """Partition samples into the last 30 days and the 30 days before that.

    recent:   created_at >= now - 30d (later-than-now samples included)
    previous: now - 60d <= created_at < now - 30d
    Anything older is ignored.
    """
    now = as_utc(now)
    recent_from = now - TREND_WINDOW
    previous_from = now - 2 * TREND_WINDOW

    recent: list[int] = []
    previous: list[int] = []
    for s in samples:
        ts = as_utc(s.created_at)
        if ts >= recent_from:
            recent.append(s.value)
        elif ts >= previous_from:
            previous.append(s.value)
    return recent, previous


def classify_trend(recent_average: float, previous_average: float) -> Trend:
    if recent_average > previous_average + TREND_THRESHOLD:
        return Trend.up
    if recent_average < previous_average - TREND_THRESHOLD:
        return Trend.down
    return Trend.stable


def rating_trend(samples: Iterable[RatingSample], now: datetime | None = None) -> Trend:
    """Compare the recent window's average with the previous window's.

    An empty window averages to 0, so a store with no ratings older than
    30 days reads as `up` as soon as it has any recent rating.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    recent, previous = split_windows(samples, now)
    return classify_trend(
        summarize_ratings(recent).average,
        summarize_ratings(previous).average,
    )
