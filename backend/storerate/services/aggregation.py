from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Iterable

MIN_RATING = 1
MAX_RATING = 5


class InvalidRatingError(ValueError):
    """A rating value outside 1..5 reached the aggregation layer."""

    def __init__(self, value):
        super().__init__(f"Rating must be an integer between {MIN_RATING} and {MAX_RATING}, got {value!r}")
        self.value = value


@dataclass(frozen=True)
class RatingSummary:
    average: float
    count: int

    def rounded(self) -> RatingSummary:
        return replace(self, average=round_tenths(self.average))


def check_rating_value(value) -> int:
    # bool is an int subclass, but True is not a star count
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRatingError(value)
    if value < MIN_RATING or value > MAX_RATING:
        raise InvalidRatingError(value)
    return value


def summarize_ratings(values: Iterable[int]) -> RatingSummary:
    """Count and mean of a collection of 1..5 star values.

    An empty collection averages to 0.0, never NaN or None. Out-of-range values
    raise InvalidRatingError instead of being clamped.
    """
    total = 0
    count = 0
    for v in values:
        total += check_rating_value(v)
        count += 1
    if count == 0:
        return RatingSummary(average=0.0, count=0)
    return RatingSummary(average=total / count, count=count)


def round_tenths(value: float) -> float:
    """Round half-up at the tenths digit: 4.449 -> 4.4, 4.45 -> 4.5.

    Presentation only; re-aggregating rounded values drifts.
    """
    return math.floor(value * 10 + 0.5) / 10
