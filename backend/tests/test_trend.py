from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from storerate.services.trend import (
    RatingSample,
    Trend,
    classify_trend,
    rating_trend,
    split_windows,
)

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


def days_ago(n: float) -> datetime:
    return NOW - timedelta(days=n)


@pytest.mark.parametrize(
    "recent, previous, expected",
    [
        (4.5, 4.0, Trend.up),
        (3.9, 4.0, Trend.stable),
        (3.8, 4.0, Trend.down),
        (4.0, 4.0, Trend.stable),
        (4.05, 4.0, Trend.stable),
        (0.0, 0.0, Trend.stable),
    ],
)
def test_classify_trend(recent, previous, expected):
    assert classify_trend(recent, previous) is expected


def test_empty_previous_window_reads_as_up():
    assert classify_trend(0.5, 0.0) is Trend.up


def test_empty_recent_window_reads_as_down():
    assert classify_trend(0.0, 3.0) is Trend.down


def test_trend_values_are_lowercase_strings():
    assert [t.value for t in Trend] == ["up", "down", "stable"]


def test_split_windows_boundaries():
    samples = [
        RatingSample(5, days_ago(0)),
        RatingSample(4, days_ago(30)),  # exactly on the recent boundary
        RatingSample(3, days_ago(30) - timedelta(seconds=1)),
        RatingSample(2, days_ago(60)),  # exactly on the previous boundary
        RatingSample(1, days_ago(60) - timedelta(seconds=1)),
        RatingSample(1, days_ago(400)),
    ]
    recent, previous = split_windows(samples, NOW)
    assert recent == [5, 4]
    assert previous == [3, 2]


def test_future_samples_count_as_recent():
    recent, previous = split_windows([RatingSample(2, NOW + timedelta(days=3))], NOW)
    assert recent == [2]
    assert previous == []


def test_naive_timestamps_are_utc():
    naive = days_ago(10).replace(tzinfo=None)
    recent, _ = split_windows([RatingSample(4, naive)], NOW)
    assert recent == [4]


def test_rating_trend_new_store_is_up():
    samples = [RatingSample(v, days_ago(i + 1)) for i, v in enumerate([5, 5, 4, 4, 3])]
    assert rating_trend(samples, NOW) is Trend.up


def test_rating_trend_no_ratings_is_stable():
    assert rating_trend([], NOW) is Trend.stable


def test_rating_trend_down():
    samples = [
        RatingSample(5, days_ago(45)),
        RatingSample(5, days_ago(50)),
        RatingSample(3, days_ago(5)),
        RatingSample(4, days_ago(6)),
    ]
    assert rating_trend(samples, NOW) is Trend.down


def test_rating_trend_ignores_ratings_older_than_sixty_days():
    samples = [
        RatingSample(1, days_ago(90)),
        RatingSample(4, days_ago(40)),
        RatingSample(4, days_ago(2)),
    ]
    assert rating_trend(samples, NOW) is Trend.stable
