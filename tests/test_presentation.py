from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from pyfindme.models.snapshot import LocationSnapshot
from pyfindme.presentation import default_sentence, elapsed_bucket, format_status

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
DEFAULT = "I'm based in Burlington, Vermont"


def _snapshot(age: timedelta, label: str = "Montreal, Canada") -> LocationSnapshot:
    return LocationSnapshot(label=label, observed_at=NOW - age)


@pytest.mark.parametrize(
    "now",
    [NOW, NOW + timedelta(days=10_000), datetime(1970, 1, 1, tzinfo=UTC)],
)
def test_no_snapshot_gives_default(now: datetime) -> None:
    assert format_status(None, now) == DEFAULT


def test_default_place_is_configurable() -> None:
    assert format_status(None, NOW, default_place="Lyon, France") == "I'm based in Lyon, France"
    assert default_sentence() == DEFAULT


@pytest.mark.parametrize(
    ("age", "expected"),
    [
        (timedelta(0), "as of now, I'm in Montreal, Canada"),
        (timedelta(seconds=59), "as of now, I'm in Montreal, Canada"),
        (timedelta(minutes=1), "as of 1 minute ago, I'm in Montreal, Canada"),
        (timedelta(minutes=2), "as of 2 minutes ago, I'm in Montreal, Canada"),
        (timedelta(minutes=59), "as of 59 minutes ago, I'm in Montreal, Canada"),
        (timedelta(minutes=60), "as of 1 hour ago, I'm in Montreal, Canada"),
        (timedelta(minutes=100), "as of 1 hour ago, I'm in Montreal, Canada"),
        (timedelta(minutes=150), "as of 2 hours ago, I'm in Montreal, Canada"),
        (timedelta(hours=23, minutes=59), "as of 23 hours ago, I'm in Montreal, Canada"),
        (timedelta(hours=24), "as of 1 day ago, I'm in Montreal, Canada"),
        (timedelta(hours=99), "as of 4 days ago, I'm in Montreal, Canada"),
        (timedelta(days=99, hours=23), "as of 99 days ago, I'm in Montreal, Canada"),
    ],
)
def test_bucketed_sentences(age: timedelta, expected: str) -> None:
    assert format_status(_snapshot(age), NOW) == expected


def test_count_above_99_falls_back_to_default() -> None:
    assert format_status(_snapshot(timedelta(days=100)), NOW) == DEFAULT
    assert format_status(_snapshot(timedelta(days=100), label="anything at all"), NOW) == DEFAULT


def test_future_fix_counts_as_now() -> None:
    assert format_status(_snapshot(-timedelta(hours=3)), NOW) == "as of now, I'm in Montreal, Canada"


def test_bucket_uses_local_count() -> None:
    # 150 minutes is checked as 2 hours, not as 150.
    assert elapsed_bucket(150 * 60) == (2, "hours")
    assert elapsed_bucket(100 * 86400) == (100, "days")
    assert elapsed_bucket(86400) == (1, "day")
