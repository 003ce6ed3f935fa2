# tests/utils/test_date_utils.py

from datetime import datetime, timedelta, timezone

import pytest

from initres.utils.date_utils import ensure_utc, parse_duration, to_unix_millis


@pytest.mark.parametrize(
    "value, expected",
    [
        ("30s", timedelta(seconds=30)),
        ("15m", timedelta(minutes=15)),
        ("12h", timedelta(hours=12)),
        ("7D", timedelta(days=7)),
    ],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


@pytest.mark.parametrize("value", ["", "7", "1w", "h1", "-3d"])
def test_parse_duration_rejects_invalid(value):
    with pytest.raises(ValueError):
        parse_duration(value)


def test_naive_datetime_is_assumed_utc():
    assert ensure_utc(datetime(2024, 1, 1, 12)).tzinfo == timezone.utc


def test_to_unix_millis():
    dt = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert to_unix_millis(dt) == 1704067200000
    assert to_unix_millis(dt.astimezone(timezone(timedelta(hours=2)))) == 1704067200000
