"""Tests for observation normalization."""

from __future__ import annotations

import os
import time

import pytest

from processing.normalize import ProcessedPoint, month_label, normalize_observations, parse_value
from sources.base import Observation, extract_observations


def _obs(*rows: tuple[str, str]) -> list[Observation]:
    return [Observation(date=d, value=v) for d, v in rows]


def test_month_label_is_english_short_name():
    assert month_label("2024-01-15") == "Jan"
    assert month_label("2023-09-01") == "Sep"
    assert month_label("2023-12-31") == "Dec"


@pytest.mark.skipif(not hasattr(time, "tzset"), reason="needs time.tzset")
@pytest.mark.parametrize("zone", ["Pacific/Kiritimati", "America/Los_Angeles", "Etc/GMT+12", "UTC"])
def test_month_label_ignores_local_time_zone(zone: str):
    previous = os.environ.get("TZ")
    os.environ["TZ"] = zone
    time.tzset()
    try:
        assert month_label("2024-01-15") == "Jan"
        assert month_label("2024-02-01") == "Feb"
        assert normalize_observations(_obs(("2024-03-01", "1.0")))[0].month == "Mar"
    finally:
        if previous is None:
            os.environ.pop("TZ", None)
        else:
            os.environ["TZ"] = previous
        time.tzset()


def test_normalize_parses_values_and_keeps_order():
    points = normalize_observations(_obs(("2024-01-01", "6.62"), ("2024-02-01", "6.78"), ("2024-03-01", "6.82")))
    assert points == [
        ProcessedPoint(date="2024-01-01", month="Jan", value=6.62),
        ProcessedPoint(date="2024-02-01", month="Feb", value=6.78),
        ProcessedPoint(date="2024-03-01", month="Mar", value=6.82),
    ]


def test_normalize_drops_missing_value_sentinel():
    points = normalize_observations(_obs(("2024-01-01", "."), ("2024-02-01", "310.2"), ("2024-03-01", "")))
    assert [p.date for p in points] == ["2024-02-01"]


def test_normalize_keeps_zero_as_a_real_value():
    points = normalize_observations(_obs(("2024-01-01", "0"), ("2024-02-01", "0.0")))
    assert [p.value for p in points] == [0.0, 0.0]


def test_normalize_drops_unparseable_dates():
    points = normalize_observations(_obs(("not-a-date", "1.0"), ("2024-13-01", "2.0"), ("2024-04-01", "3.0")))
    assert [p.date for p in points] == ["2024-04-01"]


def test_normalize_is_idempotent():
    raw = _obs(("2024-01-01", "1.5"), ("2024-02-01", "."), ("2024-03-01", "2.5"))
    assert normalize_observations(raw) == normalize_observations(raw)


def test_normalize_empty_input():
    assert normalize_observations([]) == []


@pytest.mark.parametrize("raw", [".", "", "nan", "inf", "-inf", "abc", None, True])
def test_parse_value_rejects_non_numeric(raw):
    assert parse_value(raw) is None


def test_parse_value_accepts_numbers():
    assert parse_value("-1.25") == -1.25
    assert parse_value(3) == 3.0


def test_extract_observations_tolerates_malformed_bodies():
    assert extract_observations(None) == []
    assert extract_observations({"error": "FRED API Error", "message": "Bad Request"}) == []
    assert extract_observations({"observations": "nope"}) == []
    assert extract_observations({"observations": [{"date": "2024-01-01"}, "junk", {"date": "2024-02-01", "value": "1"}]}) == [
        Observation(date="2024-02-01", value="1")
    ]
