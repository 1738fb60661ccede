"""Tests for latest value and trend calculation."""

from __future__ import annotations

import pytest

from config import METRIC_KEYS
from processing.join import CombinedRecord
from processing.metrics import (
    NOT_AVAILABLE,
    calculate_all,
    calculate_metric,
    calculate_trend,
    format_trend,
    latest_value,
)


def _records(values: list[float | None], metric: str = "priceIndex") -> list[CombinedRecord]:
    records = []
    for i, value in enumerate(values):
        slots = {m: None for m in METRIC_KEYS}
        slots[metric] = value
        records.append(CombinedRecord(date=f"2024-{i + 1:02d}-01", month="Jan", values=slots))
    return records


def test_trend_skips_absent_values():
    records = _records([None, 20.0, None, 25.0])
    assert latest_value(records, "priceIndex") == 25.0
    assert calculate_trend(records, "priceIndex") == 25.0
    assert format_trend(calculate_trend(records, "priceIndex")) == "+25.0%"


def test_latest_value_scans_back_past_trailing_gaps():
    records = _records([10.0, 12.0, None, None])
    assert latest_value(records, "priceIndex") == 12.0
    assert calculate_trend(records, "priceIndex") == 20.0


def test_negative_trend_rounded_to_one_decimal():
    records = _records([300.0, 290.0])
    assert calculate_trend(records, "priceIndex") == -3.3
    assert format_trend(-3.3) == "-3.3%"


def test_fewer_than_two_values_is_not_available():
    single = calculate_metric(_records([None, 7.0, None]), "priceIndex")
    assert single.latest_value == 7.0
    assert single.trend_percent == NOT_AVAILABLE
    assert single.trend == "N/A"
    assert not single.available

    empty = calculate_metric(_records([None, None]), "priceIndex")
    assert empty.latest_value == NOT_AVAILABLE
    assert empty.trend_percent == NOT_AVAILABLE


def test_not_available_is_not_zero():
    assert calculate_trend(_records([5.0]), "priceIndex") != 0
    assert calculate_trend([], "priceIndex") == NOT_AVAILABLE


def test_zero_previous_value_is_not_available():
    assert calculate_trend(_records([0.0, 5.0]), "priceIndex") == NOT_AVAILABLE


def test_flat_trend_is_zero_percent():
    assert calculate_trend(_records([4.0, 4.0]), "priceIndex") == 0.0
    assert format_trend(0.0) == "0.0%"


def test_calculate_all_covers_every_metric():
    derived = calculate_all(_records([1.0, 2.0], metric="inventory"))
    assert set(derived) == set(METRIC_KEYS)
    assert derived["inventory"].trend_percent == 100.0
    assert derived["priceIndex"].latest_value == NOT_AVAILABLE


@pytest.mark.parametrize("value,expected", [(1.04, "+1.0%"), (12.5, "+12.5%"), (-0.4, "-0.4%")])
def test_format_trend(value, expected):
    assert format_trend(value) == expected
