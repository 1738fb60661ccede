"""Tests for the synthetic fallback dataset."""

from __future__ import annotations

import random
from datetime import date

from config import METRIC_KEYS
from processing.fallback import FALLBACK_MONTHS, generate_fallback_data


def test_sixty_monthly_records_ending_this_month():
    records = generate_fallback_data(today=date(2026, 10, 19))
    assert len(records) == FALLBACK_MONTHS == 60
    assert records[-1].date == "2026-10-01"
    assert records[0].date == "2021-11-01"
    assert records[0].month == "Nov"
    assert records[-1].month == "Oct"


def test_dates_are_consecutive_months():
    records = generate_fallback_data(today=date(2024, 3, 31))
    dates = [date.fromisoformat(r.date) for r in records]
    for prev, cur in zip(dates, dates[1:]):
        assert (cur.year * 12 + cur.month) - (prev.year * 12 + prev.month) == 1
        assert cur.day == 1


def test_every_metric_populated_and_bounded():
    records = generate_fallback_data(today=date(2026, 10, 19))
    for i, record in enumerate(records):
        assert set(record.values) == set(METRIC_KEYS)
        assert all(v is not None for v in record.values.values())
        assert 100 + i * 0.5 <= record.get("priceIndex") <= 105 + i * 0.5
        assert 2.5 <= record.get("inventory") <= 6.0
        assert 2.0 <= record.get("mortgageRate") <= 4.3
        assert 1800 <= record.get("bankruptcies") <= 2300


def test_same_seed_same_values():
    a = generate_fallback_data(today=date(2026, 1, 1), rng=random.Random(7))
    b = generate_fallback_data(today=date(2026, 1, 1), rng=random.Random(7))
    assert [r.to_dict() for r in a] == [r.to_dict() for r in b]


def test_values_rounded_to_two_decimals():
    for record in generate_fallback_data(today=date(2026, 1, 1), rng=random.Random(1)):
        for value in record.values.values():
            assert round(value, 2) == value
