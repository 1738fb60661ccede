"""
Derived Metrics - latest value and period-over-period trend per metric.

Both skip absent values: the trend compares the most recent present value
with the next present value before it, however far back that is.
"""

from dataclasses import dataclass
from typing import Dict, Sequence, Union

import pandas as pd

from config import METRIC_KEYS
from .join import CombinedRecord

NOT_AVAILABLE = 'N/A'

MetricValue = Union[float, str]


@dataclass(frozen=True)
class DerivedMetric:
    """Latest value and trend for one metric; either may be NOT_AVAILABLE."""
    latest_value: MetricValue
    trend_percent: MetricValue

    @property
    def available(self) -> bool:
        return self.trend_percent != NOT_AVAILABLE

    @property
    def trend(self) -> str:
        return format_trend(self.trend_percent)


def _present_values(records: Sequence[CombinedRecord], metric: str) -> pd.Series:
    return pd.Series([r.get(metric) for r in records], dtype='float64').dropna()


def latest_value(records: Sequence[CombinedRecord], metric: str) -> MetricValue:
    """Most recent present value, scanning back from the end."""
    present = _present_values(records, metric)
    if present.empty:
        return NOT_AVAILABLE
    return float(present.iloc[-1])


def calculate_trend(records: Sequence[CombinedRecord], metric: str) -> MetricValue:
    """
    Percent change between the two most recent present values.

    Rounded to one decimal place. NOT_AVAILABLE with fewer than two present
    values, or when the earlier value is zero.
    """
    present = _present_values(records, metric)
    if len(present) < 2:
        return NOT_AVAILABLE

    latest, previous = float(present.iloc[-1]), float(present.iloc[-2])
    if previous == 0:
        return NOT_AVAILABLE
    return round((latest - previous) / previous * 100, 1)


def calculate_metric(records: Sequence[CombinedRecord], metric: str) -> DerivedMetric:
    return DerivedMetric(
        latest_value=latest_value(records, metric),
        trend_percent=calculate_trend(records, metric),
    )


def calculate_all(
    records: Sequence[CombinedRecord],
    metrics: Sequence[str] = METRIC_KEYS,
) -> Dict[str, DerivedMetric]:
    return {m: calculate_metric(records, m) for m in metrics}


def format_trend(trend_percent: MetricValue) -> str:
    """Render a trend as '+25.0%', '-3.2%' or 'N/A'."""
    if trend_percent == NOT_AVAILABLE:
        return NOT_AVAILABLE
    sign = '+' if trend_percent > 0 else ''
    return f"{sign}{trend_percent:.1f}%"
