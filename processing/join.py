"""
Join Engine - outer join of the normalized series on date.

Builds one CombinedRecord per distinct date seen in any series, sorted as
calendar dates. A metric without an observation on that date is None,
never zero (zero is a real observation).
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from config import METRIC_KEYS
from sources.errors import NoDataError
from .normalize import MONTH_ABBR, ProcessedPoint


@dataclass
class CombinedRecord:
    """One row of the combined table."""
    date: str
    month: str
    values: Dict[str, Optional[float]]

    def get(self, metric: str) -> Optional[float]:
        return self.values.get(metric)

    def to_dict(self) -> Dict[str, Any]:
        return {'date': self.date, 'month': self.month, **self.values}


def _to_series(points: Sequence[ProcessedPoint]) -> pd.Series:
    index = pd.to_datetime([p.date for p in points], format='%Y-%m-%d')
    series = pd.Series([p.value for p in points], index=index, dtype='float64')
    # Same date twice in one series: first one wins
    return series[~series.index.duplicated(keep='first')]


def join_series(
    series: Mapping[str, Sequence[ProcessedPoint]],
    metrics: Sequence[str] = METRIC_KEYS,
) -> List[CombinedRecord]:
    """
    Combine per-metric point lists into a date-sorted table.

    Args:
        series: Metric key -> normalized points (missing keys count as empty)
        metrics: Metric slots every record carries

    Returns:
        CombinedRecords covering the union of all input dates

    Raises:
        NoDataError: if every series is empty
    """
    columns = {}
    for metric in metrics:
        points = series.get(metric) or []
        if points:
            columns[metric] = _to_series(points)

    if not columns:
        raise NoDataError('No valid data received from FRED API')

    frame = pd.concat(columns, axis=1).sort_index().reindex(columns=list(metrics))

    records = []
    for ts, row in frame.iterrows():
        values = {m: (None if pd.isna(row[m]) else float(row[m])) for m in metrics}
        records.append(CombinedRecord(
            date=ts.strftime('%Y-%m-%d'),
            month=MONTH_ABBR[ts.month - 1],
            values=values,
        ))
    return records
