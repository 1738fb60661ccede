"""
Observation Normalizer - raw {date, value} records to ProcessedPoints.

One function for every series so absent values are handled the same way
everywhere: a value that does not parse as a finite number is absent and
the point is dropped, never turned into zero.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional

from sources.base import Observation

# Fixed English labels; strftime('%b') follows the process locale
MONTH_ABBR = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
              'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')


@dataclass(frozen=True)
class ProcessedPoint:
    """One normalized observation of a single series."""
    date: str
    month: str
    value: float


def parse_date(raw: str) -> date:
    """Parse YYYY-MM-DD as a UTC calendar date."""
    return datetime.strptime(raw, '%Y-%m-%d').replace(tzinfo=timezone.utc).date()


def month_label(raw: str) -> str:
    """Short month name for a YYYY-MM-DD date, independent of local zone."""
    return MONTH_ABBR[parse_date(raw).month - 1]


def parse_value(raw: object) -> Optional[float]:
    """Float value of an observation, or None for '.' and other junk."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def normalize_observations(observations: Iterable[Observation]) -> List[ProcessedPoint]:
    """
    Convert raw observations to ProcessedPoints, preserving order.

    Points with an unparseable date or value are dropped.
    """
    points = []
    for obs in observations:
        value = parse_value(obs.value)
        if value is None:
            continue
        try:
            day = parse_date(obs.date)
        except (TypeError, ValueError):
            continue
        points.append(ProcessedPoint(date=day.isoformat(), month=MONTH_ABBR[day.month - 1], value=value))
    return points
