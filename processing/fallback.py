"""
Fallback Generator - synthetic five-year monthly dataset.

Used only when live acquisition fails as a whole. The shape is fixed
(60 monthly records ending in the current month, every metric set); the
values are a smooth trend or seasonal curve plus bounded noise.
"""

import math
import random
from datetime import date
from typing import List, Optional

from dateutil.relativedelta import relativedelta

from .join import CombinedRecord
from .normalize import MONTH_ABBR

FALLBACK_MONTHS = 60


def generate_fallback_data(
    today: Optional[date] = None,
    rng: Optional[random.Random] = None,
    months: int = FALLBACK_MONTHS,
) -> List[CombinedRecord]:
    """
    Generate synthetic combined records.

    Args:
        today: Reference date; the last record falls in its month
        rng: Random source (pass a seeded one for reproducible output)
        months: Number of monthly records

    Returns:
        List of CombinedRecords, oldest first
    """
    today = today or date.today()
    rng = rng or random.Random()
    start = today.replace(day=1) - relativedelta(months=months - 1)

    data = []
    for i in range(months):
        current = start + relativedelta(months=i)
        values = {
            'priceIndex': 100 + i * 0.5 + rng.random() * 5,
            'inventory': 4 + math.sin(i / 10) * 1.5 + rng.random() * 0.5,
            'mortgageRate': 3 + math.sin(i / 15) * 1 + rng.random() * 0.3,
            'constructionSpend': 1200 + i * 10 + math.sin(i / 8) * 100 + rng.random() * 50,
            'bankruptcies': 2000 + math.sin(i / 12) * 200 + rng.random() * 100,
        }
        data.append(CombinedRecord(
            date=current.isoformat(),
            month=MONTH_ABBR[current.month - 1],
            values={k: round(v, 2) for k, v in values.items()},
        ))

    return data
