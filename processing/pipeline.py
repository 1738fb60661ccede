"""
Dashboard Pipeline - one fetch cycle from health probe to derived metrics.

    health probe -> fetch (all settled) -> normalize -> join -> metrics

Any failure before a non-empty combined table exists diverts to the
fallback generator, and the result carries a user-visible error.
Per-series failures and bad observations are absorbed along the way.
"""

import logging
import random
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Dict, List, Optional

from sources.base import observations_from
from sources.errors import BackendUnreachableError, NoDataError, PipelineError
from sources.proxy import SeriesFetcher
from .fallback import generate_fallback_data
from .join import CombinedRecord, join_series
from .metrics import DerivedMetric, calculate_all
from .normalize import normalize_observations

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = 'No valid data received from FRED API. Using synthetic data instead.'
GENERIC_MESSAGE = 'Failed to load economic data. Using synthetic data instead.'


class PipelineState(str, Enum):
    LOADING = "loading"
    SUCCESS = "success"
    SUCCESS_WITH_FALLBACK = "success_with_fallback"


@dataclass
class DashboardResult:
    """Everything the presentation layer needs from one fetch cycle."""
    state: PipelineState
    records: List[CombinedRecord]
    metrics: Dict[str, DerivedMetric]
    observation_start: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None

    @property
    def is_synthetic(self) -> bool:
        return self.state == PipelineState.SUCCESS_WITH_FALLBACK


class DashboardPipeline:
    """Runs the acquisition pipeline against a SeriesFetcher."""

    def __init__(
        self,
        fetcher: SeriesFetcher,
        clock: Callable[[], date] = date.today,
        rng: Optional[random.Random] = None,
    ):
        self._fetcher = fetcher
        self._clock = clock
        self._rng = rng

    async def run(self) -> DashboardResult:
        today = self._clock()
        params = self._fetcher.common_params(today)
        logger.info(f"Fetching data from FRED API starting from {params['observation_start']}...")

        try:
            await self._fetcher.check_health()
            results = await self._fetcher.fetch_all(params)

            normalized = {m: normalize_observations(observations_from(r)) for m, r in results.items()}
            records = join_series(normalized)
        except BackendUnreachableError as e:
            return self._fallback(today, str(e), e.kind)
        except NoDataError as e:
            logger.error(f"Error fetching FRED data: {e}")
            return self._fallback(today, NO_DATA_MESSAGE, e.kind)
        except Exception as e:
            logger.exception(f"Error fetching FRED data: {e}")
            return self._fallback(today, GENERIC_MESSAGE, PipelineError.kind)

        logger.info(f"Combined {len(records)} records from {sum(r.ok for r in results.values())} series")
        return DashboardResult(
            state=PipelineState.SUCCESS,
            records=records,
            metrics=calculate_all(records),
            observation_start=params['observation_start'],
        )

    def _fallback(self, today: date, message: str, kind: str) -> DashboardResult:
        logger.warning(f"Using synthetic data: {message}")
        records = generate_fallback_data(today=today, rng=self._rng)
        return DashboardResult(
            state=PipelineState.SUCCESS_WITH_FALLBACK,
            records=records,
            metrics=calculate_all(records),
            error=message,
            error_kind=kind,
        )


class DashboardSession:
    """
    Holds the page-level state for one consumer.

    LOADING until the pipeline settles, then SUCCESS or
    SUCCESS_WITH_FALLBACK. After teardown() a late result is discarded.
    """

    def __init__(self, pipeline: DashboardPipeline):
        self._pipeline = pipeline
        self._active = True
        self.state = PipelineState.LOADING
        self.result: Optional[DashboardResult] = None

    @property
    def active(self) -> bool:
        return self._active

    def teardown(self) -> None:
        self._active = False

    async def load(self) -> Optional[DashboardResult]:
        result = await self._pipeline.run()
        if not self._active:
            logger.debug("Session torn down before fetch settled; discarding result")
            return None
        self.result = result
        self.state = result.state
        return result
