"""
Dashboard API Endpoint

Runs one fetch cycle and returns the combined table, derived metrics and
the display catalog, plus the fixed regional and market tables. When live data could not be loaded the response is
synthetic and carries the error message to show the user.
"""

from typing import AsyncIterator, Dict, List, Optional, Union

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from config import MARKET_DATA, METRICS, REGIONAL_DATA, config
from processing import DashboardPipeline, DashboardResult, DashboardSession
from sources import SeriesFetcher

dashboard_router = APIRouter()


# =============================================================================
# PYDANTIC MODELS FOR JSON API
# =============================================================================

class MetricSummary(BaseModel):
    """Card data for one metric."""
    name: str
    color: str
    latestValue: Union[float, str]
    trendPercent: Union[float, str]
    trend: str


class RegionSummary(BaseModel):
    region: str
    priceIndex: float
    inventoryMonths: float
    yearOverYearGrowth: float


class MarketTrend(BaseModel):
    quarter: str
    residential: float
    commercial: float
    industrial: float


class MarketSegment(BaseModel):
    name: str
    value: float
    color: str


class MarketSummary(BaseModel):
    trends: List[MarketTrend]
    segments: List[MarketSegment]


class DashboardResponse(BaseModel):
    """Full dashboard payload."""
    state: str
    isSynthetic: bool
    error: Optional[str] = None
    errorKind: Optional[str] = None
    observationStart: Optional[str] = None
    data: List[Dict[str, Union[str, float, None]]]
    metrics: Dict[str, MetricSummary]
    regional: List[RegionSummary]
    market: MarketSummary


def build_response(result: DashboardResult) -> DashboardResponse:
    metrics = {}
    for key, derived in result.metrics.items():
        info = METRICS.get(key, {'name': key, 'color': '#64748b'})
        metrics[key] = MetricSummary(
            name=info['name'],
            color=info['color'],
            latestValue=derived.latest_value,
            trendPercent=derived.trend_percent,
            trend=derived.trend,
        )

    return DashboardResponse(
        state=result.state.value,
        isSynthetic=result.is_synthetic,
        error=result.error,
        errorKind=result.error_kind,
        observationStart=result.observation_start,
        data=[r.to_dict() for r in result.records],
        metrics=metrics,
        regional=[RegionSummary(**row) for row in REGIONAL_DATA],
        market=MarketSummary(**MARKET_DATA),
    )


async def get_pipeline() -> AsyncIterator[DashboardPipeline]:
    fetcher = SeriesFetcher(config.fetcher_config())
    try:
        yield DashboardPipeline(fetcher)
    finally:
        await fetcher.aclose()


@dashboard_router.get("/api/dashboard", response_model=DashboardResponse)
async def dashboard(pipeline: DashboardPipeline = Depends(get_pipeline)):
    """Fetch, join and summarize all indicator series."""
    session = DashboardSession(pipeline)
    result = await session.load()
    return build_response(result)
