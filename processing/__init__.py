"""Processing module - normalize, join, fallback and derived metrics."""

from .normalize import ProcessedPoint, normalize_observations, month_label
from .join import CombinedRecord, join_series
from .fallback import generate_fallback_data
from .metrics import NOT_AVAILABLE, DerivedMetric, calculate_all, calculate_metric, format_trend
from .pipeline import DashboardPipeline, DashboardResult, DashboardSession, PipelineState

__all__ = [
    'ProcessedPoint',
    'normalize_observations',
    'month_label',
    'CombinedRecord',
    'join_series',
    'generate_fallback_data',
    'NOT_AVAILABLE',
    'DerivedMetric',
    'calculate_all',
    'calculate_metric',
    'format_trend',
    'DashboardPipeline',
    'DashboardResult',
    'DashboardSession',
    'PipelineState',
]
