"""Data sources module - proxy fetcher and upstream FRED client."""

from .base import Endpoints, Err, ErrorKind, FetcherConfig, FetchResult, Observation, Ok, resolve_endpoints
from .errors import BackendUnreachableError, NoDataError, PipelineError
from .fred import FREDClient, UpstreamError
from .proxy import SeriesFetcher, observation_start

__all__ = [
    'Endpoints',
    'Err',
    'ErrorKind',
    'FetcherConfig',
    'FetchResult',
    'Observation',
    'Ok',
    'resolve_endpoints',
    'BackendUnreachableError',
    'NoDataError',
    'PipelineError',
    'FREDClient',
    'UpstreamError',
    'SeriesFetcher',
    'observation_start',
]
