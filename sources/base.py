"""
Shared types for fetching series through the proxy.

Every fetch returns a tagged result - Ok(payload) or Err(kind, message) -
so nothing untyped is thrown across the fetch boundary.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union


class ErrorKind(str, Enum):
    """Why a single series could not be fetched."""
    NETWORK = "network"          # transport failed, no response
    HTTP_STATUS = "http_status"  # proxy answered with a non-2xx status
    MALFORMED = "malformed"      # 2xx but the body was not usable JSON


@dataclass(frozen=True)
class Ok:
    """Successful fetch carrying the upstream JSON body."""
    payload: Dict[str, Any]

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed fetch with a classified reason."""
    kind: ErrorKind
    message: str
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return False


FetchResult = Union[Ok, Err]


@dataclass(frozen=True)
class Observation:
    """One raw record from the upstream observations list."""
    date: str
    value: str


@dataclass
class FetcherConfig:
    """
    Explicit configuration for the series fetcher.

    Args:
        base_url: API base the proxy is served from
        api_key_provider: Optional callable returning a key to forward as
            ``api_key``; the proxy normally injects its own key instead
        observation_window_years: How far back ``observation_start`` reaches
        frequency: Sampling frequency requested for every series
    """
    base_url: str
    api_key_provider: Optional[Callable[[], Optional[str]]] = None
    observation_window_years: int = 5
    frequency: str = "m"


@dataclass(frozen=True)
class Endpoints:
    """Resolved proxy URLs for one API base."""
    series_url: str
    health_url: str


def resolve_endpoints(api_base: str) -> Endpoints:
    """
    Work out the series and health URLs for an API base.

    Serverless deployments expose the proxy as a function named
    ``fredProxy``; the standalone server mounts it under ``/api/fred``.
    """
    base = api_base.rstrip('/')
    if '.netlify/functions' in base:
        return Endpoints(series_url=f"{base}/fredProxy", health_url=f"{base}/health")
    return Endpoints(series_url=f"{base}/api/fred", health_url=f"{base}/health")


def observations_from(result: FetchResult) -> List[Observation]:
    """Observation list for a fetch result; failures become an empty list."""
    if not isinstance(result, Ok):
        return []
    return extract_observations(result.payload)


def extract_observations(payload: Any) -> List[Observation]:
    """
    Pull the observations out of an upstream body.

    Error envelopes and malformed bodies yield an empty list rather than
    raising, and records missing a date or value are skipped.
    """
    if not isinstance(payload, dict):
        return []
    raw = payload.get('observations')
    if not isinstance(raw, list):
        return []

    observations = []
    for obs in raw:
        if not isinstance(obs, dict):
            continue
        date, value = obs.get('date'), obs.get('value')
        if not isinstance(date, str) or value is None:
            continue
        observations.append(Observation(date=date, value=str(value)))
    return observations
