"""
Proxy Series Fetcher - one GET per series through the proxy.

Each series resolves to its own Ok/Err result. fetch_all() puts every
request in flight together and waits until all of them have settled, so a
single failing series never aborts the batch.
"""

import asyncio
import logging
from datetime import date
from typing import Any, Dict, Mapping, Optional

import httpx
from dateutil.relativedelta import relativedelta

from config import SERIES_IDS
from .base import Err, ErrorKind, FetcherConfig, FetchResult, Ok, resolve_endpoints
from .errors import BackendUnreachableError

logger = logging.getLogger(__name__)

_SCALARS = (str, int, float, bool)


def observation_start(today: date, window_years: int = 5) -> date:
    """First day of the current month, ``window_years`` back."""
    return today.replace(day=1) - relativedelta(years=window_years)


class SeriesFetcher:
    """Fetches raw series payloads from the proxy endpoint."""

    def __init__(
        self,
        fetcher_config: FetcherConfig,
        client: Optional[httpx.AsyncClient] = None,
        series_ids: Optional[Mapping[str, str]] = None,
    ):
        self._config = fetcher_config
        self._endpoints = resolve_endpoints(fetcher_config.base_url)
        self._series_ids = dict(series_ids or SERIES_IDS)
        self._client = client
        self._owns_client = client is None

    @property
    def series_ids(self) -> Dict[str, str]:
        return dict(self._series_ids)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            # No per-request timeout: a slow upstream holds the batch
            self._client = httpx.AsyncClient(timeout=None)
            self._owns_client = True
        return self._client

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SeriesFetcher":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    def common_params(self, today: Optional[date] = None) -> Dict[str, Any]:
        """Parameters shared by every series request in one cycle."""
        start = observation_start(today or date.today(), self._config.observation_window_years)
        return {
            'observation_start': start.isoformat(),
            'frequency': self._config.frequency,
        }

    async def check_health(self) -> Dict[str, Any]:
        """
        Pre-flight probe of the proxy.

        Raises:
            BackendUnreachableError: transport error, non-2xx or a non-JSON body
        """
        try:
            resp = await self._get_client().get(self._endpoints.health_url)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Proxy server health check failed: {e}")
            raise BackendUnreachableError(
                'Proxy server is not running or not responding. '
                'Please ensure the backend server is started.'
            ) from e
        logger.info(f"Proxy server health check: {data}")
        return data

    async def get_series(self, metric: str, params: Optional[Mapping[str, Any]] = None) -> FetchResult:
        """
        Fetch one series by metric key.

        Args:
            metric: Metric key from SERIES_IDS (e.g. 'mortgageRate')
            params: Flat mapping of query parameters with scalar values

        Returns:
            Ok(payload) or Err(kind, message); never raises for I/O problems
        """
        if metric not in self._series_ids:
            raise ValueError(f"Unknown series '{metric}'")
        query = self._build_query(params or {})
        series_id = self._series_ids[metric]
        url = f"{self._endpoints.series_url}/{series_id}"

        logger.info(f"Fetching data for {series_id}...")
        try:
            resp = await self._get_client().get(url, params=query)
        except httpx.HTTPError as e:
            logger.error(f"Error fetching series {series_id}: {e}")
            return Err(ErrorKind.NETWORK, f"Error fetching {series_id}: {e}")

        if not resp.is_success:
            logger.error(f"Error response for {series_id}: {resp.text}")
            return Err(
                ErrorKind.HTTP_STATUS,
                _envelope_message(resp) or f"HTTP error! Status: {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            payload = resp.json()
        except ValueError:
            return Err(ErrorKind.MALFORMED, f"Invalid JSON for {series_id}", status_code=resp.status_code)
        if not isinstance(payload, dict):
            return Err(ErrorKind.MALFORMED, f"Unexpected body for {series_id}", status_code=resp.status_code)

        logger.info(f"Successfully fetched data for {series_id}")
        return Ok(payload)

    async def fetch_all(self, params: Mapping[str, Any]) -> Dict[str, FetchResult]:
        """
        Fetch every configured series in parallel.

        Waits for all requests to settle. Anything that escapes get_series
        is captured as an Err for that series only.

        Returns:
            Dict of metric key -> result, in SERIES_IDS order
        """
        _check_params(params)
        metrics = list(self._series_ids)
        settled = await asyncio.gather(
            *(self.get_series(m, params) for m in metrics),
            return_exceptions=True,
        )

        results: Dict[str, FetchResult] = {}
        for metric, outcome in zip(metrics, settled):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                outcome = Err(ErrorKind.NETWORK, f"{type(outcome).__name__}: {outcome}")
            results[metric] = outcome

        failed = [m for m, r in results.items() if not r.ok]
        if failed:
            logger.warning(f"{len(failed)} out of {len(results)} requests failed: {failed}")
            for metric in failed:
                logger.warning(f"  {metric}: {results[metric].message}")
        return results

    def _build_query(self, params: Mapping[str, Any]) -> Dict[str, Any]:
        _check_params(params)
        query = {k: str(v).lower() if isinstance(v, bool) else v for k, v in params.items()}
        if self._config.api_key_provider is not None:
            api_key = self._config.api_key_provider()
            if api_key:
                query['api_key'] = api_key
        return query


def _check_params(params: Mapping[str, Any]) -> None:
    for key, value in params.items():
        if not isinstance(value, _SCALARS):
            raise TypeError(f"Parameter '{key}' must be a scalar, got {type(value).__name__}")


def _envelope_message(resp: httpx.Response) -> Optional[str]:
    """Message from the proxy's ``{error, message}`` envelope, if any."""
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get('message'):
        return f"{body.get('error', 'Error')}: {body['message']}"
    return None
