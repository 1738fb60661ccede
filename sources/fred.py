"""
FRED Upstream Client - Federal Reserve Economic Data

Used by the proxy to forward observation requests with the server-side key.
The body is passed back verbatim; callers decide how to shape errors.
"""

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from config import config

logger = logging.getLogger(__name__)


# Module-level connection pool for HTTP connection reuse
_async_client: Optional[httpx.AsyncClient] = None


def get_async_client() -> httpx.AsyncClient:
    """Get or create the shared async HTTP client with connection pooling."""
    global _async_client
    if _async_client is None or _async_client.is_closed:
        _async_client = httpx.AsyncClient(
            timeout=config.upstream_timeout,
            limits=httpx.Limits(
                max_keepalive_connections=10,
                max_connections=20,
                keepalive_expiry=30.0
            )
        )
    return _async_client


async def close_async_client() -> None:
    """Close the shared client (app shutdown)."""
    global _async_client
    if _async_client is not None and not _async_client.is_closed:
        await _async_client.aclose()
    _async_client = None


class UpstreamError(Exception):
    """The upstream request failed; carries what the proxy should report."""

    def __init__(self, error: str, message: str, status_code: int = 500):
        super().__init__(message)
        self.error = error
        self.message = message
        self.status_code = status_code


class FREDClient:
    """Thin client for the FRED observations endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        base_url: Optional[str] = None,
    ):
        self._api_key = api_key
        self._client = client
        self._base_url = (base_url or config.fred_base_url).rstrip('/')

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def build_params(self, series_id: str, query: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Merge caller query with the injected key and output format.

        The server-side key and ``file_type`` always win over anything the
        caller sent.
        """
        params = {k: v for k, v in query.items() if k not in ('api_key', 'file_type', 'series_id')}
        params['series_id'] = series_id
        params['api_key'] = self._api_key
        params['file_type'] = 'json'
        return params

    async def observations(self, series_id: str, query: Mapping[str, Any]) -> Any:
        """
        Fetch observations for one series.

        Returns:
            The decoded upstream JSON body

        Raises:
            UpstreamError: on missing key, transport failure or non-2xx status
        """
        if not self._api_key:
            raise UpstreamError('Configuration Error', 'FRED API key not configured')

        url = f"{self._base_url}/series/observations"
        params = self.build_params(series_id, query)
        logger.info(f"Proxying request for {series_id} with {sorted(k for k in params if k != 'api_key')}")

        client = self._client or get_async_client()
        try:
            resp = await client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"No response received from FRED API for {series_id}: {e}")
            raise UpstreamError('No Response', 'No response received from FRED API') from e

        if resp.status_code >= 400:
            message = _error_message(resp) or f"HTTP error! Status: {resp.status_code}"
            logger.error(f"FRED API error for {series_id}: {resp.status_code} {message}")
            raise UpstreamError('FRED API Error', message, status_code=resp.status_code)

        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamError('FRED API Error', f"Invalid JSON from FRED for {series_id}") from e


def _error_message(resp: httpx.Response) -> Optional[str]:
    """FRED puts a human-readable reason in ``error_message``."""
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get('error_message')
    return None
