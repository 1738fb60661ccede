"""
FRED Proxy Endpoint

Forwards observation requests to FRED with the server-side API key, so
the key never reaches the browser.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from config import config
from sources.fred import FREDClient, UpstreamError

logger = logging.getLogger(__name__)

proxy_router = APIRouter()


def get_fred_client() -> FREDClient:
    return FREDClient(api_key=config.fred_api_key, base_url=config.fred_base_url)


@proxy_router.get("/api/fred/{series_id}")
async def fred_proxy(series_id: str, request: Request, fred: FREDClient = Depends(get_fred_client)):
    """Proxy /api/fred/<seriesId>?<query> to FRED series/observations."""
    try:
        data = await fred.observations(series_id, dict(request.query_params))
    except UpstreamError as e:
        return JSONResponse(
            status_code=e.status_code,
            content={"error": e.error, "message": e.message},
        )
    return JSONResponse(data)
