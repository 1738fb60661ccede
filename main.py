"""
Real Estate Indicators - FRED proxy and dashboard API

Serves the data behind the real-estate economic-indicators dashboard:
- /api/fred/{series_id}: FRED proxy that injects the API key server-side
- /health: reachability probe used before every fetch cycle
- /api/dashboard: five series fetched, joined on date and summarized,
  with synthetic data when live data cannot be loaded
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import config, SERIES_IDS
from api import dashboard_router, health_router, proxy_router
from sources.fred import close_async_client

logger = logging.getLogger(__name__)


# =============================================================================
# APP INITIALIZATION
# =============================================================================

app = FastAPI(
    title="Real Estate Indicators",
    description="Real estate economic indicators from FRED",
    version="1.0.0"
)

# CORS open for every origin (dashboard may be served from anywhere)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(proxy_router)
app.include_router(health_router)
app.include_router(dashboard_router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"detail": str(exc), "type": type(exc).__name__},
        headers={"Access-Control-Allow-Origin": "*"},
    )


# =============================================================================
# STARTUP / SHUTDOWN
# =============================================================================

@app.on_event("startup")
async def startup():
    """Log configuration."""
    print("=" * 60)
    print("Real Estate Indicators Starting Up")
    print("=" * 60)
    print(f"  FRED: {'SET' if config.fred_api_key else 'NOT SET'}")
    print(f"  API base: {config.api_base_url}")
    print(f"  Window: {config.observation_window_years} years, frequency '{config.frequency}'")
    print("-" * 60)
    print("Series:")
    for key, series_id in SERIES_IDS.items():
        print(f"  {key}: {series_id}")
    print("=" * 60)


@app.on_event("shutdown")
async def shutdown():
    await close_async_client()


# =============================================================================
# RUN
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=config.port,
        reload=True
    )
