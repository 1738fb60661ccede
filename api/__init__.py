"""API module - FastAPI routers and endpoints."""

from .dashboard import dashboard_router
from .health import health_router
from .proxy import proxy_router

__all__ = ['dashboard_router', 'health_router', 'proxy_router']
