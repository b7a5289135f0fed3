"""
API routers package for the FastAPI application.

This package contains all API endpoint routers organized by domain:
- users_api: User CRUD, filters, activation and statistics
- app_api: Application info, configuration and environment endpoints
- app_config_api: Environment-scoped configuration entries
- health_api: Health check endpoint
"""

from .users_api import router as users_router
from .app_api import router as app_router
from .app_config_api import router as app_config_router
from .health_api import health_api_router

__all__ = [
    "users_router",
    "app_router",
    "app_config_router",
    "health_api_router",
]
