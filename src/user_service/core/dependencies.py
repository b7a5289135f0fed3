"""
FastAPI dependency providers.

Routers receive settings, repositories and services through ``Depends``;
each request gets its own database session from ``get_db``.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from core.config import get_settings, Settings
from core.database import get_db
from repositories.app_config_repository import AppConfigRepository
from services.user_service import UserService


# ============================================================================
# Configuration Dependencies
# ============================================================================

def get_app_settings() -> Settings:
    """
    Get the current application settings.

    Delegates to the cached ``get_settings`` so a configuration reload
    (``get_settings.cache_clear()``) is visible to the next request.

    Example:
        @router.get("/config")
        def get_config(settings: Settings = Depends(get_app_settings)):
            return settings.features()
    """
    return get_settings()


# ============================================================================
# Repository Dependencies
# ============================================================================

def get_app_config_repository(db: Session = Depends(get_db)) -> AppConfigRepository:
    return AppConfigRepository(db)


# ============================================================================
# Service Dependencies
# ============================================================================

def get_user_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> UserService:
    """
    Get a UserService bound to the request's session.

    Example:
        @router.get("/users/{user_id}")
        def get_user(user_id: int, service: UserService = Depends(get_user_service)):
            return service.get_user_by_id(user_id)
    """
    return UserService(db, settings)
