from fastapi import APIRouter, Depends, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
import logging

from core.config import Settings
from core.database import get_database_health
from core.dependencies import get_app_settings, get_user_service
from schemas.common import HealthCheckResponse
from services.user_service import UserService

logger = logging.getLogger("HEALTH_API_LOGGER")

health_api_router = APIRouter(prefix="/health", tags=["health"])


@health_api_router.get("", response_model=HealthCheckResponse)
def health_status(
    settings: Settings = Depends(get_app_settings),
    user_service: UserService = Depends(get_user_service),
):
    """
    Liveness/readiness probe.

    200 with status UP while the database answers, 503 with status DOWN
    otherwise so the orchestrator stops routing traffic to this pod.
    """
    database_health = get_database_health()
    database_up = database_health.get("status") == "healthy"

    checks = {
        "database": "UP" if database_up else "DOWN",
        "cache": "UP" if settings.feature_cache_enabled else "DISABLED",
        "metrics": "UP" if settings.feature_metrics_enabled else "DISABLED",
    }
    if database_up:
        user_store = user_service.health_check()
        checks["userStore"] = "UP" if user_store.get("status") == "healthy" else "DOWN"

    overall = "UP" if all(value != "DOWN" for value in checks.values()) else "DOWN"
    if overall == "DOWN":
        logger.warning(f"Health check failed: {checks}")

    body = HealthCheckResponse(
        status=overall,
        environment=settings.environment,
        version=settings.app_version,
        checks=checks,
        database=database_health,
    )
    code = status.HTTP_200_OK if overall == "UP" else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=code, content=jsonable_encoder(body))
