"""
Application information API.

Reports who is running where: name, environment, build metadata, feature
flags and the pod the request landed on. Secrets are never returned.
"""

import os
import platform
import socket
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import fastapi
import sqlalchemy
from fastapi import APIRouter, Body, Depends
import logging

from core.config import Settings, get_settings
from core.dependencies import get_app_settings

logger = logging.getLogger("APP_API")

router = APIRouter(tags=["Application"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/")
def home(settings: Settings = Depends(get_app_settings)):
    return {
        "message": f"Welcome to {settings.app_name}",
        "environment": settings.environment,
        "version": settings.build_version if settings.build_version != "unknown" else settings.app_version,
        "timestamp": _now(),
        "status": "OK",
    }


@router.get("/info")
def app_info(settings: Settings = Depends(get_app_settings)):
    return {
        "name": settings.app_name,
        "environment": settings.environment,
        "version": settings.app_version,
        "description": settings.app_description,
        "build": {
            "version": settings.build_version,
            "date": settings.build_date,
            "revision": settings.build_revision,
        },
        "runtime": {
            "pythonVersion": platform.python_version(),
            "fastapiVersion": fastapi.__version__,
            "sqlalchemyVersion": sqlalchemy.__version__,
            "timestamp": _now(),
        },
    }


@router.get("/config")
def app_configuration(settings: Settings = Depends(get_app_settings)):
    """Feature, monitoring, database and security settings, without secrets."""
    return {
        "features": settings.features(),
        "monitoring": settings.monitoring(),
        "database": settings.database(),
        "security": settings.security(),
    }


@router.api_route("/config/reload", methods=["GET", "POST"])
def reload_configuration():
    """
    Re-read settings from the environment.

    Database connection settings are bound to the engine at startup and
    only change on restart.
    """
    get_settings.cache_clear()
    settings = get_settings()
    logger.info(f"Configuration reloaded for environment: {settings.environment}")
    return {
        "message": "Configuration reloaded",
        "environment": settings.environment,
        "features": settings.features(),
        "timestamp": _now(),
    }


@router.get("/environment")
def environment_info(settings: Settings = Depends(get_app_settings)):
    return {
        "environment": settings.environment,
        "applicationName": settings.app_name,
        "serverPort": settings.server_port,
        "hostname": os.getenv("HOSTNAME") or socket.gethostname(),
        "podName": os.getenv("POD_NAME"),
        "namespace": os.getenv("POD_NAMESPACE"),
        "nodeName": os.getenv("NODE_NAME"),
    }


@router.post("/echo")
@router.post("/test", include_in_schema=False)
def echo(
    payload: Optional[Dict[str, Any]] = Body(None),
    settings: Settings = Depends(get_app_settings),
):
    """Echo the request body back with the environment and feature flags."""
    return {
        "message": "Echo endpoint called successfully",
        "timestamp": _now(),
        "environment": settings.environment,
        "receivedPayload": payload,
        "featuresEnabled": settings.features(),
    }
