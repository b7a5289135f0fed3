"""
Common/shared Pydantic schemas.

This module contains reusable schemas used across the application:
- Error responses
- Application info and health payloads
- Configuration entries
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Any, Dict, List
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ErrorResponse(BaseModel):
    """Error response model for request validation failures."""
    error: str
    detail: Optional[List[Dict[str, Any]]] = None
    timestamp: datetime = Field(default_factory=_utcnow)


class HealthCheckResponse(BaseModel):
    """Health check response."""
    status: str
    environment: str
    version: str
    checks: Dict[str, str]
    database: Dict[str, Any]
    timestamp: datetime = Field(default_factory=_utcnow)


class AppConfigResponse(BaseModel):
    """One environment-scoped configuration entry."""
    id: int
    config_key: str
    config_value: str
    environment: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
