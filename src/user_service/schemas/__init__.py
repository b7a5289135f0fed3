"""
Pydantic schemas package.

Request/response validation models, organized by domain:
- user: user create/update requests, responses and statistics
- common: error, health and configuration entry payloads
"""

from schemas.common import ErrorResponse, HealthCheckResponse, AppConfigResponse
from schemas.user import (
    CreateUserRequest,
    UpdateUserRequest,
    UserResponse,
    UserStatistics,
)

__all__ = [
    "ErrorResponse",
    "HealthCheckResponse",
    "AppConfigResponse",
    "CreateUserRequest",
    "UpdateUserRequest",
    "UserResponse",
    "UserStatistics",
]
