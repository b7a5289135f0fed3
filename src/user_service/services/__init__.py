"""
Service layer.

Services hold the business rules and wrap repositories; routers call
services, never repositories directly.
"""

from services.base_service import BaseService
from services.user_service import UserService

__all__ = ["BaseService", "UserService"]
