"""
Base Service Class

Provides common functionality and patterns for services: a named logger,
database session access and input validation helpers.
"""

import logging
from typing import Optional, Dict, Any
from abc import ABC, abstractmethod
from sqlalchemy.orm import Session

from core.exceptions import ValidationException, DatabaseException


class BaseService(ABC):
    """
    Base class for all service implementations.

    Provides:
    - Standardized logging
    - Database session management
    - Common validation helpers
    """

    def __init__(self, db: Optional[Session] = None, service_name: Optional[str] = None):
        """
        Initialize base service.

        Args:
            db: Optional database session
            service_name: Service name for logging (defaults to class name)
        """
        self.db = db
        self.service_name = service_name or self.__class__.__name__
        self.logger = logging.getLogger(self.service_name)

    # ========================================================================
    # Database Helpers
    # ========================================================================

    def _ensure_db(self) -> Session:
        """
        Ensure database session is available.

        Raises:
            DatabaseException: If no database session available
        """
        if self.db is None:
            raise DatabaseException("Database session not available")
        return self.db

    # ========================================================================
    # Validation Helpers
    # ========================================================================

    def _validate_required(self, value: Any, field_name: str) -> Any:
        """
        Validate that a required field is not None or empty.

        Raises:
            ValidationException: If value is None or blank
        """
        if value is None:
            raise ValidationException(f"{field_name} is required", {"field": field_name})

        if isinstance(value, str) and not value.strip():
            raise ValidationException(f"{field_name} cannot be empty", {"field": field_name})

        return value

    def _validate_positive(self, value: int, field_name: str) -> int:
        """
        Validate that a numeric value is positive.

        Raises:
            ValidationException: If value is not positive
        """
        if value <= 0:
            raise ValidationException(f"{field_name} must be positive", {"field": field_name})
        return value

    # ========================================================================
    # Abstract Methods (to be implemented by subclasses)
    # ========================================================================

    @abstractmethod
    def health_check(self) -> Dict[str, Any]:
        """
        Perform health check for this service.

        Returns:
            Dictionary with health status and details

        Example:
            {
                "status": "healthy",
                "details": {"users": 3}
            }
        """
        pass
