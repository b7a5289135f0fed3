"""
Service exceptions.

Repositories and services raise these; ``main.register_exception_handlers``
maps them to HTTP responses:

- ValidationException -> 400
- NotFoundException   -> 404
- DuplicateException  -> 409
- DatabaseException   -> 500

ConfigurationException is raised at startup only (unreachable database).
"""

from typing import Optional, Any, Dict


class ApplicationException(Exception):
    """Root of the user service exceptions; ``details`` is machine-readable context."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DatabaseException(ApplicationException):
    """A query or commit failed for a reason other than a unique constraint."""


class ValidationException(ApplicationException):
    """Input accepted by the request schema but rejected by a business rule."""


class NotFoundException(ApplicationException):
    """No row with the given identifier, e.g. ``User not found: 42``."""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            f"{resource} not found: {identifier}",
            {"resource": resource, "identifier": identifier},
        )


class DuplicateException(ApplicationException):
    """A unique field (username or email) is already taken by another row."""

    def __init__(self, resource: str, field: str, value: Any):
        super().__init__(
            f"{resource} already exists with {field}: {value}",
            {"resource": resource, "field": field, "value": value},
        )


class ConfigurationException(ApplicationException):
    """Settings that make startup impossible."""
