"""
ORM Models package.

All models are imported here so they register with ``Base.metadata``
before tables are created.

Usage:
    from models import User, AppConfig, AppMetadata
    from models.base import Base
"""

from models.base import Base, TimestampMixin
from models.user import User
from models.app_config import AppConfig
from models.app_metadata import AppMetadata

__all__ = [
    "Base",
    "TimestampMixin",
    "User",
    "AppConfig",
    "AppMetadata",
]
