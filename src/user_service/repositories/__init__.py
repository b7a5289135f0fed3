"""
Repositories package.

This package contains all data access layer repositories following the Repository Pattern.
Each repository extends BaseRepository and provides domain-specific data operations.

Usage:
    from repositories import UserRepository
    from core.database import get_db

    def list_users(db: Session = Depends(get_db)):
        repo = UserRepository(db)
        return repo.get_all()
"""

from repositories.base import BaseRepository
from repositories.user_repository import UserRepository
from repositories.app_config_repository import AppConfigRepository
from repositories.app_metadata_repository import AppMetadataRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "AppConfigRepository",
    "AppMetadataRepository",
]
