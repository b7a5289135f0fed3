"""
App Config Repository

Read access to per-environment configuration entries.
"""

from typing import List, Optional
from sqlalchemy.orm import Session

from models.app_config import AppConfig
from repositories.base import BaseRepository


class AppConfigRepository(BaseRepository[AppConfig]):
    """Repository for AppConfig entries."""

    def __init__(self, db: Session):
        super().__init__(AppConfig, db)

    def find_by_environment(self, environment: str) -> List[AppConfig]:
        return (
            self.db.query(AppConfig)
            .filter(AppConfig.environment == environment)
            .order_by(AppConfig.config_key)
            .all()
        )

    def find_by_key_and_environment(self, config_key: str, environment: str) -> Optional[AppConfig]:
        return (
            self.db.query(AppConfig)
            .filter(AppConfig.config_key == config_key, AppConfig.environment == environment)
            .first()
        )
