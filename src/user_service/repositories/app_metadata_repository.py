"""
App Metadata Repository
"""

from typing import Optional
from sqlalchemy.orm import Session

from models.app_metadata import AppMetadata
from repositories.base import BaseRepository


class AppMetadataRepository(BaseRepository[AppMetadata]):

    def __init__(self, db: Session):
        super().__init__(AppMetadata, db)

    def find_by_key(self, metadata_key: str) -> Optional[AppMetadata]:
        return self.db.query(AppMetadata).filter(AppMetadata.metadata_key == metadata_key).first()
