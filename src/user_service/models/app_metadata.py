"""
Application metadata ORM model.

Global key/value facts about the deployment (name, supported profiles,
where configuration comes from), independent of environment.
"""

from sqlalchemy import Column, Integer, String, Text

from models.base import Base, TimestampMixin


class AppMetadata(TimestampMixin, Base):
    __tablename__ = "app_metadata"

    id = Column(Integer, primary_key=True, index=True)
    metadata_key = Column(String(100), unique=True, nullable=False, index=True)
    metadata_value = Column(Text, nullable=False)

    def __repr__(self):
        return f"<AppMetadata(key='{self.metadata_key}')>"
