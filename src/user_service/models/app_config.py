"""
Application configuration ORM model.

Key/value settings scoped by environment, loaded as seed data.
"""

from sqlalchemy import Column, Integer, String, Text, UniqueConstraint

from models.base import Base, TimestampMixin


class AppConfig(TimestampMixin, Base):
    """One configuration value for one environment."""

    __tablename__ = "app_config"

    id = Column(Integer, primary_key=True, index=True)
    config_key = Column(String(100), nullable=False, index=True)
    config_value = Column(Text, nullable=False)
    environment = Column(String(20), nullable=False, index=True)
    description = Column(Text, nullable=True)

    __table_args__ = (
        UniqueConstraint("config_key", "environment", name="uq_app_config_key_environment"),
    )
