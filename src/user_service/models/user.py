"""
User ORM model.

Stores user records partitioned by environment tag.
"""

from sqlalchemy import Column, Integer, String, Boolean

from models.base import Base, TimestampMixin


class User(TimestampMixin, Base):
    """User record with identity, environment tag and active flag."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    environment = Column(String(20), nullable=False, default="dev", index=True)
    active = Column(Boolean, nullable=False, default=True)

    def __repr__(self) -> str:
        return f"<User id={self.id} username={self.username!r} environment={self.environment!r}>"
