"""
User Repository

Data access layer for user records. Every finder is an explicit query;
constraint violations on write are translated into DuplicateException.
"""

from typing import List, Optional
from sqlalchemy import desc
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
import logging

from models.user import User
from repositories.base import BaseRepository
from core.exceptions import DuplicateException

logger = logging.getLogger("USER_REPOSITORY")


def _conflicting_field(error: IntegrityError) -> str:
    """Best effort guess of the unique column named in a driver error message."""
    message = str(error.orig).lower()
    for field in ("username", "email"):
        if field in message:
            return field
    return "username or email"


class UserRepository(BaseRepository[User]):
    """Repository for user records."""

    def __init__(self, db: Session):
        super().__init__(User, db)

    # ------------------------------------------------------------------
    # Single-record lookups
    # ------------------------------------------------------------------

    def find_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def exists_by_username(self, username: str) -> bool:
        return self.db.query(User.id).filter(User.username == username).first() is not None

    def exists_by_email(self, email: str) -> bool:
        return self.db.query(User.id).filter(User.email == email).first() is not None

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def find_active(self) -> List[User]:
        return self.db.query(User).filter(User.active.is_(True)).order_by(User.id).all()

    def find_by_environment(self, environment: str) -> List[User]:
        return self.db.query(User).filter(User.environment == environment).order_by(User.id).all()

    def find_by_environment_and_active(self, environment: str) -> List[User]:
        """Active users of one environment."""
        return (
            self.db.query(User)
            .filter(User.environment == environment, User.active.is_(True))
            .order_by(User.id)
            .all()
        )

    def find_by_environment_and_status(self, environment: str, active: bool) -> List[User]:
        """Users of one environment with the given active flag, newest first."""
        return (
            self.db.query(User)
            .filter(User.environment == environment, User.active.is_(active))
            .order_by(desc(User.created_at), desc(User.id))
            .all()
        )

    def find_recent_active(self, limit: int) -> List[User]:
        """The ``limit`` most recently created active users, newest first."""
        return (
            self.db.query(User)
            .filter(User.active.is_(True))
            .order_by(desc(User.created_at), desc(User.id))
            .limit(limit)
            .all()
        )

    # ------------------------------------------------------------------
    # Counts
    # ------------------------------------------------------------------

    def count_active(self) -> int:
        return self.count({"active": True})

    def count_by_environment(self, environment: str) -> int:
        return self.count({"environment": environment})

    def count_by_environment_and_active(self, environment: str) -> int:
        return self.count({"environment": environment, "active": True})

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def save_new(self, user: User) -> User:
        """Insert a user, raising DuplicateException on a unique constraint violation."""
        username, email = user.username, user.email
        try:
            return self.create(user)
        except IntegrityError as e:
            field = _conflicting_field(e)
            value = email if field == "email" else username
            logger.warning(f"Unique constraint violated on insert ({field}={value})")
            raise DuplicateException("User", field, value) from e

    def save_changes(self, user: User) -> User:
        """Commit pending changes to an attached user, translating constraint violations."""
        username, email = user.username, user.email
        try:
            return self.update(user)
        except IntegrityError as e:
            field = _conflicting_field(e)
            value = email if field == "email" else username
            logger.warning(f"Unique constraint violated on update of user {user.id} ({field}={value})")
            raise DuplicateException("User", field, value) from e
