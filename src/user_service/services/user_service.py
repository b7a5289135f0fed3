"""
User Service

Business rules for user records: uniqueness of username and email,
partial updates that never touch ``created_at``, activation state and
environment statistics. One instance is created per request around the
request's database session.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from core.config import Settings, get_settings
from core.exceptions import DatabaseException, DuplicateException, ValidationException
from models.base import utcnow
from models.user import User
from repositories.user_repository import UserRepository
from schemas.user import UserStatistics
from services.base_service import BaseService

UPDATABLE_FIELDS = ("username", "email", "environment", "active")


class UserService(BaseService):
    """User management operations on top of UserRepository."""

    def __init__(self, db: Session, settings: Optional[Settings] = None):
        super().__init__(db, service_name="USER_SERVICE")
        self.settings = settings or get_settings()
        self.current_environment = self.settings.environment
        self.users = UserRepository(self._ensure_db())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_all_users(self) -> List[User]:
        self.logger.info(f"Fetching all users in environment: {self.current_environment}")
        return self.users.get_all()

    def get_users_by_environment(self, environment: str) -> List[User]:
        self.logger.info(f"Fetching users for environment: {environment}")
        return self.users.find_by_environment(environment)

    def get_active_users(self) -> List[User]:
        self.logger.info("Fetching active users")
        return self.users.find_active()

    def get_active_users_by_environment(self, environment: str) -> List[User]:
        self.logger.info(f"Fetching active users for environment: {environment}")
        return self.users.find_by_environment_and_active(environment)

    def get_users_by_environment_and_status(self, environment: str, active: bool) -> List[User]:
        self.logger.info(f"Fetching users for environment: {environment} with active={active}")
        return self.users.find_by_environment_and_status(environment, active)

    def get_recent_active_users(self, limit: int) -> List[User]:
        self._validate_positive(limit, "limit")
        self.logger.debug(f"Fetching {limit} most recent active users")
        return self.users.find_recent_active(limit)

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        self.logger.debug(f"Fetching user with ID: {user_id}")
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        self.logger.debug(f"Fetching user with username: {username}")
        return self.users.find_by_username(username)

    def get_user_by_email(self, email: str) -> Optional[User]:
        self.logger.debug(f"Fetching user with email: {email}")
        return self.users.find_by_email(email)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_user(
        self,
        username: str,
        email: str,
        environment: Optional[str] = None,
        active: bool = True,
    ) -> User:
        """
        Create a user.

        Args:
            username: Unique, non-blank username
            email: Unique email address
            environment: Environment tag; defaults to the running environment
            active: Initial active flag

        Raises:
            ValidationException: If username or email is blank
            DuplicateException: If username or email is already taken
        """
        self._validate_required(username, "username")
        self._validate_required(email, "email")
        environment = environment or self.current_environment

        self.logger.info(f"Creating new user: {username} in environment: {environment}")

        if self.users.exists_by_username(username):
            raise DuplicateException("User", "username", username)
        if self.users.exists_by_email(email):
            raise DuplicateException("User", "email", email)

        user = User(username=username, email=email, environment=environment, active=active)
        saved = self.users.save_new(user)

        self.logger.info(f"Created user with ID: {saved.id} in environment: {environment}")
        return saved

    def update_user(self, user_id: int, updates: Dict[str, Any]) -> User:
        """
        Apply the given fields to an existing user.

        Unknown keys and ``None`` values are ignored; uniqueness is only
        re-checked for a username or email that actually changes.

        Raises:
            ValidationException: If no updatable field is given
            NotFoundException: If the user does not exist
            DuplicateException: If the new username or email is taken
        """
        changes = {
            key: value for key, value in updates.items()
            if key in UPDATABLE_FIELDS and value is not None
        }
        if not changes:
            raise ValidationException("No fields to update")

        self.logger.info(f"Updating user with ID: {user_id}")
        user = self.users.get_or_fail(user_id)

        username = changes.get("username")
        if username is not None:
            self._validate_required(username, "username")
            if username != user.username and self.users.exists_by_username(username):
                raise DuplicateException("User", "username", username)

        email = changes.get("email")
        if email is not None:
            self._validate_required(email, "email")
            if email != user.email and self.users.exists_by_email(email):
                raise DuplicateException("User", "email", email)

        for key, value in changes.items():
            setattr(user, key, value)
        # onupdate only fires when a column value actually changes
        user.updated_at = utcnow()

        updated = self.users.save_changes(user)
        self.logger.info(f"Updated user with ID: {updated.id} (fields: {', '.join(sorted(changes))})")
        return updated

    def activate_user(self, user_id: int) -> User:
        self.logger.info(f"Activating user with ID: {user_id}")
        return self._set_active(user_id, True)

    def deactivate_user(self, user_id: int) -> User:
        self.logger.info(f"Deactivating user with ID: {user_id}")
        return self._set_active(user_id, False)

    def _set_active(self, user_id: int, active: bool) -> User:
        user = self.users.get_or_fail(user_id)
        user.active = active
        user.updated_at = utcnow()
        return self.users.save_changes(user)

    def delete_user(self, user_id: int) -> None:
        """
        Permanently delete a user.

        Raises:
            NotFoundException: If the user does not exist
        """
        self.logger.warning(f"Permanently deleting user with ID: {user_id}")
        user = self.users.get_or_fail(user_id)
        self.users.delete(user)
        self.logger.warning(f"Permanently deleted user with ID: {user_id}")

    # ------------------------------------------------------------------
    # Statistics & health
    # ------------------------------------------------------------------

    def get_user_statistics(self) -> UserStatistics:
        self.logger.debug(f"Generating user statistics for environment: {self.current_environment}")
        return UserStatistics(
            total_users=self.users.count(),
            active_users=self.users.count_active(),
            users_in_environment=self.users.count_by_environment(self.current_environment),
            active_users_in_environment=self.users.count_by_environment_and_active(self.current_environment),
            environment=self.current_environment,
        )

    def health_check(self) -> Dict[str, Any]:
        try:
            total = self.users.count()
        except DatabaseException as e:
            self.logger.error(f"User store health check failed: {e}")
            return {"status": "unhealthy", "error": str(e)}
        return {"status": "healthy", "details": {"users": total}}

