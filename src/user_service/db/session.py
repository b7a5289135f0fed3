"""
Database session management utilities and context managers.

Used outside of FastAPI's dependency injection, e.g. by startup seeding.
"""

from contextlib import contextmanager
from typing import Generator
from sqlalchemy.orm import Session

from core.database import SessionLocal
from core.exceptions import DatabaseException


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Context manager for database sessions with automatic cleanup.

    Provides a database session that automatically commits on success
    and rolls back on exceptions.

    Raises:
        DatabaseException: If database operation fails

    Example:
        with get_db_context() as db:
            db.add(User(username="admin", email="admin@example.com"))
            # Automatically commits on exit
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception as e:
        db.rollback()
        raise DatabaseException(f"Database operation failed: {str(e)}") from e
    finally:
        db.close()
