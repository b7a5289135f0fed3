"""
Database connection and session management.

This module handles:
- Database engine creation with connection pooling
- Session factory setup
- Connection health checks
- Retry logic for database initialization
"""

import time
from typing import Generator, Dict, Any
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool
import logging

from core.config import get_settings
from core.exceptions import ConfigurationException

logger = logging.getLogger('CORE_DATABASE')

# Get settings
settings = get_settings()

RETRY_DELAYS = [1, 2, 3, 5, 8]


def _engine_config(database_url: str) -> Dict[str, Any]:
    """Engine keyword arguments for the configured backend."""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        config: Dict[str, Any] = {
            'connect_args': {'check_same_thread': False},
            'echo': settings.db_echo,
        }
        # In-memory databases live inside one connection; share it across threads
        if url.database in (None, "", ":memory:"):
            config['poolclass'] = StaticPool
        return config

    return {
        'poolclass': QueuePool,
        'pool_size': settings.db_pool_size,
        'max_overflow': settings.db_max_overflow,
        'pool_timeout': settings.db_pool_timeout,
        'pool_recycle': settings.db_pool_recycle,
        'pool_pre_ping': settings.db_pool_pre_ping,
        'echo': settings.db_echo,
    }


def create_engine_with_retry(database_url: str) -> Engine:
    """
    Create the engine and wait for the database to accept connections.

    Retries with a growing delay (1, 2, 3, 5, 8 seconds) so the service can
    start alongside a database container that is still booting.

    Raises:
        ConfigurationException: If the database is unreachable after all attempts
    """
    for i, delay in enumerate(RETRY_DELAYS):
        try:
            candidate = create_engine(database_url, **_engine_config(database_url))
            # Test connection with health check
            with candidate.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info(f"Database connection established successfully on attempt {i+1}")
            return candidate
        except OperationalError as e:
            logger.error(f"Database not ready (attempt {i+1}/{len(RETRY_DELAYS)}): {e}")
            if i < len(RETRY_DELAYS) - 1:
                logger.info(f"Retrying in {delay} seconds...")
                time.sleep(delay)
            else:
                raise ConfigurationException(
                    f"Could not connect to the database after {len(RETRY_DELAYS)} attempts"
                ) from e


# Initialize engine with retry logic
DATABASE_URL = settings.get_database_url()
logger.info(f"Initializing database connection to: {settings.get_masked_database_url()}")
engine = create_engine_with_retry(DATABASE_URL)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function to get database session.

    Yields:
        Session: SQLAlchemy database session

    Example:
        @router.get("/users")
        def list_users(db: Session = Depends(get_db)):
            return db.query(User).all()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_database_health() -> Dict[str, Any]:
    """
    Check database connection health and return status.

    Returns:
        dict: Health status with connection pool information

    Example:
        {
            "status": "healthy",
            "connection_pool": "Pool size: 10  Connections in pool: 0 ..."
        }
    """
    url = engine.url
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
        return {
            "status": "healthy",
            "connection_pool": engine.pool.status(),
            "database": url.database,
            "host": url.host,
        }
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "status": "unhealthy",
            "error": str(e),
            "database": url.database,
            "host": url.host,
        }


def init_db() -> None:
    """
    Create missing tables and, when SEED_DATA is enabled, load demo rows.

    Safe to call on every startup: table creation is idempotent and the
    seed step only inserts into empty tables.
    """
    from models import Base
    from db.init_db import seed_database

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Base database tables ensured")

        if settings.seed_data:
            seed_database()
    except Exception as e:
        logger.error(f"Error during database initialization: {e}")
        # Re-raise to prevent app startup if critical initialization fails
        raise
