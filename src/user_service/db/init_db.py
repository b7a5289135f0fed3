"""
Demo data for local and dev environments.

Loaded on startup when SEED_DATA=true. Each table is only seeded while it
is empty, so restarts never duplicate rows.
"""

import logging
from typing import List, Tuple

from sqlalchemy.orm import Session

from db.session import get_db_context
from models.app_config import AppConfig
from models.app_metadata import AppMetadata
from models.user import User
from repositories.app_config_repository import AppConfigRepository
from repositories.app_metadata_repository import AppMetadataRepository
from repositories.user_repository import UserRepository

# Get logger without configuring (let main configure logging)
logger = logging.getLogger(__name__)

DEMO_ENVIRONMENT = "demo"

DEMO_USERS: List[Tuple[str, str]] = [
    ("admin", "admin@example.com"),
    ("user1", "user1@example.com"),
    ("user2", "user2@example.com"),
]

# (key, value, environment, description)
DEMO_APP_CONFIG: List[Tuple[str, str, str, str]] = [
    ("max_users", "1000", "dev", "Maximum number of users allowed in development"),
    ("max_users", "10000", "staging", "Maximum number of users allowed in staging"),
    ("max_users", "100000", "prod", "Maximum number of users allowed in production"),
    ("feature_toggle_cache", "true", "dev", "Enable caching feature in development"),
    ("feature_toggle_cache", "true", "staging", "Enable caching feature in staging"),
    ("feature_toggle_cache", "true", "prod", "Enable caching feature in production"),
    ("debug_enabled", "true", "dev", "Enable debug mode in development"),
    ("debug_enabled", "false", "staging", "Disable debug mode in staging"),
    ("debug_enabled", "false", "prod", "Disable debug mode in production"),
]

DEMO_APP_METADATA: List[Tuple[str, str]] = [
    ("app_name", "User Service"),
    ("app_description", "Example application with multi-environment support"),
    ("supported_profiles", "dev,staging,prod"),
    ("configuration_source", "ConfigMap and Secret"),
]


def seed_users(db: Session) -> int:
    repo = UserRepository(db)
    if repo.count() > 0:
        logger.info("Users table already populated, skipping user seed")
        return 0
    users = [
        User(username=username, email=email, environment=DEMO_ENVIRONMENT, active=True)
        for username, email in DEMO_USERS
    ]
    repo.bulk_create(users)
    logger.info(f"Seeded {len(users)} demo users")
    return len(users)


def seed_app_config(db: Session) -> int:
    repo = AppConfigRepository(db)
    if repo.count() > 0:
        logger.info("app_config table already populated, skipping config seed")
        return 0
    entries = [
        AppConfig(config_key=key, config_value=value, environment=environment, description=description)
        for key, value, environment, description in DEMO_APP_CONFIG
    ]
    repo.bulk_create(entries)
    logger.info(f"Seeded {len(entries)} app config entries")
    return len(entries)


def seed_app_metadata(db: Session) -> int:
    repo = AppMetadataRepository(db)
    if repo.count() > 0:
        logger.info("app_metadata table already populated, skipping metadata seed")
        return 0
    rows = [AppMetadata(metadata_key=key, metadata_value=value) for key, value in DEMO_APP_METADATA]
    repo.bulk_create(rows)
    logger.info(f"Seeded {len(rows)} app metadata entries")
    return len(rows)


def seed_database() -> Tuple[int, int, int]:
    """
    Insert demo users, configuration entries and metadata into empty tables.

    Returns:
        Tuple of (users, config entries, metadata entries) inserted
    """
    with get_db_context() as db:
        users = seed_users(db)
        entries = seed_app_config(db)
        metadata = seed_app_metadata(db)
    return users, entries, metadata
