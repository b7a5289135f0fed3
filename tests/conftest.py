import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient

SERVICE_ROOT = Path(__file__).resolve().parents[1] / "src" / "user_service"
if str(SERVICE_ROOT) not in sys.path:
    sys.path.insert(0, str(SERVICE_ROOT))

# Must be set before any service module is imported: the engine is built at import time.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["SEED_DATA"] = "false"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from core.config import get_settings  # noqa: E402
from core.database import SessionLocal, engine  # noqa: E402
from models import Base, User  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(autouse=True)
def reset_settings_cache():
    yield
    get_settings.cache_clear()


@pytest.fixture()
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client():
    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def user_factory(db_session) -> Callable[..., User]:
    def _create(
        username: str,
        email: Optional[str] = None,
        environment: str = "test",
        active: bool = True,
        created_at: Optional[datetime] = None,
    ) -> User:
        user = User(
            username=username,
            email=email or f"{username}@example.com",
            environment=environment,
            active=active,
        )
        if created_at is not None:
            user.created_at = created_at
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _create
