import os

# Settings are read at import time, so the test environment goes in first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("RATE_LIMIT_SHORT_REQUESTS", "1000")
os.environ.setdefault("RATE_LIMIT_LONG_REQUESTS", "1000")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db, get_user_store
from app.core import rate_limit
from app.db.session import Base
from app.main import app
from app.models import employee  # noqa: F401  registers the table
from app.services.user_store import UserStore


@pytest.fixture(autouse=True)
def reset_rate_limit():
    # Fixed-window counters are process-wide; start every test from zero
    rate_limit.limiter.reset()
    yield
    rate_limit.limiter.reset()


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def user_store():
    return UserStore()


@pytest.fixture
def client(session_factory, user_store):
    def _get_test_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    app.dependency_overrides[get_user_store] = lambda: user_store
    yield TestClient(app)
    app.dependency_overrides.clear()
