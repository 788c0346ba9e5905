"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from trade_journal.database import get_db
from trade_journal.main import app
from trade_journal.models import Base

TEST_USER = "user-1"


@pytest.fixture
def db_session():
    """Create in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def client(db_session):
    """Test client authenticated as TEST_USER, backed by the test database."""
    app.dependency_overrides[get_db] = lambda: db_session
    with TestClient(app, headers={"X-User-Id": TEST_USER}) as test_client:
        yield test_client
    app.dependency_overrides.clear()
