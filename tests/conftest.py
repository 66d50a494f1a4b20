# /tests/conftest.py

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from scholar_track.db.database import init_db
from scholar_track.services.local_platform import LocalPlatformClient
from scholar_track.services.notifier import Notifier
from scholar_track.services.outbox import Outbox


@pytest.fixture
def session_factory():
    """Provides a session factory bound to a fresh in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def local_platform(session_factory):
    """A local platform with no simulated latency."""
    return LocalPlatformClient(session_factory=session_factory)


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def outbox(notifier):
    return Outbox(notifier, max_attempts=3)
