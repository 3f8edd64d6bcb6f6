"""
Shared fixtures: mocked sessions, a fake database resource, a temporary
document store and a TestClient wired through dependency overrides.
"""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from scholarship_portal.core.database import get_database, get_db
from scholarship_portal.core.rate_limit import reset_memory_store
from scholarship_portal.core.storage import DocumentStore, get_document_store
from scholarship_portal.main import app


class FakeDatabase:
    """
    Stand-in for ``Database`` that records what the unit of work did.

    ``transaction()`` yields the given session and notes whether the block
    committed, rolled back, and released its connection.
    """

    def __init__(self, session):
        self.session_obj = session
        self.committed = False
        self.rolled_back = False
        self.released = False

    @asynccontextmanager
    async def session(self):
        yield self.session_obj

    @asynccontextmanager
    async def transaction(self):
        try:
            yield self.session_obj
        except Exception:
            self.rolled_back = True
            raise
        else:
            self.committed = True
        finally:
            self.released = True


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.flush = AsyncMock()
    db.get = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def fake_database(mock_db):
    return FakeDatabase(mock_db)


@pytest.fixture
def document_store(tmp_path):
    store = DocumentStore(tmp_path / "uploads")
    store.ensure_root()
    return store


@pytest.fixture
def client(mock_db, fake_database, document_store):
    """TestClient with database, storage and rate limiter isolated."""

    async def override_get_db():
        yield mock_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_database] = lambda: fake_database
    app.dependency_overrides[get_document_store] = lambda: document_store
    reset_memory_store()

    yield TestClient(app)

    app.dependency_overrides.clear()
    reset_memory_store()
