"""
pytest Fixtures for Bookstore API Tests

DATABASE FIXTURES
=================
Tests run against SQLite in-memory instead of PostgreSQL:
- Fast: No disk I/O, runs in memory
- Isolated: Every test function gets a brand new database, so generated
  ids always start at 1
- Simple: No external database needed

StaticPool keeps the single connection alive for the whole test; without
it the in-memory database would disappear between checkouts.
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from bookstore.bootstrap import bootstrap_database, create_schema
from bookstore.config import Settings
from bookstore.database import DatabasePool
from bookstore.main import create_app
from bookstore.repositories import SQLBookRepository

from tests.utils import make_settings


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def pool() -> Generator[DatabasePool, None, None]:
    """
    An empty SQLite in-memory database behind a DatabasePool.

    Only the schema exists; no seed rows.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    pool = DatabasePool(engine)
    create_schema(pool)

    yield pool

    pool.close()


@pytest.fixture
def seeded_pool(pool: DatabasePool) -> DatabasePool:
    """The same database after a full startup bootstrap (3 seed books)."""
    bootstrap_database(pool)
    return pool


@pytest.fixture
def repository(seeded_pool: DatabasePool) -> SQLBookRepository:
    return SQLBookRepository(seeded_pool)


@pytest.fixture
def client(
    settings: Settings,
    repository: SQLBookRepository,
) -> Generator[TestClient, None, None]:
    """
    Create a test client serving the seeded SQLite store.

    The repository is handed to create_app(), so the lifespan handler does
    not try to reach PostgreSQL.
    """
    app = create_app(settings, repository=repository)

    with TestClient(app) as test_client:
        yield test_client
