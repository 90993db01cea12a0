"""
Tests for the Connection Pool

Covers the liveness probe, fatal construction failures and close-once
teardown.
"""

import threading
from unittest.mock import MagicMock

import pytest
from sqlalchemy import text

from bookstore.database import DatabasePool, create_pool
from bookstore.exceptions import PoolClosedError, StartupError

from tests.utils import make_settings


class TestDatabasePool:

    def test_ping(self, pool):
        pool.ping()

    def test_session_commits(self, pool):
        with pool.session() as session:
            session.execute(
                text("INSERT INTO books (title, author, quantity) VALUES ('A', 'B', 1)")
            )

        with pool.session() as session:
            count = session.execute(text("SELECT COUNT(*) FROM books")).scalar_one()
        assert count == 1

    def test_session_rolls_back_on_error(self, pool):
        with pytest.raises(RuntimeError):
            with pool.session() as session:
                session.execute(
                    text("INSERT INTO books (title, author, quantity) VALUES ('A', 'B', 1)")
                )
                raise RuntimeError("abort")

        with pool.session() as session:
            count = session.execute(text("SELECT COUNT(*) FROM books")).scalar_one()
        assert count == 0

    def test_close_only_once(self):
        engine = MagicMock()
        pool = DatabasePool(engine)

        pool.close()
        pool.close()

        assert pool.closed
        engine.dispose.assert_called_once()

    def test_concurrent_close_disposes_once(self):
        engine = MagicMock()
        pool = DatabasePool(engine)
        start = threading.Barrier(8)

        def worker() -> None:
            start.wait()
            pool.close()

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert pool.closed
        engine.dispose.assert_called_once()

    def test_no_checkout_after_close(self, pool):
        pool.close()

        with pytest.raises(PoolClosedError):
            with pool.session():
                pass
        with pytest.raises(PoolClosedError):
            pool.ping()


class TestCreatePool:

    def test_create_pool_success(self, tmp_path):
        settings = make_settings(database_url=f"sqlite:///{tmp_path / 'books.db'}")

        pool = create_pool(settings)

        assert not pool.closed
        assert pool.engine.pool.size() == settings.db_pool_size
        pool.close()

    def test_failed_probe_is_fatal(self, tmp_path):
        settings = make_settings(
            database_url=f"sqlite:///{tmp_path / 'missing' / 'books.db'}"
        )

        with pytest.raises(StartupError, match="unable to ping database"):
            create_pool(settings)

    def test_invalid_url_is_fatal(self):
        settings = make_settings(database_url="not a url")

        with pytest.raises(StartupError, match="unable to create connection pool"):
            create_pool(settings)
