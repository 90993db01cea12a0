"""
Database Connection Pool

This module owns the lifecycle of the pooled connections to the book store.

The pool is built from settings once at startup, probed for liveness, and
then shared by every in-flight request. Each repository call checks out a
connection for a single statement and returns it right away.

Session Management Pattern
==========================
DatabasePool.session() is a context manager:
1. Check out a connection (waits at most db_pool_timeout seconds)
2. Yield a Session bound to it, inside a transaction
3. Commit on success, rollback on failure
4. Return the connection to the pool

SQLAlchemy's QueuePool does the bounding and blocking; a checkout that
times out raises sqlalchemy.exc.TimeoutError, which the repository
reports as a store failure instead of hanging.

Teardown
========
close() disposes the engine exactly once. Later checkouts raise
PoolClosedError. Requests still running when close() is called have an
undefined outcome: nothing drains them.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookstore.config import Settings
from bookstore.exceptions import PoolClosedError, StartupError

logger = logging.getLogger(__name__)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Base.metadata is what the schema bootstrapper creates tables from.
    """
    pass


# =============================================================================
# Connection Pool
# =============================================================================
class DatabasePool:
    """
    Shared handle over a pooled SQLAlchemy engine.

    Safe for concurrent use: the engine's pool hands each session its own
    connection.

    Example:
        pool = DatabasePool(engine)
        pool.ping()
        with pool.session() as session:
            session.execute(select(Book))
        pool.close()
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        self._sessionmaker = sessionmaker(
            bind=engine,
            autoflush=False,
            expire_on_commit=False,
        )
        self._closed = False
        self._close_lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    def ping(self) -> None:
        """
        Liveness probe: run SELECT 1 on a pooled connection.

        Raises:
            PoolClosedError: If the pool was already closed
            SQLAlchemyError: If the store cannot be reached
        """
        if self._closed:
            raise PoolClosedError()
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Provide a transactional session for a single unit of work.

        Yields:
            SQLAlchemy Session; committed on exit, rolled back on error

        Raises:
            PoolClosedError: If the pool was already closed
        """
        if self._closed:
            raise PoolClosedError()
        with self._sessionmaker.begin() as session:
            yield session

    def close(self) -> None:
        """
        Release every pooled connection. Only the first call has effect,
        even when several threads call close() at the same time.
        """
        with self._close_lock:
            if self._closed:
                logger.debug("Connection pool already closed")
                return
            self._closed = True
            self.engine.dispose()
        logger.info("Database connection pool closed")


def create_pool(settings: Settings) -> DatabasePool:
    """
    Build the connection pool from settings and verify it is alive.

    Key engine parameters:
    - pool_size / max_overflow: bound on physical connections
    - pool_timeout: checkout deadline in seconds
    - pool_pre_ping: replace connections that died while idle
    - echo: log SQL in debug mode

    Args:
        settings: Application settings

    Returns:
        A verified DatabasePool

    Raises:
        StartupError: If the engine cannot be built or the probe fails
    """
    try:
        engine = create_engine(
            settings.sqlalchemy_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_pre_ping=True,
            echo=settings.debug,
        )
    except (SQLAlchemyError, ImportError, ValueError, TypeError) as e:
        logger.critical(f"Unable to create connection pool: {e}")
        raise StartupError("unable to create connection pool") from e

    pool = DatabasePool(engine)
    try:
        pool.ping()
    except SQLAlchemyError as e:
        logger.critical(f"Unable to ping database: {e}")
        pool.close()
        raise StartupError("unable to ping database") from e

    logger.info("Successfully connected to database!")
    return pool
