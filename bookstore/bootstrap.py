"""
Schema Bootstrap

Makes table existence and baseline content idempotent across restarts.
Runs once at startup, before any request is served.

1. create_schema(): CREATE TABLE IF NOT EXISTS for every model
   (metadata.create_all checks before creating). Failure is fatal.
2. seed_books(): if, and only if, the books table is empty, insert the
   three seed rows. A non-empty table is left alone. Failure is logged
   and ignored; an empty table is a valid running state.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from bookstore.database import Base, DatabasePool
from bookstore.exceptions import PoolClosedError, StartupError
from bookstore.models import Book

logger = logging.getLogger(__name__)

# (title, author, quantity), inserted in this order so ids come out 1, 2, 3
SEED_BOOKS: list[tuple[str, str, int]] = [
    ("The Great Gatsby", "F. Scott Fitzgerald", 3),
    ("1984", "George Orwell", 5),
    ("To Kill a Mockingbird", "Harper Lee", 4),
]


def create_schema(pool: DatabasePool) -> None:
    """
    Create the books table if it does not exist.

    Raises:
        StartupError: If the table cannot be created
    """
    try:
        Base.metadata.create_all(bind=pool.engine, checkfirst=True)
    except SQLAlchemyError as e:
        logger.critical(f"Failed to create table: {e}")
        raise StartupError("failed to create books table") from e
    logger.info("Table created or already exists")


def seed_books(pool: DatabasePool) -> int:
    """
    Insert the seed rows into an empty books table.

    Returns:
        Number of rows inserted: len(SEED_BOOKS) or 0
    """
    try:
        with pool.session() as session:
            count = session.execute(select(func.count()).select_from(Book)).scalar_one()
            if count:
                logger.info(f"Books table already has {count} rows, skipping seed")
                return 0
            session.add_all(
                Book(title=title, author=author, quantity=quantity)
                for title, author, quantity in SEED_BOOKS
            )
    except (SQLAlchemyError, PoolClosedError) as e:
        logger.error(f"Error seeding data: {e}")
        return 0

    logger.info("Initial data seeded")
    return len(SEED_BOOKS)


def bootstrap_database(pool: DatabasePool) -> None:
    """Ensure the schema exists, then seed it if empty."""
    create_schema(pool)
    seed_books(pool)
