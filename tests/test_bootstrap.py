"""
Tests for Schema Bootstrap

Table creation must be idempotent and fatal on failure; seeding must
happen only on an empty table and never stop startup.
"""

from contextlib import contextmanager

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.exc import OperationalError

from bookstore.bootstrap import SEED_BOOKS, bootstrap_database, create_schema, seed_books
from bookstore.database import DatabasePool
from bookstore.exceptions import StartupError
from bookstore.models import Book


def count_books(pool: DatabasePool) -> int:
    with pool.session() as session:
        return session.execute(select(func.count()).select_from(Book)).scalar_one()


class TestCreateSchema:

    def test_create_schema_twice(self, pool):
        """Creating an existing table is a no-op."""
        create_schema(pool)
        create_schema(pool)

        assert count_books(pool) == 0

    def test_create_schema_failure_is_fatal(self, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'books.db'}")

        with pytest.raises(StartupError):
            create_schema(DatabasePool(engine))


class TestSeedBooks:

    def test_seed_empty_table(self, pool):
        inserted = seed_books(pool)

        assert inserted == len(SEED_BOOKS)
        with pool.session() as session:
            rows = session.execute(
                select(Book.id, Book.title, Book.author, Book.quantity).order_by(Book.id)
            ).all()
        assert [tuple(row) for row in rows] == [
            (1, "The Great Gatsby", "F. Scott Fitzgerald", 3),
            (2, "1984", "George Orwell", 5),
            (3, "To Kill a Mockingbird", "Harper Lee", 4),
        ]

    def test_seed_populated_table_inserts_nothing(self, seeded_pool):
        assert seed_books(seeded_pool) == 0
        assert count_books(seeded_pool) == 3

    def test_seed_skips_table_with_user_rows(self, pool):
        with pool.session() as session:
            session.add(Book(title="Dune", author="Herbert", quantity=2))

        assert seed_books(pool) == 0
        assert count_books(pool) == 1

    def test_repeated_bootstrap_keeps_seed_count(self, pool):
        for _ in range(3):
            bootstrap_database(pool)

        assert count_books(pool) == 3

    def test_seed_failure_is_not_fatal(self, pool, monkeypatch, caplog):
        @contextmanager
        def broken_session():
            raise OperationalError("SELECT count(*) FROM books", {}, Exception("boom"))
            yield

        monkeypatch.setattr(pool, "session", broken_session)

        assert seed_books(pool) == 0
        assert "Error seeding data" in caplog.text

    def test_bootstrap_survives_seed_failure(self, pool, monkeypatch):
        @contextmanager
        def broken_session():
            raise OperationalError("INSERT INTO books", {}, Exception("boom"))
            yield

        monkeypatch.setattr(pool, "session", broken_session)

        bootstrap_database(pool)
