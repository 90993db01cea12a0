"""
SQL Book Repository

Each operation checks out one pooled session, issues a single statement
and returns the connection. Nothing is cached between calls.

Error mapping
=============
- Zero matching/affected rows -> BookNotFoundError
- Any SQLAlchemyError (query failure, lost connection, pool checkout
  timeout), a closed pool, or a parameter the driver cannot bind
  (OverflowError for integers outside the column range) -> StoreFailureError

Store failures are logged here with the operation name and book id; the
exception message carries only a short caller-safe text.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bookstore.database import DatabasePool
from bookstore.exceptions import BookNotFoundError, PoolClosedError, StoreFailureError
from bookstore.models import Book
from bookstore.repositories.base import BookRepository
from bookstore.schemas import BookCreate, BookResponse

logger = logging.getLogger(__name__)


class SQLBookRepository(BookRepository):
    """Book repository backed by the pooled relational store."""

    def __init__(self, pool: DatabasePool) -> None:
        self.pool = pool

    @contextmanager
    def _unit_of_work(
        self,
        operation: str,
        failure_message: str,
        book_id: Optional[int] = None,
    ) -> Iterator[Session]:
        """
        Run one store operation, translating driver errors.

        Args:
            operation: Operation name for the log line
            failure_message: Message exposed to the caller on failure
            book_id: Book id for the log line, when there is one
        """
        try:
            with self.pool.session() as session:
                yield session
        except (SQLAlchemyError, PoolClosedError, OverflowError) as e:
            logger.error(f"Store failure in {operation} (book_id={book_id}): {e}")
            raise StoreFailureError(failure_message, operation) from e

    def list_books(self) -> list[BookResponse]:
        with self._unit_of_work("list_books", "database error") as session:
            stmt = select(Book).order_by(Book.id)
            books = session.execute(stmt).scalars().all()
            return [BookResponse.model_validate(book) for book in books]

    def get_book(self, book_id: int) -> BookResponse:
        with self._unit_of_work("get_book", "database error", book_id) as session:
            book = session.get(Book, book_id)
            if book is None:
                raise BookNotFoundError(book_id)
            return BookResponse.model_validate(book)

    def create_book(self, data: BookCreate) -> BookResponse:
        with self._unit_of_work("create_book", "failed to add book") as session:
            book = Book(title=data.title, author=data.author, quantity=data.quantity)
            session.add(book)
            # flush issues the INSERT and populates the generated id
            session.flush()
            return BookResponse.model_validate(book)

    def update_book(self, book_id: int, data: BookCreate) -> BookResponse:
        with self._unit_of_work("update_book", "failed to update book", book_id) as session:
            stmt = (
                update(Book)
                .where(Book.id == book_id)
                .values(title=data.title, author=data.author, quantity=data.quantity)
                .execution_options(synchronize_session=False)
            )
            affected = session.execute(stmt).rowcount

        if affected == 0:
            raise BookNotFoundError(book_id)
        return BookResponse(id=book_id, **data.model_dump())

    def delete_book(self, book_id: int) -> None:
        with self._unit_of_work("delete_book", "failed to delete book", book_id) as session:
            stmt = (
                delete(Book)
                .where(Book.id == book_id)
                .execution_options(synchronize_session=False)
            )
            affected = session.execute(stmt).rowcount

        if affected == 0:
            raise BookNotFoundError(book_id)
