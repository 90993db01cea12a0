"""
In-Memory Book Repository

Keeps books in a dict for running without a database (STORAGE_BACKEND=memory).
All reads and writes go through one lock, so concurrent requests never
interleave inside an operation. Ids come from a counter and are never
reused, matching a database sequence.
"""

import threading
from collections.abc import Iterable
from typing import Optional

from bookstore.exceptions import BookNotFoundError
from bookstore.repositories.base import BookRepository
from bookstore.schemas import BookCreate, BookResponse


class InMemoryBookRepository(BookRepository):
    """Process-local book repository guarded by a single lock."""

    def __init__(self, seed: Optional[Iterable[tuple[str, str, int]]] = None) -> None:
        self._lock = threading.Lock()
        self._books: dict[int, BookResponse] = {}
        self._last_id = 0
        for title, author, quantity in seed or ():
            self.create_book(BookCreate(title=title, author=author, quantity=quantity))

    def list_books(self) -> list[BookResponse]:
        with self._lock:
            return [self._books[book_id] for book_id in sorted(self._books)]

    def get_book(self, book_id: int) -> BookResponse:
        with self._lock:
            try:
                return self._books[book_id]
            except KeyError:
                raise BookNotFoundError(book_id) from None

    def create_book(self, data: BookCreate) -> BookResponse:
        with self._lock:
            self._last_id += 1
            book = BookResponse(id=self._last_id, **data.model_dump())
            self._books[book.id] = book
            return book

    def update_book(self, book_id: int, data: BookCreate) -> BookResponse:
        with self._lock:
            if book_id not in self._books:
                raise BookNotFoundError(book_id)
            book = BookResponse(id=book_id, **data.model_dump())
            self._books[book_id] = book
            return book

    def delete_book(self, book_id: int) -> None:
        with self._lock:
            if self._books.pop(book_id, None) is None:
                raise BookNotFoundError(book_id)
