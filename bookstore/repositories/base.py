"""Book repository interface."""

from abc import ABC, abstractmethod

from bookstore.schemas import BookCreate, BookResponse


class BookRepository(ABC):
    """
    Translates book operations into store calls.

    Implementations hold no per-request state. Failures are raised:
    BookNotFoundError when no row matches, StoreFailureError when the
    store itself fails.
    """

    @abstractmethod
    def list_books(self) -> list[BookResponse]:
        """Return every book, ordered by ascending id."""

    @abstractmethod
    def get_book(self, book_id: int) -> BookResponse:
        """Return the book with this id."""

    @abstractmethod
    def create_book(self, data: BookCreate) -> BookResponse:
        """Insert a book and return it with its generated id."""

    @abstractmethod
    def update_book(self, book_id: int, data: BookCreate) -> BookResponse:
        """Replace title, author and quantity of an existing book."""

    @abstractmethod
    def delete_book(self, book_id: int) -> None:
        """Remove the book with this id."""
