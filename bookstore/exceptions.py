"""
Bookstore Exceptions

Every failure the core can produce is one of these classes. The routers
never build error responses themselves: they let these propagate and the
exception handlers registered in main.create_app() render them.

Taxonomy:
- StartupError: pool construction, liveness probe or schema creation
  failed. Fatal; the process stops before serving.
- PoolClosedError: a connection was requested after the pool was
  shut down. The repository reports it as a StoreFailureError.
- InvalidBookIdError: the path id is not a 64-bit integer (400).
- BookValidationError: request data broke a domain rule (400).
- BookNotFoundError: no row matched the requested id (404).
- StoreFailureError: the store failed unexpectedly (500). The message is
  safe to show to callers; the cause is chained and logged.
"""


class BookstoreError(Exception):
    """Base class for all bookstore errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class StartupError(BookstoreError):
    """The service cannot start without a working store."""


class PoolClosedError(BookstoreError):
    """A connection was requested after the pool was shut down."""

    def __init__(self, message: str = "connection pool is closed") -> None:
        super().__init__(message)


class BookNotFoundError(BookstoreError):
    """No book has the requested id."""

    def __init__(self, book_id: int) -> None:
        super().__init__("book not found")
        self.book_id = book_id


class BookValidationError(BookstoreError):
    """Decoded request data failed a domain rule."""

    def __init__(self, reason: str) -> None:
        super().__init__(f"invalid request: {reason}")
        self.reason = reason


class StoreFailureError(BookstoreError):
    """An unexpected driver or query error, with a caller-safe message."""

    def __init__(self, message: str, operation: str) -> None:
        super().__init__(message)
        self.operation = operation


class InvalidBookIdError(BookstoreError):
    """The path id is not a plain base-10 integer within 64 bits."""

    def __init__(self, raw_id: str) -> None:
        super().__init__("invalid book ID")
        self.raw_id = raw_id
