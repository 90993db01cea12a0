"""
FastAPI Dependencies Module

Dependencies are reusable components injected into route handlers.

The repository and settings live on app.state and are set up by
create_app() / the lifespan handler. Reading them through Depends()
instead of importing module globals lets tests build an app around a
fake repository, or swap one with app.dependency_overrides.

Instead of writing:
    def list_books(repository: BookRepository = Depends(get_repository)):

You can write:
    def list_books(repository: Repository):
"""

import re
from typing import Annotated

from fastapi import Depends, Path, Request

from bookstore.config import Settings
from bookstore.exceptions import InvalidBookIdError
from bookstore.repositories import BookRepository

# Optional sign followed by ASCII digits only. Rejects "1.0", " 1", "1_0"
# and non-ASCII digits, all of which int() would otherwise accept.
BOOK_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def get_repository(request: Request) -> BookRepository:
    """Return the book repository the application was started with."""
    return request.app.state.repository


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


def parse_book_id(
    book_id: Annotated[str, Path(description="Book ID (64-bit integer)")],
) -> int:
    """
    Parse the {book_id} path segment.

    Runs before the request body is validated, so an invalid id is
    reported even when the body is also invalid.

    Raises:
        InvalidBookIdError: If the segment is not a base-10 integer that
            fits in 64 bits
    """
    if not BOOK_ID_PATTERN.fullmatch(book_id):
        raise InvalidBookIdError(book_id)
    value = int(book_id)
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidBookIdError(book_id)
    return value


Repository = Annotated[BookRepository, Depends(get_repository)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
BookId = Annotated[int, Depends(parse_book_id)]
