"""
Books Router

CRUD endpoints for books.

Each handler makes exactly one repository call. Failures are not caught
here: BookNotFoundError, BookValidationError and StoreFailureError
propagate to the exception handlers in main.py, which render them as
{"message": ...} with 404, 400 and 500 respectively.

A book_id that is not a plain 64-bit integer is rejected by parse_book_id
with 400 "invalid book ID" before any store access.
"""

from fastapi import APIRouter, status

from bookstore.dependencies import AppSettings, BookId, Repository
from bookstore.schemas import (
    BookCreate,
    BookResponse,
    MessageResponse,
    validate_book,
)

router = APIRouter(
    prefix="/books",
    tags=["Books"],
    responses={
        400: {"model": MessageResponse, "description": "Invalid book ID or request body"},
        500: {"model": MessageResponse, "description": "Store failure"},
    },
)


@router.get(
    "",
    response_model=list[BookResponse],
    summary="List all books",
    description="Get every book, ordered by id.",
)
def list_books(repository: Repository) -> list[BookResponse]:
    """List all books. An empty store returns an empty list."""
    return repository.list_books()


@router.get(
    "/{book_id}",
    response_model=BookResponse,
    summary="Get a book by ID",
    responses={404: {"model": MessageResponse, "description": "Book not found"}},
)
def get_book(book_id: BookId, repository: Repository) -> BookResponse:
    """Get a single book by its ID."""
    return repository.get_book(book_id)


@router.post(
    "",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
)
def create_book(
    book_data: BookCreate,
    repository: Repository,
    settings: AppSettings,
) -> BookResponse:
    """
    Create a new book.

    Args:
        book_data: Decoded request body
        repository: Book repository (injected)
        settings: Application settings (injected), for the quantity policy

    Returns:
        Created book with its generated id
    """
    book = validate_book(book_data, settings.allow_negative_quantity)
    return repository.create_book(book)


@router.put(
    "/{book_id}",
    response_model=BookResponse,
    summary="Replace a book",
    description="Replace title, author and quantity of an existing book.",
    responses={404: {"model": MessageResponse, "description": "Book not found"}},
)
def update_book(
    book_id: BookId,
    book_data: BookCreate,
    repository: Repository,
    settings: AppSettings,
) -> BookResponse:
    """
    Replace an existing book.

    PUT is a full replace: an omitted quantity is stored as 0, not left
    unchanged.
    """
    book = validate_book(book_data, settings.allow_negative_quantity)
    return repository.update_book(book_id, book)


@router.delete(
    "/{book_id}",
    response_model=MessageResponse,
    summary="Delete a book",
    responses={404: {"model": MessageResponse, "description": "Book not found"}},
)
def delete_book(book_id: BookId, repository: Repository) -> MessageResponse:
    """Delete a book. Deleting it again returns 404."""
    repository.delete_book(book_id)
    return MessageResponse(message="book deleted successfully")
