"""
Pydantic Schemas Package

Request/response models for the API, kept separate from the SQLAlchemy
models so the wire format does not follow the table layout by accident.

Schema Naming Convention:
- XxxBase: Shared fields
- XxxCreate: Request body for create/replace
- XxxResponse: Fields returned in API responses
"""

from bookstore.schemas.book import (
    BookBase,
    BookCreate,
    BookResponse,
    MessageResponse,
    validate_book,
)

__all__ = [
    "BookBase",
    "BookCreate",
    "BookResponse",
    "MessageResponse",
    "validate_book",
]
