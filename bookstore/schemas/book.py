"""
Book Pydantic Schemas

Decoding and validation are two separate steps:

1. Decoding: FastAPI parses the JSON body into BookCreate. This only checks
   the shape (field types, quantity defaulting to 0). A body that cannot be
   decoded is rejected with 400 "invalid request".
2. Validation: validate_book() applies the domain rules (non-blank title
   and author, the configurable quantity policy) and raises
   BookValidationError.
"""

from pydantic import BaseModel, ConfigDict, Field

from bookstore.exceptions import BookValidationError


class BookBase(BaseModel):
    """Fields shared by book requests and responses."""

    title: str = Field(
        ...,
        description="Book title",
        examples=["Dune", "1984"],
    )

    author: str = Field(
        ...,
        description="Book author",
        examples=["Frank Herbert", "George Orwell"],
    )

    quantity: int = Field(
        default=0,
        description="Copies in stock",
        examples=[2, 5],
    )


class BookCreate(BookBase):
    """
    Request body for both POST /books and PUT /books/{id}.

    PUT is a full replace, so create and update share one shape.
    Strict mode keeps "5" from being accepted where 5 is expected.

    Example request body:
    {
        "title": "Dune",
        "author": "Frank Herbert",
        "quantity": 2
    }
    """

    model_config = ConfigDict(strict=True)


class BookResponse(BaseModel):
    """
    Book as returned by the API, with its store-generated id.

    Fields are declared here rather than inherited so that "id" is
    serialized first.
    """

    id: int = Field(..., description="Unique book identifier")
    title: str
    author: str
    quantity: int

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    """Envelope carrying a short human-readable message."""

    message: str = Field(..., examples=["book deleted successfully"])


def validate_book(data: BookCreate, allow_negative_quantity: bool = True) -> BookCreate:
    """
    Apply the domain rules to a decoded book payload.

    Title and author are stripped of surrounding whitespace and must not be
    empty. Negative quantities are rejected only when the policy says so.

    Args:
        data: Decoded request body
        allow_negative_quantity: Quantity policy from settings

    Returns:
        A normalized copy of the payload

    Raises:
        BookValidationError: If a rule is broken
    """
    title = data.title.strip()
    author = data.author.strip()

    if not title:
        raise BookValidationError("title must not be empty")
    if not author:
        raise BookValidationError("author must not be empty")
    if not allow_negative_quantity and data.quantity < 0:
        raise BookValidationError("quantity must not be negative")

    return BookCreate(title=title, author=author, quantity=data.quantity)
