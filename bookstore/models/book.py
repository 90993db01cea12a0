"""
Book Model

The only model of the Bookstore API, mapped to the "books" table.

Column layout:
- id: auto-incrementing primary key (SERIAL on PostgreSQL)
- title: VARCHAR(255) NOT NULL
- author: VARCHAR(255) NOT NULL
- quantity: INTEGER NOT NULL DEFAULT 0
"""

from sqlalchemy import Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from bookstore.database import Base


class Book(Base):
    """
    Book model representing a stocked title.

    Table: books

    Example:
        book = Book(title="1984", author="George Orwell", quantity=5)
    """

    __tablename__ = "books"

    # SQLite reuses the highest rowid after a delete unless AUTOINCREMENT is
    # set; PostgreSQL sequences never reuse ids.
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    author: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    quantity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
    )

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}', author='{self.author}')"
