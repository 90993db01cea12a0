"""
SQLAlchemy Models Package

Importing this package registers every model on Base.metadata, which is
what the schema bootstrapper creates tables from.
"""

from bookstore.models.book import Book

__all__ = [
    "Book",
]
