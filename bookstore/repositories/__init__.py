"""
Book Repositories Package

- base.py: BookRepository interface
- sql.py: SQLBookRepository over the pooled relational store
- memory.py: InMemoryBookRepository for running without a database
"""

from bookstore.repositories.base import BookRepository
from bookstore.repositories.memory import InMemoryBookRepository
from bookstore.repositories.sql import SQLBookRepository

__all__ = [
    "BookRepository",
    "InMemoryBookRepository",
    "SQLBookRepository",
]
