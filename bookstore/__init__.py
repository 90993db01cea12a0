"""
Bookstore API Application Package

A small CRUD service over a single "book" entity, backed either by
PostgreSQL (through a pooled SQLAlchemy engine) or by an in-process
collection.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- exceptions.py: Error taxonomy shared by every layer
- database.py: Connection pool lifecycle (engine, sessions, teardown)
- bootstrap.py: Idempotent schema creation and seed data
- main.py: FastAPI application factory, lifespan and error rendering
- dependencies.py: Dependency injection functions
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas and request validation
- repositories/: Store-backed and in-memory book repositories
- routers/: API route handlers
"""

__version__ = "0.1.0"
