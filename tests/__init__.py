"""
Test Suite for Bookstore API

Test Organization:
- conftest.py: Shared fixtures (test database, pool, repository, client)
- test_books.py: Tests for /books endpoints
- test_repository.py: Tests for the SQL and in-memory repositories
- test_bootstrap.py: Tests for schema creation and seeding
- test_database.py: Tests for the connection pool lifecycle
- test_app.py: Tests for startup, shutdown and health
- test_config.py: Tests for settings loading

Running Tests:
    # Run all tests
    pytest

    # Run specific file
    pytest tests/test_books.py

    # Run with verbose output
    pytest -v
"""
