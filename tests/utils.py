"""Helpers shared by the test modules."""

from bookstore.config import Settings


def make_settings(**overrides) -> Settings:
    """Settings that ignore any .env file on the developer's machine."""
    return Settings(_env_file=None, **overrides)
