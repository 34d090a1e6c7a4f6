"""Bookstore ORM models, engine setup, and seed data via SQLAlchemy."""

from includeall.infrastructure.database.engine import (
    QueryCounter,
    count_queries,
    create_db_engine,
    create_session_factory,
    init_database,
)
from includeall.infrastructure.database.models import Author, Base, Book, Review, Tag, book_tags
from includeall.infrastructure.database.seed import seed_bookstore

__all__ = [
    "Author",
    "Base",
    "Book",
    "QueryCounter",
    "Review",
    "Tag",
    "book_tags",
    "count_queries",
    "create_db_engine",
    "create_session_factory",
    "init_database",
    "seed_bookstore",
]
