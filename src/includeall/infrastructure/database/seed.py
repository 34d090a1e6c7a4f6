"""Seed data for the bookstore schema.

Three authors, five books, seven reviews, five tags, and the book/tag
links between them. Seeding is idempotent: a store that already has
authors is left untouched.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import func, select

from includeall.infrastructure.database.models import Author, Book, Review, Tag

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

AUTHORS = [
    (1, "Tolkien", "English writer and philologist", date(1892, 1, 3)),
    (2, "Asimov", "American writer and professor of biochemistry", date(1920, 1, 2)),
    (3, "Herbert", "American science fiction author", date(1920, 10, 8)),
]

BOOKS = [
    (1, "The Lord of the Rings", "9780544003415", "29.99", date(1954, 7, 29), 1),
    (2, "The Hobbit", "9780547928227", "14.99", date(1937, 9, 21), 1),
    (3, "Foundation", "9780553293357", "17.99", date(1951, 6, 1), 2),
    (4, "I, Robot", "9780553294385", "15.99", date(1950, 12, 2), 2),
    (5, "Dune", "9780441013593", "18.99", date(1965, 8, 1), 3),
]

REVIEWS = [
    (1, "Alice", 5, "A masterpiece of fantasy literature!", 1, datetime(2024, 1, 15)),
    (2, "Bob", 4, "Epic but long", 1, datetime(2024, 2, 20)),
    (3, "Charlie", 5, "The book that started it all", 2, datetime(2024, 3, 10)),
    (4, "Diana", 5, "Mind-blowing sci-fi", 3, datetime(2024, 4, 5)),
    (5, "Eve", 4, "Thought-provoking robot stories", 4, datetime(2024, 5, 1)),
    (6, "Frank", 5, "The greatest sci-fi novel ever written", 5, datetime(2024, 6, 15)),
    (7, "Grace", 3, "Dense but rewarding", 5, datetime(2024, 7, 20)),
]

TAGS = [(1, "Fantasy"), (2, "Sci-Fi"), (3, "Classic"), (4, "Adventure"), (5, "Robots")]

BOOK_TAGS = {
    "The Lord of the Rings": ["Fantasy", "Classic", "Adventure"],
    "The Hobbit": ["Fantasy", "Adventure"],
    "Foundation": ["Sci-Fi", "Classic"],
    "I, Robot": ["Sci-Fi", "Robots"],
    "Dune": ["Sci-Fi", "Classic", "Adventure"],
}


def seed_bookstore(session: Session) -> bool:
    """Insert the sample bookstore rows if the store is empty.

    Returns True if rows were inserted, False if the store was already seeded.
    Does not commit; the caller owns the transaction.
    """
    existing = session.scalar(select(func.count()).select_from(Author))
    if existing:
        return False

    authors = {
        author_id: Author(id=author_id, name=name, bio=bio, birth_date=born)
        for author_id, name, bio, born in AUTHORS
    }
    tags = {name: Tag(id=tag_id, name=name) for tag_id, name in TAGS}
    books: dict[int, Book] = {}
    for book_id, title, isbn, price, published, author_id in BOOKS:
        book = Book(
            id=book_id,
            title=title,
            isbn=isbn,
            price=Decimal(price),
            published_date=published,
            author=authors[author_id],
        )
        book.tags.extend(tags[name] for name in BOOK_TAGS[title])
        books[book_id] = book

    for review_id, reviewer, rating, comment, book_id, created in REVIEWS:
        books[book_id].reviews.append(
            Review(
                id=review_id,
                reviewer_name=reviewer,
                rating=rating,
                comment=comment,
                created_at=created,
            )
        )

    session.add_all(authors.values())
    session.add_all(tags.values())
    session.flush()
    logger.debug(
        "Seeded bookstore: %d authors, %d books, %d reviews, %d tags",
        len(AUTHORS),
        len(BOOKS),
        len(REVIEWS),
        len(TAGS),
    )
    return True
