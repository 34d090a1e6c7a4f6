"""Tests for database engine initialization, seeding, and statement counting."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import func, inspect, select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from includeall.infrastructure.database.engine import (
    count_queries,
    create_db_engine,
    default_db_url,
    init_database,
)
from includeall.infrastructure.database.models import Author, Book, Review, Tag, book_tags
from includeall.infrastructure.database.seed import seed_bookstore


def _count(session: Session, model: type) -> int:
    return session.scalar(select(func.count()).select_from(model)) or 0


class TestInitDatabase:
    def test_creates_db_file(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path)
        try:
            assert (tmp_path / ".includeall" / "bookstore.db").is_file()
        finally:
            engine.dispose()

    def test_creates_all_tables(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path, seed=False)
        try:
            tables = set(inspect(engine).get_table_names())
            assert {"authors", "books", "reviews", "tags", "book_tags"} <= tables
        finally:
            engine.dispose()

    def test_seeds_sample_rows(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path)
        try:
            with Session(engine) as session:
                assert _count(session, Author) == 3
                assert _count(session, Book) == 5
                assert _count(session, Review) == 7
                assert _count(session, Tag) == 5
                links = session.scalar(select(func.count()).select_from(book_tags))
                assert links == 12
        finally:
            engine.dispose()

    def test_idempotent(self, tmp_path: Path) -> None:
        init_database(tmp_path).dispose()
        engine = init_database(tmp_path)
        try:
            with Session(engine) as session:
                assert _count(session, Author) == 3
        finally:
            engine.dispose()

    def test_no_seed(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path, seed=False)
        try:
            with Session(engine) as session:
                assert _count(session, Author) == 0
        finally:
            engine.dispose()

    def test_explicit_url(self, tmp_path: Path) -> None:
        url = f"sqlite:///{tmp_path / 'custom.db'}"
        engine = init_database(tmp_path, url=url)
        try:
            assert (tmp_path / "custom.db").is_file()
            assert not (tmp_path / ".includeall").exists()
        finally:
            engine.dispose()

    def test_default_url(self, tmp_path: Path) -> None:
        assert default_db_url(tmp_path).endswith("/.includeall/bookstore.db")


class TestSeed:
    def test_seed_returns_false_when_populated(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path)
        try:
            with Session(engine) as session:
                assert seed_bookstore(session) is False
        finally:
            engine.dispose()

    def test_tag_links(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path)
        try:
            with Session(engine) as session:
                dune = session.scalars(select(Book).where(Book.title == "Dune")).one()
                assert [t.name for t in dune.tags] == ["Sci-Fi", "Classic", "Adventure"]
                assert dune.author.name == "Herbert"
                assert [r.reviewer_name for r in dune.reviews] == ["Frank", "Grace"]
        finally:
            engine.dispose()


class TestConstraints:
    def test_foreign_keys_enforced(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path, seed=False)
        try:
            with pytest.raises(IntegrityError), engine.begin() as conn:
                conn.execute(
                    text("INSERT INTO books (id, title, price, author_id) VALUES (1, 'x', 1, 99)")
                )
        finally:
            engine.dispose()

    def test_rating_check(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path)
        try:
            with pytest.raises(IntegrityError), Session(engine) as session:
                session.add(Review(reviewer_name="Zed", rating=9, book_id=1))
                session.flush()
        finally:
            engine.dispose()

    def test_version_counter_increments(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path)
        try:
            with Session(engine) as session:
                author = session.get(Author, 1)
                assert author is not None
                assert author.version_id == 1
                author.bio = "Updated"
                session.commit()
                assert author.version_id == 2
        finally:
            engine.dispose()


class TestCountQueries:
    def test_counts_statements(self, tmp_path: Path) -> None:
        engine = init_database(tmp_path)
        try:
            with count_queries(engine) as counter, Session(engine) as session:
                session.scalars(select(Author)).all()
                session.scalars(select(Book)).all()
            assert counter.count == 2
            assert all(s.lstrip().upper().startswith("SELECT") for s in counter.statements)
        finally:
            engine.dispose()

    def test_detaches_after_block(self, tmp_path: Path) -> None:
        engine = create_db_engine(f"sqlite:///{tmp_path / 'x.db'}")
        try:
            with count_queries(engine) as counter, engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            with engine.connect() as conn:
                conn.execute(text("SELECT 2"))
            assert counter.count == 1
        finally:
            engine.dispose()
