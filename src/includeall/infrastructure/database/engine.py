"""Database engine setup for the bookstore store.

SQLite by default, stored at ``{root}/.includeall/bookstore.db``; any
SQLAlchemy URL can be configured instead. Foreign keys are enforced on
SQLite so association-table cascades behave like a server database.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from includeall.infrastructure.database.models import Base
from includeall.infrastructure.database.seed import seed_bookstore

DATA_DIRNAME = ".includeall"
DB_FILENAME = "bookstore.db"


def default_db_url(root: Path) -> str:
    return f"sqlite:///{root / DATA_DIRNAME / DB_FILENAME}"


def create_db_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine; SQLite connections get ``foreign_keys=ON``."""
    engine = create_engine(url, echo=echo)

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def init_database(
    root: Path,
    *,
    url: str | None = None,
    echo: bool = False,
    seed: bool = True,
) -> Engine:
    """Initialize the bookstore database and return its engine.

    Creates the ``.includeall/`` directory (default URL only), all
    tables, and the sample rows when *seed* is True.

    Idempotent, safe to call on an existing store.
    """
    if url is None:
        (root / DATA_DIRNAME).mkdir(parents=True, exist_ok=True)
        url = default_db_url(root)

    engine = create_db_engine(url, echo=echo)
    Base.metadata.create_all(engine)

    if seed:
        with Session(engine) as session, session.begin():
            seed_bookstore(session)
    return engine


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)


# ---------------------------------------------------------------------------
# Statement counting
# ---------------------------------------------------------------------------


@dataclass
class QueryCounter:
    """Collects the SQL statements an engine executes while attached."""

    statements: list[str] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.statements)

    def __call__(
        self,
        conn: Any,
        cursor: Any,
        statement: str,
        parameters: Any,
        context: Any,
        executemany: bool,
    ) -> None:
        self.statements.append(statement)


@contextmanager
def count_queries(engine: Engine) -> Iterator[QueryCounter]:
    """Count statements executed on *engine* inside the block."""
    counter = QueryCounter()
    event.listen(engine, "before_cursor_execute", counter)
    try:
        yield counter
    finally:
        event.remove(engine, "before_cursor_execute", counter)
