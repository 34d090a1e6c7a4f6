"""Store: the single dependency injected into every service.

Owns the database engine, the session factory, and the schema graph
introspected from the ORM registry. The schema graph is built lazily on
first access and reused for the lifetime of the store; the ORM mapping
is fixed once the models are imported, so the snapshot never goes stale.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from includeall.infrastructure.database.engine import (
    count_queries,
    create_session_factory,
    init_database,
)
from includeall.infrastructure.database.models import Base
from includeall.infrastructure.graph.engine import NetworkSchemaGraph

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy.engine import Engine
    from sqlalchemy.orm import Session

    from includeall.config.settings import IncludeallSettings
    from includeall.infrastructure.database.engine import QueryCounter

logger = logging.getLogger(__name__)


class Store:
    """Database access plus the bookstore schema graph.

    Usage::

        store = Store(settings)
        with store.session() as session:
            session.scalars(select(Author)).all()
    """

    def __init__(self, settings: IncludeallSettings) -> None:
        self._settings = settings
        self._engine = init_database(
            settings.project_root,
            url=settings.database.url,
            echo=settings.database.echo,
            seed=settings.seed.enabled,
        )
        self._session_factory = create_session_factory(self._engine)
        self._schema: NetworkSchemaGraph | None = None
        logger.debug("Store opened at %s", self._engine.url)

    @property
    def settings(self) -> IncludeallSettings:
        return self._settings

    @property
    def root(self) -> Path:
        return self._settings.project_root

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def schema(self) -> NetworkSchemaGraph:
        """The ORM schema graph (built on first access)."""
        if self._schema is None:
            self._schema = NetworkSchemaGraph.from_registry(Base.registry)
        return self._schema

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Yield a session; commit on success, roll back on error."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    @contextmanager
    def count_queries(self) -> Iterator[QueryCounter]:
        """Count SQL statements executed inside the block."""
        with count_queries(self._engine) as counter:
            yield counter

    def close(self) -> None:
        self._engine.dispose()
