"""BaseService: foundation for all includeall services.

Every service receives a :class:`Store` at construction time. The Store
provides sessions, statement counting, and the schema graph.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from includeall.domain.includes import (
    DepthExceeded,
    IncludePlan,
    UnknownEntityType,
    resolve_include_paths,
)
from includeall.domain.schema import type_name
from includeall.services.result import ServiceResult
from includeall.services.telemetry import trace_span

if TYPE_CHECKING:
    from includeall.infrastructure.store import Store

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class IncludeService(BaseService):
            def load(self, root: str) -> ServiceResult:
                with self._store.session() as session:
                    ...
    """

    def __init__(self, store: Store) -> None:
        self._store = store

    def _resolve(self, op: str, root: Any, max_depth: int | None) -> IncludePlan | ServiceResult:
        """Resolve include paths for *root*; failures come back as ServiceResults.

        *max_depth* None means the configured ``[includes] max_depth``.
        """
        limit = max_depth if max_depth is not None else self._store.settings.includes.max_depth

        with trace_span("resolve_include_paths") as span:
            resolution = resolve_include_paths(self._store.schema, root, limit)
            if span:
                span.annotate("max_depth", limit)
                span.annotate("ok", resolution.ok)

        match resolution:
            case IncludePlan():
                return resolution
            case UnknownEntityType():
                return self._unknown_type(op, resolution.type_id)
            case DepthExceeded():
                logger.debug("Depth limit hit at %s (limit %d)", resolution.path, limit)
                return ServiceResult.failure(
                    op,
                    resolution.code,
                    resolution.message,
                    path=resolution.path,
                    limit=resolution.limit,
                    depth=resolution.depth,
                )

    def _mapped_root(self, op: str, plan: IncludePlan) -> type | ServiceResult:
        """The ORM class behind *plan*'s root, or a NOT_MAPPED failure."""
        entity = self._store.schema.lookup(plan.root)
        if entity is None or entity.cls is None:
            return ServiceResult.failure(
                op,
                "NOT_MAPPED",
                f"Entity type '{plan.root}' has no mapped class to query",
                type_id=plan.root,
            )
        return entity.cls

    def _unknown_type(self, op: str, type_id: Any) -> ServiceResult:
        """Failure result for a type the schema graph does not know."""
        name = type_name(type_id)
        return ServiceResult.failure(
            op,
            "UNKNOWN_ENTITY_TYPE",
            f"Entity type '{name}' is not part of the schema",
            type_id=name,
            known=[entity.name for entity in self._store.schema.entity_types()],
        )
