"""IncludeService: resolve include paths and run include-everything queries.

``resolve_paths`` is a pure function of (schema, root, max_depth) and
never touches the database. ``load`` feeds the resolved paths to the
loader-option builder, one option per path, and executes the query.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select

from includeall.domain.includes import hop_count
from includeall.infrastructure.loading import (
    LoadStrategy,
    apply_include_paths,
    collect_along_path,
)
from includeall.services.base import BaseService
from includeall.services.result import ServiceResult
from includeall.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class IncludeService(BaseService):
    """Handles include-path resolution and eager loading."""

    # ------------------------------------------------------------------
    # resolve_paths: the include-path resolver over the ORM schema
    # ------------------------------------------------------------------

    @traced
    def resolve_paths(self, root: Any, *, max_depth: int | None = None) -> ServiceResult:
        """Resolve every include path needed to eagerly load *root*'s subgraph.

        Args:
            root: Entity type name (e.g. ``"Author"``) or mapped class.
            max_depth: Hop limit per path; defaults to ``[includes] max_depth``.
        """
        op = "resolve_paths"
        plan = self._resolve(op, root, max_depth)
        if isinstance(plan, ServiceResult):
            return plan

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "root": plan.root,
                "max_depth": plan.max_depth,
                "count": len(plan.paths),
                "paths": list(plan.paths),
            },
        )

    # ------------------------------------------------------------------
    # describe_schema: the schema graph the resolver walks
    # ------------------------------------------------------------------

    @traced
    def describe_schema(self) -> ServiceResult:
        """List every entity type with its navigations in traversal order."""
        schema = self._store.schema
        types: list[dict[str, Any]] = []
        for entity in schema.entity_types():
            navigations = [
                {
                    "name": nav.name,
                    "target": nav.target,
                    "multiplicity": str(nav.multiplicity),
                    "inverse": nav.inverse,
                }
                for nav in schema.navigations_of(entity)
            ]
            types.append({"name": entity.name, "navigations": navigations})

        return ServiceResult(ok=True, op="schema", data={"count": len(types), "types": types})

    # ------------------------------------------------------------------
    # load: execute an include-everything query
    # ------------------------------------------------------------------

    @traced
    def load(
        self,
        root: Any,
        *,
        max_depth: int | None = None,
        strategy: str | None = None,
    ) -> ServiceResult:
        """Load every *root* row with its whole reachable subgraph.

        Reports the SQL statement count and, per include path, the number
        of distinct objects reached. Walking the paths afterwards should
        emit no further SQL; any that does is reported as a warning.
        """
        op = "load"
        plan = self._resolve(op, root, max_depth)
        if isinstance(plan, ServiceResult):
            return plan
        root_cls = self._mapped_root(op, plan)
        if isinstance(root_cls, ServiceResult):
            return root_cls

        load_strategy = LoadStrategy(strategy or self._store.settings.includes.strategy)
        stmt = apply_include_paths(select(root_cls), root_cls, plan.paths, load_strategy)

        with self._store.session() as session, self._store.count_queries() as counter:
            with trace_span("execute") as span:
                rows = session.scalars(stmt).unique().all()
                if span:
                    span.annotate("rows", len(rows))
                    span.annotate("statements", counter.count)
            query_count = counter.count
            items = [
                {
                    "path": path,
                    "depth": hop_count(path),
                    "count": len(collect_along_path(rows, path)),
                }
                for path in plan.paths
            ]
            lazy_loads = counter.count - query_count

        warnings: list[str] = []
        if lazy_loads:
            warnings.append(f"{lazy_loads} lazy load(s) emitted while walking include paths")

        logger.debug(
            "Loaded %d %s rows with %d include paths in %d statements",
            len(rows),
            plan.root,
            len(plan.paths),
            query_count,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "root": plan.root,
                "strategy": str(load_strategy),
                "count": len(rows),
                "queries": query_count,
                "paths": list(plan.paths),
                "items": items,
            },
            warnings=warnings,
        )
