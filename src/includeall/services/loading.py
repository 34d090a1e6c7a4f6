"""LoadingService: lazy vs eager loading, side by side.

Every pass walks the same include paths over the same root rows. The lazy
pass issues a plain ``select(root)`` and lets each attribute access
trigger its own SELECT (the N+1 pattern); the eager passes attach the
resolved include paths up front. Each pass runs in a fresh session so
the identity map of one cannot satisfy loads for another.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select

from includeall.infrastructure.loading import LoadStrategy, apply_include_paths, collect_along_path
from includeall.services.base import BaseService
from includeall.services.result import ServiceResult
from includeall.services.telemetry import trace_span, traced


class LoadingService(BaseService):
    """Compares loading strategies by SQL statement count."""

    @traced
    def compare(self, root: Any = "Author", *, max_depth: int | None = None) -> ServiceResult:
        """Count the statements needed to walk *root*'s subgraph lazily and eagerly."""
        op = "compare_loading"
        plan = self._resolve(op, root, max_depth)
        if isinstance(plan, ServiceResult):
            return plan
        root_cls = self._mapped_root(op, plan)
        if isinstance(root_cls, ServiceResult):
            return root_cls

        paths = plan.paths
        statements = {
            "lazy": select(root_cls),
            "selectin": apply_include_paths(select(root_cls), root_cls, paths),
            "joined": apply_include_paths(select(root_cls), root_cls, paths, LoadStrategy.JOINED),
        }

        passes: dict[str, dict[str, Any]] = {}
        for label, stmt in statements.items():
            with trace_span(label) as span, self._store.session() as session:
                with self._store.count_queries() as counter:
                    rows = session.scalars(stmt).unique().all()
                    reached = {path: len(collect_along_path(rows, path)) for path in paths}
                if span:
                    span.annotate("statements", counter.count)
                passes[label] = {"queries": counter.count, "rows": len(rows), "reached": reached}

        lazy = passes["lazy"]
        items = [
            {
                "strategy": label,
                "queries": result["queries"],
                "rows": result["rows"],
                "saved": lazy["queries"] - result["queries"],
            }
            for label, result in passes.items()
        ]
        warnings = [
            f"{label} loading reached different objects than lazy loading"
            for label, result in passes.items()
            if result["reached"] != lazy["reached"]
        ]

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "root": plan.root,
                "paths": list(paths),
                "objects": lazy["reached"],
                "count": len(items),
                "items": items,
            },
            warnings=warnings,
        )
