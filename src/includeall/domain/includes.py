"""Include-path resolution over a schema graph.

Computes every eager-load path reachable from a root entity type:
depth-first, pre-order, in the schema's navigation order.

Three guards shape the output:

- **Back-pointer suppression**: a navigation declared as the inverse of
  the edge just walked is skipped (``Book.Author`` after ``Author.Books``).
- **Branch-local cycle guard**: a type already on the current
  root-to-here branch is recorded as a path but never expanded again.
  The visited set is unwound on backtrack, so a type reachable through
  two independent routes (a diamond) appears under both.
- **Depth limit**: the first path longer than ``max_depth`` hops fails
  the whole resolution with :class:`DepthExceeded`. No partial result.

Failures are returned as values, never raised.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Literal, TypeAlias

from pydantic import BaseModel, Field

from includeall.domain.schema import EntityType, Navigation, SchemaGraph, type_name

DEFAULT_MAX_DEPTH = 3
PATH_SEPARATOR = "."


class IncludePlan(BaseModel):
    """Successful resolution: ordered include paths for *root*."""

    model_config = {"frozen": True}

    ok: Literal[True] = True
    root: str
    max_depth: int
    paths: tuple[str, ...] = Field(default_factory=tuple)


class UnknownEntityType(BaseModel):
    """The requested type is not part of the schema graph."""

    model_config = {"frozen": True}

    ok: Literal[False] = False
    code: Literal["UNKNOWN_ENTITY_TYPE"] = "UNKNOWN_ENTITY_TYPE"
    type_id: str

    @property
    def message(self) -> str:
        return f"Entity type '{self.type_id}' is not part of the schema"


class DepthExceeded(BaseModel):
    """A path would need more than *limit* hops."""

    model_config = {"frozen": True}

    ok: Literal[False] = False
    code: Literal["DEPTH_EXCEEDED"] = "DEPTH_EXCEEDED"
    path: str
    limit: int

    @property
    def depth(self) -> int:
        return hop_count(self.path)

    @property
    def message(self) -> str:
        return (
            f"Include depth limit exceeded: path '{self.path}' would reach depth "
            f"{self.depth}, but max_depth is {self.limit}. "
            "Increase max_depth or restructure the query."
        )


IncludeFailure: TypeAlias = UnknownEntityType | DepthExceeded
IncludeResolution: TypeAlias = IncludePlan | IncludeFailure


def join_path(parent: str, name: str) -> str:
    """Append one navigation hop to a dot-joined path."""
    return f"{parent}{PATH_SEPARATOR}{name}" if parent else name


def hop_count(path: str) -> int:
    """Number of navigation hops in a dot-joined path."""
    return len(path.split(PATH_SEPARATOR)) if path else 0


@dataclass
class _Frame:
    """One expanded entity type on the current traversal branch."""

    entity: EntityType
    path: str
    depth: int
    incoming: Navigation | None
    pending: Iterator[Navigation]


def resolve_include_paths(
    schema: SchemaGraph,
    root_type_id: Any,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> IncludeResolution:
    """Resolve the include paths needed to eagerly load *root_type_id*'s subgraph.

    Args:
        schema: Read-only schema snapshot; must not change during the call.
        root_type_id: Type name or mapped class of the root entity.
        max_depth: Maximum hops per path. Exceeding it fails the call.

    Returns:
        :class:`IncludePlan` on success, otherwise :class:`UnknownEntityType`
        or :class:`DepthExceeded`.
    """
    root = schema.lookup(root_type_id)
    if root is None:
        return UnknownEntityType(type_id=type_name(root_type_id))

    paths: list[str] = []
    visited: set[str] = {root.name}
    stack: list[_Frame] = [_Frame(root, "", 0, None, iter(schema.navigations_of(root)))]

    while stack:
        frame = stack[-1]
        nav = next(frame.pending, None)
        if nav is None:
            stack.pop()
            visited.discard(frame.entity.name)
            continue

        if frame.incoming is not None and nav.is_inverse_of(frame.incoming):
            continue

        path = join_path(frame.path, nav.name)
        depth = frame.depth + 1
        if depth > max_depth:
            return DepthExceeded(path=path, limit=max_depth)

        paths.append(path)

        # Cycle: the target is an ancestor on this branch.
        if nav.target in visited:
            continue

        target = schema.lookup(nav.target)
        if target is None:
            return UnknownEntityType(type_id=nav.target)

        visited.add(target.name)
        stack.append(_Frame(target, path, depth, nav, iter(schema.navigations_of(target))))

    return IncludePlan(root=root.name, max_depth=max_depth, paths=tuple(paths))
