"""Turn include paths into SQLAlchemy eager-loader options.

Each dot-joined path becomes one chained loader option, e.g.
``books.reviews`` -> ``selectinload(Author.books).selectinload(Book.reviews)``.

Strategies:
- ``selectin``: one extra SELECT ... IN per include level (split query).
- ``joined``: LEFT OUTER JOINs folded into the root SELECT (single query).
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from sqlalchemy.orm import RelationshipProperty, joinedload, selectinload

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.orm.strategy_options import _AbstractLoad


class LoadStrategy(StrEnum):
    SELECTIN = "selectin"
    JOINED = "joined"


_LOADERS = {
    LoadStrategy.SELECTIN: selectinload,
    LoadStrategy.JOINED: joinedload,
}


def loader_option_for_path(
    root_cls: type,
    path: str,
    strategy: LoadStrategy = LoadStrategy.SELECTIN,
) -> _AbstractLoad:
    """Build the chained loader option for one include path.

    Raises:
        AttributeError: if a hop does not name a relationship attribute.
    """
    option: Any = None
    current = root_cls
    for name in path.split("."):
        attr = getattr(current, name)
        prop = getattr(attr, "property", None)
        if not isinstance(prop, RelationshipProperty):
            raise AttributeError(f"'{current.__name__}.{name}' is not a relationship")
        if option is None:
            option = _LOADERS[strategy](attr)
        else:
            option = getattr(option, f"{strategy}load")(attr)
        current = prop.mapper.class_
    return option


def apply_include_paths(
    stmt: Select[Any],
    root_cls: type,
    paths: Iterable[str],
    strategy: LoadStrategy = LoadStrategy.SELECTIN,
) -> Select[Any]:
    """Attach one eager-loader option per include path to *stmt*."""
    options = [loader_option_for_path(root_cls, path, strategy) for path in paths]
    return stmt.options(*options) if options else stmt


def collect_along_path(roots: Iterable[Any], path: str) -> list[Any]:
    """Walk *path* from *roots*, returning distinct reached objects in order.

    Only touches the attributes named by the path. On eagerly loaded
    objects this emits no SQL; on lazy objects each access may.
    """
    current: list[Any] = list(roots)
    for name in path.split("."):
        reached: list[Any] = []
        seen: set[int] = set()
        for obj in current:
            value = getattr(obj, name)
            related = value if isinstance(value, (list, tuple, set)) else [value]
            for item in related:
                if item is not None and id(item) not in seen:
                    seen.add(id(item))
                    reached.append(item)
        current = reached
    return current
