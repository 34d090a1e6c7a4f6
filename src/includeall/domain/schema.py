"""Schema graph types: entity types, navigations, and the graph protocol.

An entity type is a node; a navigation is a named, directed edge to another
entity type. Inverses are only ever *declared*: two navigations are each
other's inverse because the schema says so, never because their endpoints
happen to line up.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Protocol, runtime_checkable


class Multiplicity(StrEnum):
    """Cardinality of a navigation as seen from its source type."""

    TO_ONE = "to-one"
    TO_MANY = "to-many"
    MANY_TO_MANY = "many-to-many"


class SchemaError(ValueError):
    """Raised when a schema graph is declared inconsistently."""


@dataclass(frozen=True)
class Navigation:
    """A directed relationship edge ``source.name -> target``.

    Attributes:
        source: Name of the owning entity type.
        name: Edge name, unique among the source's navigations.
        target: Name of the entity type the edge leads to.
        multiplicity: Cardinality from the source's side.
        inverse: Name of the navigation on *target* that walks the same
            relationship backward, or None when no inverse is modeled.
    """

    source: str
    name: str
    target: str
    multiplicity: Multiplicity = Multiplicity.TO_MANY
    inverse: str | None = None

    @property
    def qualified_name(self) -> str:
        return f"{self.source}.{self.name}"

    @property
    def is_many_to_many(self) -> bool:
        return self.multiplicity is Multiplicity.MANY_TO_MANY

    def is_inverse_of(self, other: Navigation) -> bool:
        """True if *self* is declared as the backward edge of *other*."""
        return (
            self.inverse is not None
            and self.inverse == other.name
            and self.source == other.target
            and self.target == other.source
        )


@dataclass(frozen=True)
class EntityType:
    """A node in the schema graph.

    ``cls`` holds the mapped Python class when the graph was introspected
    from an ORM registry; hand-declared graphs leave it unset.
    """

    name: str
    cls: type | None = field(default=None, compare=False)


@runtime_checkable
class SchemaGraph(Protocol):
    """Read-only view of entity types and their outgoing navigations.

    Ordering contract for :meth:`navigations_of`: regular (to-one and
    to-many) navigations first, many-to-many navigations after, each group
    in declaration order. Resolved include paths inherit this order.
    """

    def lookup(self, type_id: Any) -> EntityType | None:
        """Resolve a type name (or mapped class) to its entity type."""
        ...

    def navigations_of(self, entity_type: EntityType) -> Sequence[Navigation]:
        """Return all outgoing navigations of *entity_type* in contract order."""
        ...


def order_navigations(navigations: Sequence[Navigation]) -> tuple[Navigation, ...]:
    """Apply the navigation ordering contract (stable within each group)."""
    regular = [nav for nav in navigations if not nav.is_many_to_many]
    many = [nav for nav in navigations if nav.is_many_to_many]
    return (*regular, *many)


def type_name(type_id: Any) -> str:
    """Normalize a type identifier (class or name) to its name."""
    if isinstance(type_id, type):
        return type_id.__name__
    return str(type_id)
