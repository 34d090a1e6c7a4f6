"""NetworkSchemaGraph: schema graph stored in a NetworkX MultiDiGraph.

Nodes are entity type names (``entity`` attribute holds the EntityType);
edges are navigations keyed by name (``navigation`` attribute). A
MultiDiGraph preserves edge insertion order per node, so once the
navigations are inserted in contract order, ``out_edges`` returns them
in that order.

Built once, never mutated afterwards: safe to share between concurrent
resolutions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any, TypeAlias

import networkx as nx
from sqlalchemy.orm import RelationshipDirection

from includeall.domain.schema import (
    EntityType,
    Multiplicity,
    Navigation,
    SchemaError,
    order_navigations,
    type_name,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Mapper, registry

logger = logging.getLogger(__name__)

_Graph: TypeAlias = nx.MultiDiGraph
Declaration: TypeAlias = tuple[EntityType | str, Sequence[Navigation]]


class NetworkSchemaGraph:
    """SchemaGraph implementation backed by NetworkX."""

    def __init__(self, graph: _Graph) -> None:
        self._graph = graph
        self._by_class: dict[type, str] = {}
        for name, attrs in graph.nodes(data=True):
            cls = attrs["entity"].cls
            if cls is not None:
                self._by_class[cls] = name

    @property
    def graph(self) -> _Graph:
        return self._graph

    # ------------------------------------------------------------------
    # SchemaGraph protocol
    # ------------------------------------------------------------------

    def lookup(self, type_id: Any) -> EntityType | None:
        if isinstance(type_id, type):
            name = self._by_class.get(type_id)
            if name is None:
                return None
        else:
            name = str(type_id)
        if name not in self._graph:
            return None
        entity: EntityType = self._graph.nodes[name]["entity"]
        return entity

    def navigations_of(self, entity_type: EntityType) -> tuple[Navigation, ...]:
        if entity_type.name not in self._graph:
            return ()
        return tuple(
            data["navigation"]
            for _, _, data in self._graph.out_edges(entity_type.name, data=True)
        )

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------

    def entity_types(self) -> list[EntityType]:
        """All entity types, sorted by name."""
        return [self._graph.nodes[n]["entity"] for n in sorted(self._graph.nodes)]

    def __contains__(self, type_id: object) -> bool:
        return self.lookup(type_id) is not None

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    @classmethod
    def from_declarations(cls, declarations: Iterable[Declaration]) -> NetworkSchemaGraph:
        """Build a graph from ``(entity, navigations)`` pairs.

        Navigations are reordered per the ordering contract; one-sided
        inverse declarations are completed on the other side.

        Raises:
            SchemaError: on duplicate types or navigation names, unknown
                targets, or conflicting inverse declarations.
        """
        entities: dict[str, EntityType] = {}
        declared: dict[str, list[Navigation]] = {}
        for entity, navigations in declarations:
            if isinstance(entity, str):
                entity = EntityType(name=entity)
            if entity.name in entities:
                raise SchemaError(f"Entity type '{entity.name}' declared twice")
            entities[entity.name] = entity
            declared[entity.name] = list(navigations)

        _check_navigations(entities, declared)
        completed = _complete_inverses(declared)

        g: _Graph = nx.MultiDiGraph()
        for name, entity in entities.items():
            g.add_node(name, entity=entity)
        for name in entities:
            for nav in order_navigations(completed[name]):
                g.add_edge(
                    nav.source,
                    nav.target,
                    key=nav.name,
                    navigation=nav,
                    multiplicity=str(nav.multiplicity),
                )

        logger.debug(
            "Built schema graph: %d types, %d navigations",
            g.number_of_nodes(),
            g.number_of_edges(),
        )
        return cls(g)

    @classmethod
    def from_registry(cls, mapper_registry: registry) -> NetworkSchemaGraph:
        """Introspect a SQLAlchemy declarative registry.

        Each mapped class becomes an entity type named after the class;
        each relationship becomes a navigation named after its attribute
        key, with the inverse taken from ``back_populates``/``backref``.
        """
        mapper_registry.configure()
        mappers = sorted(mapper_registry.mappers, key=lambda m: m.class_.__name__)
        declarations: list[Declaration] = []
        for mapper in mappers:
            entity = EntityType(name=mapper.class_.__name__, cls=mapper.class_)
            navigations = [_navigation_from(mapper, rel) for rel in mapper.relationships]
            declarations.append((entity, navigations))
        return cls.from_declarations(declarations)


# ---------------------------------------------------------------------------
# Declaration checks
# ---------------------------------------------------------------------------


def _check_navigations(
    entities: dict[str, EntityType], declared: dict[str, list[Navigation]]
) -> None:
    for name, navigations in declared.items():
        seen: set[str] = set()
        for nav in navigations:
            if nav.source != name:
                raise SchemaError(f"Navigation '{nav.qualified_name}' declared on '{name}'")
            if nav.name in seen:
                raise SchemaError(f"Navigation '{nav.qualified_name}' declared twice")
            seen.add(nav.name)
            if nav.target not in entities:
                raise SchemaError(
                    f"Navigation '{nav.qualified_name}' targets unknown type '{nav.target}'"
                )


def _complete_inverses(declared: dict[str, list[Navigation]]) -> dict[str, list[Navigation]]:
    """Mirror one-sided inverse declarations; reject conflicting ones."""
    by_key = {(nav.source, nav.name): nav for navs in declared.values() for nav in navs}
    mirrored: dict[tuple[str, str], str] = {}

    for nav in by_key.values():
        if nav.inverse is None:
            continue
        other = by_key.get((nav.target, nav.inverse))
        if other is None:
            raise SchemaError(
                f"Navigation '{nav.qualified_name}' declares unknown inverse "
                f"'{nav.target}.{nav.inverse}'"
            )
        if other.target != nav.source:
            raise SchemaError(
                f"Inverse '{other.qualified_name}' of '{nav.qualified_name}' "
                f"does not lead back to '{nav.source}'"
            )
        if other.inverse is None:
            mirrored[(other.source, other.name)] = nav.name
        elif other.inverse != nav.name:
            raise SchemaError(
                f"Conflicting inverses: '{nav.qualified_name}' -> '{other.qualified_name}', "
                f"but '{other.qualified_name}' -> '{other.target}.{other.inverse}'"
            )

    if not mirrored:
        return declared
    return {
        name: [
            _with_inverse(nav, mirrored[(nav.source, nav.name)])
            if (nav.source, nav.name) in mirrored
            else nav
            for nav in navs
        ]
        for name, navs in declared.items()
    }


def _with_inverse(nav: Navigation, inverse: str) -> Navigation:
    return Navigation(
        source=nav.source,
        name=nav.name,
        target=nav.target,
        multiplicity=nav.multiplicity,
        inverse=inverse,
    )


# ---------------------------------------------------------------------------
# SQLAlchemy relationship -> Navigation
# ---------------------------------------------------------------------------


def _navigation_from(mapper: Mapper[Any], rel: Any) -> Navigation:
    if rel.direction is RelationshipDirection.MANYTOMANY:
        multiplicity = Multiplicity.MANY_TO_MANY
    elif rel.direction is RelationshipDirection.MANYTOONE or not rel.uselist:
        multiplicity = Multiplicity.TO_ONE
    else:
        multiplicity = Multiplicity.TO_MANY

    return Navigation(
        source=type_name(mapper.class_),
        name=rel.key,
        target=type_name(rel.mapper.class_),
        multiplicity=multiplicity,
        inverse=rel.back_populates or None,
    )
