"""Tests for schema graph domain types."""

from __future__ import annotations

import pytest

from includeall.domain.schema import (
    EntityType,
    Multiplicity,
    SchemaGraph,
    order_navigations,
    type_name,
)
from includeall.infrastructure.graph.engine import NetworkSchemaGraph
from tests.conftest import nav


class TestNavigation:
    def test_qualified_name(self) -> None:
        assert nav("Author", "Books", "Book").qualified_name == "Author.Books"

    def test_is_inverse_of_declared_pair(self) -> None:
        books = nav("Author", "Books", "Book", inverse="Author")
        author = nav("Book", "Author", "Author", Multiplicity.TO_ONE, inverse="Books")
        assert author.is_inverse_of(books)
        assert books.is_inverse_of(author)

    def test_not_inverse_without_declaration(self) -> None:
        books = nav("Author", "Books", "Book")
        author = nav("Book", "Author", "Author", Multiplicity.TO_ONE)
        assert not author.is_inverse_of(books)

    def test_not_inverse_when_endpoints_differ(self) -> None:
        # Same names, but the edge does not lead back to the source.
        books = nav("Author", "Books", "Book", inverse="Author")
        other = nav("Book", "Author", "Publisher", Multiplicity.TO_ONE, inverse="Books")
        assert not other.is_inverse_of(books)

    def test_frozen(self) -> None:
        n = nav("A", "b", "B")
        with pytest.raises(AttributeError):
            n.name = "c"  # type: ignore[misc]

    def test_multiplicity_values(self) -> None:
        assert str(Multiplicity.TO_ONE) == "to-one"
        assert str(Multiplicity.MANY_TO_MANY) == "many-to-many"


class TestOrdering:
    def test_many_to_many_after_regular(self) -> None:
        navs = [
            nav("Book", "Tags", "Tag", Multiplicity.MANY_TO_MANY),
            nav("Book", "Author", "Author", Multiplicity.TO_ONE),
            nav("Book", "Shelves", "Shelf", Multiplicity.MANY_TO_MANY),
            nav("Book", "Reviews", "Review"),
        ]
        assert [n.name for n in order_navigations(navs)] == [
            "Author",
            "Reviews",
            "Tags",
            "Shelves",
        ]


class TestTypeName:
    def test_class(self) -> None:
        class Author:
            pass

        assert type_name(Author) == "Author"

    def test_string(self) -> None:
        assert type_name("Author") == "Author"


class TestProtocolConformance:
    def test_network_graph_is_schema_graph(self, bookstore_schema: NetworkSchemaGraph) -> None:
        assert isinstance(bookstore_schema, SchemaGraph)

    def test_entity_equality_ignores_class(self) -> None:
        assert EntityType("Author", cls=int) == EntityType("Author")
