"""Schema graph adapter built on NetworkX."""

from includeall.infrastructure.graph.engine import NetworkSchemaGraph

__all__ = ["NetworkSchemaGraph"]
