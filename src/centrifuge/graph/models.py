"""Data models for the dependency graph.

Two node levels share one id space:
  File nodes: keyed by relative path, connected by import edges
  Function nodes: keyed by ``path::exportName``, attached to a file node
      through ``parent_file`` and never part of an edge
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class NodeType(str, Enum):
    FILE = "file"
    FUNCTION = "function"


@dataclass
class GraphNode:
    """A file or an exported function/class."""

    id: str
    type: NodeType
    path: str
    label: str
    loc: int
    module: str
    parent_file: str | None = None

    @property
    def is_file(self) -> bool:
        return self.type is NodeType.FILE


@dataclass
class GraphEdge:
    """Directed import edge between two file nodes.

    ``weight`` is the number of imported symbols, or 1 for side-effect
    imports with no symbols.
    """

    source: str
    target: str
    symbols: list[str] = field(default_factory=list)
    is_type_only: bool = False
    weight: int = 1


@dataclass
class BuiltGraph:
    """Directed dependency graph plus the flat node and edge lists.

    Edges are directed: adjacency[A] contains B means A imports B.
    ``adjacency`` and ``reverse`` hold file nodes only, in insertion order.
    """

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)
    adjacency: dict[str, list[str]] = field(default_factory=dict)
    reverse: dict[str, list[str]] = field(default_factory=dict)
    node_index: dict[str, GraphNode] = field(default_factory=dict)
    edge_index: dict[tuple[str, str], GraphEdge] = field(default_factory=dict)

    @property
    def file_nodes(self) -> list[GraphNode]:
        return [n for n in self.nodes if n.is_file]

    @property
    def function_nodes(self) -> list[GraphNode]:
        return [n for n in self.nodes if not n.is_file]

    def has_edge(self, source: str, target: str) -> bool:
        return (source, target) in self.edge_index

    def edge(self, source: str, target: str) -> GraphEdge:
        return self.edge_index[(source, target)]

    def out_neighbors(self, node_id: str) -> list[str]:
        return self.adjacency.get(node_id, [])

    def in_neighbors(self, node_id: str) -> list[str]:
        return self.reverse.get(node_id, [])

    def neighbors(self, node_id: str) -> list[str]:
        """Distinct neighbours in either direction, out-neighbours first."""
        seen: dict[str, None] = dict.fromkeys(self.out_neighbors(node_id))
        for n in self.in_neighbors(node_id):
            seen.setdefault(n, None)
        return list(seen)

    def module_of(self, node_id: str) -> str:
        return self.node_index[node_id].module

    def edge_weights(self) -> dict[tuple[str, str], float]:
        return {key: float(e.weight) for key, e in self.edge_index.items()}
