"""Dependency graph: construction, cycles, traversals."""

from .algorithms import compute_blast_radius, compute_degrees
from .builder import build_graph, module_key
from .cycles import MAX_CYCLES, detect_circular_deps, normalize_cycle
from .models import BuiltGraph, GraphEdge, GraphNode, NodeType

__all__ = [
    "BuiltGraph",
    "GraphEdge",
    "GraphNode",
    "NodeType",
    "MAX_CYCLES",
    "build_graph",
    "compute_blast_radius",
    "compute_degrees",
    "detect_circular_deps",
    "module_key",
    "normalize_cycle",
]
