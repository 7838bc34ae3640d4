"""Graph traversals over file nodes: degree and blast radius."""

from collections import deque

from .models import BuiltGraph


def compute_degrees(graph: BuiltGraph) -> tuple[dict[str, int], dict[str, int]]:
    """Return (in_degree, out_degree) for every file node."""
    in_degree = {node: len(graph.in_neighbors(node)) for node in graph.adjacency}
    out_degree = {node: len(graph.out_neighbors(node)) for node in graph.adjacency}
    return in_degree, out_degree


def compute_blast_radius(graph: BuiltGraph) -> dict[str, set[str]]:
    """Compute blast radius: for each file, what files are transitively affected.

    Uses BFS on the reverse graph. If A imports B, then changing B
    affects A. So we follow reverse edges from each node. The start node
    is never part of its own blast radius, even inside a cycle.
    """
    blast: dict[str, set[str]] = {}

    for start_node in graph.adjacency:
        visited: set[str] = set()
        queue: deque[str] = deque(graph.in_neighbors(start_node))
        while queue:
            node = queue.popleft()
            if node in visited:
                continue
            visited.add(node)
            queue.extend(n for n in graph.in_neighbors(node) if n not in visited)
        visited.discard(start_node)
        blast[start_node] = visited

    return blast
