"""Circular dependency detection over file nodes.

This is a heuristic cycle finder, not an exhaustive enumeration of simple
cycles. A global ``visited`` set stops the search from re-entering nodes
explored from an earlier start node, so some cycles through those nodes
are never reported. Every strongly connected region reachable from an
unvisited start yields at least one representative cycle.
"""

from typing import List

from .models import BuiltGraph

MAX_CYCLES = 100


def detect_circular_deps(graph: BuiltGraph, max_cycles: int = MAX_CYCLES) -> List[List[str]]:
    """Find circular dependency chains with an iterative DFS.

    Each cycle starts and ends with the same node id, so a cycle through
    k files has k + 1 entries. Rotations of one cycle are reported once,
    in first-seen order.

    Uses an explicit call stack of (node, neighbor cursor) frames to avoid
    Python recursion limits on deep import chains.
    """
    cycles: List[List[str]] = []
    visited: set[str] = set()

    for start in graph.adjacency:
        if len(cycles) >= max_cycles:
            break
        if start in visited:
            continue

        path: List[str] = [start]
        on_stack: set[str] = {start}
        visited.add(start)
        call_stack: List[List] = [[start, 0]]

        while call_stack and len(cycles) < max_cycles:
            frame = call_stack[-1]
            node, cursor = frame
            neighbors = graph.out_neighbors(node)

            if cursor >= len(neighbors):
                # All neighbors processed: "return" from node
                call_stack.pop()
                path.pop()
                on_stack.discard(node)
                continue

            neighbor = neighbors[cursor]
            frame[1] = cursor + 1

            if neighbor in on_stack:
                cycle_start = path.index(neighbor)
                cycles.append(path[cycle_start:] + [neighbor])
            elif neighbor not in visited:
                visited.add(neighbor)
                on_stack.add(neighbor)
                path.append(neighbor)
                call_stack.append([neighbor, 0])

    return _dedupe(cycles)


def normalize_cycle(cycle: List[str]) -> tuple[str, ...]:
    """Rotate a closed cycle so its smallest node id comes first.

    The closing (repeated) element is dropped before rotating.

    >>> normalize_cycle(["b", "c", "a", "b"])
    ('a', 'b', 'c')
    """
    open_cycle = cycle[:-1]
    if not open_cycle:
        return ()
    pivot = open_cycle.index(min(open_cycle))
    return tuple(open_cycle[pivot:] + open_cycle[:pivot])


def _dedupe(cycles: List[List[str]]) -> List[List[str]]:
    seen: set[tuple[str, ...]] = set()
    unique: List[List[str]] = []
    for cycle in cycles:
        key = normalize_cycle(cycle)
        if key in seen:
            continue
        seen.add(key)
        unique.append(cycle)
    return unique
