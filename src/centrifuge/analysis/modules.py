"""Per-module measurements: cohesion, escape velocity, module dependencies.

A module is the directory key assigned by the graph builder. For each
module every member's file edges are classified:

- internal: both endpoints in the module
- external: outgoing edge to another module

Cohesion = internal / (internal + external), 1.0 for a module with no
dependency edges at all. Escape velocity is non-zero only for a module
that depends on nothing outside itself yet is used by other modules.
"""

from collections import defaultdict
from typing import Dict, List, Mapping

from ..graph.models import BuiltGraph, GraphNode
from ..parsing.models import ParsedFile
from .models import ModuleMetrics


def group_by_module(file_nodes: List[GraphNode]) -> Dict[str, List[GraphNode]]:
    """Group file nodes by module key, preserving first-seen order."""
    modules: Dict[str, List[GraphNode]] = defaultdict(list)
    for node in file_nodes:
        modules[node.module].append(node)
    return dict(modules)


def compute_cohesion(internal_deps: int, external_deps: int) -> float:
    total = internal_deps + external_deps
    if total == 0:
        return 1.0
    return internal_deps / total


def compute_escape_velocity(external_deps: int, depender_modules: int, total_modules: int) -> float:
    """min(1, dependers / (modules - 1)) for self-contained, used modules."""
    if external_deps != 0 or depender_modules == 0 or total_modules <= 1:
        return 0.0
    return min(1.0, depender_modules / (total_modules - 1))


def compute_module_metrics(
    graph: BuiltGraph,
    parsed_by_path: Mapping[str, ParsedFile],
) -> Dict[str, ModuleMetrics]:
    """Compute ModuleMetrics for every module key."""
    modules = group_by_module(graph.file_nodes)
    result: Dict[str, ModuleMetrics] = {}

    for module_path, files in modules.items():
        member_ids = {f.id for f in files}
        internal_deps = 0
        external_deps = 0
        total_loc = 0
        total_exports = 0
        depends_on: Dict[str, None] = {}
        depended_by: Dict[str, None] = {}

        for node in files:
            total_loc += node.loc
            parsed = parsed_by_path.get(node.id)
            if parsed is not None:
                total_exports += len(parsed.exports)

            for target in graph.out_neighbors(node.id):
                if target in member_ids:
                    internal_deps += 1
                else:
                    external_deps += 1
                    depends_on.setdefault(graph.module_of(target), None)

            for source in graph.in_neighbors(node.id):
                if source not in member_ids:
                    depended_by.setdefault(graph.module_of(source), None)

        escape_velocity = compute_escape_velocity(external_deps, len(depended_by), len(modules))

        result[module_path] = ModuleMetrics(
            path=module_path,
            files=len(files),
            loc=total_loc,
            exports=total_exports,
            internal_deps=internal_deps,
            external_deps=external_deps,
            cohesion=round(compute_cohesion(internal_deps, external_deps), 2),
            escape_velocity=round(escape_velocity, 2),
            depends_on=list(depends_on),
            depended_by=list(depended_by),
        )

    return result
