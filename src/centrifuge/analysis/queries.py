"""Read-only queries over a finished analysis result.

Each query answers one question about a CodebaseGraph without re-running
the pipeline:
  file_context: what a file defines, imports, and who imports it
  get_dependents: who breaks, directly or transitively, if a file changes
  module_structure: how modules depend on each other, and which cycles exist
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import Enum

from ..exceptions import FileNotInGraphError
from ..graph.builder import module_key
from .models import CodebaseGraph, FileMetrics, ModuleMetrics

DEFAULT_DEPENDENT_DEPTH = 2

# Affected-file counts above these are MEDIUM / HIGH risk
RISK_MEDIUM_ABOVE = 5
RISK_HIGH_ABOVE = 20

# Closed cycle paths ([a, b, a]) longer than this are HIGH severity,
# so a cycle through three or more files is HIGH
CYCLE_HIGH_ABOVE = 3


class RiskLevel(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass
class FileLink:
    """One import edge seen from a file: the file on the other end and the symbols."""

    path: str
    symbols: list[str] = field(default_factory=list)


@dataclass
class FunctionSummary:
    name: str
    loc: int


@dataclass
class FileContext:
    """Everything known about one file node."""

    path: str
    loc: int
    module: str
    functions: list[FunctionSummary] = field(default_factory=list)
    imports: list[FileLink] = field(default_factory=list)
    dependents: list[FileLink] = field(default_factory=list)
    metrics: FileMetrics = field(default_factory=FileMetrics)


@dataclass
class TransitiveDependent:
    """A file reached through at least one intermediate dependent.

    ``through_path`` starts at the queried file and ends at the file that
    imports ``path`` directly.
    """

    path: str
    through_path: list[str]
    depth: int


@dataclass
class DependentsReport:
    file: str
    direct_dependents: list[FileLink] = field(default_factory=list)
    transitive_dependents: list[TransitiveDependent] = field(default_factory=list)
    total_affected: int = 0
    risk_level: RiskLevel = RiskLevel.LOW


@dataclass
class CrossModuleDep:
    """Number of file edges from one module into another."""

    source: str
    target: str
    weight: int


@dataclass
class CycleReport:
    cycle: list[str]
    severity: RiskLevel


@dataclass
class ModuleStructure:
    modules: list[ModuleMetrics] = field(default_factory=list)
    cross_module_deps: list[CrossModuleDep] = field(default_factory=list)
    circular_deps: list[CycleReport] = field(default_factory=list)


def _require_file(result: CodebaseGraph, path: str) -> FileMetrics:
    metrics = result.file_metrics.get(path)
    if metrics is None:
        raise FileNotInGraphError(path)
    return metrics


def file_context(result: CodebaseGraph, path: str) -> FileContext:
    """Functions, imports, dependents and metrics of one file.

    Raises:
        FileNotInGraphError: If ``path`` is not a file node of ``result``
    """
    metrics = _require_file(result, path)

    node = next((n for n in result.nodes if n.id == path and n.is_file), None)
    functions = [
        FunctionSummary(name=n.label, loc=n.loc) for n in result.nodes if n.parent_file == path
    ]
    imports = [FileLink(e.target, list(e.symbols)) for e in result.edges if e.source == path]
    dependents = [FileLink(e.source, list(e.symbols)) for e in result.edges if e.target == path]

    return FileContext(
        path=path,
        loc=node.loc if node else 0,
        module=node.module if node else module_key(path),
        functions=functions,
        imports=imports,
        dependents=dependents,
        metrics=metrics,
    )


def risk_level(total_affected: int) -> RiskLevel:
    if total_affected > RISK_HIGH_ABOVE:
        return RiskLevel.HIGH
    if total_affected > RISK_MEDIUM_ABOVE:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def get_dependents(
    result: CodebaseGraph, path: str, depth: int = DEFAULT_DEPENDENT_DEPTH
) -> DependentsReport:
    """Files that import ``path``, directly and up to ``depth`` hops away.

    BFS over reverse edges. Direct dependents keep their imported
    symbols; files first reached at hop 2 or later are listed as
    transitive with the chain that leads to them. ``total_affected``
    counts every distinct file reached within ``depth`` hops. A depth
    below 1 is treated as 1.

    Raises:
        FileNotInGraphError: If ``path`` is not a file node of ``result``
    """
    _require_file(result, path)
    depth = max(depth, 1)

    reverse: dict[str, list[str]] = {}
    direct: list[FileLink] = []
    for e in result.edges:
        reverse.setdefault(e.target, []).append(e.source)
        if e.target == path:
            direct.append(FileLink(e.source, list(e.symbols)))

    level = {path: 0}
    parent: dict[str, str] = {}
    transitive: list[TransitiveDependent] = []
    queue: deque[str] = deque([path])

    while queue:
        node = queue.popleft()
        if level[node] >= depth:
            continue
        for dep in reverse.get(node, []):
            if dep in level:
                continue
            level[dep] = level[node] + 1
            parent[dep] = node
            queue.append(dep)
            if level[dep] > 1:
                transitive.append(
                    TransitiveDependent(dep, _chain_to(node, parent), level[dep])
                )

    total_affected = len(level) - 1
    return DependentsReport(
        file=path,
        direct_dependents=direct,
        transitive_dependents=transitive,
        total_affected=total_affected,
        risk_level=risk_level(total_affected),
    )


def _chain_to(node: str, parent: dict[str, str]) -> list[str]:
    chain = [node]
    while chain[-1] in parent:
        chain.append(parent[chain[-1]])
    chain.reverse()
    return chain


def module_structure(result: CodebaseGraph) -> ModuleStructure:
    """Modules by size, weighted cross-module dependencies, and rated cycles.

    ``modules`` is ordered by file count, largest first.
    ``cross_module_deps`` counts file edges per (source, target) module
    pair, heaviest first; edges inside one module are not counted.
    Cycles through three or more files are HIGH severity; two-file
    cycles are LOW.
    """
    module_of = {n.id: n.module for n in result.nodes if n.is_file}

    weights: dict[tuple[str, str], int] = {}
    for e in result.edges:
        source = module_of.get(e.source)
        target = module_of.get(e.target)
        if source is None or target is None or source == target:
            continue
        weights[(source, target)] = weights.get((source, target), 0) + 1

    cross = [CrossModuleDep(s, t, w) for (s, t), w in weights.items()]
    cross.sort(key=lambda d: d.weight, reverse=True)

    cycles = [
        CycleReport(
            cycle=list(c),
            severity=RiskLevel.HIGH if len(c) > CYCLE_HIGH_ABOVE else RiskLevel.LOW,
        )
        for c in result.stats.circular_deps
    ]

    return ModuleStructure(
        modules=sorted(result.module_metrics.values(), key=lambda m: m.files, reverse=True),
        cross_module_deps=cross,
        circular_deps=cycles,
    )
