"""Result models for one analysis run.

Levels:
  Per-file measurements (FileMetrics)
  Per-module measurements (ModuleMetrics), module = containing directory
  Architectural forces (ForceAnalysis): cohesion verdicts, tension,
      bridges, extraction candidates
  Visualization groups (GroupMetrics)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..graph.models import GraphEdge, GraphNode

# ── Per-file ───────────────────────────────────────────────────────


@dataclass
class FileMetrics:
    """Graph and construct measurements for one file node."""

    page_rank: float = 0.0
    betweenness: float = 0.0
    fan_in: int = 0
    fan_out: int = 0
    coupling: float = 0.0  # fan_out / (fan_in + fan_out), 0 when isolated
    tension: float = 0.0  # backfilled from force analysis
    is_bridge: bool = False
    churn: int = 0
    cyclomatic_complexity: float = 1.0  # mean over exports
    blast_radius: int = 0  # transitive dependents
    dead_exports: list[str] = field(default_factory=list)
    has_tests: bool = False
    test_file: str = ""


# ── Per-module ─────────────────────────────────────────────────────


@dataclass
class ModuleMetrics:
    """Per-module (directory) measurements."""

    path: str
    files: int = 0
    loc: int = 0
    exports: int = 0
    internal_deps: int = 0
    external_deps: int = 0
    cohesion: float = 1.0  # internal / (internal + external), 1 with no deps
    escape_velocity: float = 0.0
    depends_on: list[str] = field(default_factory=list)
    depended_by: list[str] = field(default_factory=list)


# ── Forces ─────────────────────────────────────────────────────────


class CohesionVerdict(str, Enum):
    COHESIVE = "COHESIVE"
    MODERATE = "MODERATE"
    JUNK_DRAWER = "JUNK_DRAWER"


@dataclass
class ModuleCohesion:
    """A module's metrics with its cohesion verdict."""

    module: ModuleMetrics
    verdict: CohesionVerdict


@dataclass
class ModulePull:
    """How strongly one foreign module pulls on a file."""

    module: str
    strength: float
    symbols: list[str] = field(default_factory=list)


@dataclass
class TensionFile:
    """A file pulled evenly by several foreign modules."""

    file: str
    tension: float
    pulled_by: list[ModulePull] = field(default_factory=list)
    recommendation: str = ""


@dataclass
class BridgeFile:
    """A file sitting on many shortest paths between distinct modules."""

    file: str
    betweenness: float
    connects: list[str] = field(default_factory=list)
    role: str = ""


@dataclass
class ExtractionCandidate:
    """A module that is used elsewhere and depends on nothing outside itself."""

    target: str
    escape_velocity: float
    internal_deps: int
    external_deps: int
    depended_by_modules: int
    recommendation: str = ""


@dataclass
class ForceAnalysis:
    module_cohesion: list[ModuleCohesion] = field(default_factory=list)
    tension_files: list[TensionFile] = field(default_factory=list)
    bridge_files: list[BridgeFile] = field(default_factory=list)
    extraction_candidates: list[ExtractionCandidate] = field(default_factory=list)
    summary: str = ""


# ── Visualization groups ───────────────────────────────────────────


@dataclass
class GroupMetrics:
    """Aggregate of all files collapsed into one cloud group."""

    name: str
    files: int
    loc: int
    importance: float  # summed PageRank, 4dp
    fan_in: int
    fan_out: int
    color: str


# ── Full result ────────────────────────────────────────────────────


@dataclass
class CodebaseStats:
    total_files: int = 0
    total_functions: int = 0
    total_dependencies: int = 0
    circular_deps: list[list[str]] = field(default_factory=list)


@dataclass
class CodebaseGraph:
    """Complete analysis result. One immutable snapshot per run."""

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)
    file_metrics: dict[str, FileMetrics] = field(default_factory=dict)
    module_metrics: dict[str, ModuleMetrics] = field(default_factory=dict)
    groups: list[GroupMetrics] = field(default_factory=list)
    force_analysis: ForceAnalysis = field(default_factory=ForceAnalysis)
    stats: CodebaseStats = field(default_factory=CodebaseStats)
