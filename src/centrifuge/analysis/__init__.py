"""Analysis pipeline: centrality, per-file and per-module metrics, forces, groups."""

from .engine import AnalysisEngine, analyze_codebase, analyze_graph
from .groups import cloud_group, compute_groups
from .hotspots import HOTSPOT_METRICS, Hotspot, rank_hotspots
from .models import (
    BridgeFile,
    CodebaseGraph,
    CodebaseStats,
    CohesionVerdict,
    ExtractionCandidate,
    FileMetrics,
    ForceAnalysis,
    GroupMetrics,
    ModuleCohesion,
    ModuleMetrics,
    ModulePull,
    TensionFile,
)
from .queries import (
    DependentsReport,
    FileContext,
    ModuleStructure,
    RiskLevel,
    file_context,
    get_dependents,
    module_structure,
)
from .serializers import to_dict, to_json

__all__ = [
    "AnalysisEngine",
    "analyze_codebase",
    "analyze_graph",
    "cloud_group",
    "compute_groups",
    "rank_hotspots",
    "file_context",
    "get_dependents",
    "module_structure",
    "to_dict",
    "to_json",
    "HOTSPOT_METRICS",
    "Hotspot",
    "DependentsReport",
    "FileContext",
    "ModuleStructure",
    "RiskLevel",
    "BridgeFile",
    "CodebaseGraph",
    "CodebaseStats",
    "CohesionVerdict",
    "ExtractionCandidate",
    "FileMetrics",
    "ForceAnalysis",
    "GroupMetrics",
    "ModuleCohesion",
    "ModuleMetrics",
    "ModulePull",
    "TensionFile",
]
