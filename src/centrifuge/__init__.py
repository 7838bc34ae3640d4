"""
Centrifuge - Dependency Graph Force Analysis

Builds a weighted dependency graph from parsed source-file metadata and
measures the forces acting on it: centrality, coupling, cohesion,
circular dependencies, tension between modules, bridge files and
extraction candidates.
"""

__version__ = "0.1.0"

from .analysis import (
    CodebaseGraph,
    analyze_codebase,
    analyze_graph,
    file_context,
    get_dependents,
    module_structure,
    rank_hotspots,
    to_dict,
)
from .graph import build_graph, detect_circular_deps
from .parsing import ParsedExport, ParsedFile, ParsedImport, load_parsed_files

__all__ = [
    "analyze_codebase",  # Main entry point
    "analyze_graph",
    "build_graph",
    "detect_circular_deps",
    "rank_hotspots",
    "file_context",
    "get_dependents",
    "module_structure",
    "to_dict",
    "load_parsed_files",
    "CodebaseGraph",
    "ParsedExport",
    "ParsedFile",
    "ParsedImport",
]
