"""Analysis engine implementing the computation DAG.

DAG:
  Parsed files → Build graph (file + function nodes, import edges)
              → Cycle detection + centrality (PageRank, betweenness)
              → Per-file metrics (degree, coupling, blast radius, dead exports)
              → Per-module metrics (cohesion, escape velocity)
              → Force analysis (verdicts, tension, bridges, extraction)
              → Backfill tension into per-file metrics
              → Cloud groups
"""

from typing import Dict, List, Optional

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..graph.builder import build_graph
from ..graph.cycles import detect_circular_deps
from ..graph.models import BuiltGraph
from ..logging_config import get_logger
from ..parsing.models import ParsedFile
from .centrality import compute_betweenness, compute_pagerank
from .files import compute_file_metrics
from .forces import compute_force_analysis
from .groups import compute_groups
from .models import CodebaseGraph, CodebaseStats
from .modules import compute_module_metrics

logger = get_logger(__name__)


class AnalysisEngine:
    """Executes the full analysis DAG on a set of parsed files."""

    def __init__(self, files: List[ParsedFile], config: Optional[AnalysisConfig] = None):
        self.files = files
        self.config = config or DEFAULT_CONFIG

    def run(self) -> CodebaseGraph:
        """Build the graph and run every analysis stage."""
        built = build_graph(self.files)
        return analyze_graph(built, self.files, self.config)


def analyze_codebase(
    files: List[ParsedFile], config: Optional[AnalysisConfig] = None
) -> CodebaseGraph:
    """Analyze a parsed codebase snapshot. Main entry point."""
    return AnalysisEngine(files, config).run()


def analyze_graph(
    built: BuiltGraph,
    files: Optional[List[ParsedFile]] = None,
    config: Optional[AnalysisConfig] = None,
) -> CodebaseGraph:
    """Run every analysis stage over an already built graph.

    ``files`` supplies export, churn and test metadata. Without it the
    graph metrics are still computed, but complexity defaults to 1 and
    no dead exports or tests are reported.
    """
    config = config or DEFAULT_CONFIG
    thresholds = config.thresholds
    parsed_by_path: Dict[str, ParsedFile] = {f.relative_path: f for f in files or []}

    circular_deps = detect_circular_deps(built, max_cycles=config.max_cycles)
    pagerank = compute_pagerank(built, config)
    betweenness = compute_betweenness(built)

    file_metrics = compute_file_metrics(built, parsed_by_path, pagerank, betweenness, thresholds)
    module_metrics = compute_module_metrics(built, parsed_by_path)
    force_analysis = compute_force_analysis(built, module_metrics, betweenness, thresholds)

    for tension_file in force_analysis.tension_files:
        metrics = file_metrics.get(tension_file.file)
        if metrics is not None:
            metrics.tension = tension_file.tension

    file_nodes = built.file_nodes
    groups = compute_groups(file_nodes, file_metrics, max_groups=config.max_groups)

    stats = CodebaseStats(
        total_files=len(file_nodes),
        total_functions=len(built.nodes) - len(file_nodes),
        total_dependencies=len(built.edges),
        circular_deps=circular_deps,
    )
    logger.debug(
        "Analysis complete: %d files, %d circular deps, %d tension files",
        stats.total_files,
        len(circular_deps),
        len(force_analysis.tension_files),
    )

    return CodebaseGraph(
        nodes=built.nodes,
        edges=built.edges,
        file_metrics=file_metrics,
        module_metrics=module_metrics,
        groups=groups,
        force_analysis=force_analysis,
        stats=stats,
    )
