"""Per-file measurements: degree, coupling, complexity, dead exports."""

from typing import Dict, List, Mapping, Optional

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..graph.algorithms import compute_blast_radius, compute_degrees
from ..graph.models import BuiltGraph
from ..parsing.models import ParsedFile
from .models import FileMetrics


def compute_coupling(fan_in: int, fan_out: int) -> float:
    """Coupling = fan_out / (fan_in + fan_out), 0 for isolated files."""
    total = fan_in + fan_out
    if total == 0:
        return 0.0
    return fan_out / total


def average_complexity(parsed: Optional[ParsedFile]) -> float:
    """Mean McCabe complexity over a file's exports, 1 when it has none."""
    if parsed is None or not parsed.exports:
        return 1.0
    mean = sum(e.complexity for e in parsed.exports) / len(parsed.exports)
    return round(mean, 2)


def consumed_symbols(graph: BuiltGraph) -> Dict[str, set[str]]:
    """Symbols imported from each file, across all inbound edges."""
    consumed: Dict[str, set[str]] = {}
    for edge in graph.edges:
        consumed.setdefault(edge.target, set()).update(edge.symbols)
    return consumed


def find_dead_exports(parsed: Optional[ParsedFile], consumed: set[str]) -> List[str]:
    """Non-default exports never named by an inbound edge."""
    if parsed is None:
        return []
    return [e.name for e in parsed.exports if not e.is_default and e.name not in consumed]


def compute_file_metrics(
    graph: BuiltGraph,
    parsed_by_path: Mapping[str, ParsedFile],
    pagerank: Mapping[str, float],
    betweenness: Mapping[str, float],
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> Dict[str, FileMetrics]:
    """Build FileMetrics for every file node.

    ``tension`` stays 0 here; force analysis backfills it.
    """
    in_degree, out_degree = compute_degrees(graph)
    blast = compute_blast_radius(graph)
    consumed = consumed_symbols(graph)

    metrics: Dict[str, FileMetrics] = {}
    for node in graph.file_nodes:
        parsed = parsed_by_path.get(node.id)
        fan_in = in_degree.get(node.id, 0)
        fan_out = out_degree.get(node.id, 0)
        btwn = betweenness.get(node.id, 0.0)
        test_file = parsed.test_file if parsed is not None else None

        metrics[node.id] = FileMetrics(
            page_rank=pagerank.get(node.id, 0.0),
            betweenness=btwn,
            fan_in=fan_in,
            fan_out=fan_out,
            coupling=compute_coupling(fan_in, fan_out),
            is_bridge=btwn > thresholds.bridge_flag_betweenness,
            churn=parsed.churn if parsed is not None else 0,
            cyclomatic_complexity=average_complexity(parsed),
            blast_radius=len(blast.get(node.id, ())),
            dead_exports=find_dead_exports(parsed, consumed.get(node.id, set())),
            has_tests=test_file is not None,
            test_file=test_file or "",
        )

    return metrics
