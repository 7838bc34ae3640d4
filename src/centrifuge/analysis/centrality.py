"""Centrality over the file-node graph, with safe fallbacks.

A failed computation never aborts the run: PageRank falls back to a
uniform 1/N distribution and betweenness to zero for every file.
"""

from typing import Dict

from ..config import DEFAULT_CONFIG, AnalysisConfig
from ..graph.models import BuiltGraph
from ..logging_config import get_logger
from ..math.graph import GraphMetrics

logger = get_logger(__name__)

_CENTRALITY_ERRORS = (ArithmeticError, ValueError, KeyError)


def compute_pagerank(graph: BuiltGraph, config: AnalysisConfig = DEFAULT_CONFIG) -> Dict[str, float]:
    """Weighted PageRank over file nodes, edge weight = symbol count."""
    nodes = list(graph.adjacency)
    if not nodes:
        return {}
    try:
        return GraphMetrics.pagerank(
            graph.adjacency,
            weights=graph.edge_weights(),
            damping=config.pagerank_damping,
            iterations=config.pagerank_iterations,
            tolerance=config.pagerank_tolerance,
        )
    except _CENTRALITY_ERRORS as e:
        logger.warning("PageRank failed (%s); using uniform scores", e)
        return dict.fromkeys(nodes, 1.0 / len(nodes))


def compute_betweenness(graph: BuiltGraph) -> Dict[str, float]:
    """Normalized directed betweenness over file nodes."""
    nodes = list(graph.adjacency)
    try:
        return GraphMetrics.betweenness_centrality(graph.adjacency, normalize=True)
    except _CENTRALITY_ERRORS as e:
        logger.warning("Betweenness centrality failed (%s); using zero scores", e)
        return dict.fromkeys(nodes, 0.0)
