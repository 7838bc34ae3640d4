"""Hotspot ranking: top files by one per-file metric."""

from dataclasses import dataclass
from typing import Callable, Dict, List

from ..exceptions import InvalidMetricError
from .models import CodebaseGraph, FileMetrics

MIN_LIMIT = 1
MAX_LIMIT = 100

_SCORERS: Dict[str, Callable[[FileMetrics], float]] = {
    "coupling": lambda m: m.coupling,
    "pagerank": lambda m: m.page_rank,
    "fan_in": lambda m: m.fan_in,
    "fan_out": lambda m: m.fan_out,
    "betweenness": lambda m: m.betweenness,
    "tension": lambda m: m.tension,
    "churn": lambda m: m.churn,
    "complexity": lambda m: m.cyclomatic_complexity,
    "blast_radius": lambda m: m.blast_radius,
    # Untested files rank first
    "coverage": lambda m: 0.0 if m.has_tests else 1.0,
}

HOTSPOT_METRICS = list(_SCORERS)


@dataclass
class Hotspot:
    path: str
    score: float


def rank_hotspots(result: CodebaseGraph, metric: str = "coupling", limit: int = 10) -> List[Hotspot]:
    """Rank files by ``metric``, highest first.

    ``limit`` is clamped to [1, 100]. Ties keep file order.

    Raises:
        InvalidMetricError: If ``metric`` is not one of HOTSPOT_METRICS
    """
    scorer = _SCORERS.get(metric)
    if scorer is None:
        raise InvalidMetricError(metric, HOTSPOT_METRICS)

    limit = min(max(limit, MIN_LIMIT), MAX_LIMIT)
    scored = [Hotspot(path=path, score=float(scorer(m))) for path, m in result.file_metrics.items()]
    scored.sort(key=lambda h: h.score, reverse=True)
    return scored[:limit]
