"""Cloud groups: coarse collapse of modules for visualization legends."""

from dataclasses import dataclass
from typing import Dict, List, Mapping

from ..graph.models import GraphNode
from .models import FileMetrics, GroupMetrics

# Conventional source-root directories; the group is the directory below them
SOURCE_DIRS = frozenset({"src", "lib", "app", "packages", "apps"})

ROOT_GROUP = "root"

GROUP_COLORS = [
    "#2563eb",
    "#dc2626",
    "#16a34a",
    "#9333ea",
    "#ea580c",
    "#0891b2",
    "#ca8a04",
    "#e11d48",
    "#4f46e5",
    "#059669",
]

MAX_GROUPS = 8


def cloud_group(module: str) -> str:
    """Collapse a module key to its top-level group name.

    >>> cloud_group("src/graph/")
    'graph'
    >>> cloud_group("tests/unit/")
    'tests'
    >>> cloud_group(".")
    'root'
    """
    parts = [p for p in module.rstrip("/").split("/") if p]
    if not parts or parts[0] == ".":
        return ROOT_GROUP
    if parts[0] in SOURCE_DIRS and len(parts) > 1:
        return parts[1]
    return parts[0]


@dataclass
class _GroupTotals:
    files: int = 0
    loc: int = 0
    page_rank: float = 0.0
    fan_in: int = 0
    fan_out: int = 0


def compute_groups(
    file_nodes: List[GraphNode],
    file_metrics: Mapping[str, FileMetrics],
    max_groups: int = MAX_GROUPS,
) -> List[GroupMetrics]:
    """Aggregate files per cloud group, most important first."""
    totals: Dict[str, _GroupTotals] = {}

    for node in file_nodes:
        group = totals.setdefault(cloud_group(node.module), _GroupTotals())
        metrics = file_metrics.get(node.id)
        group.files += 1
        group.loc += node.loc
        if metrics is not None:
            group.page_rank += metrics.page_rank
            group.fan_in += metrics.fan_in
            group.fan_out += metrics.fan_out

    ranked = sorted(totals.items(), key=lambda item: item[1].page_rank, reverse=True)

    return [
        GroupMetrics(
            name=name,
            files=data.files,
            loc=data.loc,
            importance=round(data.page_rank, 4),
            fan_in=data.fan_in,
            fan_out=data.fan_out,
            color=GROUP_COLORS[i % len(GROUP_COLORS)],
        )
        for i, (name, data) in enumerate(ranked[:max_groups])
    ]
