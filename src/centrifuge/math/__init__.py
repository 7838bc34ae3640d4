"""Mathematical utilities for dependency analysis."""

from .entropy import Entropy
from .graph import GraphMetrics

__all__ = [
    "Entropy",
    "GraphMetrics",
]
