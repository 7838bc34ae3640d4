"""Graph theory: weighted PageRank and betweenness centrality."""

from typing import Dict, List, Mapping, Optional, Tuple

import numpy as np


def _collect_nodes(adjacency: Mapping[str, List[str]]) -> List[str]:
    """Adjacency keys in order, then targets that never appear as a key."""
    nodes: List[str] = list(adjacency)
    known = set(nodes)
    for neighbors in adjacency.values():
        for tgt in neighbors:
            if tgt not in known:
                known.add(tgt)
                nodes.append(tgt)
    return nodes


class GraphMetrics:
    """Centrality calculations for directed dependency graphs."""

    @staticmethod
    def pagerank(
        adjacency: Mapping[str, List[str]],
        weights: Optional[Mapping[Tuple[str, str], float]] = None,
        damping: float = 0.85,
        iterations: int = 100,
        tolerance: float = 1e-6,
    ) -> Dict[str, float]:
        """
        Compute weighted PageRank using power iteration.

        PR(v) = (1 - d) / N + d * (Σ PR(u) * w(u,v) / W(u) + D / N)

        where W(u) is the total outgoing weight of u and D is the rank
        mass sitting on dangling nodes (no outgoing weight), which is
        redistributed uniformly.

        Args:
            adjacency: Node -> list of neighbors
            weights: (source, target) -> edge weight; missing edges weigh 1.0
            damping: Damping factor (0.85 is standard)
            iterations: Maximum iterations
            tolerance: Convergence tolerance on the largest per-node change

        Returns:
            Dictionary mapping nodes to PageRank scores (summing to 1)

        Raises:
            ValueError: If an edge weight is negative or not finite
            ArithmeticError: If the ranks do not settle within ``iterations``
        """
        nodes = _collect_nodes(adjacency)
        if not nodes:
            return {}

        n = len(nodes)
        index = {node: i for i, node in enumerate(nodes)}

        sources: List[int] = []
        targets: List[int] = []
        edge_weights: List[float] = []
        for src, neighbors in adjacency.items():
            for tgt in neighbors:
                sources.append(index[src])
                targets.append(index[tgt])
                w = 1.0 if weights is None else float(weights.get((src, tgt), 1.0))
                edge_weights.append(w)

        src_idx = np.asarray(sources, dtype=np.intp)
        tgt_idx = np.asarray(targets, dtype=np.intp)
        w_arr = np.asarray(edge_weights, dtype=np.float64)

        if np.any(w_arr < 0) or not np.all(np.isfinite(w_arr)):
            raise ValueError("edge weights must be finite and non-negative")

        out_weight = np.bincount(src_idx, weights=w_arr, minlength=n)
        dangling = out_weight == 0
        # Transition probability of each edge: w(u,v) / W(u)
        with np.errstate(divide="ignore", invalid="ignore"):
            probs = np.where(out_weight[src_idx] > 0, w_arr / out_weight[src_idx], 0.0)

        rank = np.full(n, 1.0 / n)
        max_diff = float("inf")
        for _ in range(iterations):
            dangling_sum = rank[dangling].sum()
            flow = np.bincount(tgt_idx, weights=probs * rank[src_idx], minlength=n)
            new_rank = (1.0 - damping) / n + damping * (flow + dangling_sum / n)

            max_diff = float(np.abs(new_rank - rank).max())
            rank = new_rank
            if max_diff < tolerance:
                break
        else:
            raise ArithmeticError(
                f"PageRank did not converge in {iterations} iterations (last change {max_diff:.2e})"
            )

        if not np.all(np.isfinite(rank)):
            raise FloatingPointError("PageRank did not produce finite scores")

        return {node: float(rank[i]) for node, i in index.items()}

    @staticmethod
    def betweenness_centrality(
        adjacency: Mapping[str, List[str]], normalize: bool = True
    ) -> Dict[str, float]:
        """
        Compute betweenness centrality using Brandes' algorithm.

        C_B(v) = Σ (σ_st(v) / σ_st) where s != v != t

        One BFS per source counts shortest paths (σ). Dependencies (δ) are
        then accumulated over the BFS order in reverse, pulling from each
        node's successors one level further out.

        Args:
            adjacency: Node -> list of neighbors (directed)
            normalize: Normalize by (n-1)(n-2), the number of ordered pairs
                excluding v, so values fall in [0, 1]

        Returns:
            Dictionary mapping nodes to betweenness centrality
        """
        nodes = _collect_nodes(adjacency)
        n = len(nodes)
        index = {node: i for i, node in enumerate(nodes)}
        # Repeated neighbors are one edge
        successors = [
            [index[t] for t in dict.fromkeys(adjacency.get(node, []))] for node in nodes
        ]

        centrality = np.zeros(n, dtype=np.float64)

        for s in range(n):
            sigma = [0] * n
            sigma[s] = 1
            dist = [-1] * n
            dist[s] = 0

            # BFS order doubles as the queue; dist never decreases along it
            order = [s]
            head = 0
            while head < len(order):
                v = order[head]
                head += 1
                for w in successors[v]:
                    if dist[w] < 0:
                        dist[w] = dist[v] + 1
                        order.append(w)
                    if dist[w] == dist[v] + 1:
                        sigma[w] += sigma[v]

            delta = [0.0] * n
            for v in reversed(order):
                for w in successors[v]:
                    if dist[w] == dist[v] + 1:
                        delta[v] += sigma[v] * (1.0 + delta[w]) / sigma[w]
                if v != s:
                    centrality[v] += delta[v]

        if normalize and n > 2:
            # Directed graph: normalize by (n-1)(n-2).
            # Reference: Brandes (2001), Section 4.
            centrality *= 1.0 / ((n - 1) * (n - 2))

        return {node: float(centrality[i]) for node, i in index.items()}
