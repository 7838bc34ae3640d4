"""Centrifuge force analysis: which forces pull a codebase apart.

- Cohesion verdicts: is each module a unit or a junk drawer?
- Tension: is a file pulled evenly by several foreign modules?
- Bridges: does a file hold otherwise separate modules together?
- Extraction: is a module self-contained and used elsewhere?

Tension is the normalized Shannon entropy of the pull strengths:

    tension = H(p) / ln(k),   p_i = strength_i / Σ strength

over the k >= 2 foreign modules pulling on the file. Outgoing edges pull
with their weight, incoming edges with a fixed half strength.
"""

import posixpath
from typing import Dict, List, Mapping

from ..config import DEFAULT_THRESHOLDS, ThresholdConfig
from ..graph.models import BuiltGraph, GraphNode
from ..math.entropy import Entropy
from .models import (
    BridgeFile,
    CohesionVerdict,
    ExtractionCandidate,
    ForceAnalysis,
    ModuleCohesion,
    ModuleMetrics,
    ModulePull,
    TensionFile,
)

HEALTHY_SUMMARY = "Codebase architecture looks healthy. No major force imbalances detected."


def cohesion_verdict(cohesion: float, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS) -> CohesionVerdict:
    if cohesion >= thresholds.cohesive_min:
        return CohesionVerdict.COHESIVE
    if cohesion >= thresholds.moderate_min:
        return CohesionVerdict.MODERATE
    return CohesionVerdict.JUNK_DRAWER


def compute_module_pulls(
    graph: BuiltGraph,
    file_node: GraphNode,
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> Dict[str, ModulePull]:
    """Accumulate pull strength per foreign module for one file."""
    pulls: Dict[str, ModulePull] = {}

    for target in graph.out_neighbors(file_node.id):
        target_module = graph.module_of(target)
        if target_module == file_node.module:
            continue
        edge = graph.edge(file_node.id, target)
        pull = pulls.setdefault(target_module, ModulePull(module=target_module, strength=0.0))
        pull.strength += edge.weight or 1
        for sym in edge.symbols:
            if sym not in pull.symbols:
                pull.symbols.append(sym)

    for source in graph.in_neighbors(file_node.id):
        source_module = graph.module_of(source)
        if source_module == file_node.module:
            continue
        pull = pulls.setdefault(source_module, ModulePull(module=source_module, strength=0.0))
        pull.strength += thresholds.inbound_pull_strength

    return pulls


def compute_tension(pulls: Mapping[str, ModulePull]) -> float:
    """Normalized entropy of pull strengths, 0 with fewer than two modules."""
    if len(pulls) < 2:
        return 0.0
    distribution = {mod: p.strength for mod, p in pulls.items()}
    return round(Entropy.normalized(distribution), 2)


def find_tension_files(
    graph: BuiltGraph, thresholds: ThresholdConfig = DEFAULT_THRESHOLDS
) -> List[TensionFile]:
    """Files whose tension exceeds the threshold, tension descending."""
    tension_files: List[TensionFile] = []

    for node in graph.file_nodes:
        pulls = compute_module_pulls(graph, node, thresholds)
        if len(pulls) < 2:
            continue

        tension = compute_tension(pulls)
        if tension <= thresholds.tension_min:
            continue

        ranked = sorted(pulls.values(), key=lambda p: p.strength, reverse=True)
        for pull in ranked:
            pull.strength = round(pull.strength, 2)

        file_name = posixpath.basename(node.id)
        top_modules = [_module_basename(p.module) for p in ranked[:2]]
        tension_files.append(
            TensionFile(
                file=node.id,
                tension=tension,
                pulled_by=ranked,
                recommendation="Split into "
                + " and ".join(f"{mod}-{file_name}" for mod in top_modules),
            )
        )

    tension_files.sort(key=lambda t: t.tension, reverse=True)
    return tension_files


def find_bridge_files(
    graph: BuiltGraph,
    betweenness: Mapping[str, float],
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> List[BridgeFile]:
    """Files with notable betweenness touching several foreign modules."""
    bridges: List[BridgeFile] = []

    for node in graph.file_nodes:
        btwn = betweenness.get(node.id, 0.0)
        if btwn < thresholds.bridge_min_betweenness:
            continue

        connected: Dict[str, None] = {}
        for neighbor in graph.neighbors(node.id):
            mod = graph.module_of(neighbor)
            if mod != node.module:
                connected.setdefault(mod, None)

        if len(connected) >= thresholds.bridge_min_modules:
            bridges.append(
                BridgeFile(
                    file=node.id,
                    betweenness=round(btwn, 2),
                    connects=list(connected),
                    role=f"Bridge between {len(connected)} otherwise-disconnected modules",
                )
            )

    bridges.sort(key=lambda b: b.betweenness, reverse=True)
    return bridges


def find_extraction_candidates(
    module_metrics: Mapping[str, ModuleMetrics],
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> List[ExtractionCandidate]:
    candidates: List[ExtractionCandidate] = []

    for mod in module_metrics.values():
        if mod.escape_velocity < thresholds.extraction_min_escape_velocity:
            continue
        if mod.files < 1:
            continue

        if mod.external_deps == 0:
            detail = "0 deps on host codebase"
        else:
            detail = f"{mod.external_deps} deps to resolve"

        candidates.append(
            ExtractionCandidate(
                target=mod.path,
                escape_velocity=mod.escape_velocity,
                internal_deps=mod.internal_deps,
                external_deps=mod.external_deps,
                depended_by_modules=len(mod.depended_by),
                recommendation=f"Extract to standalone package — {detail}",
            )
        )

    candidates.sort(key=lambda c: c.escape_velocity, reverse=True)
    return candidates


def build_summary(
    module_cohesion: List[ModuleCohesion],
    tension_files: List[TensionFile],
    extraction_candidates: List[ExtractionCandidate],
) -> str:
    junk_drawers = [m for m in module_cohesion if m.verdict is CohesionVerdict.JUNK_DRAWER]

    parts: List[str] = []
    if junk_drawers:
        names = ", ".join(m.module.path for m in junk_drawers)
        parts.append(f"{len(junk_drawers)} junk-drawer module(s) ({names})")
    if tension_files:
        parts.append(f"{len(tension_files)} tension file(s) need splitting")
    if extraction_candidates:
        targets = ", ".join(c.target for c in extraction_candidates)
        parts.append(f"{targets} ready for extraction")
    if not parts:
        return HEALTHY_SUMMARY

    return ". ".join(parts) + "."


def compute_force_analysis(
    graph: BuiltGraph,
    module_metrics: Mapping[str, ModuleMetrics],
    betweenness: Mapping[str, float],
    thresholds: ThresholdConfig = DEFAULT_THRESHOLDS,
) -> ForceAnalysis:
    module_cohesion = [
        ModuleCohesion(module=m, verdict=cohesion_verdict(m.cohesion, thresholds))
        for m in module_metrics.values()
    ]
    tension_files = find_tension_files(graph, thresholds)
    bridge_files = find_bridge_files(graph, betweenness, thresholds)
    extraction_candidates = find_extraction_candidates(module_metrics, thresholds)

    return ForceAnalysis(
        module_cohesion=module_cohesion,
        tension_files=tension_files,
        bridge_files=bridge_files,
        extraction_candidates=extraction_candidates,
        summary=build_summary(module_cohesion, tension_files, extraction_candidates),
    )


def _module_basename(module: str) -> str:
    stripped = module.rstrip("/")
    return posixpath.basename(stripped) or stripped
