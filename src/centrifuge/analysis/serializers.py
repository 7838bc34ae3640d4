"""JSON serialization of analysis results.

Consumers (visualization front ends, tool-calling layers) expect the
camelCase contract below. All key renaming happens HERE, not in the
domain models.
"""

from __future__ import annotations

import json
from typing import Any

from ..graph.models import GraphEdge, GraphNode
from .hotspots import Hotspot
from .models import (
    BridgeFile,
    CodebaseGraph,
    ExtractionCandidate,
    FileMetrics,
    ForceAnalysis,
    GroupMetrics,
    ModuleCohesion,
    ModuleMetrics,
    TensionFile,
)
from .queries import DependentsReport, FileContext, FileLink, ModuleStructure


def node_to_dict(node: GraphNode) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": node.id,
        "type": node.type.value,
        "path": node.path,
        "label": node.label,
        "loc": node.loc,
        "module": node.module,
    }
    if node.parent_file is not None:
        data["parentFile"] = node.parent_file
    return data


def edge_to_dict(edge: GraphEdge) -> dict[str, Any]:
    return {
        "source": edge.source,
        "target": edge.target,
        "symbols": list(edge.symbols),
        "isTypeOnly": edge.is_type_only,
        "weight": edge.weight,
    }


def file_metrics_to_dict(m: FileMetrics) -> dict[str, Any]:
    return {
        "pageRank": m.page_rank,
        "betweenness": m.betweenness,
        "fanIn": m.fan_in,
        "fanOut": m.fan_out,
        "coupling": m.coupling,
        "tension": m.tension,
        "isBridge": m.is_bridge,
        "churn": m.churn,
        "cyclomaticComplexity": m.cyclomatic_complexity,
        "blastRadius": m.blast_radius,
        "deadExports": list(m.dead_exports),
        "hasTests": m.has_tests,
        "testFile": m.test_file,
    }


def module_metrics_to_dict(m: ModuleMetrics) -> dict[str, Any]:
    return {
        "path": m.path,
        "files": m.files,
        "loc": m.loc,
        "exports": m.exports,
        "internalDeps": m.internal_deps,
        "externalDeps": m.external_deps,
        "cohesion": m.cohesion,
        "escapeVelocity": m.escape_velocity,
        "dependsOn": list(m.depends_on),
        "dependedBy": list(m.depended_by),
    }


def _cohesion_to_dict(c: ModuleCohesion) -> dict[str, Any]:
    data = module_metrics_to_dict(c.module)
    data["verdict"] = c.verdict.value
    return data


def _tension_to_dict(t: TensionFile) -> dict[str, Any]:
    return {
        "file": t.file,
        "tension": t.tension,
        "pulledBy": [
            {"module": p.module, "strength": p.strength, "symbols": list(p.symbols)}
            for p in t.pulled_by
        ],
        "recommendation": t.recommendation,
    }


def _bridge_to_dict(b: BridgeFile) -> dict[str, Any]:
    return {
        "file": b.file,
        "betweenness": b.betweenness,
        "connects": list(b.connects),
        "role": b.role,
    }


def _extraction_to_dict(e: ExtractionCandidate) -> dict[str, Any]:
    return {
        "target": e.target,
        "escapeVelocity": e.escape_velocity,
        "internalDeps": e.internal_deps,
        "externalDeps": e.external_deps,
        "dependedByModules": e.depended_by_modules,
        "recommendation": e.recommendation,
    }


def force_analysis_to_dict(fa: ForceAnalysis) -> dict[str, Any]:
    return {
        "moduleCohesion": [_cohesion_to_dict(c) for c in fa.module_cohesion],
        "tensionFiles": [_tension_to_dict(t) for t in fa.tension_files],
        "bridgeFiles": [_bridge_to_dict(b) for b in fa.bridge_files],
        "extractionCandidates": [_extraction_to_dict(e) for e in fa.extraction_candidates],
        "summary": fa.summary,
    }


def group_to_dict(g: GroupMetrics) -> dict[str, Any]:
    return {
        "name": g.name,
        "files": g.files,
        "loc": g.loc,
        "importance": g.importance,
        "fanIn": g.fan_in,
        "fanOut": g.fan_out,
        "color": g.color,
    }


def hotspot_to_dict(h: Hotspot) -> dict[str, Any]:
    return {"path": h.path, "score": h.score}


def _link_to_dict(link: FileLink, key: str = "path") -> dict[str, Any]:
    return {key: link.path, "symbols": list(link.symbols)}


def file_context_to_dict(ctx: FileContext) -> dict[str, Any]:
    return {
        "path": ctx.path,
        "loc": ctx.loc,
        "module": ctx.module,
        "functions": [{"name": f.name, "loc": f.loc} for f in ctx.functions],
        "imports": [_link_to_dict(link, key="from") for link in ctx.imports],
        "dependents": [_link_to_dict(link) for link in ctx.dependents],
        "metrics": file_metrics_to_dict(ctx.metrics),
    }


def dependents_to_dict(report: DependentsReport) -> dict[str, Any]:
    return {
        "file": report.file,
        "directDependents": [_link_to_dict(link) for link in report.direct_dependents],
        "transitiveDependents": [
            {"path": t.path, "throughPath": list(t.through_path), "depth": t.depth}
            for t in report.transitive_dependents
        ],
        "totalAffected": report.total_affected,
        "riskLevel": report.risk_level.value,
    }


def module_structure_to_dict(structure: ModuleStructure) -> dict[str, Any]:
    return {
        "modules": [module_metrics_to_dict(m) for m in structure.modules],
        "crossModuleDeps": [
            {"from": d.source, "to": d.target, "weight": d.weight}
            for d in structure.cross_module_deps
        ],
        "circularDeps": [
            {"cycle": list(c.cycle), "severity": c.severity.value} for c in structure.circular_deps
        ],
    }


def to_dict(result: CodebaseGraph) -> dict[str, Any]:
    """Serialize a full analysis result to JSON-compatible primitives."""
    return {
        "nodes": [node_to_dict(n) for n in result.nodes],
        "edges": [edge_to_dict(e) for e in result.edges],
        "fileMetrics": {path: file_metrics_to_dict(m) for path, m in result.file_metrics.items()},
        "moduleMetrics": {
            path: module_metrics_to_dict(m) for path, m in result.module_metrics.items()
        },
        "groups": [group_to_dict(g) for g in result.groups],
        "forceAnalysis": force_analysis_to_dict(result.force_analysis),
        "stats": {
            "totalFiles": result.stats.total_files,
            "totalFunctions": result.stats.total_functions,
            "totalDependencies": result.stats.total_dependencies,
            "circularDeps": [list(c) for c in result.stats.circular_deps],
        },
    }


def to_json(result: CodebaseGraph, indent: int | None = 2) -> str:
    return json.dumps(to_dict(result), indent=indent, ensure_ascii=False)
