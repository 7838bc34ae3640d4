"""Dependency graph construction from parsed import declarations."""

import posixpath
from typing import List

from ..logging_config import get_logger
from ..parsing.models import ParsedFile, ParsedImport
from .models import BuiltGraph, GraphEdge, GraphNode, NodeType

logger = get_logger(__name__)

MODULE_SEPARATOR = "/"
ROOT_MODULE = "."

TEST_EDGE_SYMBOL = "tests"


def module_key(relative_path: str) -> str:
    """Directory grouping key: ``dirname + "/"``, or "." for root-level files.

    >>> module_key("src/graph/builder.ts")
    'src/graph/'
    >>> module_key("index.ts")
    '.'
    """
    directory = posixpath.dirname(relative_path)
    if not directory:
        return ROOT_MODULE
    return directory + MODULE_SEPARATOR


def build_graph(files: List[ParsedFile]) -> BuiltGraph:
    """Build the dependency graph for a set of parsed files.

    Imports that do not resolve to a known file are external and skipped.
    Repeated imports between the same pair of files merge into one edge.
    """
    graph = BuiltGraph()
    known_paths = {f.relative_path for f in files}

    for f in files:
        _add_file_nodes(graph, f)

    skipped = 0
    for f in files:
        for imp in f.imports:
            target = imp.resolved_from
            if not target or target not in known_paths:
                skipped += 1
                continue
            if target == f.relative_path:
                continue
            _add_import_edge(graph, f.relative_path, target, imp)

    # Test association edges: test -> implementation
    for f in files:
        test_path = f.test_file
        if not test_path or test_path not in known_paths or test_path == f.relative_path:
            continue
        if graph.has_edge(test_path, f.relative_path):
            continue
        _link(
            graph,
            GraphEdge(
                source=test_path,
                target=f.relative_path,
                symbols=[TEST_EDGE_SYMBOL],
                is_type_only=False,
                weight=1,
            ),
        )

    logger.debug(
        "Built graph: %d files, %d functions, %d edges (%d external imports skipped)",
        len(graph.adjacency),
        len(graph.nodes) - len(graph.adjacency),
        len(graph.edges),
        skipped,
    )
    return graph


def _add_file_nodes(graph: BuiltGraph, f: ParsedFile) -> None:
    module = module_key(f.relative_path)
    file_node = GraphNode(
        id=f.relative_path,
        type=NodeType.FILE,
        path=f.relative_path,
        label=posixpath.basename(f.relative_path),
        loc=f.loc,
        module=module,
    )
    _register(graph, file_node)
    graph.adjacency[file_node.id] = []
    graph.reverse[file_node.id] = []

    for exp in f.exports:
        if not exp.creates_node:
            continue
        _register(
            graph,
            GraphNode(
                id=f"{f.relative_path}::{exp.name}",
                type=NodeType.FUNCTION,
                path=f.relative_path,
                label=exp.name,
                loc=exp.loc,
                module=module,
                parent_file=f.relative_path,
            ),
        )


def _register(graph: BuiltGraph, node: GraphNode) -> None:
    # A file can export the same name twice (overloads, re-exports); keep the first
    if node.id in graph.node_index:
        return
    graph.node_index[node.id] = node
    graph.nodes.append(node)


def _add_import_edge(graph: BuiltGraph, source: str, target: str, imp: ParsedImport) -> None:
    if graph.has_edge(source, target):
        edge = graph.edge(source, target)
        for sym in imp.symbols:
            if sym not in edge.symbols:
                edge.symbols.append(sym)
        edge.weight = len(edge.symbols) or 1
        edge.is_type_only = edge.is_type_only and imp.is_type_only
        return

    symbols = list(dict.fromkeys(imp.symbols))
    _link(
        graph,
        GraphEdge(
            source=source,
            target=target,
            symbols=symbols,
            is_type_only=imp.is_type_only,
            weight=len(symbols) or 1,
        ),
    )


def _link(graph: BuiltGraph, edge: GraphEdge) -> None:
    graph.edge_index[(edge.source, edge.target)] = edge
    graph.edges.append(edge)
    graph.adjacency[edge.source].append(edge.target)
    graph.reverse[edge.target].append(edge.source)
