"""Tests for force analysis: verdicts, tension, bridges, extraction."""

import pytest

from centrifuge.analysis.forces import (
    HEALTHY_SUMMARY,
    build_summary,
    cohesion_verdict,
    compute_force_analysis,
    compute_module_pulls,
    compute_tension,
    find_bridge_files,
    find_extraction_candidates,
    find_tension_files,
)
from centrifuge.analysis.models import (
    CohesionVerdict,
    ExtractionCandidate,
    ModuleCohesion,
    ModuleMetrics,
    ModulePull,
    TensionFile,
)
from centrifuge.analysis.modules import compute_module_metrics
from centrifuge.config import ThresholdConfig
from centrifuge.graph import build_graph
from centrifuge.parsing.models import ParsedFile, ParsedImport


def _imp(target, n_symbols=0):
    return ParsedImport("./x", target, [f"s{i}" for i in range(n_symbols)])


def _weighted_consumer(heavy, light):
    """m/x.ts imports heavy symbols from p/ and light symbols from q/."""
    return build_graph(
        [
            ParsedFile("m/x.ts", imports=[_imp("p/a.ts", heavy), _imp("q/b.ts", light)]),
            ParsedFile("p/a.ts"),
            ParsedFile("q/b.ts"),
        ]
    )


class TestCohesionVerdict:
    """Tests for cohesion verdict thresholds."""

    @pytest.mark.parametrize(
        "cohesion,expected",
        [
            (1.0, CohesionVerdict.COHESIVE),
            (0.6, CohesionVerdict.COHESIVE),
            (0.59, CohesionVerdict.MODERATE),
            (0.4, CohesionVerdict.MODERATE),
            (0.39, CohesionVerdict.JUNK_DRAWER),
            (0.0, CohesionVerdict.JUNK_DRAWER),
        ],
    )
    def test_boundaries(self, cohesion, expected):
        """Verdicts switch at the inclusive lower bounds."""
        assert cohesion_verdict(cohesion) is expected

    def test_custom_thresholds(self):
        """Verdicts follow configured thresholds."""
        thresholds = ThresholdConfig(cohesive_min=0.9, moderate_min=0.5)
        assert cohesion_verdict(0.8, thresholds) is CohesionVerdict.MODERATE


class TestModulePulls:
    """Tests for foreign-module pull on a file."""

    def test_outbound_weight_and_inbound_half(self, shared_util_files):
        """Inbound edges pull at half strength."""
        graph = build_graph(shared_util_files)
        pulls = compute_module_pulls(graph, graph.node_index["utils.ts"])
        assert set(pulls) == {"src/a/", "src/b/"}
        assert pulls["src/a/"].strength == 0.5
        assert pulls["src/a/"].symbols == []

    def test_outbound_symbols_collected(self):
        """Outbound pulls carry the symbols imported."""
        graph = _weighted_consumer(3, 1)
        pulls = compute_module_pulls(graph, graph.node_index["m/x.ts"])
        assert pulls["p/"].strength == 3
        assert pulls["p/"].symbols == ["s0", "s1", "s2"]
        assert pulls["q/"].strength == 1

    def test_same_module_ignored(self):
        """Edges inside the file's own module do not pull."""
        graph = build_graph([ParsedFile("m/a.ts", imports=[_imp("m/b.ts", 2)]), ParsedFile("m/b.ts")])
        assert compute_module_pulls(graph, graph.node_index["m/a.ts"]) == {}


class TestTension:
    """Tests for tension scoring and reporting."""

    def test_single_module_zero(self):
        """One pulling module means no tension."""
        assert compute_tension({"a/": ModulePull("a/", 3.0)}) == 0.0

    def test_even_split(self):
        """An even split between two modules is maximal tension."""
        pulls = {"a/": ModulePull("a/", 2.0), "b/": ModulePull("b/", 2.0)}
        assert compute_tension(pulls) == 1.0

    def test_shared_util_reported(self, shared_util_files):
        """A util used evenly by two modules is reported."""
        tension_files = find_tension_files(build_graph(shared_util_files))
        assert len(tension_files) == 1
        tf = tension_files[0]
        assert tf.file == "utils.ts"
        assert tf.tension == 1.0
        assert tf.recommendation == "Split into a-utils.ts and b-utils.ts"
        assert [p.module for p in tf.pulled_by] == ["src/a/", "src/b/"]

    def test_skewed_pull_reported(self):
        """A 10:1 split still clears the default threshold."""
        tension_files = find_tension_files(_weighted_consumer(10, 1))
        assert len(tension_files) == 1
        tf = tension_files[0]
        assert tf.tension == 0.44
        assert [p.module for p in tf.pulled_by] == ["p/", "q/"]
        assert tf.pulled_by[0].strength == 10
        assert tf.recommendation == "Split into p-x.ts and q-x.ts"

    def test_dominant_pull_not_reported(self):
        """A 30:1 split falls below the threshold."""
        assert find_tension_files(_weighted_consumer(30, 1)) == []

    def test_threshold_configurable(self):
        """A lower threshold reports weaker tension."""
        thresholds = ThresholdConfig(tension_min=0.1)
        assert len(find_tension_files(_weighted_consumer(30, 1), thresholds)) == 1

    def test_sorted_descending(self):
        """Tension files are ordered highest first."""
        files = [
            ParsedFile("m/x.ts", imports=[_imp("p/a.ts", 10), _imp("q/b.ts", 1)]),
            ParsedFile("m/y.ts", imports=[_imp("p/a.ts", 1), _imp("q/b.ts", 1)]),
            ParsedFile("p/a.ts"),
            ParsedFile("q/b.ts"),
        ]
        tension_files = find_tension_files(build_graph(files))
        assert [t.file for t in tension_files][:2] == ["m/y.ts", "m/x.ts"]
        tensions = [t.tension for t in tension_files]
        assert tensions == sorted(tensions, reverse=True)


class TestBridges:
    """Tests for bridge file detection."""

    def _bridge_graph(self):
        return build_graph(
            [
                ParsedFile("a/x.ts", imports=[_imp("hub.ts")]),
                ParsedFile("hub.ts", imports=[_imp("b/y.ts")]),
                ParsedFile("b/y.ts"),
            ]
        )

    def test_hub_is_bridge(self):
        """A central file linking several modules is a bridge."""
        bridges = find_bridge_files(self._bridge_graph(), {"hub.ts": 0.5})
        assert len(bridges) == 1
        assert bridges[0].file == "hub.ts"
        assert bridges[0].betweenness == 0.5
        assert bridges[0].connects == ["b/", "a/"]
        assert bridges[0].role == "Bridge between 2 otherwise-disconnected modules"

    def test_low_betweenness_ignored(self):
        """Low betweenness is not a bridge."""
        assert find_bridge_files(self._bridge_graph(), {"hub.ts": 0.04}) == []

    def test_single_foreign_module_ignored(self):
        """Linking only one other module is not a bridge."""
        graph = build_graph(
            [
                ParsedFile("a/x.ts", imports=[_imp("hub.ts")]),
                ParsedFile("hub.ts", imports=[_imp("a/y.ts")]),
                ParsedFile("a/y.ts"),
            ]
        )
        assert find_bridge_files(graph, {"hub.ts": 0.5}) == []


class TestExtraction:
    """Tests for extraction candidates."""

    def test_candidate(self):
        """A module above the threshold is a candidate with a recommendation."""
        modules = {
            "lib/": ModuleMetrics(
                path="lib/", files=2, internal_deps=1, escape_velocity=1.0, depended_by=["app/", "cli/"]
            ),
            "app/": ModuleMetrics(path="app/", files=1, external_deps=1),
        }
        candidates = find_extraction_candidates(modules)
        assert len(candidates) == 1
        c = candidates[0]
        assert c.target == "lib/"
        assert c.depended_by_modules == 2
        assert c.internal_deps == 1
        assert c.recommendation == "Extract to standalone package — 0 deps on host codebase"

    def test_below_threshold(self):
        """Low escape velocity is not a candidate."""
        modules = {"lib/": ModuleMetrics(path="lib/", files=1, escape_velocity=0.25)}
        assert find_extraction_candidates(modules) == []

    def test_sorted_by_escape_velocity(self):
        """Candidates are ordered by escape velocity."""
        modules = {
            "x/": ModuleMetrics(path="x/", files=1, escape_velocity=0.5),
            "y/": ModuleMetrics(path="y/", files=1, escape_velocity=1.0),
        }
        assert [c.target for c in find_extraction_candidates(modules)] == ["y/", "x/"]


class TestSummary:
    """Tests for the one-line summary."""

    def test_healthy(self):
        """No findings gives the healthy summary."""
        assert build_summary([], [], []) == HEALTHY_SUMMARY

    def test_all_clauses(self):
        """Each finding kind adds its own clause."""
        junk = ModuleCohesion(ModuleMetrics(path="misc/", cohesion=0.1), CohesionVerdict.JUNK_DRAWER)
        ok = ModuleCohesion(ModuleMetrics(path="core/"), CohesionVerdict.COHESIVE)
        tension = [TensionFile(file="u.ts", tension=0.9)]
        extraction = [
            ExtractionCandidate("lib/", 1.0, 0, 0, 2),
            ExtractionCandidate("fmt/", 0.5, 0, 0, 1),
        ]
        summary = build_summary([junk, ok], tension, extraction)
        assert summary == (
            "1 junk-drawer module(s) (misc/). "
            "1 tension file(s) need splitting. "
            "lib/, fmt/ ready for extraction."
        )


class TestComputeForceAnalysis:
    """Tests for the combined force analysis."""

    def test_verdict_per_module(self, shared_util_files):
        """Every module receives a verdict."""
        graph = build_graph(shared_util_files)
        modules = compute_module_metrics(graph, {f.relative_path: f for f in shared_util_files})
        fa = compute_force_analysis(graph, modules, {})
        verdicts = {c.module.path: c.verdict for c in fa.module_cohesion}
        assert verdicts == {
            "src/a/": CohesionVerdict.JUNK_DRAWER,
            "src/b/": CohesionVerdict.JUNK_DRAWER,
            ".": CohesionVerdict.COHESIVE,
        }
        assert len(fa.tension_files) == 1
        assert fa.bridge_files == []
        assert fa.summary.startswith("2 junk-drawer module(s) (src/a/, src/b/).")
