"""End-to-end tests for the analysis pipeline."""

import pytest

from centrifuge import analyze_codebase, analyze_graph, build_graph, load_parsed_files
from centrifuge.analysis.engine import AnalysisEngine
from centrifuge.analysis.forces import HEALTHY_SUMMARY
from centrifuge.analysis.models import CohesionVerdict
from centrifuge.config import AnalysisConfig
from centrifuge.parsing.models import ParsedFile, ParsedImport


def _imp(target, *symbols):
    return ParsedImport("./x", target, list(symbols))


class TestEmptyAndTrivial:
    """Tests for degenerate inputs."""

    def test_empty_input(self):
        """An empty input gives an empty, healthy result."""
        result = analyze_codebase([])
        assert result.nodes == []
        assert result.edges == []
        assert result.file_metrics == {}
        assert result.module_metrics == {}
        assert result.groups == []
        assert result.stats.total_files == 0
        assert result.stats.circular_deps == []
        assert result.force_analysis.summary == HEALTHY_SUMMARY

    def test_single_file(self):
        """A single file takes all the rank and reports a healthy summary."""
        result = analyze_codebase([ParsedFile("index.ts", loc=5)])
        m = result.file_metrics["index.ts"]
        assert m.page_rank == pytest.approx(1.0)
        assert m.betweenness == 0.0
        assert m.coupling == 0.0
        assert m.blast_radius == 0
        module = result.module_metrics["."]
        assert module.cohesion == 1.0
        assert module.escape_velocity == 0.0
        assert [g.name for g in result.groups] == ["root"]
        assert result.force_analysis.summary == HEALTHY_SUMMARY


class TestParsedSnapshot:
    """Tests against the parser-style fixture."""

    @pytest.fixture
    def result(self, parsed_json):
        return analyze_codebase(load_parsed_files(parsed_json))

    def test_stats(self, result):
        """Stats count files, functions and dependencies."""
        assert result.stats.total_files == 3
        assert result.stats.total_functions == 3
        assert result.stats.total_dependencies == 2
        assert result.stats.circular_deps == []

    def test_file_metrics(self, result):
        """Per-file metrics match the fixture's imports."""
        math = result.file_metrics["src/lib/math.ts"]
        assert math.fan_in == 2
        assert math.fan_out == 0
        assert math.coupling == 0.0
        assert math.blast_radius == 2
        assert math.dead_exports == ["PI"]
        assert math.has_tests is True
        assert math.test_file == "src/lib/math.test.ts"

        main = result.file_metrics["src/app/main.ts"]
        assert main.churn == 7
        assert main.cyclomatic_complexity == 3.0
        assert main.coupling == 1.0
        assert main.dead_exports == ["main"]
        assert main.page_rank < math.page_rank

    def test_modules_and_forces(self, result):
        """The library module is cohesive and extractable."""
        lib = result.module_metrics["src/lib/"]
        assert lib.internal_deps == 1
        assert lib.external_deps == 0
        assert lib.escape_velocity == 1.0
        assert lib.depended_by == ["src/app/"]

        verdicts = {c.module.path: c.verdict for c in result.force_analysis.module_cohesion}
        assert verdicts["src/app/"] is CohesionVerdict.JUNK_DRAWER
        assert verdicts["src/lib/"] is CohesionVerdict.COHESIVE

        fa = result.force_analysis
        assert [c.target for c in fa.extraction_candidates] == ["src/lib/"]
        assert fa.tension_files == []
        assert fa.summary == "1 junk-drawer module(s) (src/app/). src/lib/ ready for extraction."

    def test_groups(self, result):
        """Groups are named after their modules."""
        assert [g.name for g in result.groups] == ["lib", "app"]
        assert result.groups[0].files == 2
        assert result.groups[0].color == "#2563eb"


class TestScenarios:
    """Tests for whole-pipeline behaviours."""

    def test_cycle_reported(self):
        """Mutual imports show up in stats."""
        files = [
            ParsedFile("a.ts", imports=[_imp("b.ts", "f")]),
            ParsedFile("b.ts", imports=[_imp("a.ts", "g")]),
        ]
        result = analyze_codebase(files)
        assert result.stats.circular_deps == [["a.ts", "b.ts", "a.ts"]]
        assert result.file_metrics["a.ts"].blast_radius == 1

    def test_tension_backfilled(self, shared_util_files):
        """Tension from force analysis is copied into file metrics."""
        result = analyze_codebase(shared_util_files)
        assert result.file_metrics["utils.ts"].tension == 1.0
        assert result.file_metrics["src/a/x.ts"].tension == 0.0

    def test_bridge_detected(self):
        """A hub between modules is flagged as a bridge."""
        files = [
            ParsedFile("a/x.ts", imports=[_imp("hub.ts", "h")]),
            ParsedFile("hub.ts", imports=[_imp("b/y.ts", "y")]),
            ParsedFile("b/y.ts"),
        ]
        result = analyze_codebase(files)
        assert result.file_metrics["hub.ts"].is_bridge is True
        assert [b.file for b in result.force_analysis.bridge_files] == ["hub.ts"]

    def test_max_cycles_from_config(self):
        """max_cycles caps reported cycles."""
        files = []
        for i in range(4):
            files.append(ParsedFile(f"x{i}.ts", imports=[_imp(f"y{i}.ts")]))
            files.append(ParsedFile(f"y{i}.ts", imports=[_imp(f"x{i}.ts")]))
        result = analyze_codebase(files, AnalysisConfig(max_cycles=2))
        assert len(result.stats.circular_deps) == 2

    def test_engine_matches_function(self, chain_files):
        """AnalysisEngine and analyze_codebase agree."""
        via_engine = AnalysisEngine(chain_files).run()
        via_function = analyze_codebase(chain_files)
        assert via_engine.file_metrics == via_function.file_metrics

    def test_analyze_graph_without_files(self, chain_files):
        """A prebuilt graph can be analyzed without parsed records."""
        result = analyze_graph(build_graph(chain_files))
        assert result.file_metrics["b.ts"].cyclomatic_complexity == 1.0
        assert result.file_metrics["b.ts"].dead_exports == []
        assert result.stats.total_files == 3
