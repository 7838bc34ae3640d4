"""Tests for cloud group aggregation."""

import pytest

from centrifuge.analysis.groups import GROUP_COLORS, ROOT_GROUP, cloud_group, compute_groups
from centrifuge.analysis.models import FileMetrics
from centrifuge.graph import build_graph
from centrifuge.parsing.models import ParsedFile


class TestCloudGroup:
    """Tests for mapping modules to cloud group names."""

    @pytest.mark.parametrize(
        "module,expected",
        [
            ("src/graph/", "graph"),
            ("src/graph/deep/", "graph"),
            ("packages/ui/src/", "ui"),
            ("lib/", "lib"),
            ("tests/unit/", "tests"),
            ("docs/", "docs"),
            (".", ROOT_GROUP),
            ("", ROOT_GROUP),
        ],
    )
    def test_group_names(self, module, expected):
        """Group names come from the meaningful path segment."""
        assert cloud_group(module) == expected


class TestComputeGroups:
    """Tests for group aggregation."""

    def test_aggregates_and_orders(self):
        """Files, loc and degrees are summed per group."""
        files = [
            ParsedFile("src/core/a.ts", loc=10),
            ParsedFile("src/core/b.ts", loc=5),
            ParsedFile("src/ui/c.ts", loc=7),
        ]
        graph = build_graph(files)
        metrics = {
            "src/core/a.ts": FileMetrics(page_rank=0.1, fan_in=1, fan_out=0),
            "src/core/b.ts": FileMetrics(page_rank=0.2, fan_in=0, fan_out=1),
            "src/ui/c.ts": FileMetrics(page_rank=0.7, fan_in=2, fan_out=3),
        }
        groups = compute_groups(graph.file_nodes, metrics)
        assert [g.name for g in groups] == ["ui", "core"]
        core = groups[1]
        assert core.files == 2
        assert core.loc == 15
        assert core.importance == pytest.approx(0.3)
        assert core.fan_in == 1
        assert core.fan_out == 1
        assert [g.color for g in groups] == GROUP_COLORS[:2]

    def test_importance_rounded(self):
        """Importance is rounded to four places."""
        graph = build_graph([ParsedFile("x.ts")])
        groups = compute_groups(graph.file_nodes, {"x.ts": FileMetrics(page_rank=0.123456)})
        assert groups[0].name == "root"
        assert groups[0].importance == 0.1235

    def test_capped(self):
        """At most max_groups groups are returned."""
        files = [ParsedFile(f"m{i}/f.ts") for i in range(12)]
        graph = build_graph(files)
        metrics = {f.relative_path: FileMetrics(page_rank=(i + 1) / 100) for i, f in enumerate(files)}
        groups = compute_groups(graph.file_nodes, metrics)
        assert len(groups) == 8
        assert groups[0].name == "m11"
        assert compute_groups(graph.file_nodes, metrics, max_groups=3)[-1].name == "m9"

    def test_empty(self):
        """No files give no groups."""
        assert compute_groups([], {}) == []
