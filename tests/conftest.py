"""Shared test fixtures for Centrifuge tests."""

import json

import pytest

from centrifuge.parsing.models import ExportKind, ParsedExport, ParsedFile, ParsedImport


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def _imports(*targets):
    return [ParsedImport(source=f"./{t}", resolved_from=t, symbols=[]) for t in targets]


@pytest.fixture
def chain_files():
    """a.ts -> b.ts -> c.ts."""
    return [
        ParsedFile("a.ts", loc=10, imports=_imports("b.ts")),
        ParsedFile("b.ts", loc=10, imports=_imports("c.ts")),
        ParsedFile("c.ts", loc=10),
    ]


@pytest.fixture
def diamond_files():
    """a.ts -> c.ts, b.ts -> c.ts, c.ts -> d.ts."""
    return [
        ParsedFile("a.ts", imports=_imports("c.ts")),
        ParsedFile("b.ts", imports=_imports("c.ts")),
        ParsedFile("c.ts", imports=_imports("d.ts")),
        ParsedFile("d.ts"),
    ]


@pytest.fixture
def shared_util_files():
    """Root-level utils.ts imported from two different modules."""
    return [
        ParsedFile(
            "src/a/x.ts",
            imports=[ParsedImport("../../utils", "utils.ts", ["format"])],
        ),
        ParsedFile(
            "src/b/y.ts",
            imports=[ParsedImport("../../utils", "utils.ts", ["format"])],
        ),
        ParsedFile(
            "utils.ts",
            exports=[ParsedExport("format", ExportKind.FUNCTION, loc=5, complexity=2)],
        ),
    ]


@pytest.fixture
def parsed_json(tmp_path):
    """Write parser-style camelCase records to a temp file and return its path."""
    records = [
        {
            "path": "/repo/src/app/main.ts",
            "relativePath": "src/app/main.ts",
            "loc": 40,
            "exports": [
                {"name": "main", "type": "function", "loc": 30, "isDefault": False, "complexity": 3}
            ],
            "imports": [
                {
                    "from": "../lib/math",
                    "resolvedFrom": "src/lib/math.ts",
                    "symbols": ["add", "mul"],
                    "isTypeOnly": False,
                },
                {"from": "react", "resolvedFrom": "", "symbols": ["useState"], "isTypeOnly": False},
            ],
            "churn": 7,
            "isTestFile": False,
        },
        {
            "relativePath": "src/lib/math.ts",
            "loc": 20,
            "exports": [
                {"name": "add", "type": "function", "loc": 3, "isDefault": False, "complexity": 1},
                {"name": "mul", "type": "function", "loc": 3, "isDefault": False, "complexity": 1},
                {"name": "PI", "type": "variable", "loc": 1, "isDefault": False, "complexity": 1},
            ],
            "imports": [],
            "isTestFile": False,
            "testFile": "src/lib/math.test.ts",
        },
        {
            "relativePath": "src/lib/math.test.ts",
            "loc": 15,
            "exports": [],
            "imports": [],
            "isTestFile": True,
        },
    ]
    path = tmp_path / "parsed.json"
    path.write_text(json.dumps(records), encoding="utf-8")
    return path
