"""Query commands: file context, dependents, and module structure."""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..analysis.engine import analyze_codebase
from ..analysis.models import CodebaseGraph
from ..analysis.queries import (
    DEFAULT_DEPENDENT_DEPTH,
    RiskLevel,
    file_context,
    get_dependents,
    module_structure,
)
from ..analysis.serializers import (
    dependents_to_dict,
    file_context_to_dict,
    module_structure_to_dict,
)
from ..exceptions import CentrifugeError
from ..logging_config import resolve_verbosity, setup_logging
from ..parsing import load_parsed_files
from . import app
from ._common import CONFIG_OPTION, INPUT_ARGUMENT, console, resolve_config

_RISK_STYLE = {RiskLevel.LOW: "green", RiskLevel.MEDIUM: "yellow", RiskLevel.HIGH: "red"}

FILE_ARGUMENT = typer.Argument(..., help="Relative path of a file in the parsed input")

JSON_OPTION = typer.Option(False, "--json", help="Emit JSON instead of tables")


def _run(input_file: Path, config: Optional[Path], as_json: bool, query) -> Any:
    """Analyze the input and apply ``query`` to the result; exit 1 on failure."""
    logger = setup_logging(resolve_verbosity(quiet=as_json))
    try:
        settings = resolve_config(config=config, quiet=as_json)
        logger = setup_logging(settings.verbosity)
        result: CodebaseGraph = analyze_codebase(load_parsed_files(input_file), settings)
        return query(result)
    except CentrifugeError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _echo_json(payload: Dict[str, Any]) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command()
def context(
    input_file: Path = INPUT_ARGUMENT,
    path: str = FILE_ARGUMENT,
    as_json: bool = JSON_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
):
    """
    Show one file's functions, imports, dependents and metrics.

    [bold cyan]Examples:[/bold cyan]

      centrifuge context parsed.json src/lib/math.ts
    """
    ctx = _run(input_file, config, as_json, lambda r: file_context(r, path))

    if as_json:
        _echo_json(file_context_to_dict(ctx))
        return

    m = ctx.metrics
    console.print()
    console.print(f"[bold cyan]{escape(ctx.path)}[/bold cyan]  {ctx.loc} loc, module {escape(ctx.module)}")
    console.print(
        f"  PageRank {m.page_rank:.4f}, betweenness {m.betweenness:.2f}, "
        f"fan-in {m.fan_in}, fan-out {m.fan_out}, coupling {m.coupling:.2f}, "
        f"tension {m.tension:.2f}, blast radius {m.blast_radius}"
    )
    for fn in ctx.functions:
        console.print(f"  [green]fn[/green] {escape(fn.name)} ({fn.loc} loc)")
    for link in ctx.imports:
        console.print(f"  [blue]imports[/blue] {escape(link.path)} {escape(', '.join(link.symbols))}")
    for link in ctx.dependents:
        console.print(f"  [magenta]used by[/magenta] {escape(link.path)} {escape(', '.join(link.symbols))}")


@app.command()
def dependents(
    input_file: Path = INPUT_ARGUMENT,
    path: str = FILE_ARGUMENT,
    depth: int = typer.Option(
        DEFAULT_DEPENDENT_DEPTH, "--depth", "-d", help="Maximum hops to follow", min=1
    ),
    as_json: bool = JSON_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
):
    """
    List files that depend on a file, directly and transitively.

    [bold cyan]Examples:[/bold cyan]

      centrifuge dependents parsed.json src/lib/math.ts --depth 3
    """
    report = _run(input_file, config, as_json, lambda r: get_dependents(r, path, depth=depth))

    if as_json:
        _echo_json(dependents_to_dict(report))
        return

    style = _RISK_STYLE[report.risk_level]
    console.print()
    console.print(
        f"[bold cyan]{escape(report.file)}[/bold cyan]: {report.total_affected} affected, "
        f"risk [{style}]{report.risk_level.value}[/{style}]"
    )
    table = Table(title="Dependents")
    table.add_column("File", style="cyan")
    table.add_column("Depth", justify="right")
    table.add_column("Via")
    for link in report.direct_dependents:
        table.add_row(escape(link.path), "1", escape(", ".join(link.symbols)))
    for t in report.transitive_dependents:
        table.add_row(escape(t.path), str(t.depth), escape(" → ".join(t.through_path)))
    console.print(table)


@app.command()
def modules(
    input_file: Path = INPUT_ARGUMENT,
    as_json: bool = JSON_OPTION,
    config: Optional[Path] = CONFIG_OPTION,
):
    """
    Show modules, weighted cross-module dependencies and rated cycles.

    [bold cyan]Examples:[/bold cyan]

      centrifuge modules parsed.json --json
    """
    structure = _run(input_file, config, as_json, module_structure)

    if as_json:
        _echo_json(module_structure_to_dict(structure))
        return

    table = Table(title="Modules")
    table.add_column("Module", style="cyan")
    table.add_column("Files", justify="right")
    table.add_column("LOC", justify="right")
    table.add_column("Cohesion", justify="right")
    for m in structure.modules:
        table.add_row(escape(m.path), str(m.files), str(m.loc), f"{m.cohesion:.2f}")
    console.print(table)

    deps = Table(title="Cross-module dependencies")
    deps.add_column("From", style="cyan")
    deps.add_column("To", style="cyan")
    deps.add_column("Edges", justify="right")
    for d in structure.cross_module_deps:
        deps.add_row(escape(d.source), escape(d.target), str(d.weight))
    console.print(deps)

    for c in structure.circular_deps:
        style = _RISK_STYLE[c.severity]
        console.print(f"  [{style}]{c.severity.value}[/{style}] {escape(' → '.join(c.cycle))}")
