"""Analyze command: full dependency graph force analysis."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..analysis.engine import analyze_codebase
from ..analysis.models import CodebaseGraph, CohesionVerdict
from ..analysis.serializers import to_json
from ..exceptions import CentrifugeError
from ..logging_config import resolve_verbosity, setup_logging
from ..parsing import load_parsed_files
from . import app
from ._common import CONFIG_OPTION, INPUT_ARGUMENT, console, resolve_config

_VERDICT_STYLE = {
    CohesionVerdict.COHESIVE: "green",
    CohesionVerdict.MODERATE: "yellow",
    CohesionVerdict.JUNK_DRAWER: "red",
}


@app.command()
def analyze(
    input_file: Path = INPUT_ARGUMENT,
    fmt: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich (human-readable) or json (for visualizers and agents)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed metrics and debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress logging",
    ),
    config: Optional[Path] = CONFIG_OPTION,
):
    """
    Analyze dependency structure: centrality, cycles, cohesion, tension.

    [bold cyan]Examples:[/bold cyan]

      centrifuge analyze parsed.json

      centrifuge analyze parsed.json --format json > graph.json
    """
    logger = setup_logging(resolve_verbosity(verbose, quiet))

    if fmt not in ("rich", "json"):
        console.print(f"[red]Error:[/red] unknown format '{escape(fmt)}' (use rich or json)")
        raise typer.Exit(2)

    try:
        settings = resolve_config(config=config, verbose=verbose, quiet=quiet)
        # Config files and CENTRIFUGE_VERBOSITY can change the level
        logger = setup_logging(settings.verbosity)
        files = load_parsed_files(input_file)
        result = analyze_codebase(files, settings)
    except CentrifugeError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if fmt == "json":
        typer.echo(to_json(result))
    else:
        _output_rich(result, verbose=verbose)


def _output_rich(result: CodebaseGraph, verbose: bool = False) -> None:
    stats = result.stats
    console.print()
    console.print("[bold cyan]CENTRIFUGE Force Analysis[/bold cyan]")
    console.print()
    console.print(
        f"  [green]{stats.total_files}[/green] files, "
        f"[green]{stats.total_functions}[/green] functions, "
        f"[green]{stats.total_dependencies}[/green] dependencies, "
        f"[{'red' if stats.circular_deps else 'green'}]{len(stats.circular_deps)}[/] circular"
    )
    console.print()

    limit = None if verbose else 10

    top = sorted(result.file_metrics.items(), key=lambda kv: kv[1].page_rank, reverse=True)
    table = Table(title="Most depended-upon files", show_lines=False)
    table.add_column("File", style="cyan")
    table.add_column("PageRank", justify="right")
    table.add_column("Fan-in", justify="right")
    table.add_column("Fan-out", justify="right")
    table.add_column("Coupling", justify="right")
    table.add_column("Blast", justify="right")
    for path, m in top[:limit]:
        table.add_row(
            escape(path),
            f"{m.page_rank:.4f}",
            str(m.fan_in),
            str(m.fan_out),
            f"{m.coupling:.2f}",
            str(m.blast_radius),
        )
    console.print(table)

    modules = Table(title="Module cohesion")
    modules.add_column("Module", style="cyan")
    modules.add_column("Files", justify="right")
    modules.add_column("Cohesion", justify="right")
    modules.add_column("Escape", justify="right")
    modules.add_column("Verdict")
    for c in result.force_analysis.module_cohesion[:limit]:
        style = _VERDICT_STYLE[c.verdict]
        modules.add_row(
            escape(c.module.path),
            str(c.module.files),
            f"{c.module.cohesion:.2f}",
            f"{c.module.escape_velocity:.2f}",
            f"[{style}]{c.verdict.value}[/{style}]",
        )
    console.print(modules)

    if stats.circular_deps:
        console.print("[bold red]Circular dependencies[/bold red]")
        for cycle in stats.circular_deps[:limit]:
            console.print(f"  {escape(' → '.join(cycle))}")
        console.print()

    for tf in result.force_analysis.tension_files[:limit]:
        console.print(
            f"  [yellow]tension {tf.tension:.2f}[/yellow] {escape(tf.file)}: "
            f"{escape(tf.recommendation)}"
        )
    for bf in result.force_analysis.bridge_files[:limit]:
        console.print(f"  [magenta]bridge {bf.betweenness:.2f}[/magenta] {escape(bf.file)}: {bf.role}")
    for ec in result.force_analysis.extraction_candidates[:limit]:
        console.print(f"  [green]extract[/green] {escape(ec.target)}: {escape(ec.recommendation)}")

    console.print()
    console.print(f"[bold]Summary:[/bold] {escape(result.force_analysis.summary)}")
