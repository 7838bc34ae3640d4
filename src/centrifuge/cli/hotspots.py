"""Hotspots command: top files by a single metric."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from ..analysis.engine import analyze_codebase
from ..analysis.hotspots import HOTSPOT_METRICS, MAX_LIMIT, rank_hotspots
from ..analysis.serializers import hotspot_to_dict
from ..exceptions import CentrifugeError
from ..logging_config import resolve_verbosity, setup_logging
from ..parsing import load_parsed_files
from . import app
from ._common import CONFIG_OPTION, INPUT_ARGUMENT, console, resolve_config


@app.command()
def hotspots(
    input_file: Path = INPUT_ARGUMENT,
    metric: str = typer.Option(
        "coupling",
        "--metric",
        "-m",
        help=f"Metric to rank by: {', '.join(HOTSPOT_METRICS)}",
    ),
    limit: int = typer.Option(10, "--limit", "-n", help="Number of files", min=1, max=MAX_LIMIT),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table"),
    config: Optional[Path] = CONFIG_OPTION,
):
    """
    Rank files by one metric, highest first.

    [bold cyan]Examples:[/bold cyan]

      centrifuge hotspots parsed.json --metric blast_radius

      centrifuge hotspots parsed.json -m coverage -n 20 --json
    """
    logger = setup_logging(resolve_verbosity(quiet=as_json))

    try:
        settings = resolve_config(config=config, quiet=as_json)
        # Config files and CENTRIFUGE_VERBOSITY can change the level
        logger = setup_logging(settings.verbosity)
        result = analyze_codebase(load_parsed_files(input_file), settings)
        ranked = rank_hotspots(result, metric=metric, limit=limit)
    except CentrifugeError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if as_json:
        payload = {"metric": metric, "hotspots": [hotspot_to_dict(h) for h in ranked]}
        typer.echo(json.dumps(payload, indent=2))
        return

    table = Table(title=f"Hotspots by {metric}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("File", style="cyan")
    table.add_column("Score", justify="right")
    for i, h in enumerate(ranked, 1):
        table.add_row(str(i), escape(h.path), f"{h.score:.4g}")
    console.print(table)
