"""Shared CLI helpers."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import AnalysisConfig, load_config

console = Console()

# Reused by every subcommand that reads a parser dump
INPUT_ARGUMENT = typer.Argument(
    ...,
    help="JSON file with parsed-file records (output of a source parser)",
    exists=True,
    file_okay=True,
    dir_okay=False,
)

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Configuration file (TOML)",
    exists=True,
    file_okay=True,
    dir_okay=False,
)


def resolve_config(
    config: Optional[Path] = None,
    verbose: bool = False,
    quiet: bool = False,
) -> AnalysisConfig:
    """Build config from CLI options."""
    return load_config(config_file=config, verbose=verbose, quiet=quiet)
