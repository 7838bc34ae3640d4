"""CLI entry point. Registers all subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="centrifuge",
    help="Centrifuge - Dependency Graph Force Analysis",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"centrifuge {__version__}")
        raise typer.Exit()


@app.callback()
def _root(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Analyze the dependency structure of a parsed codebase."""


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .hotspots import hotspots as _hotspots  # noqa: F401, E402
from .query import context as _context  # noqa: F401, E402


def main() -> None:
    app()


__all__ = ["app", "main"]
