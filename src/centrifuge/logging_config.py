"""
Logging configuration for Centrifuge.

Every package logger lives under the ``centrifuge`` namespace and writes
through one RichHandler on stderr, so stdout stays clean for JSON output.
The host application's root logger is left alone.
"""

import logging
from typing import Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "centrifuge"

VERBOSITY_LEVELS: Dict[str, int] = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_verbosity(verbose: bool = False, quiet: bool = False) -> str:
    """Collapse --verbose / --quiet flags into a verbosity name. Quiet wins."""
    if quiet:
        return "quiet"
    if verbose:
        return "verbose"
    return "normal"


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Attach rich (and optionally file) handlers to the centrifuge logger.

    Calling it again replaces the previous handlers, so the CLI can refine
    the level once configuration files have been read.

    Args:
        verbosity: One of "quiet", "normal", "verbose"
        log_file: Optional path that receives plain-text records as well

    Returns:
        The configured ``centrifuge`` logger

    Raises:
        ValueError: If verbosity is not a known level name
    """
    try:
        level = VERBOSITY_LEVELS[verbosity]
    except KeyError:
        raise ValueError(f"unknown verbosity '{verbosity}'") from None

    debug = level == logging.DEBUG
    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=debug,
            markup=False,
            show_path=debug,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        handlers.append(file_handler)

    logger = logging.getLogger(ROOT_LOGGER)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``centrifuge`` namespace; ``__name__`` works as-is."""
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
