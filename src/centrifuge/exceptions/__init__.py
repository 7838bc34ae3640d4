"""Exception hierarchy for Centrifuge."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    FileNotInGraphError,
    InvalidInputError,
    InvalidMetricError,
)
from .base import CentrifugeError
from .config import ConfigFileError, ConfigurationError, InvalidConfigError

__all__ = [
    "CentrifugeError",
    "AnalysisError",
    "FileAccessError",
    "FileNotInGraphError",
    "InvalidInputError",
    "InvalidMetricError",
    "ConfigurationError",
    "ConfigFileError",
    "InvalidConfigError",
]
