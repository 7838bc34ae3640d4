"""Analysis-related exceptions: input loading and result queries."""

from pathlib import Path
from typing import Dict, List, Optional

from .base import CentrifugeError


class AnalysisError(CentrifugeError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when an input file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class InvalidInputError(AnalysisError):
    """Raised when parsed-file records do not match the input contract."""

    def __init__(self, reason: str, record: Optional[str] = None):
        details: Dict[str, str] = {"reason": reason}
        if record is not None:
            details["record"] = record

        super().__init__(f"Invalid parsed-file input: {reason}", details=details)
        self.reason = reason
        self.record = record


class InvalidMetricError(AnalysisError):
    """Raised when a hotspot ranking is requested for an unknown metric."""

    def __init__(self, metric: str, supported_metrics: List[str]):
        super().__init__(
            f"Unknown metric: {metric}",
            details={"metric": metric, "supported": ", ".join(supported_metrics)},
        )
        self.metric = metric
        self.supported_metrics = supported_metrics


class FileNotInGraphError(AnalysisError):
    """Raised when a query names a file that is not part of the analyzed graph."""

    def __init__(self, path: str):
        super().__init__(f"File not found in graph: {path}", details={"path": path})
        self.path = path
