"""Load ParsedFile records from the JSON file an external parser writes."""

import json
from pathlib import Path
from typing import List

from ..exceptions import FileAccessError, InvalidInputError
from ..logging_config import get_logger
from .models import ParsedFile

logger = get_logger(__name__)


def load_parsed_files(path: Path) -> List[ParsedFile]:
    """Read a JSON array of ParsedFile records.

    A top-level object with a ``files`` array is accepted too, which is
    the shape parser dumps use when they carry extra metadata.

    Raises:
        FileAccessError: If the file cannot be read
        InvalidInputError: If the content is not valid JSON or records are malformed
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise FileAccessError(path, str(e)) from e

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidInputError(f"invalid JSON at line {e.lineno}: {e.msg}", record=str(path)) from e

    return parse_records(payload)


def parse_records(payload: object) -> List[ParsedFile]:
    """Convert decoded JSON into ParsedFile objects.

    Raises:
        InvalidInputError: If the payload is not a list of records, or a
            relative path appears twice
    """
    if isinstance(payload, dict) and "files" in payload:
        payload = payload["files"]
    if not isinstance(payload, list):
        raise InvalidInputError("expected a JSON array of parsed files")

    files = [ParsedFile.from_dict(record) for record in payload]

    seen: set[str] = set()
    for f in files:
        if f.relative_path in seen:
            raise InvalidInputError("duplicate relativePath", record=f.relative_path)
        seen.add(f.relative_path)

    logger.debug("Loaded %d parsed files", len(files))
    return files
