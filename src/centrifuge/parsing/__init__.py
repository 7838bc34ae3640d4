"""Parsed-file input contract and JSON loading."""

from .loader import load_parsed_files, parse_records
from .models import NODE_CREATING_KINDS, ExportKind, ParsedExport, ParsedFile, ParsedImport

__all__ = [
    "ExportKind",
    "NODE_CREATING_KINDS",
    "ParsedExport",
    "ParsedFile",
    "ParsedImport",
    "load_parsed_files",
    "parse_records",
]
