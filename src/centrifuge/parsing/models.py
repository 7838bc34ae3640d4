"""Input contract: per-file metadata produced by an external source parser.

ParsedFile is the only input of the analysis pipeline. Parsers for
specific languages live outside this package; they emit JSON records
with camelCase keys, which ``ParsedFile.from_dict`` accepts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from ..exceptions import InvalidInputError


class ExportKind(Enum):
    """Kind of exported symbol."""

    FUNCTION = "function"
    CLASS = "class"
    VARIABLE = "variable"
    TYPE = "type"
    INTERFACE = "interface"
    ENUM = "enum"


# Export kinds that become function nodes in the graph. Every other kind is
# metadata only: it still counts for dead-export detection.
NODE_CREATING_KINDS: frozenset[ExportKind] = frozenset({ExportKind.FUNCTION, ExportKind.CLASS})


@dataclass
class ParsedExport:
    """An exported symbol.

    Attributes:
        name: Exported name
        kind: ExportKind of the symbol
        loc: Lines of code of the symbol body
        is_default: True for a default export
        complexity: McCabe complexity (1 + branches), as counted by the parser
    """

    name: str
    kind: ExportKind
    loc: int = 0
    is_default: bool = False
    complexity: int = 1

    @property
    def creates_node(self) -> bool:
        return self.kind in NODE_CREATING_KINDS


@dataclass
class ParsedImport:
    """An import statement.

    ``resolved_from`` is the relative path of the imported file, or "" when
    the import is external or could not be resolved.
    """

    source: str
    resolved_from: str = ""
    symbols: list[str] = field(default_factory=list)
    is_type_only: bool = False


@dataclass
class ParsedFile:
    """Metadata for one source file."""

    relative_path: str
    loc: int = 0
    exports: list[ParsedExport] = field(default_factory=list)
    imports: list[ParsedImport] = field(default_factory=list)
    churn: int = 0
    is_test_file: bool = False
    test_file: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ParsedFile:
        """Build a ParsedFile from a camelCase JSON record.

        Missing ``churn``, ``testFile``, ``isTestFile``, ``exports`` and
        ``imports`` fall back to their defaults.

        Raises:
            InvalidInputError: If the record is not an object, has no
                ``relativePath``, declares an unknown export type,
                or carries a non-numeric count or a non-list collection.
        """
        if not isinstance(data, Mapping):
            raise InvalidInputError(f"expected an object, got {type(data).__name__}")

        relative_path = data.get("relativePath")
        if not isinstance(relative_path, str) or not relative_path:
            raise InvalidInputError("missing relativePath", record=str(data.get("path", "")))

        exports = [_export_from_dict(e, relative_path) for e in _as_list(data, "exports", relative_path)]
        imports = [_import_from_dict(i, relative_path) for i in _as_list(data, "imports", relative_path)]

        return cls(
            relative_path=relative_path,
            loc=max(0, _as_int(data, "loc", relative_path, 0)),
            exports=exports,
            imports=imports,
            churn=max(0, _as_int(data, "churn", relative_path, 0)),
            is_test_file=bool(data.get("isTestFile", False)),
            test_file=data.get("testFile") or None,
        )


def _export_from_dict(data: Mapping[str, Any], relative_path: str) -> ParsedExport:
    if not isinstance(data, Mapping) or "name" not in data:
        raise InvalidInputError("export without a name", record=relative_path)

    raw_kind = data.get("type", data.get("kind", ExportKind.VARIABLE.value))
    try:
        kind = ExportKind(raw_kind)
    except ValueError as e:
        raise InvalidInputError(f"unknown export type '{raw_kind}'", record=relative_path) from e

    return ParsedExport(
        name=str(data["name"]),
        kind=kind,
        loc=max(0, _as_int(data, "loc", relative_path, 0)),
        is_default=bool(data.get("isDefault", False)),
        complexity=max(1, _as_int(data, "complexity", relative_path, 1)),
    )


def _import_from_dict(data: Mapping[str, Any], relative_path: str) -> ParsedImport:
    if not isinstance(data, Mapping):
        raise InvalidInputError("import is not an object", record=relative_path)

    return ParsedImport(
        source=str(data.get("from", "")),
        resolved_from=str(data.get("resolvedFrom") or ""),
        symbols=[str(s) for s in _as_list(data, "symbols", relative_path)],
        is_type_only=bool(data.get("isTypeOnly", False)),
    )


def _as_int(data: Mapping[str, Any], key: str, relative_path: str, default: int) -> int:
    value = data.get(key)
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise InvalidInputError(f"{key} must be a number, got {value!r}", record=relative_path)
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidInputError(f"{key} must be a number, got {value!r}", record=relative_path) from e


def _as_list(data: Mapping[str, Any], key: str, relative_path: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidInputError(
            f"{key} must be a list, got {type(value).__name__}", record=relative_path
        )
    return value
