"""Configuration loading and management for Centrifuge.

Configuration sources are merged in priority order:
    1. Defaults (defined in AnalysisConfig)
    2. Global config (~/.centrifuge.toml)
    3. Project config (./centrifuge.toml)
    4. Explicit config file
    5. Environment variables (CENTRIFUGE_* prefix)
    6. Keyword overrides (typically from CLI flags)

Example:
    >>> config = load_config(max_cycles=50)
    >>> config.max_cycles
    50
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigFileError, InvalidConfigError

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "CENTRIFUGE_"


@dataclass(frozen=True)
class ThresholdConfig:
    """Thresholds used by per-file metrics and force analysis.

    Attributes:
        Bridges:
            bridge_flag_betweenness: FileMetrics.is_bridge when betweenness exceeds this
            bridge_min_betweenness: Minimum betweenness for a reported bridge file
            bridge_min_modules: Foreign modules a bridge must touch

        Tension:
            tension_min: Tension files are reported strictly above this
            inbound_pull_strength: Pull contributed by each inbound edge

        Cohesion verdicts:
            cohesive_min: cohesion >= this is COHESIVE
            moderate_min: cohesion >= this is MODERATE, below is JUNK_DRAWER

        Extraction:
            extraction_min_escape_velocity: Modules at or above this are candidates
    """

    # === Bridges ===
    bridge_flag_betweenness: float = 0.10
    bridge_min_betweenness: float = 0.05
    bridge_min_modules: int = 2

    # === Tension ===
    tension_min: float = 0.30
    inbound_pull_strength: float = 0.5

    # === Cohesion verdicts ===
    cohesive_min: float = 0.60
    moderate_min: float = 0.40

    # === Extraction ===
    extraction_min_escape_velocity: float = 0.50

    def __post_init__(self) -> None:
        """Validate threshold configuration."""
        unit_fields = [
            "bridge_flag_betweenness",
            "bridge_min_betweenness",
            "tension_min",
            "cohesive_min",
            "moderate_min",
            "extraction_min_escape_velocity",
        ]
        for field_name in unit_fields:
            value = getattr(self, field_name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{field_name} must be between 0.0 and 1.0")

        if self.moderate_min > self.cohesive_min:
            raise ValueError("moderate_min must not exceed cohesive_min")
        if self.inbound_pull_strength <= 0:
            raise ValueError("inbound_pull_strength must be positive")
        if self.bridge_min_modules < 1:
            raise ValueError("bridge_min_modules must be at least 1")


DEFAULT_THRESHOLDS = ThresholdConfig()


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for one analysis run.

    Attributes:
        pagerank_damping: Damping factor for PageRank (0.0-1.0)
        pagerank_iterations: Maximum power iterations
        pagerank_tolerance: Convergence tolerance (max per-node change)
        max_cycles: Hard cap on reported circular dependencies
        max_groups: Maximum cloud groups emitted for visualization
        verbosity: Logging verbosity level
        thresholds: Nested force-analysis thresholds
    """

    pagerank_damping: float = 0.85
    pagerank_iterations: int = 100
    pagerank_tolerance: float = 1e-6

    max_cycles: int = 100
    max_groups: int = 8

    verbosity: Verbosity = "normal"

    thresholds: ThresholdConfig = field(default_factory=ThresholdConfig)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not 0.0 <= self.pagerank_damping <= 1.0:
            raise ValueError("pagerank_damping must be between 0.0 and 1.0")
        if self.pagerank_iterations < 1:
            raise ValueError("pagerank_iterations must be at least 1")
        if self.pagerank_tolerance <= 0:
            raise ValueError("pagerank_tolerance must be positive")

        if self.max_cycles < 0:
            raise ValueError("max_cycles must be non-negative")
        if self.max_groups < 1:
            raise ValueError("max_groups must be at least 1")

        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise ValueError("verbosity must be one of quiet, normal, verbose")


DEFAULT_CONFIG = AnalysisConfig()


def load_config(config_file: Optional[Path] = None, **overrides) -> AnalysisConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags)

    Returns:
        Validated AnalysisConfig instance

    Raises:
        ConfigFileError: If a config file is missing or unparseable
        InvalidConfigError: If a merged value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / ".centrifuge.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "centrifuge.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigFileError(config_file, "file not found")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())

    # Verbosity flags from the CLI collapse into one field
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update(overrides)

    thresholds_dict = merged.pop("thresholds", None)
    if thresholds_dict is not None:
        if isinstance(thresholds_dict, ThresholdConfig):
            merged["thresholds"] = thresholds_dict
        elif isinstance(thresholds_dict, dict):
            try:
                merged["thresholds"] = ThresholdConfig(**thresholds_dict)
            except (TypeError, ValueError) as e:
                raise InvalidConfigError("thresholds", thresholds_dict, str(e)) from e
        else:
            raise InvalidConfigError("thresholds", thresholds_dict, "expected a table")

    try:
        return AnalysisConfig(**merged)
    except (TypeError, ValueError) as e:
        raise InvalidConfigError("analysis", merged, str(e)) from e


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from CENTRIFUGE_* environment variables.

    Supported environment variables:
        CENTRIFUGE_PAGERANK_DAMPING: float
        CENTRIFUGE_PAGERANK_ITERATIONS: int
        CENTRIFUGE_PAGERANK_TOLERANCE: float
        CENTRIFUGE_MAX_CYCLES: int
        CENTRIFUGE_MAX_GROUPS: int
        CENTRIFUGE_VERBOSITY: quiet/normal/verbose

    Returns:
        Dict of field_name -> parsed_value for any CENTRIFUGE_* vars found.
    """
    type_hints = get_type_hints(AnalysisConfig)

    result: dict[str, Any] = {}

    for field_name in AnalysisConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e)) from e
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Returns None for types that cannot come from the environment
    (nested threshold tables).

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        if lower in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigFileError: If the file cannot be read or parsed
    """
    try:
        import tomllib
    except ModuleNotFoundError:
        # Python 3.9-3.10
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigFileError(path, str(e)) from e
