"""Configuration loading for sharpdoc (.sharpdoc.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".sharpdoc.yml"

ANALYSIS_MODES = ("auto", "semantic", "filesystem")
DOC_FORMATS = ("markdown", "json")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class WalkLimits:
    """Caps applied by the filesystem analyzer's bounded walks."""

    source_files: int = 100
    project_files: int = 50
    solution_files: int = 10
    subdirectories: int = 5
    snapshot_directories: int = 10
    snapshot_files: int = 20


@dataclass
class AnalysisConfig:
    """Analyzer selection and filesystem budget."""

    mode: str = "auto"
    timeout_seconds: float = 30.0
    limits: WalkLimits = field(default_factory=WalkLimits)


@dataclass
class DocsConfig:
    """Documentation report defaults."""

    format: str = "markdown"
    include_api_docs: bool = True


@dataclass
class SharpDocConfig:
    """Represents the settings defined in .sharpdoc.yml."""

    root: Path
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    docs: DocsConfig = field(default_factory=DocsConfig)


def default_config(root: Path | None = None) -> SharpDocConfig:
    return SharpDocConfig(root=(root or Path.cwd()).resolve())


def load_config(config_path: Path) -> SharpDocConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return SharpDocConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    analysis = AnalysisConfig()
    analysis_data = _as_dict(data.get("analysis"))
    if analysis_data:
        mode = (_as_str(analysis_data.get("mode")) or analysis.mode).lower()
        if mode not in ANALYSIS_MODES:
            raise ConfigError(
                f"Unknown analysis mode '{mode}'; expected one of {', '.join(ANALYSIS_MODES)}"
            )
        analysis.mode = mode
        timeout = _as_float(analysis_data.get("timeout_seconds"))
        if timeout is not None and timeout > 0:
            analysis.timeout_seconds = timeout
        analysis.limits = _load_limits(_as_dict(analysis_data.get("limits")))

    docs = DocsConfig()
    docs_data = _as_dict(data.get("docs"))
    if docs_data:
        docs.format = (_as_str(docs_data.get("format")) or docs.format).lower()
        include = _as_bool(docs_data.get("include_api_docs"))
        if include is not None:
            docs.include_api_docs = include

    return SharpDocConfig(root=root, analysis=analysis, docs=docs)


def _load_limits(data: Dict[str, Any]) -> WalkLimits:
    limits = WalkLimits()
    for name in (
        "source_files",
        "project_files",
        "solution_files",
        "subdirectories",
        "snapshot_directories",
        "snapshot_files",
    ):
        value = _as_int(data.get(name))
        if value is not None and value > 0:
            setattr(limits, name, value)
    return limits


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None
