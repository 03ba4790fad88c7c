"""Configuration loading for repohealth (.repohealth.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml

from .errors import ObservationError

CONFIG_FILENAME = ".repohealth.yml"

DEFAULT_EXCLUDE_PATTERNS: Tuple[str, ...] = ("node_modules", ".git", ".venv")
DEFAULT_EXTENSIONS: Tuple[str, ...] = (".md", ".ts", ".py", ".js")


class ConfigError(ObservationError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class Thresholds:
    """Detection thresholds. Both comparisons are strict."""

    dirty_ratio: float = 0.5
    unpushed_count: int = 5


@dataclass(frozen=True)
class ReportConfig:
    """Where observation reports are written."""

    output_dir: str = "logs"
    write_json: bool = True
    write_markdown: bool = True


@dataclass(frozen=True)
class ObservationConfig:
    """Settings for one observation run.

    ``workspace_root`` identifies the workspace; the remaining fields tune the
    scanner, the detectors and the report writers.
    """

    workspace_root: str
    tool_root: Optional[str] = None
    team_id: Optional[str] = None
    max_depth: int = 4
    exclude_patterns: Tuple[str, ...] = DEFAULT_EXCLUDE_PATTERNS
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    projects_dir: str = "PROJECTS"
    thresholds: Thresholds = field(default_factory=Thresholds)
    reports: ReportConfig = field(default_factory=ReportConfig)


def load_config(config_path: Path) -> ObservationConfig:
    """Load settings for a workspace directory (or its ``.repohealth.yml``).

    Returns defaults rooted at the workspace when no file exists.
    """
    config_file = _resolve_config_path(config_path)
    root = config_file.parent

    if not config_file.exists():
        return ObservationConfig(workspace_root=str(root))

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    workspace_data = _as_dict(data.get("workspace"))
    max_depth = _as_int(workspace_data.get("max_depth"))
    exclude_patterns = _as_str_list(workspace_data.get("exclude_patterns"))
    extensions = _as_str_list(workspace_data.get("extensions"))
    projects_dir = _as_str(workspace_data.get("projects_dir"))

    integration_data = _as_dict(data.get("integrations"))
    tool_root = _as_str(integration_data.get("tool_root"))
    team_id = _as_str(integration_data.get("team"))

    thresholds = Thresholds()
    threshold_data = _as_dict(data.get("thresholds"))
    if threshold_data:
        dirty_ratio = _as_float(threshold_data.get("dirty_ratio"))
        unpushed_count = _as_int(threshold_data.get("unpushed_count"))
        thresholds = Thresholds(
            dirty_ratio=dirty_ratio if dirty_ratio is not None else thresholds.dirty_ratio,
            unpushed_count=(
                unpushed_count if unpushed_count is not None else thresholds.unpushed_count
            ),
        )

    reports = ReportConfig()
    report_data = _as_dict(data.get("reports"))
    if report_data:
        output_dir = _as_str(report_data.get("output_dir"))
        write_json = _as_bool(report_data.get("json"))
        write_markdown = _as_bool(report_data.get("markdown"))
        reports = ReportConfig(
            output_dir=output_dir or reports.output_dir,
            write_json=reports.write_json if write_json is None else write_json,
            write_markdown=reports.write_markdown if write_markdown is None else write_markdown,
        )

    return ObservationConfig(
        workspace_root=str(root),
        tool_root=tool_root,
        team_id=team_id,
        max_depth=max_depth if max_depth is not None else 4,
        exclude_patterns=tuple(exclude_patterns) if exclude_patterns else DEFAULT_EXCLUDE_PATTERNS,
        extensions=tuple(_normalise_extension(ext) for ext in extensions) or DEFAULT_EXTENSIONS,
        projects_dir=projects_dir or "PROJECTS",
        thresholds=thresholds,
        reports=reports,
    )


def _resolve_config_path(config_path: Path) -> Path:
    # Anything other than the config file itself names the workspace directory.
    config_path = config_path.expanduser()
    if config_path.name == CONFIG_FILENAME and not config_path.is_dir():
        return config_path.resolve()
    return (config_path / CONFIG_FILENAME).resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _normalise_extension(value: str) -> str:
    value = value.strip()
    return value if value.startswith(".") else f".{value}"


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


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


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_EXCLUDE_PATTERNS",
    "DEFAULT_EXTENSIONS",
    "ObservationConfig",
    "ReportConfig",
    "Thresholds",
    "load_config",
]
