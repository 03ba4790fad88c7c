"""Report writers for observation results."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from .json_report import system_state_to_dict, write_observation_json
from .markdown import generate_markdown_report, write_markdown_report


@dataclass(frozen=True)
class ReportPaths:
    json_path: Path
    markdown_path: Path


def output_paths(output_dir: Path, *, now: datetime) -> ReportPaths:
    """Return timestamped report paths, e.g. ``observation-2024-01-01T00-00-00-000000+00-00.json``."""
    stamp = now.isoformat().replace(":", "-").replace(".", "-")
    return ReportPaths(
        json_path=output_dir / f"observation-{stamp}.json",
        markdown_path=output_dir / f"observation-{stamp}.md",
    )


__all__ = [
    "ReportPaths",
    "generate_markdown_report",
    "output_paths",
    "system_state_to_dict",
    "write_markdown_report",
    "write_observation_json",
]
