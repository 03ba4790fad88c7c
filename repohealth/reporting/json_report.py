"""JSON serialisation of observation snapshots."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict

from ..errors import FilesystemError
from ..models import SystemState


def system_state_to_dict(state: SystemState) -> Dict[str, Any]:
    return {
        "context": {
            "workspace": state.workspace,
            "timestamp": state.timestamp.isoformat().replace("+00:00", "Z"),
            "observationType": state.observation_type,
        },
        "current": {
            "git": {
                "totalRepositories": state.git.total_repositories,
                "cleanRepositories": state.git.clean_repositories,
                "dirtyRepositories": state.git.dirty_repositories,
                "unpushedRepositories": state.git.unpushed_repositories,
                "totalCommits": state.git.total_commits,
                "healthScore": state.git.health_score,
            },
            "workspace": {
                "totalProjects": state.workspace_metrics.total_projects,
                "totalFiles": state.workspace_metrics.total_files,
                "filesByType": dict(state.workspace_metrics.files_by_type),
            },
        },
        "history": {"snapshots": [_snapshot(item) for item in state.history]},
    }


def _snapshot(item: object) -> object:
    if isinstance(item, SystemState):
        return system_state_to_dict(item)
    try:
        return asdict(item)  # type: ignore[call-overload]
    except TypeError:
        return item


def write_observation_json(path: Path, state: SystemState) -> Path:
    payload = system_state_to_dict(state)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    except OSError as exc:
        raise FilesystemError(f"Failed to write {path}: {exc}") from exc
    return path


__all__ = ["system_state_to_dict", "write_observation_json"]
