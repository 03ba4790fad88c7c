"""Markdown rendering of an observation."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence

from ..derived import calculate_trend, calculate_velocity
from ..errors import FilesystemError
from ..models import Anomaly, Pattern, RepositoryRecord, SystemState
from ..observation import Observation


def generate_markdown_report(
    observation: Observation[SystemState],
    repos: Sequence[RepositoryRecord],
) -> str:
    """Render the observation as Markdown. Repositories keep their input order."""
    state = observation.context
    git = state.git

    lines: List[str] = [
        "# Workspace Health Report",
        f"**Generated**: {state.timestamp.isoformat()}",
        f"**Workspace**: {state.workspace}",
        "",
        "---",
        "",
        "## Summary",
        "",
        f"- **Total Repositories**: {git.total_repositories}",
        f"- **Clean Repositories**: {git.clean_repositories} ({git.health_score:.1f}%)",
        f"- **Dirty Repositories**: {git.dirty_repositories}",
        f"- **Unpushed Repositories**: {git.unpushed_repositories}",
        f"- **Total Commits**: {git.total_commits}",
        f"- **Health Score**: {git.health_score:.1f}%",
        f"- **Trend**: {calculate_trend(observation).value}",
        f"- **Velocity**: {calculate_velocity(observation)} commits",
        "",
        "---",
        "",
        "## Git Repositories",
        "",
        "| # | Repository | Branch | Status | Commits Ahead | Total Commits |",
        "|---|------------|--------|--------|---------------|---------------|",
    ]
    for index, repo in enumerate(repos, start=1):
        status = "clean" if repo.is_clean else "dirty"
        ahead = f"↑{repo.commits_ahead}" if repo.commits_ahead > 0 else "-"
        lines.append(
            f"| {index} | `{repo.name}` | {repo.branch} | {status} | {ahead} | {repo.total_commits} |"
        )

    lines.extend(["", "---", "", "## Pattern Detection", ""])
    lines.extend(_pattern_lines(observation.patterns))
    lines.extend(["---", "", "## Anomaly Detection", ""])
    lines.extend(_anomaly_lines(observation.anomalies))
    lines.extend(["---", "", "*Generated by repohealth*"])
    return "\n".join(lines) + "\n"


def _pattern_lines(patterns: Sequence[Pattern]) -> List[str]:
    if not patterns:
        return ["No significant patterns detected.", ""]
    lines: List[str] = []
    for pattern in patterns:
        lines.extend(
            [
                f"### {pattern.type}",
                f"- **Significance**: {pattern.significance}",
                f"- **Evidence**: {pattern.evidence}",
                f"- **Recommendation**: {pattern.recommendation}",
                "",
            ]
        )
    return lines


def _anomaly_lines(anomalies: Sequence[Anomaly]) -> List[str]:
    if not anomalies:
        return ["No anomalies detected.", ""]
    lines: List[str] = []
    for anomaly in anomalies:
        lines.extend(
            [
                f"### {anomaly.type}",
                f"- **Severity**: {anomaly.severity.value}",
                f"- **Deviation**: {anomaly.deviation:.2f}",
                f"- **Description**: {anomaly.description}",
                f"- **Recommendation**: {anomaly.recommendation}",
                "",
            ]
        )
    return lines


def write_markdown_report(
    path: Path,
    observation: Observation[SystemState],
    repos: Sequence[RepositoryRecord],
) -> Path:
    markdown = generate_markdown_report(observation, repos)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(markdown, encoding="utf-8")
    except OSError as exc:
        raise FilesystemError(f"Failed to write {path}: {exc}") from exc
    return path


__all__ = ["generate_markdown_report", "write_markdown_report"]
