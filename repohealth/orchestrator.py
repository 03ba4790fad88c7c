"""Pipeline orchestration: scan the workspace, observe, and write reports."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from .config import ObservationConfig
from .derived import Trend, derive_trend, derive_velocity
from .git import GitInspector, scan_git_repositories
from .health import Clock, utc_now
from .logging import get_logger
from .models import RepositoryRecord, SystemState
from .observation import Observation
from .pipeline import observe, validate_config
from .reporting import output_paths, write_markdown_report, write_observation_json
from .workspace_scanner import WorkspaceScanner


@dataclass
class ObservationOutcome:
    """Result of an observation run."""

    observation: Observation[SystemState]
    repositories: Tuple[RepositoryRecord, ...]
    trend: Trend
    velocity: int
    json_path: Optional[Path] = None
    markdown_path: Optional[Path] = None


class Orchestrator:
    """Coordinates the I/O shell around the pure observation pipeline."""

    def __init__(
        self,
        inspector: GitInspector | None = None,
        scanner: WorkspaceScanner | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.inspector = inspector or GitInspector()
        self.scanner = scanner or WorkspaceScanner()
        self.clock = clock or utc_now
        self.logger = get_logger("orchestrator")

    def run(self, config: ObservationConfig, *, write_reports: bool = True) -> ObservationOutcome:
        """Observe the configured workspace and optionally persist reports."""
        validate_config(config)
        self.logger.info("Starting observation of %s", config.workspace_root)

        repos = scan_git_repositories(config, inspector=self.inspector)
        self.logger.debug("Inspected %d repositories", len(repos))

        metrics = self.scanner.scan(
            config.workspace_root,
            extensions=config.extensions,
            exclude_patterns=config.exclude_patterns,
            projects_dir=config.projects_dir,
        )

        observation = observe(config, repos, metrics, clock=self.clock)
        trend = derive_trend(observation).focus
        velocity = derive_velocity(observation).focus
        git = observation.context.git
        self.logger.info(
            "Health %.1f%% across %d repositories (%s)",
            git.health_score,
            git.total_repositories,
            trend.value,
        )
        for pattern in observation.patterns:
            self.logger.warning("Pattern %s: %s", pattern.type, pattern.evidence)
        for anomaly in observation.anomalies:
            self.logger.warning(
                "Anomaly %s (%s): %s", anomaly.type, anomaly.severity.value, anomaly.description
            )

        outcome = ObservationOutcome(
            observation=observation,
            repositories=repos,
            trend=trend,
            velocity=velocity,
        )
        if write_reports:
            self._write_reports(config, outcome)
        return outcome

    def _write_reports(self, config: ObservationConfig, outcome: ObservationOutcome) -> None:
        reports = config.reports
        if not (reports.write_json or reports.write_markdown):
            return
        output_dir = Path(reports.output_dir).expanduser()
        if not output_dir.is_absolute():
            output_dir = Path(config.workspace_root).expanduser() / output_dir
        paths = output_paths(output_dir, now=outcome.observation.context.timestamp)

        if reports.write_json:
            outcome.json_path = write_observation_json(paths.json_path, outcome.observation.focus)
            self.logger.info("Wrote %s", outcome.json_path)
        if reports.write_markdown:
            outcome.markdown_path = write_markdown_report(
                paths.markdown_path, outcome.observation, outcome.repositories
            )
            self.logger.info("Wrote %s", outcome.markdown_path)


__all__ = ["ObservationOutcome", "Orchestrator"]
