"""FastAPI application entrypoint for repohealth service mode."""

from __future__ import annotations

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..config import DEFAULT_EXCLUDE_PATTERNS, ObservationConfig, Thresholds, load_config
from ..derived import calculate_trend, calculate_velocity
from ..errors import FilesystemError, InvalidConfig, ObservationError
from ..models import RepositoryRecord, SystemState, WorkspaceMetrics
from ..observation import Observation
from ..orchestrator import ObservationOutcome, Orchestrator
from ..pipeline import observe
from ..reporting import system_state_to_dict


class PatternModel(BaseModel):
    type: str
    significance: float
    evidence: str
    recommendation: str


class AnomalyModel(BaseModel):
    type: str
    severity: str
    deviation: float
    description: str
    recommendation: str


class ObservationResponse(BaseModel):
    state: Dict[str, Any]
    patterns: List[PatternModel]
    anomalies: List[AnomalyModel]
    trend: str
    velocity: int
    json_path: Optional[str] = None
    markdown_path: Optional[str] = None


class ObserveRequest(BaseModel):
    path: str
    tool_root: Optional[str] = None
    team: Optional[str] = None
    max_depth: Optional[int] = None
    exclude_patterns: Optional[List[str]] = None
    unpushed_threshold: Optional[int] = None
    write_reports: bool = False


class RepositoryModel(BaseModel):
    path: str
    name: str
    branch: str = "main"
    is_clean: bool = True
    commits_ahead: int = 0
    total_commits: int = 0
    last_commit_time: Optional[datetime] = None
    has_remote: bool = False


class WorkspaceModel(BaseModel):
    total_projects: int = 0
    total_files: int = 0
    files_by_type: Dict[str, int] = Field(default_factory=dict)


class EvaluateRequest(BaseModel):
    workspace: str
    repositories: List[RepositoryModel] = Field(default_factory=list)
    metrics: WorkspaceModel = Field(default_factory=WorkspaceModel)
    max_depth: int = 4
    exclude_patterns: List[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDE_PATTERNS))
    unpushed_threshold: int = 5


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def _observation_response(
    observation: Observation[SystemState],
    outcome: ObservationOutcome | None = None,
) -> ObservationResponse:
    return ObservationResponse(
        state=system_state_to_dict(observation.context),
        patterns=[
            PatternModel(
                type=p.type,
                significance=p.significance,
                evidence=p.evidence,
                recommendation=p.recommendation,
            )
            for p in observation.patterns
        ],
        anomalies=[
            AnomalyModel(
                type=a.type,
                severity=a.severity.value,
                deviation=a.deviation,
                description=a.description,
                recommendation=a.recommendation,
            )
            for a in observation.anomalies
        ],
        trend=calculate_trend(observation).value,
        velocity=calculate_velocity(observation),
        json_path=str(outcome.json_path) if outcome and outcome.json_path else None,
        markdown_path=str(outcome.markdown_path) if outcome and outcome.markdown_path else None,
    )


def _config_for_request(payload: ObserveRequest) -> ObservationConfig:
    if payload.path == "":
        raise InvalidConfig("workspace_root cannot be empty")
    config = load_config(Path(payload.path))
    thresholds = config.thresholds
    if payload.unpushed_threshold is not None:
        thresholds = Thresholds(
            dirty_ratio=thresholds.dirty_ratio,
            unpushed_count=payload.unpushed_threshold,
        )
    return ObservationConfig(
        workspace_root=config.workspace_root,
        tool_root=payload.tool_root or config.tool_root,
        team_id=payload.team or config.team_id,
        max_depth=payload.max_depth if payload.max_depth is not None else config.max_depth,
        exclude_patterns=(
            tuple(payload.exclude_patterns)
            if payload.exclude_patterns is not None
            else config.exclude_patterns
        ),
        extensions=config.extensions,
        projects_dir=config.projects_dir,
        thresholds=thresholds,
        reports=config.reports,
    )


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing repohealth operations."""

    app = FastAPI(title="repohealth", version="0.1.0")

    async def get_orchestrator() -> Orchestrator:
        # Fresh instance per request; runs share no state.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/observe", response_model=ObservationResponse)
    async def observe_workspace(
        payload: ObserveRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> ObservationResponse:
        def _run() -> ObservationOutcome:
            config = _config_for_request(payload)
            return orchestrator.run(config, write_reports=payload.write_reports)

        loop = asyncio.get_running_loop()
        outcome = await loop.run_in_executor(None, _run)
        return _observation_response(outcome.observation, outcome)

    @app.post("/evaluate", response_model=ObservationResponse)
    async def evaluate(payload: EvaluateRequest) -> ObservationResponse:
        config = ObservationConfig(
            workspace_root=payload.workspace,
            max_depth=payload.max_depth,
            exclude_patterns=tuple(payload.exclude_patterns),
            thresholds=Thresholds(unpushed_count=payload.unpushed_threshold),
        )
        repos = [RepositoryRecord(**repo.model_dump()) for repo in payload.repositories]
        metrics = WorkspaceMetrics(**payload.metrics.model_dump())
        observation = observe(config, repos, metrics)
        return _observation_response(observation)

    @app.exception_handler(InvalidConfig)
    async def invalid_config_handler(_: Any, exc: InvalidConfig) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": exc.reason})

    @app.exception_handler(FilesystemError)
    async def filesystem_error_handler(_: Any, exc: FilesystemError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.details})

    @app.exception_handler(ObservationError)
    async def observation_error_handler(_: Any, exc: ObservationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": exc.message})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)


__all__ = ["create_app", "run_service"]
