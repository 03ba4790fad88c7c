"""Tests for the git status inspector."""

from __future__ import annotations

import subprocess
from datetime import UTC, datetime
from pathlib import Path
from typing import Dict, List, Tuple

import pytest

from repohealth.config import ObservationConfig
from repohealth.errors import GitError
from repohealth.git.status import GitInspector, scan_git_repositories


def _runner(responses: Dict[Tuple[str, ...], str], calls: List[List[str]] | None = None):  # type: ignore[no-untyped-def]
    """Return canned stdout per command; unknown commands fail like git would."""

    def run(args, cwd, capture_output=False):  # type: ignore[no-untyped-def]
        args = list(args)
        if calls is not None:
            calls.append(args)
        key = tuple(args)
        if key in responses:
            return responses[key]
        raise subprocess.CalledProcessError(128, args)

    return run


HEALTHY_REPO = {
    ("git", "rev-parse", "--abbrev-ref", "HEAD"): "feature/x\n",
    ("git", "diff-index", "--quiet", "HEAD", "--"): "",
    ("git", "rev-parse", "--abbrev-ref", "@{u}"): "origin/feature/x\n",
    ("git", "rev-list", "@{u}..HEAD", "--count"): "3\n",
    ("git", "rev-list", "--count", "HEAD"): "42\n",
    ("git", "log", "-1", "--format=%ct"): "1704067200\n",
}


def test_inspect_collects_all_fields(tmp_path: Path) -> None:
    repo = tmp_path / "service-a"
    calls: List[List[str]] = []

    record = GitInspector(runner=_runner(HEALTHY_REPO, calls)).inspect(repo)

    assert record.path == str(repo)
    assert record.name == "service-a"
    assert record.branch == "feature/x"
    assert record.is_clean is True
    assert record.has_remote is True
    assert record.commits_ahead == 3
    assert record.total_commits == 42
    assert record.last_commit_time == datetime(2024, 1, 1, tzinfo=UTC)
    assert calls[0] == ["git", "rev-parse", "--abbrev-ref", "HEAD"]


def test_inspect_falls_back_to_porcelain_status(tmp_path: Path) -> None:
    responses = dict(HEALTHY_REPO)
    del responses[("git", "diff-index", "--quiet", "HEAD", "--")]
    responses[("git", "status", "--porcelain")] = " M src/app.py\n"

    record = GitInspector(runner=_runner(responses)).inspect(tmp_path / "repo")

    assert record.is_clean is False


def test_inspect_assumes_clean_when_status_unavailable(tmp_path: Path) -> None:
    responses = dict(HEALTHY_REPO)
    del responses[("git", "diff-index", "--quiet", "HEAD", "--")]

    record = GitInspector(runner=_runner(responses)).inspect(tmp_path / "repo")

    assert record.is_clean is True


def test_inspect_handles_fresh_repository(tmp_path: Path) -> None:
    responses = {
        ("git", "symbolic-ref", "--short", "HEAD"): "trunk\n",
        ("git", "status", "--porcelain"): "?? notes.txt\n",
    }

    record = GitInspector(runner=_runner(responses)).inspect(tmp_path / "fresh")

    assert record.branch == "trunk"
    assert record.is_clean is False
    assert record.has_remote is False
    assert record.commits_ahead == 0
    assert record.total_commits == 0
    assert record.last_commit_time is None


def test_inspect_defaults_branch_when_unresolvable(tmp_path: Path) -> None:
    record = GitInspector(runner=_runner({})).inspect(tmp_path / "odd")
    assert record.branch == "main"


def test_inspect_without_upstream_reports_no_remote(tmp_path: Path) -> None:
    responses = dict(HEALTHY_REPO)
    del responses[("git", "rev-parse", "--abbrev-ref", "@{u}")]

    record = GitInspector(runner=_runner(responses)).inspect(tmp_path / "repo")

    assert record.has_remote is False
    assert record.commits_ahead == 0


def test_inspect_tolerates_unparsable_output(tmp_path: Path) -> None:
    responses = dict(HEALTHY_REPO)
    responses[("git", "rev-list", "--count", "HEAD")] = "not-a-number"
    responses[("git", "log", "-1", "--format=%ct")] = ""

    record = GitInspector(runner=_runner(responses)).inspect(tmp_path / "repo")

    assert record.total_commits == 0
    assert record.last_commit_time is None


def test_missing_git_executable_raises_git_error(tmp_path: Path) -> None:
    def runner(args, cwd, capture_output=False):  # type: ignore[no-untyped-def]
        raise FileNotFoundError("git")

    with pytest.raises(GitError):
        GitInspector(runner=runner).inspect(tmp_path / "repo")


def test_scan_git_repositories_preserves_discovery_order(workspace_builder) -> None:  # type: ignore[no-untyped-def]
    workspace_builder.add_repo("b-repo")
    workspace_builder.add_repo("a-repo")
    workspace_builder.add_repo("group/c-repo")
    config = ObservationConfig(workspace_root=str(workspace_builder.path()))

    records = scan_git_repositories(config, inspector=GitInspector(runner=_runner(HEALTHY_REPO)))

    assert [record.name for record in records] == ["a-repo", "b-repo", "c-repo"]
