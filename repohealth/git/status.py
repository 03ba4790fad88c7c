"""Collect per-repository status facts by running git."""

from __future__ import annotations

import subprocess
from datetime import UTC, datetime
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence, Tuple

from ..config import ObservationConfig
from ..errors import GitError
from ..logging import get_logger
from ..models import RepositoryRecord
from .discovery import find_git_repositories

Runner = Callable[..., str]


class GitInspector:
    """Builds a :class:`RepositoryRecord` for one working copy.

    Each probe has a fallback so repositories without commits, without an
    upstream or with an unborn branch still produce a record. Only a missing
    git executable is fatal.
    """

    DEFAULT_BRANCH = "main"

    def __init__(self, runner: Runner | None = None) -> None:
        self._runner = runner or self._default_runner
        self.logger = get_logger("git")

    def inspect(self, repo_path: str | Path) -> RepositoryRecord:
        repo = Path(repo_path)
        branch = self._branch(repo)
        is_clean = self._is_clean(repo)
        has_remote, commits_ahead = self._upstream(repo)
        total_commits = self._total_commits(repo)
        last_commit_time = self._last_commit_time(repo)
        self.logger.debug(
            "%s: branch=%s clean=%s ahead=%d commits=%d",
            repo.name,
            branch,
            is_clean,
            commits_ahead,
            total_commits,
        )
        return RepositoryRecord(
            path=str(repo),
            name=repo.name,
            branch=branch,
            is_clean=is_clean,
            commits_ahead=commits_ahead,
            total_commits=total_commits,
            last_commit_time=last_commit_time,
            has_remote=has_remote,
        )

    # ------------------------------------------------------------------
    # Probes

    def _branch(self, repo: Path) -> str:
        try:
            return self._run(["git", "rev-parse", "--abbrev-ref", "HEAD"], cwd=repo).strip()
        except subprocess.CalledProcessError:
            pass
        # Unborn branch: HEAD exists only as a symbolic ref.
        try:
            branch = self._run(["git", "symbolic-ref", "--short", "HEAD"], cwd=repo).strip()
        except subprocess.CalledProcessError:
            return self.DEFAULT_BRANCH
        return branch or self.DEFAULT_BRANCH

    def _is_clean(self, repo: Path) -> bool:
        try:
            self._run(["git", "diff-index", "--quiet", "HEAD", "--"], cwd=repo)
            return True
        except subprocess.CalledProcessError:
            pass
        # diff-index also fails without a HEAD, so fall back to porcelain status.
        try:
            status = self._run(["git", "status", "--porcelain"], cwd=repo)
        except subprocess.CalledProcessError:
            self.logger.debug("%s: unable to read status; assuming clean", repo.name)
            return True
        return status.strip() == ""

    def _upstream(self, repo: Path) -> Tuple[bool, int]:
        try:
            upstream = self._run(["git", "rev-parse", "--abbrev-ref", "@{u}"], cwd=repo).strip()
            if not upstream:
                return False, 0
            ahead = self._run(["git", "rev-list", "@{u}..HEAD", "--count"], cwd=repo)
        except subprocess.CalledProcessError:
            return False, 0
        return True, _parse_count(ahead)

    def _total_commits(self, repo: Path) -> int:
        try:
            output = self._run(["git", "rev-list", "--count", "HEAD"], cwd=repo)
        except subprocess.CalledProcessError:
            return 0
        return _parse_count(output)

    def _last_commit_time(self, repo: Path) -> Optional[datetime]:
        try:
            output = self._run(["git", "log", "-1", "--format=%ct"], cwd=repo)
        except subprocess.CalledProcessError:
            return None
        try:
            seconds = int(output.strip())
        except ValueError:
            return None
        return datetime.fromtimestamp(seconds, tz=UTC)

    # ------------------------------------------------------------------
    # Internals

    def _run(self, args: Iterable[str], *, cwd: Path) -> str:
        try:
            return self._runner(args, cwd=cwd, capture_output=True)
        except FileNotFoundError as exc:
            raise GitError(f"git executable not available: {exc}") from exc

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        capture_output: bool = False,
    ) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            capture_output=capture_output,
        )
        return completed.stdout if capture_output else ""


def _parse_count(output: str) -> int:
    try:
        return int(output.strip())
    except ValueError:
        return 0


def scan_git_repositories(
    config: ObservationConfig,
    *,
    inspector: GitInspector | None = None,
) -> Tuple[RepositoryRecord, ...]:
    """Discover and inspect every repository in the configured workspace."""
    inspector = inspector or GitInspector()
    paths: Sequence[Path] = find_git_repositories(
        config.workspace_root,
        max_depth=config.max_depth,
        exclude_patterns=config.exclude_patterns,
    )
    return tuple(inspector.inspect(path) for path in paths)


__all__ = ["GitInspector", "Runner", "scan_git_repositories"]
