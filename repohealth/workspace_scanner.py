"""Workspace walking and file-type metrics."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterator, Sequence

from .config import DEFAULT_EXTENSIONS
from .errors import FilesystemError
from .ignore import ExcludeRule, build_rules, is_excluded, should_descend
from .logging import get_logger
from .models import WorkspaceMetrics


def _raise_walk_error(exc: OSError) -> None:
    raise exc


def _iter_files(root: Path, rules: Sequence[ExcludeRule]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        kept = []
        for name in sorted(dirnames):
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if should_descend(name, rel_path, rules):
                kept.append(name)
        dirnames[:] = kept

        for filename in sorted(filenames):
            if filename.startswith("."):
                continue
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if is_excluded(rel_path, False, rules):
                continue
            yield current_dir / filename


def _count_projects(root: Path, projects_dir: str) -> int:
    projects_root = root / projects_dir
    if not projects_dir or not projects_root.is_dir():
        return 0
    return sum(
        1
        for entry in projects_root.iterdir()
        if entry.is_dir() and not entry.name.startswith(".")
    )


class WorkspaceScanner:
    """Counts files by extension across a workspace."""

    def __init__(self) -> None:
        self.logger = get_logger("workspace")

    def count_files_by_type(
        self,
        root: str,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        *,
        exclude_patterns: Sequence[str] = (),
    ) -> Dict[str, int]:
        """Return a count for every requested extension, zero when none were found."""
        root_path = self._resolve_root(root)
        counts: Dict[str, int] = {ext: 0 for ext in extensions}
        rules = build_rules(exclude_patterns)
        try:
            for path in _iter_files(root_path, rules):
                suffix = path.suffix
                if suffix and suffix in counts:
                    counts[suffix] += 1
        except OSError as exc:
            raise FilesystemError(f"Failed to walk {root_path}: {exc}") from exc
        return counts

    def scan(
        self,
        root: str,
        *,
        extensions: Sequence[str] = DEFAULT_EXTENSIONS,
        exclude_patterns: Sequence[str] = (),
        projects_dir: str = "PROJECTS",
    ) -> WorkspaceMetrics:
        root_path = self._resolve_root(root)
        files_by_type = self.count_files_by_type(
            str(root_path), extensions, exclude_patterns=exclude_patterns
        )
        try:
            total_projects = _count_projects(root_path, projects_dir)
        except OSError as exc:
            raise FilesystemError(f"Failed to list projects under {root_path}: {exc}") from exc

        total_files = sum(files_by_type.values())
        self.logger.debug(
            "Counted %d files across %d extensions (%d projects)",
            total_files,
            len(files_by_type),
            total_projects,
        )
        return WorkspaceMetrics(
            total_projects=total_projects,
            total_files=total_files,
            files_by_type=files_by_type,
        )

    @staticmethod
    def _resolve_root(root: str) -> Path:
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FilesystemError(f"Workspace path not found: {root}")
        if not root_path.is_dir():
            raise FilesystemError(f"Workspace path is not a directory: {root}")
        return root_path


__all__ = ["WorkspaceScanner"]
