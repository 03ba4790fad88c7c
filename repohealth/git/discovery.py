"""Locate git working copies below a workspace root."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Sequence

from ..errors import FilesystemError
from ..ignore import build_rules, should_descend


def find_git_repositories(
    root: str,
    *,
    max_depth: int = 4,
    exclude_patterns: Sequence[str] = (),
) -> List[Path]:
    """Return every directory holding a ``.git`` directory, at most ``max_depth`` levels down.

    The root itself sits at depth 0. Repositories nested inside other
    repositories are reported too. Unreadable subdirectories are skipped.
    """
    root_path = Path(root).expanduser().resolve()
    if not root_path.exists():
        raise FilesystemError(f"Workspace path not found: {root}")
    if not root_path.is_dir():
        raise FilesystemError(f"Workspace path is not a directory: {root}")

    rules = build_rules(exclude_patterns)
    repositories: List[Path] = []

    for dirpath, dirnames, _ in os.walk(root_path):
        current = Path(dirpath)
        rel_dir = current.relative_to(root_path).as_posix() if current != root_path else ""
        depth = len(rel_dir.split("/")) if rel_dir else 0

        if ".git" in dirnames and (current / ".git").is_dir():
            repositories.append(current)

        if depth >= max_depth:
            dirnames[:] = []
            continue

        kept = []
        for name in sorted(dirnames):
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if should_descend(name, rel_path, rules):
                kept.append(name)
        dirnames[:] = kept

    return repositories


__all__ = ["find_git_repositories"]
