"""Helper utilities for constructing throwaway workspaces in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping


class WorkspaceBuilder:
    """Writes files and fake git checkouts under a temporary workspace root."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "workspace"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the workspace."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")

    def add_repo(self, relative: str) -> Path:
        """Create a directory containing an empty ``.git`` directory."""
        repo = self.root / relative
        (repo / ".git").mkdir(parents=True)
        return repo

    def path(self) -> Path:
        return self.root


__all__ = ["WorkspaceBuilder"]
