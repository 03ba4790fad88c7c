"""Git discovery and status collection."""

from .discovery import find_git_repositories
from .status import GitInspector, scan_git_repositories

__all__ = ["GitInspector", "find_git_repositories", "scan_git_repositories"]
