"""Exception hierarchy for observation runs."""

from __future__ import annotations


class ObservationError(RuntimeError):
    """Base class for failures surfaced by repohealth."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidConfig(ObservationError):
    """Raised when the observation configuration is unusable."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class GitError(ObservationError):
    """Raised when git cannot be executed for a repository."""

    def __init__(self, details: str) -> None:
        super().__init__(details)
        self.details = details


class FilesystemError(ObservationError):
    """Raised when the workspace cannot be read or reports cannot be written."""

    def __init__(self, details: str) -> None:
        super().__init__(details)
        self.details = details


__all__ = ["FilesystemError", "GitError", "InvalidConfig", "ObservationError"]
