"""Domain specific exceptions."""

from __future__ import annotations


class WindowError(Exception):
    """Base class for sliding window errors."""


class CollaboratorError(WindowError):
    """Raised when a source or sink call fails.

    The failed step is reported to its caller; steps queued after it still run.
    """

    def __init__(self, collaborator: str, message: str) -> None:
        self.collaborator = collaborator
        super().__init__(f"[{collaborator}] {message}")


class SourceError(CollaboratorError):
    """Raised when fetching records or the log bound fails."""

    def __init__(self, message: str) -> None:
        super().__init__("source", message)


class SinkError(CollaboratorError):
    """Raised when materializing or evicting buffer lines fails."""

    def __init__(self, message: str) -> None:
        super().__init__("sink", message)
