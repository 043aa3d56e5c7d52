"""Error taxonomy for buffer and file commands.

Every failure a command can surface derives from FileCommandError, so
callers (the CLI, an editor binding) can catch one type and report it.
"""

from __future__ import annotations


class FileCommandError(Exception):
    """Base class for all command failures."""


class InvalidArgument(FileCommandError, ValueError):
    """Bad input shape or a missing required parameter."""


class NotFound(FileCommandError, LookupError):
    """A named buffer is not open, or a buffer vanished before dispatch."""


class DestinationExists(FileCommandError):
    """The destination exists and overwriting was declined or disallowed."""

    def __init__(self, path: str, message: str | None = None) -> None:
        super().__init__(message or f"Destination already exists: {path}")
        self.path = path


class IOFailure(FileCommandError):
    """Wraps an underlying filesystem or version-control error."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(f"{message}: {cause}" if cause is not None else message)
        self.cause = cause
