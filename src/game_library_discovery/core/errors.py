"""Exceptions raised by discovery sources.

Only source-level problems are raised. Problems with a single manifest or
shortcut entry are skipped where they happen and never reach the caller.
"""

from pathlib import Path


class DiscoveryError(Exception):
    """Base class for source-level discovery failures.

    Attributes:
        path: The file or directory the failure refers to, if any
    """

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class SourceNotFoundError(DiscoveryError):
    """The client is not installed (its root or manifest directory is absent)."""


class LibraryIndexError(DiscoveryError):
    """The library index exists but cannot be read or interpreted."""
