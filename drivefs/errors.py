"""
Errors raised by filesystem operations.
"""
from typing import Optional


class FileSystemError(Exception):
    """Base class for all filesystem operation failures."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path: Optional[str] = path


class PathNotFound(FileSystemError):
    """A path segment could not be resolved."""


class PathAlreadyExists(FileSystemError):
    """A create, move or rename target collides with an existing sibling."""


class IllegalFileSystemOperation(FileSystemError):
    """The request is structurally invalid for the tree."""


class NotATextFile(FileSystemError):
    """A text operation targeted an entity that is not a text file."""
