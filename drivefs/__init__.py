"""
In-memory hierarchical filesystem with drives, folders, zip archives and text files.
"""
from .errors import (
    FileSystemError,
    PathNotFound,
    PathAlreadyExists,
    IllegalFileSystemOperation,
    NotATextFile,
)
from .filesystem import FileSystem
from .models import DRIVE, FOLDER, TEXT_FILE, ZIP_FILE

__version__ = "0.1.0"

__all__ = [
    "FileSystem",
    "FileSystemError",
    "PathNotFound",
    "PathAlreadyExists",
    "IllegalFileSystemOperation",
    "NotATextFile",
    "DRIVE",
    "FOLDER",
    "TEXT_FILE",
    "ZIP_FILE",
]
