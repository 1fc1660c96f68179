"""Failure taxonomy for indexing and search.

Directory-level errors (``NoFilesFound``, ``NoIndexedFiles``) are fatal to the
call that raised them. Per-file errors (``FileReadError``,
``IgnoreFileReadError``) are logged by the caller and the offending file is
skipped.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class CodeFerretError(RuntimeError):
    """Base error for the search engine."""


class NoFilesFound(CodeFerretError):
    """Raised when a build finds nothing indexable under a directory."""

    def __init__(self, directory: str | Path, extensions: Sequence[str] | None = None) -> None:
        self.directory = str(directory)
        self.extensions = tuple(extensions or ())
        ext_label = ", ".join(self.extensions) if self.extensions else "default extensions"
        super().__init__(f"No files found in {self.directory} or its subdirectories with extensions {ext_label}")


class NoIndexedFiles(CodeFerretError):
    """Raised when a search runs against an empty index after the build attempt."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = str(directory)
        super().__init__(f"No files indexed for directory {self.directory}. Please index the directory first.")


class FileReadError(CodeFerretError):
    """Raised when one source file cannot be read during a build."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Error processing {self.path}: {reason}")


class IgnoreFileReadError(CodeFerretError):
    """Raised when an ignore file cannot be read while collecting ignore rules."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Error reading ignore file at {self.path}: {reason}")
