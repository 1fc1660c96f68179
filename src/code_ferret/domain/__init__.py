"""Domain layer - value objects and errors shared by the engine, CLI and server.

This layer contains:
- Value Objects: immutable search results and code summaries (Pydantic)
- Errors: the failure taxonomy raised by indexing and search

No filesystem or protocol dependencies live here.
"""

from code_ferret.domain.errors import (
    CodeFerretError,
    FileReadError,
    IgnoreFileReadError,
    NoFilesFound,
    NoIndexedFiles,
)
from code_ferret.domain.search import CodeInfo, SearchResult


__all__ = [
    "CodeFerretError",
    "CodeInfo",
    "FileReadError",
    "IgnoreFileReadError",
    "NoFilesFound",
    "NoIndexedFiles",
    "SearchResult",
]
