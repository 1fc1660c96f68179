"""Directory-scoped index construction.

This module owns the in-memory index store and the builder that fills it.
Every build is a full rebuild: files are discovered, read, checksummed and
reduced to term weight maps, and the finished list replaces whatever the store
held for that directory. The store only ever sees complete indexes because the
assignment happens after the last file is processed.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import hashlib
import logging
import os
from pathlib import Path

from code_ferret.domain.errors import FileReadError, NoFilesFound
from code_ferret.search.discovery import FileDiscovery
from code_ferret.search.keywords import KeywordExtractor, TermWeights


logger = logging.getLogger(__name__)


def normalize_directory(directory: str | Path) -> str:
    """Return the canonical key for a directory: resolved absolute path plus one trailing separator."""
    resolved = str(Path(directory).resolve())
    return resolved if resolved.endswith(os.sep) else resolved + os.sep


def compute_checksum(content: str) -> str:
    return hashlib.md5(content.encode("utf-8"), usedforsecurity=False).hexdigest()


@dataclass(frozen=True)
class FileRecord:
    """One indexed file.

    ``checksum`` is stored for inspection only; rebuilds never consult it.
    """

    file: str
    code: str
    keywords: TermWeights = field(default_factory=dict)
    checksum: str = ""


DirectoryIndex = tuple[FileRecord, ...]


@dataclass(frozen=True)
class IndexBuildResult:
    """Outcome of a directory build."""

    directory: str
    extensions: tuple[str, ...]
    files_indexed: int
    files_skipped: int
    errors: tuple[str, ...]


class IndexStore:
    """Directory key -> index mapping that lives as long as its owner."""

    def __init__(self) -> None:
        self._indices: dict[str, DirectoryIndex] = {}
        self._extensions: dict[str, tuple[str, ...]] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._indices

    def __len__(self) -> int:
        return len(self._indices)

    def get(self, key: str) -> DirectoryIndex:
        return self._indices.get(key, ())

    def extensions_for(self, key: str) -> tuple[str, ...] | None:
        return self._extensions.get(key)

    def replace(self, key: str, records: Sequence[FileRecord], extensions: Sequence[str]) -> None:
        """Install a freshly built index, dropping any previous one for ``key``."""
        self._indices[key] = tuple(records)
        self._extensions[key] = tuple(extensions)

    def keys(self) -> list[str]:
        return sorted(self._indices)


class IndexBuilder:
    """Coordinate discovery + extraction into the store for one directory at a time."""

    def __init__(
        self,
        store: IndexStore,
        *,
        discovery: FileDiscovery | None = None,
        extractor: KeywordExtractor | None = None,
    ) -> None:
        self.store = store
        self.discovery = discovery or FileDiscovery()
        self.extractor = extractor or KeywordExtractor()

    def build(self, directory: str | Path, extensions: Sequence[str] | None = None) -> IndexBuildResult:
        """Rebuild the index for ``directory`` from scratch.

        Args:
            directory: Directory to index
            extensions: File extensions to include; configured defaults when omitted

        Returns:
            IndexBuildResult summarizing the build

        Raises:
            NoFilesFound: Nothing indexable exists in the directory or its immediate subdirectories
        """
        key = normalize_directory(directory)
        resolved_extensions = tuple(extensions or self.discovery.default_extensions)
        logger.info("Creating index for %s", key)

        files = self._discover(Path(directory), resolved_extensions)
        logger.info("Found %d source files to index", len(files))

        records: list[FileRecord] = []
        errors: list[str] = []
        for file in files:
            try:
                records.append(self._index_file(file))
            except FileReadError as exc:
                logger.warning("%s", exc)
                errors.append(str(exc))
                continue

        self.store.replace(key, records, resolved_extensions)
        logger.info("Indexing complete! Indexed %d files for directory %s", len(records), key)

        return IndexBuildResult(
            directory=key,
            extensions=resolved_extensions,
            files_indexed=len(records),
            files_skipped=len(errors),
            errors=tuple(errors),
        )

    def _discover(self, directory: Path, extensions: tuple[str, ...]) -> list[str]:
        if not directory.is_dir():
            raise NoFilesFound(directory, extensions)

        files = self.discovery.enumerate(directory, extensions)
        if files:
            return files

        logger.info("No files found directly in %s with extensions %s", directory, ", ".join(extensions))
        logger.info("Checking subdirectories...")

        for subdirectory in self._subdirectories(directory):
            try:
                files.extend(self.discovery.enumerate(subdirectory, extensions))
            except OSError as exc:
                logger.info("Could not get files from %s: %s", subdirectory, exc)
                continue

        if not files:
            raise NoFilesFound(directory, extensions)
        return files

    def _subdirectories(self, directory: Path) -> list[Path]:
        try:
            entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
        except OSError as exc:
            raise NoFilesFound(directory) from exc
        # Includes dot directories, which the recursive root glob never enters
        return [entry for entry in entries if entry.is_dir()]

    def _index_file(self, file: str) -> FileRecord:
        try:
            content = Path(file).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise FileReadError(file, str(exc)) from exc

        return FileRecord(
            file=file,
            code=content,
            keywords=self.extractor.extract(content),
            checksum=compute_checksum(content),
        )
