"""Code Search Engine - Deep Module Implementation.

Owns the directory index store and exposes the only three operations callers
need: build an index, search it, and project a search down to file paths.

Design Principles (Ousterhout Ch. 4):
- Deep module: discovery, extraction, storage and scoring stay behind a small interface
- Explicit state: one engine instance owns its store for the life of the process
- Lazy indexing: the first search against an unknown directory builds its index

Ranking:
- Scores come from the QueryScorer (prebuilt term maps or raw-text fallback)
- Results are sorted by descending score with a stable sort, so ties keep the
  discovery order of the index
"""

from __future__ import annotations

from collections.abc import Sequence
import logging
from pathlib import Path

from code_ferret.config import Settings
from code_ferret.domain.errors import NoFilesFound, NoIndexedFiles
from code_ferret.domain.search import SearchResult
from code_ferret.observability.context import bind_directory
from code_ferret.observability.metrics import INDEXED_FILES
from code_ferret.search.discovery import FileDiscovery
from code_ferret.search.indexer import (
    DirectoryIndex,
    IndexBuilder,
    IndexBuildResult,
    IndexStore,
    normalize_directory,
)
from code_ferret.search.keywords import KeywordExtractor
from code_ferret.search.scoring import QueryScorer


logger = logging.getLogger(__name__)


class CodeSearchEngine:
    """Deep module for keyword search over source trees.

    Interface Methods:
    - create_index(directory, extensions) -> IndexBuildResult
    - search(query, directory) -> list[SearchResult]
    - get_relevant_files(query, directory) -> list[str]
    """

    def __init__(self, settings: Settings | None = None):
        """Initialize the engine with an empty index store.

        Args:
            settings: Configuration; loaded from the environment when omitted
        """
        self.settings = settings or Settings()
        self._store = IndexStore()
        self._builder = IndexBuilder(
            self._store,
            discovery=FileDiscovery(
                ignore_file_name=self.settings.ignore_file_name,
                default_extensions=tuple(self.settings.get_default_extensions()),
            ),
            extractor=KeywordExtractor(),
        )
        self._scorer = QueryScorer()

    @property
    def default_extensions(self) -> tuple[str, ...]:
        return self._builder.discovery.default_extensions

    def create_index(self, directory: str | Path, extensions: Sequence[str] | None = None) -> IndexBuildResult:
        """Build a fresh index for a directory, replacing any existing one.

        Args:
            directory: Directory to index
            extensions: File extensions to include (defaults when omitted)

        Returns:
            IndexBuildResult describing the build

        Raises:
            NoFilesFound: No indexable files in the directory or its immediate subdirectories
        """
        bind_directory(normalize_directory(directory))
        result = self._builder.build(directory, extensions)
        INDEXED_FILES.labels(directory=result.directory).set(result.files_indexed)
        return result

    def search(self, query: str, directory: str | Path) -> list[SearchResult]:
        """Rank files in a directory for a free-text query.

        Args:
            query: Search query
            directory: Directory to search; indexed on first use

        Returns:
            Ranked results, rank 1 first; empty when no file scores above zero

        Raises:
            NoIndexedFiles: The directory has no indexed files after the build attempt
        """
        records = self._ensure_index(directory)

        scores = self._scorer.score(query, records)
        records_by_file = {record.file: record for record in records}
        ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)

        return [
            SearchResult(
                file=file,
                code=records_by_file[file].code,
                similarity_score=score,
                rank=position,
            )
            for position, (file, score) in enumerate(ranked, start=1)
        ]

    def get_relevant_files(self, query: str, directory: str | Path) -> list[str]:
        """Quick search returning only file paths, in rank order."""
        return [result.file for result in self.search(query, directory)]

    def indexed_directories(self) -> list[str]:
        """Normalized keys of every directory indexed by this engine."""
        return self._store.keys()

    def _ensure_index(self, directory: str | Path) -> DirectoryIndex:
        key = normalize_directory(directory)
        bind_directory(key)
        if key not in self._store:
            logger.info("No index found for %s, creating one...", key)
            extensions = self._store.extensions_for(key) or self.default_extensions
            try:
                self.create_index(directory, extensions)
            except NoFilesFound as exc:
                raise NoIndexedFiles(directory) from exc

        records = self._store.get(key)
        if not records:
            raise NoIndexedFiles(directory)
        return records
