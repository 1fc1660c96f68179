"""Query scoring against a directory index.

Two strategies share one contract:

- ``PrebuiltStrategy`` reads the term weight maps computed at index time and
  rewards both exact keyword hits and indexed terms that contain the query
  token (``email`` against ``emailservice``).
- ``FallbackStrategy`` rescans raw file text when no term maps exist, counting
  literal occurrences and adding flat boosts for declarations, call sites and
  comments.

The mode is decided once per call for the whole directory and dispatched
explicitly; no per-file shape checks happen during scoring.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
import logging
import re
from typing import ClassVar, Protocol

from code_ferret.search.indexer import FileRecord


logger = logging.getLogger(__name__)

MIN_QUERY_TOKEN_LENGTH = 3


class ScoringMode(str, Enum):
    """How a directory is scored for one query."""

    PREBUILT = "prebuilt"
    FALLBACK = "fallback"

    @classmethod
    def for_records(cls, records: Sequence[FileRecord]) -> ScoringMode:
        if any(record.keywords for record in records):
            return cls.PREBUILT
        return cls.FALLBACK


def tokenize_query(query: str) -> list[str]:
    """Lowercase, split on whitespace and drop tokens shorter than three characters."""
    return [token for token in query.lower().split() if len(token) >= MIN_QUERY_TOKEN_LENGTH]


class ScoringStrategy(Protocol):
    """Protocol implemented by per-mode scorers."""

    def score_record(self, tokens: Sequence[str], record: FileRecord) -> float:  # pragma: no cover - interface
        ...


class PrebuiltStrategy:
    """Score files from their precomputed term weight maps."""

    EXACT_WEIGHT: ClassVar[float] = 0.01
    PARTIAL_WEIGHT: ClassVar[float] = 0.005

    def score_record(self, tokens: Sequence[str], record: FileRecord) -> float:
        score = 0.0
        for token in tokens:
            score += record.keywords.get(token, 0) * self.EXACT_WEIGHT
            for term, weight in record.keywords.items():
                if term != token and token in term:
                    score += weight * self.PARTIAL_WEIGHT
        return score


class FallbackStrategy:
    """Score files by rescanning their raw text."""

    OCCURRENCE_WEIGHT: ClassVar[float] = 0.01
    CLASS_BOOST: ClassVar[float] = 0.3
    FUNCTION_BOOST: ClassVar[float] = 0.2
    COMMENT_BOOST: ClassVar[float] = 0.1

    def score_record(self, tokens: Sequence[str], record: FileRecord) -> float:
        code = record.code.lower()
        score = 0.0
        for token in tokens:
            occurrences = code.count(token)
            if not occurrences:
                continue

            score += occurrences * self.OCCURRENCE_WEIGHT

            escaped = re.escape(token)
            if re.search(rf"class\s+\w*{escaped}\w*", code, re.IGNORECASE):
                score += self.CLASS_BOOST
            if re.search(rf"function\s+\w*{escaped}\w*|\w*{escaped}\w*\s*\(", code, re.IGNORECASE):
                score += self.FUNCTION_BOOST
            if re.search(rf"//.*{escaped}|\*.*{escaped}", code, re.IGNORECASE):
                score += self.COMMENT_BOOST
        return score


class QueryScorer:
    """Compute per-file relevance for a query over one directory index."""

    def __init__(self) -> None:
        self._strategies: dict[ScoringMode, ScoringStrategy] = {
            ScoringMode.PREBUILT: PrebuiltStrategy(),
            ScoringMode.FALLBACK: FallbackStrategy(),
        }

    def score(self, query: str, records: Sequence[FileRecord]) -> dict[str, float]:
        """Score every record and keep only positive scores.

        Args:
            query: Free-text query
            records: Directory index to score

        Returns:
            Mapping of file path to score, in index order
        """
        tokens = tokenize_query(query)
        if not tokens:
            return {}

        logger.debug("Searching for keywords: %s", ", ".join(tokens))
        mode = ScoringMode.for_records(records)
        if mode is ScoringMode.FALLBACK:
            logger.info("No pre-built keyword indices found, falling back to on-the-fly search")

        strategy = self._strategies[mode]
        scores: dict[str, float] = {}
        for record in records:
            score = strategy.score_record(tokens, record)
            if score > 0:
                scores[record.file] = score
        return scores
