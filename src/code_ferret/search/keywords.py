"""Keyword extraction for source files.

Pure functions with no external dependencies. A file's text becomes an
insertion-ordered ``keyword -> weight`` map: every surviving word counts once
per occurrence, and declarations add structural boosts on top (class names
weigh more than function names).
"""

import re
from typing import ClassVar


TermWeights = dict[str, int]

_NON_WORD = re.compile(r"[\W_]+")
_CLASS_DECLARATION = re.compile(r"class\s+(\w+)")
_FUNCTION_DECLARATION = re.compile(r"function\s+(\w+)|(\w+)\s*\(")


class KeywordExtractor:
    """Derive weighted term-frequency maps from source text.

    Stateless; a single instance is shared by every index build.
    """

    MIN_TOKEN_LENGTH: ClassVar[int] = 3
    CLASS_WEIGHT: ClassVar[int] = 10
    FUNCTION_WEIGHT: ClassVar[int] = 5

    # Common source-language keywords that carry no search signal
    STOPWORDS: ClassVar[frozenset[str]] = frozenset(
        {
            "if",
            "else",
            "for",
            "while",
            "do",
            "switch",
            "case",
            "break",
            "continue",
            "return",
            "try",
            "catch",
            "finally",
            "throw",
            "new",
            "delete",
            "typeof",
            "instanceof",
            "void",
            "this",
            "super",
            "class",
            "interface",
            "extends",
            "implements",
            "static",
            "public",
            "private",
            "protected",
            "const",
            "let",
            "var",
            "function",
            "async",
            "await",
            "import",
            "export",
            "from",
            "as",
            "true",
            "false",
            "null",
            "undefined",
            # Lowercase because words are lowercased before the stoplist check
            "nan",
            "infinity",
        }
    )

    def extract(self, text: str) -> TermWeights:
        """Build the term weight map for one file.

        Args:
            text: Raw file content

        Returns:
            Mapping of lowercase keyword to accumulated weight
        """
        weights: TermWeights = {}

        for word in self.normalize(text).split():
            if self.is_indexable(word):
                weights[word] = weights.get(word, 0) + 1

        # Class names are boosted without the length/stopword filter
        for match in _CLASS_DECLARATION.finditer(text):
            name = match.group(1).lower()
            weights[name] = weights.get(name, 0) + self.CLASS_WEIGHT

        for match in _FUNCTION_DECLARATION.finditer(text):
            name = (match.group(1) or match.group(2)).lower()
            if self.is_indexable(name):
                weights[name] = weights.get(name, 0) + self.FUNCTION_WEIGHT

        return weights

    def normalize(self, text: str) -> str:
        """Lowercase, replace punctuation with spaces and collapse whitespace."""
        return " ".join(_NON_WORD.sub(" ", text.lower()).split())

    def is_indexable(self, word: str) -> bool:
        return len(word) >= self.MIN_TOKEN_LENGTH and word not in self.STOPWORDS
