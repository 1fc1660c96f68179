"""Source file discovery for directory indexing.

Files are matched per extension with a recursive glob, filtered through the
chained ignore files of the directory and all of its ancestors, and test files
are dropped unconditionally. Ordering is extension-major and lexicographic
within an extension so two enumerations of an unchanged tree are identical.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
import glob
import logging
import os
from pathlib import Path

from pathspec import GitIgnoreSpec

from code_ferret.config import DEFAULT_EXTENSIONS
from code_ferret.domain.errors import IgnoreFileReadError


logger = logging.getLogger(__name__)

_ALWAYS_IGNORED = ("node_modules/",)
_TEST_NAME_MARKERS = (".spec.", ".test.")
_TEST_DIR_SEGMENT = "__tests__"


def is_test_file(path: str | Path) -> bool:
    """Return True for spec/test files and anything under a ``__tests__`` directory."""
    candidate = Path(path)
    filename = candidate.name.lower()
    if any(marker in filename for marker in _TEST_NAME_MARKERS):
        return True
    return _TEST_DIR_SEGMENT in candidate.parts


@dataclass(frozen=True)
class FileDiscovery:
    """Enumerate indexable source files below a directory."""

    ignore_file_name: str = ".gitignore"
    default_extensions: tuple[str, ...] = DEFAULT_EXTENSIONS

    def enumerate(self, directory: str | Path, extensions: Sequence[str] | None = None) -> list[str]:
        """List candidate files as absolute paths.

        Args:
            directory: Directory to scan (relative or absolute)
            extensions: Extensions to match, e.g. ``[".ts", ".py"]``; defaults apply when empty

        Returns:
            Absolute file paths, extension-major, without duplicates
        """
        root = Path(directory).resolve()
        ignore_spec = self.load_ignore_spec(root)

        files: list[str] = []
        seen: set[str] = set()
        for extension in extensions or self.default_extensions:
            for match in self._glob_extension(root, extension):
                if match in seen:
                    continue
                relative = Path(match).relative_to(root).as_posix()
                if ignore_spec.match_file(relative):
                    continue
                seen.add(match)
                files.append(match)

        return [file for file in files if not is_test_file(file)]

    def load_ignore_spec(self, directory: Path) -> GitIgnoreSpec:
        """Collect ignore rules from ``directory`` up to the filesystem root.

        Root-most files are applied first so rules closer to ``directory`` win.
        """
        ignore_paths = [
            candidate / self.ignore_file_name
            for candidate in (directory, *directory.parents)
            if (candidate / self.ignore_file_name).is_file()
        ]

        lines: list[str] = []
        for ignore_path in reversed(ignore_paths):
            try:
                lines.extend(self._read_ignore_file(ignore_path))
            except IgnoreFileReadError as exc:
                logger.warning("%s", exc)
                continue

        lines.extend(_ALWAYS_IGNORED)
        return GitIgnoreSpec.from_lines(lines)

    def _read_ignore_file(self, path: Path) -> Iterable[str]:
        try:
            return path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as exc:
            raise IgnoreFileReadError(path, str(exc)) from exc

    def _glob_extension(self, root: Path, extension: str) -> list[str]:
        pattern = os.path.join(glob.escape(str(root)), "**", f"*{glob.escape(extension)}")
        return sorted(match for match in glob.glob(pattern, recursive=True) if os.path.isfile(match))
