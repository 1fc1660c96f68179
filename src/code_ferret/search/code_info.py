"""Line-level summary of what a source file contains.

Pure heuristics: imports, declaration lines, service/client declarations, and
coarse storage/API/auth hints from substring checks.
"""

from __future__ import annotations

from pathlib import Path

from code_ferret.domain.errors import FileReadError
from code_ferret.domain.search import CodeInfo


_IMPORT_PREFIXES = ("import ", "from ")
_DEFINITION_MARKERS = ("class ", "interface ", "function ", "const ", "type ")
_SERVICE_MARKERS = ("service", "client")

STORAGE_PATTERNS = ("s3", "storage", "bucket", "aws", "file", "upload", "download")
API_PATTERNS = ("api", "endpoint", "http", "rest", "request", "response")
AUTH_PATTERNS = ("auth", "login", "jwt", "token", "credential")


def extract_code_info(code: str, file_path: str | Path) -> CodeInfo:
    """Summarize one file.

    Args:
        code: File content
        file_path: Path reported back in the summary

    Returns:
        CodeInfo with imports, definitions, services and topic flags
    """
    imports: list[str] = []
    definitions: list[str] = []
    services: list[str] = []

    for line in code.splitlines():
        stripped = line.strip()
        if stripped.startswith(_IMPORT_PREFIXES):
            imports.append(stripped)
            continue
        if not any(marker in stripped for marker in _DEFINITION_MARKERS):
            continue

        definition = stripped.split("{", 1)[0].strip()
        definitions.append(definition)
        if any(marker in definition.lower() for marker in _SERVICE_MARKERS):
            services.append(definition)

    lowered = code.lower()
    return CodeInfo(
        file=str(file_path),
        imports=imports,
        definitions=definitions,
        services=services,
        storage_related=_mentions_any(lowered, STORAGE_PATTERNS),
        api_related=_mentions_any(lowered, API_PATTERNS),
        auth_related=_mentions_any(lowered, AUTH_PATTERNS),
    )


def _mentions_any(text: str, patterns: tuple[str, ...]) -> bool:
    return any(pattern in text for pattern in patterns)


def load_code_info(file_path: str | Path) -> CodeInfo:
    """Read a file from disk and summarize it.

    Raises:
        FileReadError: The file is missing, unreadable or not UTF-8
    """
    path = Path(file_path)
    try:
        code = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadError(path, str(exc)) from exc
    return extract_code_info(code, path)
