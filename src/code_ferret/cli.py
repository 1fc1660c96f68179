"""Command-line interface for indexing and searching source trees.

Usage:
    code-ferret index -d ./src -e .ts .tsx
    code-ferret search -q "email service" -d ./src --top 5
    code-ferret search -q "user auth" --files-only
    code-ferret info src/EmailService.ts
    code-ferret mcp

Every invocation is its own process, so ``search`` always indexes the target
directory before ranking; ``index`` reports what a build would hold.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import json
import logging
import os
import sys

from code_ferret.code_search_engine import CodeSearchEngine
from code_ferret.config import Settings
from code_ferret.domain.errors import CodeFerretError
from code_ferret.domain.search import SearchResult
from code_ferret.observability import configure_logging
from code_ferret.search.code_info import load_code_info


logger = logging.getLogger(__name__)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="code-ferret",
        description="Lightweight code search tool using keyword indexing",
    )
    parser.add_argument(
        "--log-level",
        help="Override the configured log level (debug, info, warning, error)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    index_parser = subparsers.add_parser("index", help="Index source code files in a directory")
    index_parser.add_argument("-d", "--directory", required=True, help="Directory to index")
    index_parser.add_argument(
        "-e",
        "--extensions",
        nargs="+",
        metavar="EXT",
        help="File extensions to include (e.g. .ts .js)",
    )

    search_parser = subparsers.add_parser("search", help="Search for code files matching a query")
    search_parser.add_argument("-q", "--query", required=True, help="Search query")
    search_parser.add_argument(
        "-d",
        "--directory",
        default=os.getcwd(),
        help="Directory to search (default: current directory)",
    )
    search_parser.add_argument("-t", "--top", type=int, help="Number of results to return")
    search_parser.add_argument(
        "-f",
        "--files-only",
        action="store_true",
        help="Only show file paths, not code content",
    )
    search_parser.add_argument("--json", action="store_true", help="Emit results as JSON lines")

    info_parser = subparsers.add_parser("info", help="Summarize imports and definitions of a source file")
    info_parser.add_argument("file", help="Source file to summarize")

    subparsers.add_parser("mcp", help="Run as an MCP server on stdio")
    return parser


def _validate_args(args: argparse.Namespace) -> None:
    if getattr(args, "top", None) is not None and args.top < 1:
        raise ValueError("--top must be >= 1")


def _run_index(engine: CodeSearchEngine, args: argparse.Namespace) -> int:
    result = engine.create_index(args.directory, args.extensions)
    sys.stdout.write(
        f"Indexed {result.files_indexed} files in {result.directory}"
        f" (skipped={result.files_skipped}, extensions={', '.join(result.extensions)})\n"
    )
    return 0


def _run_search(engine: CodeSearchEngine, args: argparse.Namespace, settings: Settings) -> int:
    results = engine.search(args.query, args.directory)[: args.top or settings.default_top]

    if args.json:
        for result in results:
            payload = {"file": result.file, "rank": result.rank, "similarityScore": result.similarity_score}
            if not args.files_only:
                payload["code"] = result.code
            sys.stdout.write(json.dumps(payload, sort_keys=True) + "\n")
        return 0

    if args.files_only:
        sys.stdout.write("\nRelevant Files:\n===============\n")
        for result in results:
            sys.stdout.write(f"- {result.file}\n")
        return 0

    sys.stdout.write("\nSearch Results:\n==============\n")
    for result in results:
        sys.stdout.write(_format_result(result))
    return 0


def _format_result(result: SearchResult) -> str:
    return (
        f"\nRank: {result.rank}\n"
        f"File: {result.file}\n"
        f"Relevance Score: {result.similarity_score:.3f}\n"
        "Code Example:\n"
        "------------\n"
        f"{result.code}\n\n"
    )


def _run_info(args: argparse.Namespace) -> int:
    info = load_code_info(args.file)
    sys.stdout.write(json.dumps(info.model_dump(), indent=2) + "\n")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    settings = Settings()
    if args.command == "mcp":
        # Imported lazily so the other commands do not pay for the MCP stack
        from code_ferret.server import run_server

        run_server(settings)
        return 0

    configure_logging(args.log_level or settings.log_level, settings.log_json)

    try:
        _validate_args(args)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    try:
        if args.command == "index":
            return _run_index(CodeSearchEngine(settings), args)
        if args.command == "search":
            return _run_search(CodeSearchEngine(settings), args, settings)
        return _run_info(args)
    except CodeFerretError as exc:
        logger.error("Error during %s: %s", args.command, exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
