"""MCP server exposing the code search engine as tools over stdio."""

import logging
import os
from pathlib import Path
from typing import Annotated

from fastmcp import Context, FastMCP
from opentelemetry.trace import SpanKind

from code_ferret.code_search_engine import CodeSearchEngine
from code_ferret.config import Settings
from code_ferret.domain.errors import CodeFerretError
from code_ferret.observability import REQUEST_COUNT, REQUEST_LATENCY, configure_logging, track_latency
from code_ferret.observability.tracing import configure_trace_exporter, create_span, init_tracing
from code_ferret.search.code_info import load_code_info
from code_ferret.utils.models import CodeInfoResponse, IndexDirectoryResponse, RankedFile, SearchCodeResponse


logger = logging.getLogger(__name__)


def create_server(engine: CodeSearchEngine | None = None, settings: Settings | None = None) -> FastMCP:
    """Create the MCP server backed by one engine for the life of the process."""

    settings = settings or (engine.settings if engine else Settings())
    engine = engine or CodeSearchEngine(settings)

    mcp = FastMCP(
        name=settings.mcp_server_name,
        instructions=(
            "Keyword search over local source trees. Call search_code with a query to get the most "
            "relevant files; pass a directory to (re)index it first. Use code_info to summarize a file."
        ),
        mask_error_details=True,
    )
    register_tools(mcp, engine, settings)
    return mcp


def register_tools(mcp: FastMCP, engine: CodeSearchEngine, settings: Settings) -> None:
    @mcp.tool(name="search_code", annotations={"title": "Search Code", "readOnlyHint": True})
    async def search_code(
        query: Annotated[str, "Search query to find in code"],
        directory: Annotated[str | None, "Directory to search in (defaults to the working directory)"] = None,
        extensions: Annotated[list[str] | None, "File extensions to index (e.g. ['.ts', '.py'])"] = None,
        top: Annotated[int | None, "Number of results to return (default: 10)"] = None,
        ctx: Context | None = None,
    ) -> SearchCodeResponse:
        """Find the files most relevant to a query.

        When a directory is given it is fully re-indexed before searching, so
        results always reflect the files on disk. Without a directory the
        server's working directory is searched, indexing it on first use.

        Returns:
            {
                "query": "email service",
                "directory": "/work/app",
                "files": ["/work/app/src/EmailService.ts", ...],
                "results": [{"file": "...", "score": 0.42, "rank": 1}, ...],
                "total_results": 2,
                "error": null
            }
        """
        tool_name = "search_code"
        resolved_directory = str(Path(directory).resolve()) if directory else os.getcwd()
        limit = top if top and top > 0 else settings.default_top
        with (
            track_latency(REQUEST_LATENCY, tool=tool_name),
            create_span(
                "mcp.tool.search_code",
                kind=SpanKind.INTERNAL,
                attributes={
                    "search.query": query[:100],
                    "search.directory": resolved_directory,
                    "mcp.tool.name": tool_name,
                },
            ) as span,
        ):
            logger.info("search_code called - query='%s', directory=%s", query[:50], resolved_directory)
            try:
                if directory:
                    engine.create_index(resolved_directory, extensions or None)
                results = engine.search(query, resolved_directory)
            except CodeFerretError as exc:
                span.set_attribute("error", True)
                logger.warning("search_code failed for %s: %s", resolved_directory, exc)
                REQUEST_COUNT.labels(tool=tool_name, status="error").inc()
                return SearchCodeResponse(query=query, directory=resolved_directory, error=str(exc))

            top_results = results[:limit]
            span.set_attribute("search.result_count", len(results))
            logger.info("search_code completed - results=%d", len(results))
            if ctx is not None:
                await ctx.info(f"Found {len(results)} results for query \"{query}\"")
            REQUEST_COUNT.labels(tool=tool_name, status="ok").inc()
            return SearchCodeResponse(
                query=query,
                directory=resolved_directory,
                files=[result.file for result in top_results],
                results=[
                    RankedFile(file=result.file, score=result.similarity_score, rank=result.rank)
                    for result in top_results
                ],
                total_results=len(results),
            )

    @mcp.tool(name="index_directory", annotations={"title": "Index Directory"})
    async def index_directory(
        directory: Annotated[str, "Directory to index"],
        extensions: Annotated[list[str] | None, "File extensions to include (e.g. ['.ts', '.py'])"] = None,
        ctx: Context | None = None,
    ) -> IndexDirectoryResponse:
        """Build a fresh keyword index for a directory, replacing any previous one."""
        tool_name = "index_directory"
        resolved_directory = str(Path(directory).resolve())
        with (
            track_latency(REQUEST_LATENCY, tool=tool_name),
            create_span(
                "mcp.tool.index_directory",
                kind=SpanKind.INTERNAL,
                attributes={"index.directory": resolved_directory, "mcp.tool.name": tool_name},
            ) as span,
        ):
            try:
                result = engine.create_index(resolved_directory, extensions or None)
            except CodeFerretError as exc:
                span.set_attribute("error", True)
                logger.warning("index_directory failed for %s: %s", resolved_directory, exc)
                REQUEST_COUNT.labels(tool=tool_name, status="error").inc()
                return IndexDirectoryResponse(directory=resolved_directory, error=str(exc))

            span.set_attribute("index.files_indexed", result.files_indexed)
            if ctx is not None:
                await ctx.info(f"Indexed {result.files_indexed} files in {result.directory}")
            REQUEST_COUNT.labels(tool=tool_name, status="ok").inc()
            return IndexDirectoryResponse(
                directory=result.directory,
                extensions=list(result.extensions),
                files_indexed=result.files_indexed,
                files_skipped=result.files_skipped,
                errors=list(result.errors),
            )

    @mcp.tool(name="code_info", annotations={"title": "Summarize File", "readOnlyHint": True})
    async def code_info(
        file: Annotated[str, "Path of the source file to summarize"],
        ctx: Context | None = None,
    ) -> CodeInfoResponse:
        """Summarize a source file: imports, definitions, service classes and topic hints."""
        tool_name = "code_info"
        with (
            track_latency(REQUEST_LATENCY, tool=tool_name),
            create_span("mcp.tool.code_info", kind=SpanKind.INTERNAL, attributes={"mcp.tool.name": tool_name}),
        ):
            try:
                info = load_code_info(file)
            except CodeFerretError as exc:
                REQUEST_COUNT.labels(tool=tool_name, status="error").inc()
                return CodeInfoResponse(file=file, error=str(exc))

            REQUEST_COUNT.labels(tool=tool_name, status="ok").inc()
            return CodeInfoResponse(file=file, info=info)


def run_server(settings: Settings | None = None) -> None:
    """Run the MCP server on the stdio transport until the client disconnects."""
    settings = settings or Settings()
    configure_logging(settings.log_level, settings.log_json)
    configure_trace_exporter(settings.trace_console, init_tracing(settings.mcp_server_name))

    logger.info("Starting code-ferret MCP server")
    logger.info("Current working directory: %s", os.getcwd())
    mcp = create_server(settings=settings)
    mcp.run()


if __name__ == "__main__":
    run_server()
