"""Pydantic models for type-safe MCP tool responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from code_ferret.domain.search import CodeInfo


# ============================================================================
# MCP Tool Response Models (Pydantic BaseModel for FastMCP validation)
# ============================================================================


class RankedFile(BaseModel):
    """One ranked file in a search_code response, without its content."""

    file: str = Field(description="Absolute path of the matched file")
    score: float = Field(description="Keyword relevance score (higher is better, unbounded)")
    rank: int = Field(ge=1, description="1-based rank")


class SearchCodeResponse(BaseModel):
    """Response model for the search_code MCP tool.

    Example Success Response:
        {
            "query": "email service",
            "directory": "/work/app",
            "files": ["/work/app/src/EmailService.ts", "/work/app/src/UserManagement.ts"],
            "results": [{"file": "/work/app/src/EmailService.ts", "score": 0.42, "rank": 1}, ...],
            "total_results": 2,
            "error": None
        }

    Example Error Response:
        {
            "query": "email service",
            "directory": "/work/empty",
            "files": [],
            "results": [],
            "total_results": 0,
            "error": "No files indexed for directory /work/empty. Please index the directory first."
        }
    """

    query: str = Field(description="Original query")
    directory: str = Field(description="Directory that was searched")
    files: list[str] = Field(default_factory=list, description="Ranked file paths (empty on error, never null)")
    results: list[RankedFile] = Field(default_factory=list, description="Ranked files with scores")
    total_results: int = Field(default=0, ge=0, description="Number of files scoring above zero before truncation")
    error: str | None = Field(default=None, description="Error message if search failed (None on success)")


class IndexDirectoryResponse(BaseModel):
    """Response model for the index_directory MCP tool."""

    directory: str = Field(description="Normalized directory key that was indexed")
    extensions: list[str] = Field(default_factory=list, description="Extensions used for the build")
    files_indexed: int = Field(default=0, ge=0)
    files_skipped: int = Field(default=0, ge=0)
    errors: list[str] = Field(default_factory=list, description="Per-file read errors (non-fatal)")
    error: str | None = Field(default=None, description="Error message if the build failed")


class CodeInfoResponse(BaseModel):
    """Response model for the code_info MCP tool."""

    file: str
    info: CodeInfo | None = None
    error: str | None = Field(default=None, description="Error message if the file could not be read")
