"""Domain models for search functionality.

Following Cosmic Python principles:
- Value Objects are immutable (frozen=True)
- No infrastructure dependencies

``SearchResult`` serializes its score as ``similarityScore`` so that JSON
emitted by the CLI and the MCP server keeps the field names tool clients
already consume.
"""

from pydantic import BaseModel, ConfigDict, Field


class SearchResult(BaseModel):
    """Value object for one ranked file in a search response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file: str = Field(description="Absolute path of the matched file")
    code: str = Field(description="Full raw text of the matched file")
    similarity_score: float = Field(alias="similarityScore", gt=0.0, description="Keyword relevance score")
    rank: int = Field(ge=1, description="1-based rank by descending score")


class CodeInfo(BaseModel):
    """Value object summarizing what a source file appears to do.

    Built from line-level heuristics, so it is a hint for tool clients rather
    than a parse of the file.
    """

    model_config = ConfigDict(frozen=True)

    file: str
    imports: list[str] = Field(default_factory=list)
    definitions: list[str] = Field(default_factory=list)
    services: list[str] = Field(default_factory=list)
    storage_related: bool = False
    api_related: bool = False
    auth_related: bool = False
