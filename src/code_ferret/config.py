"""Centralized configuration for code-ferret using Pydantic Settings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".py", ".java", ".cpp", ".cs")


class Settings(BaseSettings):
    """Strictly typed configuration loaded from ``CODE_FERRET_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CODE_FERRET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",  # Ignore extra env vars not defined in model
    )

    # Indexing
    default_extensions: str = Field(
        default=",".join(DEFAULT_EXTENSIONS),
        description="Comma-separated file extensions indexed when a caller does not pass any",
    )
    ignore_file_name: str = Field(
        default=".gitignore",
        min_length=1,
        description="Name of the ignore file collected from the indexed directory and its ancestors",
    )

    # Results
    default_top: int = Field(default=10, ge=1, description="Number of results shown by the CLI and MCP tools")

    # Server
    mcp_server_name: str = Field(default="code-ferret", description="Name advertised by the MCP server")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=False, description="Emit structured JSON logs")

    # Tracing
    trace_console: bool = Field(default=False, description="Print finished spans to stderr")

    @field_validator("default_extensions")
    @classmethod
    def _check_extensions(cls, value: str) -> str:
        for extension in (item.strip() for item in value.split(",")):
            if extension and not extension.startswith("."):
                raise ValueError(f"Extension '{extension}' must start with '.' (e.g. '.ts')")
        return value

    def get_default_extensions(self) -> list[str]:
        """Get list of default extensions (comma-separated).

        Returns:
            Extensions in configured order, falling back to the built-in set when empty
        """
        extensions = [item.strip() for item in self.default_extensions.split(",") if item.strip()]
        return extensions or list(DEFAULT_EXTENSIONS)
