"""Centralized configuration for workspace-search using Pydantic Settings."""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from workspace_search.search.options import (
    DEFAULT_SNIPPET_LENGTH,
    DEFAULT_THRESHOLD,
    SearchField,
    SearchOptions,
)


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Values are validated at startup; out-of-range values raise
    ``pydantic.ValidationError`` rather than being clamped.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Matching
    search_threshold: float = Field(
        default=DEFAULT_THRESHOLD,
        ge=0.0,
        le=1.0,
        description="Maximum tolerated distance between query and document (0 = exact only)",
    )
    search_name_weight: float = Field(default=0.5, ge=0.0, description="Weight of the file name field")
    search_content_weight: float = Field(default=0.5, ge=0.0, description="Weight of the file content field")
    search_result_limit: int | None = Field(default=None, ge=1, description="Maximum results per query")
    snippet_length: int = Field(default=DEFAULT_SNIPPET_LENGTH, ge=1, description="Snippet display bound")

    # Indexing
    index_content_prefix_length: int = Field(
        default=1000, ge=1, description="Leading characters of each file kept for matching"
    )
    index_min_content_length: int = Field(
        default=10, ge=0, description="Files with less stripped content are not indexed"
    )
    index_max_documents: int = Field(default=300, ge=1, description="Maximum files enumerated per snapshot")
    index_include_extensions: str = Field(
        default="js,ts,jsx,tsx,md,txt", description="Comma-separated file extensions to index"
    )
    index_exclude_dirs: str = Field(
        default="node_modules,.git,.hg,.svn", description="Comma-separated directory names to skip"
    )

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=False, description="Emit structured JSON logs")

    # Tracing
    trace_console: bool = Field(default=False, description="Print finished spans to stderr")

    @model_validator(mode="after")
    def _check_weights(self) -> "Settings":
        if self.search_name_weight == 0 and self.search_content_weight == 0:
            raise ValueError(
                "At least one of SEARCH_NAME_WEIGHT or SEARCH_CONTENT_WEIGHT must be greater than zero."
            )
        return self

    def get_include_extensions(self) -> list[str]:
        """Get list of file extensions to index."""
        return [ext.strip() for ext in self.index_include_extensions.split(",") if ext.strip()]

    def get_exclude_dirs(self) -> list[str]:
        """Get list of directory names excluded from enumeration."""
        return [name.strip() for name in self.index_exclude_dirs.split(",") if name.strip()]

    def to_search_options(self) -> SearchOptions:
        """Build validated matcher options from these settings."""
        return SearchOptions(
            field_weights={
                SearchField.NAME: self.search_name_weight,
                SearchField.CONTENT: self.search_content_weight,
            },
            threshold=self.search_threshold,
            snippet_length=self.snippet_length,
            limit=self.search_result_limit,
        )
