"""Adapters layer - I/O collaborators feeding the search engine."""

from .workspace_files import (
    DEFAULT_EXCLUDE_DIRS,
    DEFAULT_EXTENSIONS,
    DEFAULT_MAX_DOCUMENTS,
    WorkspaceFileSource,
)


__all__ = [
    "DEFAULT_EXCLUDE_DIRS",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_MAX_DOCUMENTS",
    "WorkspaceFileSource",
]
