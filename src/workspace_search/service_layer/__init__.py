"""Service layer - search session orchestration."""

from .search_service import EmptyQueryError, SearchService


__all__ = [
    "EmptyQueryError",
    "SearchService",
]
