"""Search service orchestration layer.

Owns one search session: a lazily built snapshot that is reused across
queries until :meth:`SearchService.refresh` replaces it. Query policy
(blank queries are rejected) is enforced here, at the boundary, rather
than inside the matcher.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
from pathlib import Path

from workspace_search.adapters.workspace_files import WorkspaceFileSource
from workspace_search.config import Settings
from workspace_search.observability.metrics import (
    INDEX_DOC_COUNT,
    SEARCH_LATENCY,
    SEARCH_REQUESTS,
    track_latency,
)
from workspace_search.observability.tracing import create_span
from workspace_search.search.indexer import (
    DEFAULT_CONTENT_PREFIX_LENGTH,
    DEFAULT_MIN_CONTENT_LENGTH,
    build_snapshot,
)
from workspace_search.search.matcher import search
from workspace_search.search.models import MatchResult, RawDocument, Snapshot
from workspace_search.search.options import SearchOptions


logger = logging.getLogger(__name__)


class EmptyQueryError(ValueError):
    """Raised when a caller submits a blank query."""

    def __init__(self) -> None:
        super().__init__("Search query is required.")


class SearchService:
    """High-level search orchestration for one workspace session."""

    def __init__(
        self,
        source: Iterable[RawDocument],
        options: SearchOptions | None = None,
        *,
        content_prefix_length: int = DEFAULT_CONTENT_PREFIX_LENGTH,
        min_content_length: int = DEFAULT_MIN_CONTENT_LENGTH,
    ) -> None:
        """Initialize the service.

        Args:
            source: Re-iterable supplier of raw documents (e.g. a
                :class:`WorkspaceFileSource`); iterated once per snapshot build.
            options: Matcher options; defaults are used when omitted.
            content_prefix_length: Characters of each document kept for matching.
            min_content_length: Minimum stripped length for a document to be indexed.
        """
        self.source = source
        self.options = options or SearchOptions()
        self.content_prefix_length = content_prefix_length
        self.min_content_length = min_content_length
        self._snapshot: Snapshot | None = None

    @classmethod
    def from_settings(cls, settings: Settings, root: Path | str) -> SearchService:
        """Wire a file-backed service from application settings."""
        source = WorkspaceFileSource(
            root,
            extensions=settings.get_include_extensions(),
            exclude_dirs=settings.get_exclude_dirs(),
            max_documents=settings.index_max_documents,
        )
        return cls(
            source,
            settings.to_search_options(),
            content_prefix_length=settings.index_content_prefix_length,
            min_content_length=settings.index_min_content_length,
        )

    @property
    def has_snapshot(self) -> bool:
        return self._snapshot is not None

    @property
    def snapshot(self) -> Snapshot:
        """Current snapshot, built on first access."""
        if self._snapshot is None:
            self._snapshot = self._build()
        return self._snapshot

    def refresh(self) -> Snapshot:
        """Discard the cached snapshot and build a new one."""
        self._snapshot = self._build()
        return self._snapshot

    def _build(self) -> Snapshot:
        with create_span("search.build_snapshot") as span, track_latency(SEARCH_LATENCY, operation="build"):
            snapshot = build_snapshot(
                self.source,
                content_prefix_length=self.content_prefix_length,
                min_content_length=self.min_content_length,
            )
            span.set_attribute("search.documents_indexed", len(snapshot))
            span.set_attribute("search.documents_skipped", snapshot.skipped)

        INDEX_DOC_COUNT.labels(state="indexed").set(len(snapshot))
        INDEX_DOC_COUNT.labels(state="skipped").set(snapshot.skipped)
        logger.info("Indexed %d documents (%d skipped)", len(snapshot), snapshot.skipped)
        return snapshot

    def search(self, raw_query: str, options: SearchOptions | None = None) -> list[MatchResult]:
        """Run a query against the session snapshot.

        Args:
            raw_query: Free-text query from the user.
            options: Per-call override of the session options.

        Returns:
            Ranked results, best first. An empty list is a valid outcome.

        Raises:
            EmptyQueryError: If the query is blank.
        """
        if not raw_query or not raw_query.strip():
            SEARCH_REQUESTS.labels(outcome="rejected").inc()
            raise EmptyQueryError()

        active_options = options or self.options
        snapshot = self.snapshot

        with (
            create_span(
                "search.query",
                attributes={"search.query_length": len(raw_query), "search.threshold": active_options.threshold},
            ) as span,
            track_latency(SEARCH_LATENCY, operation="search"),
        ):
            results = search(snapshot, raw_query, active_options)
            span.set_attribute("search.result_count", len(results))

        SEARCH_REQUESTS.labels(outcome="matched" if results else "empty").inc()
        logger.debug("Search completed: %d results for %d documents", len(results), len(snapshot))
        return results
