"""Approximate matching and ranking over a snapshot.

Scoring model
-------------
Each positively weighted field gets a distance in [0, 1] from
:func:`~workspace_search.search.fuzzy.field_distance`. A field counts as a
match when its distance is below 1.0 and within the threshold. Matching
fields contribute ``weight * (1 - distance)``; the sum is normalised by the
total weight. The inverse of that combined value is the document distance,
which must also stay within the threshold.

Only the public :class:`MatchResult` carries the higher-is-better score;
everything before that works in distances.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging

from workspace_search.search.analyzers import normalize_text, query_terms
from workspace_search.search.fuzzy import field_distance
from workspace_search.search.models import Document, MatchResult, Snapshot
from workspace_search.search.options import SearchField, SearchOptions
from workspace_search.search.snippet import truncate_snippet


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedQuery:
    """Normalised query text plus its terms."""

    text: str
    terms: tuple[str, ...]

    @classmethod
    def from_raw(cls, query: str) -> PreparedQuery:
        text = normalize_text(query)
        return cls(text=text, terms=tuple(query_terms(text)))

    @property
    def is_empty(self) -> bool:
        return not self.text


def document_distance(document: Document, query: PreparedQuery, options: SearchOptions) -> float | None:
    """Combined distance of ``document`` to ``query``.

    Returns:
        Distance in [0, 1], or ``None`` when the document does not match
        (no field within the threshold, or combined distance too large).
    """
    weighted_similarity = 0.0
    matched = False

    for search_field, weight in options.active_weights():
        distance = field_distance(query.text, query.terms, document.normalized.get(search_field.value, ""))
        if distance < 1.0 and distance <= options.threshold:
            matched = True
            weighted_similarity += weight * (1.0 - distance)

    if not matched:
        return None

    distance = 1.0 - weighted_similarity / options.total_weight
    # Guard float noise so an exact match on every weighted field yields 0.0
    distance = min(1.0, max(0.0, round(distance, 12)))
    if distance > options.threshold:
        return None
    return distance


def _to_result(document: Document, distance: float, options: SearchOptions) -> MatchResult:
    content = document.field_text(SearchField.CONTENT.value)
    return MatchResult(
        document_id=document.id,
        display_name=document.display_name,
        snippet=truncate_snippet(content, options.snippet_length),
        score=1.0 - distance,
    )


def search(snapshot: Snapshot, query: str, options: SearchOptions | None = None) -> list[MatchResult]:
    """Rank the documents of ``snapshot`` against ``query``.

    Args:
        snapshot: Immutable corpus to search.
        query: Free-text query; blank queries match nothing.
        options: Field weights, threshold and display bounds.

    Returns:
        Results sorted by score descending. Ties keep snapshot order.
    """
    options = options or SearchOptions()
    prepared = PreparedQuery.from_raw(query)
    if prepared.is_empty or snapshot.is_empty:
        return []

    scored: list[tuple[float, Document]] = []
    for document in snapshot:
        distance = document_distance(document, prepared, options)
        if distance is not None:
            scored.append((distance, document))

    # sorted() is stable, so equal distances keep snapshot order
    scored = sorted(scored, key=lambda item: item[0])
    if options.limit is not None:
        scored = scored[: options.limit]

    logger.debug(
        "Query %r matched %d of %d documents (threshold=%.2f)",
        prepared.text,
        len(scored),
        len(snapshot),
        options.threshold,
    )
    return [_to_result(document, distance, options) for distance, document in scored]
