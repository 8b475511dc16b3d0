"""In-memory snapshot builder.

The indexer turns raw ``(id, display_name, text)`` triples into a
:class:`~workspace_search.search.models.Snapshot`. It never touches the
filesystem; enumeration and reading belong to the caller. Malformed
entries are skipped so that one bad file cannot fail the whole build.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
from pathlib import PurePath
from typing import Any

from workspace_search.search.models import Document, RawDocument, Snapshot
from workspace_search.search.options import SearchField


logger = logging.getLogger(__name__)

DEFAULT_CONTENT_PREFIX_LENGTH = 1000
DEFAULT_MIN_CONTENT_LENGTH = 10


class DocumentLoadError(ValueError):
    """Raised when an inbound document cannot be normalised."""


def _coerce_raw_document(item: Any) -> RawDocument:
    if isinstance(item, RawDocument):
        raw = item
    elif isinstance(item, (str, bytes)):
        raise DocumentLoadError("expected (id, display_name, text), got a bare string")
    else:
        try:
            doc_id, display_name, text = item
        except (TypeError, ValueError) as exc:
            raise DocumentLoadError(f"expected (id, display_name, text), got {type(item).__name__}") from exc
        raw = RawDocument(doc_id, display_name, text)

    if not isinstance(raw.id, str) or not raw.id.strip():
        raise DocumentLoadError("document id must be a non-empty string")

    text = raw.text
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("utf-8", errors="replace")
    if not isinstance(text, str):
        raise DocumentLoadError(f"{raw.id}: text must be str, got {type(text).__name__}")

    display_name = raw.display_name if isinstance(raw.display_name, str) else ""
    if not display_name.strip():
        display_name = PurePath(raw.id).name or raw.id

    return RawDocument(raw.id, display_name, text)


def build_document(raw: RawDocument, *, content_prefix_length: int = DEFAULT_CONTENT_PREFIX_LENGTH) -> Document:
    """Normalise one raw document into the fixed field layout."""
    return Document(
        id=raw.id,
        display_name=raw.display_name,
        fields={
            SearchField.NAME.value: raw.display_name,
            SearchField.CONTENT.value: raw.text[:content_prefix_length],
        },
    )


def build_snapshot(
    documents: Iterable[Any],
    *,
    content_prefix_length: int = DEFAULT_CONTENT_PREFIX_LENGTH,
    min_content_length: int = DEFAULT_MIN_CONTENT_LENGTH,
) -> Snapshot:
    """Build an immutable snapshot from raw document triples.

    Args:
        documents: Iterable of ``(id, display_name, text)`` items.
        content_prefix_length: Number of leading characters of the text kept
            in the content field. Matches beyond this prefix are unreachable.
        min_content_length: Documents whose stripped text is shorter than
            this are treated as noise and left out.

    Returns:
        A new :class:`Snapshot`, ordered as the input.

    Raises:
        ValueError: If the length bounds are out of range.
    """
    if content_prefix_length < 1:
        raise ValueError(f"content_prefix_length must be >= 1, got {content_prefix_length}")
    if min_content_length < 0:
        raise ValueError(f"min_content_length must be >= 0, got {min_content_length}")

    indexed: list[Document] = []
    seen_ids: set[str] = set()
    skipped = 0

    for item in documents:
        try:
            raw = _coerce_raw_document(item)
        except DocumentLoadError as exc:
            logger.debug("Skipping malformed document: %s", exc)
            skipped += 1
            continue

        if raw.id in seen_ids:
            logger.debug("Skipping duplicate document id %s", raw.id)
            skipped += 1
            continue

        if len(raw.text.strip()) < min_content_length:
            logger.debug("Skipping %s: content shorter than %d characters", raw.id, min_content_length)
            skipped += 1
            continue

        seen_ids.add(raw.id)
        indexed.append(build_document(raw, content_prefix_length=content_prefix_length))

    logger.debug("Snapshot built: %d documents indexed, %d skipped", len(indexed), skipped)
    return Snapshot(documents=tuple(indexed), skipped=skipped)
