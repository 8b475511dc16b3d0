"""Snippet extraction for search result previews.

Snippets are for display only and never influence ranking.
"""

from __future__ import annotations


ELLIPSIS_MARKER = "..."


def truncate_snippet(text: str, max_chars: int = 80, marker: str = ELLIPSIS_MARKER) -> str:
    """Return the first ``max_chars`` characters of ``text``.

    Args:
        text: The field text to preview.
        max_chars: Display bound, not counting the marker.
        marker: Appended when the text was cut.

    Returns:
        A string no longer than ``max_chars + len(marker)``.
    """
    if max_chars < 1:
        raise ValueError(f"max_chars must be >= 1, got {max_chars}")
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + marker
