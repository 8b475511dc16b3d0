"""Approximate matching for typo-tolerant search.

This module measures how far a query is from appearing *somewhere* inside
a field's text. The distance is a semi-global edit distance: the minimum
number of single-character edits that turn the query into any substring
of the text. Where the match sits in the text does not change the result.

Smart Defaults (no per-call config needed):
- Exact containment short-circuits to distance 0
- Distances are normalised by the pattern length and capped at 1.0
- Multi-term queries may match their terms out of order
"""

from __future__ import annotations

from collections.abc import Sequence


def _pattern_masks(pattern: str) -> dict[str, int]:
    masks: dict[str, int] = {}
    for index, char in enumerate(pattern):
        masks[char] = masks.get(char, 0) | (1 << index)
    return masks


def substring_edit_distance(pattern: str, text: str, max_distance: int | None = None) -> int:
    """Calculate the best edit distance of ``pattern`` against any substring of ``text``.

    Uses Myers' bit-parallel algorithm with Python integers as bit vectors,
    so patterns of any length are supported in O(len(text) * len(pattern) / w)
    word operations.

    Args:
        pattern: The string to look for (usually the query or a query term).
        text: The text to search in.
        max_distance: If provided, return max_distance+1 when the best
            alignment needs more edits than this.

    Returns:
        The minimum number of insertions, deletions and substitutions
        needed to turn ``pattern`` into some substring of ``text``.

    Examples:
        >>> substring_edit_distance("index", "export function indexfile")
        0
        >>> substring_edit_distance("fiel", "export function indexfile")
        1
        >>> substring_edit_distance("abc", "")
        3
    """
    m = len(pattern)
    if m == 0:
        return 0
    if not text:
        best = m
    elif pattern in text:
        best = 0
    else:
        masks = _pattern_masks(pattern)
        all_ones = (1 << m) - 1
        high_bit = 1 << (m - 1)
        positive = all_ones
        negative = 0
        score = m
        best = m

        for char in text:
            eq = masks.get(char, 0)
            xv = eq | negative
            xh = (((eq & positive) + positive) ^ positive) | eq
            horizontal_pos = negative | ~(xh | positive)
            horizontal_neg = positive & xh

            if horizontal_pos & high_bit:
                score += 1
            elif horizontal_neg & high_bit:
                score -= 1

            # Free start anywhere in the text: nothing is shifted into bit 0
            horizontal_pos = (horizontal_pos << 1) & all_ones
            horizontal_neg = (horizontal_neg << 1) & all_ones
            positive = (horizontal_neg | ~(xv | horizontal_pos)) & all_ones
            negative = horizontal_pos & xv

            if score < best:
                best = score
                if best == 0:
                    break

    if max_distance is not None and best > max_distance:
        return max_distance + 1
    return best


def normalized_distance(pattern: str, text: str) -> float:
    """Edit distance of ``pattern`` within ``text`` scaled to [0, 1].

    0.0 means ``pattern`` occurs verbatim in ``text``; 1.0 means no
    character of the pattern could be aligned.
    """
    if not pattern:
        return 0.0
    edits = substring_edit_distance(pattern, text, max_distance=len(pattern))
    return min(1.0, edits / len(pattern))


def field_distance(query: str, terms: Sequence[str], text: str) -> float:
    """Distance between a normalised query and a normalised field value.

    The whole query is matched as one phrase. When it has several terms,
    each term is also matched on its own and the length-weighted mean of
    the term distances is used if it is better, so ``"file index"`` still
    finds ``"indexFile"``.

    Args:
        query: Case-folded query string.
        terms: Case-folded query terms.
        text: Case-folded field text.

    Returns:
        Distance in [0, 1], lower is better.
    """
    if not query:
        return 1.0
    if not text:
        return 1.0

    best = normalized_distance(query, text)
    if best == 0.0 or len(terms) < 2:
        return best

    total_length = sum(len(term) for term in terms)
    if total_length == 0:
        return best

    term_distance = sum(normalized_distance(term, text) * len(term) for term in terms) / total_length
    return min(best, term_distance)
