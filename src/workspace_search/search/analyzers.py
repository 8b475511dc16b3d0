"""Analyzer utilities for query and field normalisation.

Matching is case-insensitive and whitespace-insensitive at the edges, so
both the query and every field value go through :func:`normalize_text`
before distances are computed. Query terms are produced by a small
composable tokenizer/filter pipeline.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
import re


_WHITESPACE_PATTERN = re.compile(r"\s+")


@dataclass(frozen=True)
class Token:
    """Represents a token emitted by analyzers."""

    text: str
    position: int
    start_char: int
    end_char: int


class RegexTokenizer:
    """Regex-based tokenizer that yields word tokens."""

    def __init__(self, pattern: str = r"[\w']+", flags: int = re.UNICODE | re.MULTILINE) -> None:
        self.pattern = re.compile(pattern, flags)

    def __call__(self, text: str) -> Iterator[Token]:
        for position, match in enumerate(self.pattern.finditer(text)):
            yield Token(
                text=match.group(0),
                position=position,
                start_char=match.start(),
                end_char=match.end(),
            )


class CaseFoldFilter:
    """Filter that case-folds token text."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            folded = token.text.casefold()
            if folded == token.text:
                yield token
            else:
                yield Token(folded, token.position, token.start_char, token.end_char)


class UniqueFilter:
    """Drop repeated terms, keeping the first occurrence."""

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        seen: set[str] = set()
        for token in tokens:
            if token.text in seen:
                continue
            seen.add(token.text)
            yield token


class QueryAnalyzer:
    """Tokenizer followed by a chain of filters."""

    def __init__(self, tokenizer: RegexTokenizer | None = None, filters: Iterable | None = None) -> None:
        self.tokenizer = tokenizer or RegexTokenizer()
        self.filters = list(filters) if filters is not None else [CaseFoldFilter(), UniqueFilter()]

    def __call__(self, text: str) -> list[Token]:
        tokens: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            tokens = token_filter(tokens)
        return list(tokens)


_DEFAULT_ANALYZER = QueryAnalyzer()


def normalize_text(text: str) -> str:
    """Case-fold ``text`` and collapse runs of whitespace."""
    return _WHITESPACE_PATTERN.sub(" ", text).strip().casefold()


def query_terms(query: str, analyzer: QueryAnalyzer | None = None) -> list[str]:
    """Split a query into distinct, case-folded word terms."""
    active = analyzer or _DEFAULT_ANALYZER
    return [token.text for token in active(query)]
