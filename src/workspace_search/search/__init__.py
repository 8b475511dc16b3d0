"""
Approximate search engine package.

This package provides a pure-Python lexical search stack:
- models: Document, Snapshot and MatchResult records
- options: Field enumeration and validated search configuration
- analyzers: Query tokenization and text normalisation
- fuzzy: Bit-parallel approximate substring distance
- indexer: Snapshot construction from raw documents
- matcher: Weighted field scoring, threshold filtering and ranking
- snippet: Display snippets for results
"""

from workspace_search.search.indexer import build_snapshot
from workspace_search.search.matcher import search
from workspace_search.search.models import Document, MatchResult, RawDocument, Snapshot
from workspace_search.search.options import SearchField, SearchOptions


__all__ = [
    "Document",
    "MatchResult",
    "RawDocument",
    "SearchField",
    "SearchOptions",
    "Snapshot",
    "build_snapshot",
    "search",
]
