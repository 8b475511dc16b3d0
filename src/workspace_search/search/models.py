"""Search data models."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, NamedTuple

from workspace_search.search.analyzers import normalize_text


class RawDocument(NamedTuple):
    """Inbound document as handed over by a file enumeration collaborator."""

    id: str
    display_name: str
    text: str


@dataclass(frozen=True)
class Document:
    """A normalized corpus entry with a fixed set of searchable fields."""

    id: str
    display_name: str
    fields: Mapping[str, str] = field(default_factory=dict)
    normalized: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.fields:
            raise ValueError(f"Document {self.id!r} must define at least one field")
        for name, value in self.fields.items():
            if not isinstance(value, str):
                raise TypeError(f"Field {name!r} of document {self.id!r} must be a string")
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        # Matching runs against the case-folded form; computed once per build.
        object.__setattr__(
            self,
            "normalized",
            MappingProxyType({name: normalize_text(value) for name, value in self.fields.items()}),
        )

    def field_text(self, name: str) -> str:
        """Return the text stored for ``name`` or an empty string."""
        return self.fields.get(name, "")


@dataclass(frozen=True)
class Snapshot:
    """Immutable, ordered view of an indexed corpus.

    Snapshots are never patched; build a new one when the corpus changes.
    """

    documents: tuple[Document, ...] = ()
    skipped: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "documents", tuple(self.documents))

    def __len__(self) -> int:
        return len(self.documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self.documents)

    @property
    def is_empty(self) -> bool:
        return not self.documents


@dataclass(frozen=True)
class MatchResult:
    """A single ranked hit."""

    document_id: str
    display_name: str
    snippet: str
    score: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "document_id": self.document_id,
            "display_name": self.display_name,
            "snippet": self.snippet,
            "score": self.score,
        }
