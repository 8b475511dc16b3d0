"""Filesystem enumeration of searchable workspace files.

This is the I/O side of indexing: it decides which files qualify, reads
them, and hands ``RawDocument`` triples to the pure indexer.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import logging
from pathlib import Path

from workspace_search.search.models import RawDocument


logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = ("js", "ts", "jsx", "tsx", "md", "txt")
DEFAULT_EXCLUDE_DIRS: tuple[str, ...] = ("node_modules", ".git", ".hg", ".svn")
DEFAULT_MAX_DOCUMENTS = 300


def _normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    return frozenset("." + ext.strip().lstrip(".").lower() for ext in extensions if ext.strip().lstrip("."))


class WorkspaceFileSource:
    """Enumerate and read text files below a workspace root."""

    def __init__(
        self,
        root: Path | str,
        *,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
        exclude_dirs: Iterable[str] = DEFAULT_EXCLUDE_DIRS,
        max_documents: int | None = DEFAULT_MAX_DOCUMENTS,
    ) -> None:
        self.root = Path(root)
        if not self.root.is_dir():
            raise NotADirectoryError(f"Workspace root is not a directory: {self.root}")
        if max_documents is not None and max_documents < 1:
            raise ValueError(f"max_documents must be >= 1, got {max_documents}")
        self.extensions = _normalize_extensions(extensions)
        self.exclude_dirs = frozenset(exclude_dirs)
        self.max_documents = max_documents

    def _is_excluded(self, path: Path) -> bool:
        relative_parts = path.relative_to(self.root).parts[:-1]
        return any(part in self.exclude_dirs for part in relative_parts)

    def discover(self) -> Iterator[Path]:
        """Yield qualifying files in sorted order, up to ``max_documents``."""
        found = 0
        for path in sorted(self.root.rglob("*")):
            if self.max_documents is not None and found >= self.max_documents:
                logger.debug("Reached document cap of %d under %s", self.max_documents, self.root)
                return
            if path.suffix.lower() not in self.extensions:
                continue
            if self._is_excluded(path) or not path.is_file():
                continue
            found += 1
            yield path

    def iter_documents(self) -> Iterator[RawDocument]:
        """Read each discovered file, skipping the ones that cannot be read."""
        for path in self.discover():
            try:
                text = path.read_text(encoding="utf-8", errors="replace")
            except OSError as exc:
                logger.error("Error reading file %s: %s", path, exc)
                continue
            yield RawDocument(id=str(path), display_name=path.name, text=text)

    def __iter__(self) -> Iterator[RawDocument]:
        return self.iter_documents()
