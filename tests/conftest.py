"""Shared test fixtures and configuration."""

import logging
import os
from pathlib import Path

import pytest

from workspace_search.observability import tracing
from workspace_search.search.indexer import build_snapshot
from workspace_search.search.models import RawDocument


# Complete test environment that overrides every config value
TEST_ENV = {
    "SEARCH_THRESHOLD": "0.95",
    "SEARCH_NAME_WEIGHT": "0.5",
    "SEARCH_CONTENT_WEIGHT": "0.5",
    "SNIPPET_LENGTH": "80",
    "INDEX_CONTENT_PREFIX_LENGTH": "1000",
    "INDEX_MIN_CONTENT_LENGTH": "10",
    "INDEX_MAX_DOCUMENTS": "300",
    "INDEX_INCLUDE_EXTENSIONS": "js,ts,jsx,tsx,md,txt",
    "INDEX_EXCLUDE_DIRS": "node_modules,.git,.hg,.svn",
    "LOG_LEVEL": "info",
    "LOG_JSON": "false",
    "TRACE_CONSOLE": "false",
}

for key, value in TEST_ENV.items():
    os.environ[key] = value
os.environ.pop("SEARCH_RESULT_LIMIT", None)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Reset config env vars and keep a stray .env file out of Settings."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("SEARCH_RESULT_LIMIT", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def restore_root_logging():
    """configure_logging() replaces root handlers; undo that after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def reset_tracer():
    """cli.main() installs its own tracer; drop it so exporters do not leak between tests."""
    yield
    tracing._tracer_holder["tracer"] = None


@pytest.fixture
def scenario_documents() -> list[RawDocument]:
    """The two-file corpus used throughout the ranking scenarios."""
    return [
        RawDocument("a", "readme.md", "hello world project documentation"),
        RawDocument("b", "index.ts", "export function indexFile() {}"),
    ]


@pytest.fixture
def scenario_snapshot(scenario_documents):
    return build_snapshot(scenario_documents)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A small project tree with qualifying and excluded files."""
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "docs").mkdir()
    (root / "node_modules" / "lib").mkdir(parents=True)
    (root / ".git").mkdir()

    (root / "README.md").write_text("# Project\n\nHello world project documentation.\n", encoding="utf-8")
    (root / "src" / "index.ts").write_text("export function indexFile() { return 42; }\n", encoding="utf-8")
    (root / "src" / "parser.js").write_text("function parseConfig(text) { return JSON.parse(text); }\n")
    (root / "docs" / "notes.txt").write_text("Deployment notes: run the migration before release.\n")
    (root / "docs" / "empty.md").write_text("   \n")
    (root / "src" / "image.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (root / "node_modules" / "lib" / "index.js").write_text("module.exports = function indexFile() {};\n")
    (root / ".git" / "notes.txt").write_text("internal git metadata that should never be indexed\n")
    return root
