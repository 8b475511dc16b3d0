"""Unit tests for the search service layer."""

from prometheus_client import REGISTRY
import pytest

from workspace_search.config import Settings
from workspace_search.search.models import RawDocument
from workspace_search.search.options import SearchField, SearchOptions
from workspace_search.service_layer.search_service import EmptyQueryError, SearchService


class CountingSource:
    """Re-iterable document source that records how often it was read."""

    def __init__(self, documents):
        self.documents = list(documents)
        self.reads = 0

    def __iter__(self):
        self.reads += 1
        return iter(self.documents)


def _counter_value(outcome: str) -> float:
    return REGISTRY.get_sample_value("search_requests_total", {"outcome": outcome}) or 0.0


@pytest.fixture
def source(scenario_documents):
    return CountingSource(scenario_documents)


@pytest.mark.unit
class TestSearchService:
    def test_snapshot_is_built_lazily_and_cached(self, source):
        service = SearchService(source)

        assert not service.has_snapshot
        service.search("index file")
        service.search("hello world")

        assert service.has_snapshot
        assert source.reads == 1

    def test_refresh_rebuilds_snapshot(self, source):
        service = SearchService(source)
        first = service.snapshot

        source.documents.append(RawDocument("c", "notes.txt", "fresh notes about indexing files"))
        second = service.refresh()

        assert second is not first
        assert len(first) == 2
        assert len(second) == 3
        assert source.reads == 2

    @pytest.mark.parametrize("query", ["", "   "])
    def test_blank_query_is_rejected_at_boundary(self, source, query):
        service = SearchService(source)
        before = _counter_value("rejected")

        with pytest.raises(EmptyQueryError, match="Search query is required."):
            service.search(query)

        assert _counter_value("rejected") == before + 1
        assert not service.has_snapshot

    def test_search_returns_ranked_results(self, source):
        results = SearchService(source).search("index file")

        assert results[0].document_id == "b"

    def test_per_call_options_override_session_options(self, source):
        service = SearchService(source, SearchOptions(threshold=0.0))

        assert service.search("index file") == []
        relaxed = service.search("index file", SearchOptions(threshold=0.95))
        assert relaxed

    def test_empty_result_is_counted(self, source):
        service = SearchService(source, SearchOptions(threshold=0.05))
        before = _counter_value("empty")

        assert service.search("qqqqzzzz") == []
        assert _counter_value("empty") == before + 1

    def test_index_bounds_are_passed_to_indexer(self):
        documents = [RawDocument("long", "long.md", "abcdefghij" * 10)]
        service = SearchService(documents, content_prefix_length=20, min_content_length=5)

        assert service.snapshot.documents[0].field_text("content") == "abcdefghij" * 2

    def test_from_settings_wires_file_source(self, workspace):
        settings = Settings(search_content_weight=1.0, search_name_weight=0.0)  # type: ignore[call-arg]

        service = SearchService.from_settings(settings, workspace)
        results = service.search("indexFile")

        assert results[0].display_name == "index.ts"
        assert results[0].score == 1.0
        # empty.md is below the minimum length, node_modules is excluded
        assert {doc.display_name for doc in service.snapshot} == {"README.md", "notes.txt", "index.ts", "parser.js"}
        assert service.options.field_weights[SearchField.NAME] == 0.0
