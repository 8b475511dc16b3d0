"""Unit tests for the command-line front end."""

import io
import json

import pytest

from workspace_search import cli
from workspace_search.search.models import MatchResult


pytestmark = pytest.mark.unit


def _run(argv, monkeypatch=None, stdin=None):
    out = io.StringIO()
    if monkeypatch is not None and stdin is not None:
        monkeypatch.setattr("sys.stdin", io.StringIO(stdin))
    code = cli.main(argv, out=out)
    return code, out.getvalue()


def test_text_output_lists_best_match_first(workspace):
    code, output = _run([str(workspace), "index file"])

    assert code == cli.EXIT_OK
    first_label = output.splitlines()[0]
    assert first_label.startswith("index.ts - export function indexFile()")
    assert f"{workspace / 'src' / 'index.ts'} (Score: " in output


def test_json_output(workspace):
    code, output = _run([str(workspace), "indexFile", "--format", "json", "--content-weight", "1", "--name-weight", "0"])

    payload = json.loads(output)
    assert code == cli.EXIT_OK
    assert payload[0]["display_name"] == "index.ts"
    assert payload[0]["score"] == 1.0
    assert all(payload[i]["score"] >= payload[i + 1]["score"] for i in range(len(payload) - 1))


def test_limit_flag(workspace):
    code, output = _run([str(workspace), "export", "--format", "json", "--limit", "1", "--threshold", "1"])

    assert code == cli.EXIT_OK
    assert len(json.loads(output)) == 1


def test_query_is_prompted_when_missing(workspace, monkeypatch):
    code, output = _run([str(workspace)], monkeypatch, stdin="deployment notes\n")

    assert code == cli.EXIT_OK
    assert output.splitlines()[0].startswith("notes.txt - ")


def test_blank_query_is_rejected(workspace, capsys):
    code, output = _run([str(workspace), "   "])

    assert code == cli.EXIT_NO_QUERY
    assert output == ""
    assert "Search query is required." in capsys.readouterr().err


def test_closed_stdin_counts_as_blank_query(workspace, monkeypatch):
    code, _ = _run([str(workspace)], monkeypatch, stdin="")

    assert code == cli.EXIT_NO_QUERY


def test_no_results_message(workspace):
    code, output = _run([str(workspace), "qqqqzzzz", "--threshold", "0.1"])

    assert code == cli.EXIT_OK
    assert output == "No results found for query: qqqqzzzz\n"


def test_no_results_json_is_empty_list(workspace):
    code, output = _run([str(workspace), "qqqqzzzz", "--threshold", "0.1", "--format", "json"])

    assert code == cli.EXIT_OK
    assert json.loads(output) == []


@pytest.mark.parametrize(
    "flags",
    [
        ["--threshold", "1.5"],
        ["--name-weight", "-1"],
        ["--name-weight", "0", "--content-weight", "0"],
        ["--limit", "0"],
    ],
)
def test_invalid_configuration_exits_with_config_error(workspace, flags):
    code, output = _run([str(workspace), "query", *flags])

    assert code == cli.EXIT_CONFIG_ERROR
    assert output == ""


def test_missing_root_exits_with_config_error(tmp_path):
    code, _ = _run([str(tmp_path / "missing"), "query"])

    assert code == cli.EXIT_CONFIG_ERROR


def test_format_result_flattens_newlines():
    result = MatchResult(document_id="/w/a.md", display_name="a.md", snippet="line one\nline two", score=0.87654)

    assert cli.format_result(result) == "a.md - line one line two\n    /w/a.md (Score: 0.877)"


def test_format_result_keeps_two_line_layout_for_tabs_and_carriage_returns():
    result = MatchResult(document_id="/w/a.md", display_name="a.md", snippet="one\r\ntwo\tthree\rfour", score=0.5)

    label, detail = cli.format_result(result).split("\n")

    assert label == "a.md - one two three four"
    assert detail == "    /w/a.md (Score: 0.500)"


def test_metrics_flag_prints_prometheus_exposition(workspace, capsys):
    code, output = _run([str(workspace), "index file", "--metrics"])

    err = capsys.readouterr().err
    assert code == cli.EXIT_OK
    assert "index.ts" in output
    assert 'search_requests_total{outcome="matched"}' in err
    assert 'index_document_count{state="indexed"} 4.0' in err


def test_metrics_are_not_printed_by_default(workspace, capsys):
    _run([str(workspace), "index file"])

    assert "search_requests_total" not in capsys.readouterr().err


def test_trace_flag_prints_spans(workspace, capsys):
    code, _ = _run([str(workspace), "index file", "--trace"])

    err = capsys.readouterr().err
    assert code == cli.EXIT_OK
    assert '"name": "search.build_snapshot"' in err
    assert '"name": "search.query"' in err


def test_trace_console_setting_enables_span_output(workspace, capsys, monkeypatch):
    monkeypatch.setenv("TRACE_CONSOLE", "true")

    _run([str(workspace), "index file"])

    assert '"name": "search.query"' in capsys.readouterr().err
