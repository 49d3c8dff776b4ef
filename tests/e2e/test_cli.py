"""End-to-end tests for the seqflow command line."""

import json

from click.testing import CliRunner

from seqflow.__main__ import main

SOURCE = """sequenceDiagram
    title Checkout
    participant FE as Frontend
    FE->>API: Create order @path(POST /orders) @flow(happy)
"""


def test_ast_from_stdin():
    result = CliRunner().invoke(main, [], input=SOURCE)
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["title"] == "Checkout"
    assert [p["id"] for p in data["participants"]] == ["FE", "API"]
    assert data["messages"][0]["annotations"]["method"] == "POST"
    assert data["messages"][0]["arrow"] == {"line": "solid", "head": "filled"}


def test_ast_from_file(tmp_path):
    src = tmp_path / "diagram.seq"
    src.write_text(SOURCE, encoding="utf-8")
    result = CliRunner().invoke(main, [str(src)])
    assert result.exit_code == 0
    assert json.loads(result.output)["messages"][0]["text"] == "Create order"


def test_tokens_mode():
    result = CliRunner().invoke(main, ["--tokens", "--indent", "0"], input="A->>B @sync")
    assert result.exit_code == 0
    assert json.loads(result.output) == [
        {"type": "IDENTIFIER", "value": "A"},
        {"type": "ARROW", "value": "->>"},
        {"type": "IDENTIFIER", "value": "B"},
        {"type": "ANNOTATION", "name": "sync", "value": None},
    ]


def test_spans_mode():
    result = CliRunner().invoke(main, ["--spans"], input="A->>B")
    assert result.exit_code == 0
    spans = json.loads(result.output)
    assert spans[1] == {"type": "ARROW", "text": "->>", "start": 1, "end": 4}


def test_output_file(tmp_path):
    out = tmp_path / "ast.json"
    result = CliRunner().invoke(main, ["-o", str(out)], input="A->>B: hi")
    assert result.exit_code == 0
    assert result.output == ""
    assert json.loads(out.read_text(encoding="utf-8"))["messages"][0]["text"] == "hi"


def test_parse_error_exits_nonzero():
    result = CliRunner().invoke(main, [], input="sequenceDiagram\nparticipant\n")
    assert result.exit_code == 1
    assert "participant identifier" in result.output


def test_missing_input_file():
    result = CliRunner().invoke(main, ["does-not-exist.seq"])
    assert result.exit_code != 0
