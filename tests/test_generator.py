"""Tests for seqflow.generator — message line rendering and source editing."""

import pytest

from seqflow.generator import (
    delete_message_from_source,
    generate_message_line,
    insert_message_in_source,
    is_message_line,
    update_message_in_source,
)
from seqflow.parsers import parse
from seqflow.syntax.types import Annotations, Arrow, Message, Payload
from seqflow.types import ArrowHead, LineStyle


def make_message(text="Request", arrow=("solid", "filled"), **annotations) -> Message:
    return Message(
        source="Client",
        target="API",
        arrow=Arrow(LineStyle(arrow[0]), ArrowHead(arrow[1])),
        text=text,
        annotations=Annotations(**annotations),
    )


SOURCE = """sequenceDiagram
    participant Client
    participant API
    Client->>API: one
    API-->>Client: two
    %% Client->>API: commented out
    Client->>API: three"""


class TestGenerateMessageLine:
    def test_plain(self):
        assert generate_message_line(make_message()) == "Client->>API: Request"

    def test_arrow_variants(self):
        assert generate_message_line(make_message(arrow=("dashed", "open"))) == "Client-->API: Request"
        assert generate_message_line(make_message(arrow=("solid", "open"))) == "Client->API: Request"
        assert generate_message_line(make_message(arrow=("dashed", "filled"))) == "Client-->>API: Request"

    def test_path_with_method(self):
        line = generate_message_line(make_message(path="/users", method="GET"))
        assert line == "Client->>API: Request @path(GET /users)"

    def test_flow_annotation(self):
        line = generate_message_line(make_message(flows=["happy_path"]))
        assert line == "Client->>API: Request @flow(happy_path)"

    def test_multiple_flows(self):
        line = generate_message_line(make_message(flows=["happy_path", "error_flow"]))
        assert line == "Client->>API: Request @flow(happy_path, error_flow)"

    def test_sync_is_not_written(self):
        assert "@" not in generate_message_line(make_message(is_async=False))

    def test_all_annotations_in_order(self):
        line = generate_message_line(
            make_message(
                path="/orders",
                method="POST",
                request_type="JSON",
                is_async=True,
                timeout="5s",
                queue="orders",
                flows=["a"],
                request=Payload.inline("id: {v: int}"),
                response=Payload.reference("#Created"),
            )
        )
        assert line == (
            "Client->>API: Request @path(POST /orders) @type(JSON) @async @timeout(5s) "
            "@queue(orders) @flow(a) @request{id: {v: int}} @response{#Created}"
        )

    def test_round_trip_annotations(self):
        original = make_message(
            path="/orders/{id}",
            method="DELETE",
            request_type="GRPC",
            is_async=True,
            flows=["happy_path", "error_flow"],
            request=Payload.reference("https://schemas.example.com/order"),
            response=Payload.inline("user: {name: string}"),
        )
        once = parse(generate_message_line(original)).messages[0]
        twice = parse(generate_message_line(once)).messages[0]
        assert once.annotations == original.annotations
        assert twice.annotations == once.annotations
        assert twice.annotations.flows == ["happy_path", "error_flow"]

    def test_empty_payload_is_written(self):
        line = generate_message_line(make_message(request=Payload.inline("")))
        assert line == "Client->>API: Request @request{}"

    def test_unbalanced_braces_use_parentheses(self):
        line = generate_message_line(make_message(request=Payload.inline("a}")))
        assert line == "Client->>API: Request @request(a})"

    @pytest.mark.parametrize("source", ["A->>B: x @request{}", "A->>B: x @request(a})", "A->>B: x @queue(q)) @flow(f)"])
    def test_round_trip_awkward_values(self, source):
        once = parse(source).messages[0]
        again = parse(generate_message_line(once)).messages[0]
        assert again.annotations == once.annotations


def test_is_message_line():
    assert is_message_line("A->>B: hi")
    assert is_message_line("A-->B")
    assert not is_message_line("")
    assert not is_message_line("%% A->>B")
    assert not is_message_line("// A->>B")
    assert not is_message_line("participant A")
    assert not is_message_line("title A->>B")
    assert not is_message_line("just text")


class TestUpdate:
    def test_replaces_nth_message_keeping_indent(self):
        updated = update_message_in_source(SOURCE, 1, make_message(text="changed"))
        lines = updated.split("\n")
        assert lines[4] == "    Client->>API: changed"
        assert [m.text for m in parse(updated).messages] == ["one", "changed", "three"]

    def test_skips_commented_lines(self):
        updated = update_message_in_source(SOURCE, 2, make_message(text="last"))
        assert updated.split("\n")[-1] == "    Client->>API: last"

    def test_out_of_range_is_unchanged(self):
        assert update_message_in_source(SOURCE, 9, make_message()) == SOURCE


class TestInsert:
    def test_insert_at_index(self):
        updated = insert_message_in_source(SOURCE, 0, make_message(text="zero"))
        assert [m.text for m in parse(updated).messages] == ["zero", "one", "two", "three"]
        assert updated.split("\n")[3] == "    Client->>API: zero"

    def test_insert_past_end_appends_after_last_message(self):
        updated = insert_message_in_source(SOURCE, 10, make_message(text="four"))
        assert [m.text for m in parse(updated).messages] == ["one", "two", "three", "four"]

    def test_insert_after_participants_when_no_messages(self):
        source = "sequenceDiagram\n  participant A\n  participant B\n  %% end"
        updated = insert_message_in_source(source, 0, make_message(text="first"))
        assert updated.split("\n")[3] == "  Client->>API: first"

    def test_insert_after_header_when_empty(self):
        updated = insert_message_in_source("title T\nsequenceDiagram\n", 0, make_message(text="x"))
        assert updated.split("\n")[2] == "    Client->>API: x"

    def test_insert_into_blank_source(self):
        updated = insert_message_in_source("", 0, make_message(text="x"))
        assert updated == "\n    Client->>API: x"


class TestDelete:
    def test_delete_middle(self):
        updated = delete_message_from_source(SOURCE, 1)
        assert [m.text for m in parse(updated).messages] == ["one", "three"]

    def test_out_of_range_is_unchanged(self):
        assert delete_message_from_source(SOURCE, -1) == SOURCE
        assert delete_message_from_source(SOURCE, 3) == SOURCE
