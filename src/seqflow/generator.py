"""Source-text editing helpers.

Editors never mutate a parsed Diagram; they rewrite the source text and
parse again. These helpers render a Message back into a DSL line and
locate, replace, insert or delete the Nth message line of a source.
"""

from __future__ import annotations

import re

from seqflow.syntax.types import Message, Payload
from seqflow.tokenizer import ARROWS
from seqflow.types import PayloadKind

_INDENT_RE = re.compile(r"^(\s*)")
_LINE_KEYWORDS = ("sequenceDiagram", "participant", "actor", "Note", "title", "description")
_DEFAULT_INDENT = "    "
_CLOSERS = {"(": ")", "{": "}"}


def _payload_text(payload: Payload) -> str:
    if payload.kind == PayloadKind.Reference:
        return payload.url or ""
    return payload.schema or ""


def _balances(value: str, opener: str) -> bool:
    """True when the tokenizer's depth-counted scan would read ``value`` back whole."""
    closer = _CLOSERS[opener]
    depth = 0
    for ch in value:
        if ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def _annotation(name: str, value: str, opener: str = "(") -> str:
    # Fall back to the other bracket type when the value's own brackets would end the scan early
    other = "{" if opener == "(" else "("
    if not _balances(value, opener) and _balances(value, other):
        opener = other
    return f"@{name}{opener}{value}{_CLOSERS[opener]}"


def generate_message_line(message: Message) -> str:
    """Render a message as one DSL line, annotations included."""
    parts = [f"{message.source}{message.arrow.literal}{message.target}: {message.text}"]
    ann = message.annotations

    if ann.path:
        parts.append(_annotation("path", f"{ann.method} {ann.path}" if ann.method else ann.path))
    if ann.request_type:
        parts.append(_annotation("type", ann.request_type))
    if ann.is_async:
        parts.append("@async")
    if ann.timeout is not None:
        parts.append(_annotation("timeout", ann.timeout))
    if ann.queue is not None:
        parts.append(_annotation("queue", ann.queue))
    if ann.flows:
        parts.append(_annotation("flow", ", ".join(ann.flows)))
    if ann.request is not None:
        parts.append(_annotation("request", _payload_text(ann.request), "{"))
    if ann.response is not None:
        parts.append(_annotation("response", _payload_text(ann.response), "{"))

    return " ".join(parts)


def is_message_line(line: str) -> bool:
    """True when a (stripped) source line holds a message."""
    if not line or line.startswith(("%%", "//")):
        return False
    if line.startswith(_LINE_KEYWORDS):
        return False
    return any(arrow in line for arrow in ARROWS)


def _indent_of(line: str) -> str:
    return _INDENT_RE.match(line).group(1)


def _message_line_indices(lines: list[str]) -> list[int]:
    return [i for i, line in enumerate(lines) if is_message_line(line.strip())]


def update_message_in_source(source: str, index: int, message: Message) -> str:
    """Replace the ``index``-th message line, keeping its indentation."""
    lines = source.split("\n")
    positions = _message_line_indices(lines)
    if not 0 <= index < len(positions):
        return source
    i = positions[index]
    lines[i] = _indent_of(lines[i]) + generate_message_line(message)
    return "\n".join(lines)


def insert_message_in_source(source: str, index: int, message: Message) -> str:
    """Insert a message so that it becomes the ``index``-th message.

    Past the last message it is appended after it; with no messages it goes
    after the last participant declaration, else after ``sequenceDiagram``,
    else at the end of the text.
    """
    lines = source.split("\n")
    positions = _message_line_indices(lines)
    indent = _DEFAULT_INDENT

    if 0 <= index < len(positions):
        at = positions[index]
        indent = _indent_of(lines[at])
    elif positions:
        at = positions[-1] + 1
        indent = _indent_of(lines[positions[-1]])
    else:
        declarations = [
            i for i, line in enumerate(lines) if line.strip().startswith(("participant", "actor"))
        ]
        if declarations:
            at = declarations[-1] + 1
            indent = _indent_of(lines[declarations[-1]])
        else:
            header = next((i for i, line in enumerate(lines) if line.strip() == "sequenceDiagram"), None)
            at = header + 1 if header is not None else len(lines)

    lines.insert(at, indent + generate_message_line(message))
    return "\n".join(lines)


def delete_message_from_source(source: str, index: int) -> str:
    """Remove the ``index``-th message line."""
    lines = source.split("\n")
    positions = _message_line_indices(lines)
    if not 0 <= index < len(positions):
        return source
    del lines[positions[index]]
    return "\n".join(lines)
