"""Lexical output of the tokenizer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from seqflow.types import TokenKind


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    # Payload text; None for Newline and bare annotations, a dict for init directives
    value: Any = None
    # Annotation name, or flow id for flow directives
    name: str | None = None
    # Flow directives only
    display_name: str | None = None
    color: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.kind.value}
        if self.kind == TokenKind.Annotation:
            out["name"] = self.name
            out["value"] = self.value
        elif self.kind == TokenKind.FlowDirective:
            out["id"] = self.name
            out["displayName"] = self.display_name
            out["color"] = self.color
        elif self.kind != TokenKind.Newline:
            out["value"] = self.value
        return out


@dataclass(frozen=True)
class Span:
    """A token's extent in the source, for highlighting consumers."""

    kind: TokenKind
    text: str
    start: int
    end: int

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind.value, "text": self.text, "start": self.start, "end": self.end}
