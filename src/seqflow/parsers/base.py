"""Base parser protocol."""

from __future__ import annotations

from typing import Protocol

from seqflow.syntax.types import Diagram
from seqflow.tokens import Token


class Parser(Protocol):
    """Protocol that all diagram parsers must implement."""

    def parse(self, src: str) -> Diagram:
        """Parse source text into a Diagram AST."""
        ...

    def parse_tokens(self, tokens: list[Token]) -> Diagram:
        """Parse an already tokenized source into a Diagram AST."""
        ...
