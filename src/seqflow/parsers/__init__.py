"""Parser registry — dispatch source text to the parser for its diagram type."""

from __future__ import annotations

from seqflow.parsers.base import Parser
from seqflow.parsers.sequence import SequenceParser
from seqflow.syntax.types import Diagram
from seqflow.tokens import Token

# The sequenceDiagram header is optional, so every source is a sequence diagram
DEFAULT_TYPE = "sequence"

_PARSERS: dict[str, type[Parser]] = {
    "sequence": SequenceParser,
}


def parse(src: str, diagram_type: str = DEFAULT_TYPE) -> Diagram:
    """Parse source text to an AST with the parser registered for ``diagram_type``."""
    parser_cls = _PARSERS.get(diagram_type)
    if parser_cls is None:
        raise ValueError(f"Unsupported diagram type: {diagram_type}")
    return parser_cls().parse(src)


def parse_tokens(tokens: list[Token]) -> Diagram:
    """Parse a token list produced by ``seqflow.tokenizer.tokenize``."""
    return SequenceParser().parse_tokens(tokens)
