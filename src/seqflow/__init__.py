"""seqflow: tokenizer and parser for an annotated sequence-diagram DSL."""

from seqflow.errors import ParseError
from seqflow.generator import (
    delete_message_from_source,
    generate_message_line,
    insert_message_in_source,
    update_message_in_source,
)
from seqflow.parsers import parse, parse_tokens
from seqflow.syntax.types import (
    Annotations,
    Arrow,
    Diagram,
    FlowDefinition,
    Message,
    Participant,
    Payload,
)
from seqflow.tokenizer import tokenize, tokenize_with_spans
from seqflow.tokens import Span, Token

__all__ = [
    "Annotations",
    "Arrow",
    "Diagram",
    "FlowDefinition",
    "Message",
    "ParseError",
    "Participant",
    "Payload",
    "Span",
    "Token",
    "delete_message_from_source",
    "generate_message_line",
    "insert_message_in_source",
    "parse",
    "parse_dsl",
    "parse_tokens",
    "tokenize",
    "tokenize_with_spans",
    "update_message_in_source",
]


def parse_dsl(src: str) -> dict:
    """Parse sequence-diagram source and return the AST as a plain dict.

    Args:
        src: DSL source string.

    Returns:
        The diagram in its camelCase wire shape (``displayName``, ``isAsync``...).

    Raises:
        ParseError: If a ``participant``/``actor`` keyword has no identifier.
    """
    return parse(src).to_dict()
