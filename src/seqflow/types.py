"""Shared type definitions for seqflow.

Enums used across the tokenizer, parser, AST and editing helpers.
"""

from __future__ import annotations

from enum import Enum


class TokenKind(Enum):
    Keyword = "KEYWORD"
    Identifier = "IDENTIFIER"
    String = "STRING"
    Arrow = "ARROW"
    Colon = "COLON"
    As = "AS"
    Annotation = "ANNOTATION"
    Comment = "COMMENT"
    InitDirective = "INIT_DIRECTIVE"
    FlowDirective = "FLOW_DIRECTIVE"
    Newline = "NEWLINE"


class LineStyle(Enum):
    Solid = "solid"  # ->  ->>
    Dashed = "dashed"  # -->  -->>


class ArrowHead(Enum):
    Open = "open"  # ->  -->
    Filled = "filled"  # ->>  -->>


class PayloadKind(Enum):
    Reference = "reference"  # http://, https://, #anchor
    Inline = "inline"  # raw schema text


class ParticipantType(Enum):
    Default = "default"

    @classmethod
    def default(cls) -> ParticipantType:
        return cls.Default
