"""Syntax tree for the sequence-diagram DSL."""

from seqflow.syntax.types import (
    Annotations,
    Arrow,
    Diagram,
    FlowDefinition,
    Message,
    Participant,
    Payload,
)

__all__ = [
    "Annotations",
    "Arrow",
    "Diagram",
    "FlowDefinition",
    "Message",
    "Participant",
    "Payload",
]
