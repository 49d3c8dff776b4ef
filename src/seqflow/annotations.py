"""Annotation and arrow decoding for message lines.

Each ``@name`` suffix on a message maps to one field of the Annotations
record. Unknown names are ignored so new annotation kinds can appear in
sources before tooling understands them.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from seqflow.syntax.types import Annotations, Arrow, Payload
from seqflow.tokens import Token
from seqflow.types import ArrowHead, LineStyle

logger = logging.getLogger(__name__)

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS")
REFERENCE_PREFIXES = ("http://", "https://", "#")

_PATH_RE = re.compile(r"^(?:(" + "|".join(HTTP_METHODS) + r")\s+(?=\S))?(.*)$", re.IGNORECASE | re.DOTALL)


def decode_arrow(literal: str) -> Arrow:
    """Classify an arrow literal into its (line, head) pair."""
    line = LineStyle.Dashed if "--" in literal else LineStyle.Solid
    head = ArrowHead.Filled if ">>" in literal else ArrowHead.Open
    return Arrow(line=line, head=head)


def split_path(value: str) -> tuple[str | None, str]:
    """Split ``"GET /users"`` into ``("GET", "/users")``; no method gives ``(None, value)``."""
    m = _PATH_RE.match(value.strip())
    method, path = m.group(1), m.group(2).strip()
    return (method.upper() if method else None), path


def decode_payload(value: str) -> Payload:
    if value.startswith(REFERENCE_PREFIXES):
        return Payload.reference(value)
    return Payload.inline(value)


def split_flows(value: str) -> list[str]:
    return [f.strip() for f in value.split(",") if f.strip()]


def apply_annotation(annotations: Annotations, name: str, value: str | None) -> None:
    """Fold one ``@name(value)`` into the record. Later annotations overwrite earlier ones."""
    if name == "sync":
        annotations.is_async = False
    elif name == "async":
        annotations.is_async = True
    elif value is None:
        logger.debug("annotation @%s has no value, ignoring", name)
    elif name == "path":
        method, path = split_path(value)
        annotations.method = method
        annotations.path = path or None
    elif name == "type":
        annotations.request_type = value.strip().upper() or None
    elif name == "timeout":
        annotations.timeout = value
    elif name == "queue":
        annotations.queue = value
    elif name == "flow":
        annotations.flows = split_flows(value)
    elif name == "request":
        annotations.request = decode_payload(value)
    elif name == "response":
        annotations.response = decode_payload(value)
    else:
        logger.debug("unknown annotation @%s, ignoring", name)


def decode_annotations(tokens: Iterable[Token]) -> Annotations:
    """Build a fully populated Annotations record from a run of annotation tokens."""
    annotations = Annotations()
    for token in tokens:
        apply_annotation(annotations, token.name or "", token.value)
    return annotations
