"""Structured comment decoding for ``%%`` lines.

A ``%%`` run is either an init directive (``%%{init: {...}}%%``), a flow
legend declaration (``%%flow id "Name" #color``) or a plain comment. The
structured forms fall back to a plain comment whenever they are malformed,
so a half-typed directive in a live editor never breaks the parse.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field

from seqflow.tokens import Token
from seqflow.types import TokenKind

logger = logging.getLogger(__name__)

INIT_TERMINATOR = "}%%"
INIT_FIELDS = ("system", "version")

_INIT_BODY_RE = re.compile(r"^\s*init\s*:\s*(\{[\s\S]*\})\s*$")
_FLOW_PREFIX_RE = re.compile(r"^%%flow[ \t]")
_WS_RE = re.compile(r"[ \t]*")
_FLOW_ID_RE = re.compile(r"[A-Za-z0-9_]+")
_DISPLAY_NAME_RE = re.compile(r'"([^"\n]*)"?')
_COLOR_RE = re.compile(r"#[0-9A-Fa-f]*|rgba?\([^)\n]*\)?|[A-Za-z]+")


@dataclass(frozen=True)
class InitDirective:
    fields: dict[str, str] = field(default_factory=dict)

    def to_token(self) -> Token:
        return Token(TokenKind.InitDirective, dict(self.fields))


@dataclass(frozen=True)
class FlowDirective:
    id: str
    display_name: str
    color: str | None = None

    def to_token(self) -> Token:
        return Token(
            TokenKind.FlowDirective,
            self.display_name,
            name=self.id,
            display_name=self.display_name,
            color=self.color,
        )


@dataclass(frozen=True)
class PlainComment:
    text: str

    def to_token(self) -> Token:
        return Token(TokenKind.Comment, self.text)


DirectiveResult = InitDirective | FlowDirective | PlainComment


def is_flow_prefix(text: str) -> bool:
    """True when ``text`` starts with ``%%flow`` followed by a space or tab."""
    return _FLOW_PREFIX_RE.match(text) is not None


def decode_directive(text: str) -> DirectiveResult:
    """Decode the raw text of one ``%%`` run, starting with the ``%%`` itself."""
    if text.startswith("%%{"):
        return _decode_init(text)
    if is_flow_prefix(text):
        return _decode_flow(text)
    return PlainComment(text[2:].strip())


def _decode_init(text: str) -> DirectiveResult:
    if len(text) < 6 or not text.endswith(INIT_TERMINATOR):
        logger.debug("init directive without terminator, treating as comment")
        return PlainComment(text[2:].strip())

    body = text[3:-3]
    m = _INIT_BODY_RE.match(body)
    if not m:
        logger.debug("init directive without 'init:' object, treating as comment")
        return PlainComment(body)
    try:
        config = json.loads(m.group(1))
    except json.JSONDecodeError as e:
        logger.debug("init directive JSON did not parse (%s), treating as comment", e)
        return PlainComment(body)
    if not isinstance(config, dict):
        return PlainComment(body)

    fields = {key: config[key] for key in INIT_FIELDS if isinstance(config.get(key), str)}
    return InitDirective(fields)


def _decode_flow(text: str) -> DirectiveResult:
    line = text.split("\n", 1)[0]
    pos = _WS_RE.match(line, 6).end()

    m = _FLOW_ID_RE.match(line, pos)
    if not m:
        logger.debug("flow directive without id, treating as comment")
        return PlainComment(f"flow {line[pos:].strip()}".strip())
    flow_id = m.group(0)
    pos = _WS_RE.match(line, m.end()).end()

    display_name = flow_id
    m = _DISPLAY_NAME_RE.match(line, pos)
    if m:
        display_name = m.group(1)
        pos = _WS_RE.match(line, m.end()).end()

    color = None
    m = _COLOR_RE.match(line, pos)
    if m:
        color = m.group(0)

    return FlowDirective(flow_id, display_name, color)
