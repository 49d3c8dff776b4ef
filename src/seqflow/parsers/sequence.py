"""Sequence-diagram parser — hand-rolled recursive descent over tokens.

Single forward pass with a cursor and one token of lookahead. The grammar
is permissive: tokens that do not start a known production are skipped, so
half-edited sources still produce a best-effort diagram. The only hard
failure is a ``participant``/``actor`` keyword without an identifier.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from seqflow.annotations import decode_annotations, decode_arrow
from seqflow.errors import ParseError
from seqflow.syntax.types import Diagram, FlowDefinition, Message, Participant
from seqflow.tokenizer import tokenize
from seqflow.tokens import Token
from seqflow.types import TokenKind

logger = logging.getLogger(__name__)

_TEXT_KINDS = (TokenKind.Identifier, TokenKind.String)
_PARTICIPANT_KEYWORDS = ("participant", "actor")
_INIT_FIELDS = ("system", "version")


@dataclass
class _Cursor:
    """Stateful parser cursor over the token list."""

    tokens: list[Token]
    pos: int = 0

    # ── Primitive helpers ─────────────────────────────────────────────────────

    def eof(self) -> bool:
        return self.pos >= len(self.tokens)

    def current(self) -> Token | None:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def peek(self, offset: int = 1) -> Token | None:
        idx = self.pos + offset
        return self.tokens[idx] if idx < len(self.tokens) else None

    def at(self, *kinds: TokenKind) -> bool:
        tok = self.current()
        return tok is not None and tok.kind in kinds

    def consume(self, kind: TokenKind) -> Token | None:
        if self.at(kind):
            tok = self.tokens[self.pos]
            self.pos += 1
            return tok
        return None

    def skip_line(self) -> None:
        """Advance to (not past) the next Newline token."""
        while not self.eof() and not self.at(TokenKind.Newline):
            self.pos += 1

    def read_text(self, *stops: TokenKind) -> str:
        """Join Identifier/String texts until Newline or one of ``stops``."""
        words: list[str] = []
        while not self.eof() and not self.at(TokenKind.Newline, *stops):
            tok = self.tokens[self.pos]
            if tok.kind in _TEXT_KINDS:
                words.append(tok.value)
            self.pos += 1
        return " ".join(words).strip()

    # ── Participant ───────────────────────────────────────────────────────────

    def parse_participant(self) -> Participant:
        keyword = self.tokens[self.pos]
        self.pos += 1
        id_tok = self.consume(TokenKind.Identifier)
        if id_tok is None:
            raise ParseError(f"Expected participant identifier after '{keyword.value}'", self.pos)

        display_name = id_tok.value
        if self.consume(TokenKind.As):
            alias = self.consume(TokenKind.Identifier) or self.consume(TokenKind.String)
            if alias is not None:
                display_name = alias.value

        self.skip_line()
        return Participant.new(id_tok.value, display_name)

    # ── Title / description ───────────────────────────────────────────────────

    def parse_heading(self) -> str:
        self.pos += 1  # consume keyword
        return self.read_text()

    # ── Message ───────────────────────────────────────────────────────────────

    def try_parse_message(self) -> Message | None:
        """Parse ``src arrow tgt [: text] [@annotations]``.

        Returns None when the identifier does not start a message; the cursor
        is then past the identifier (or past the arrow when the target is
        missing) so scanning resumes on the next token.
        """
        source_tok = self.tokens[self.pos]
        nxt = self.peek()
        if nxt is None or nxt.kind != TokenKind.Arrow:
            self.pos += 1
            return None
        self.pos += 2

        target_tok = self.consume(TokenKind.Identifier)
        if target_tok is None:
            logger.debug("message from %r has no target, skipping", source_tok.value)
            return None

        self.consume(TokenKind.Colon)
        text = self.read_text(TokenKind.Annotation)

        start = self.pos
        while self.at(TokenKind.Annotation):
            self.pos += 1

        return Message(
            source=source_tok.value,
            target=target_tok.value,
            arrow=decode_arrow(nxt.value),
            text=text,
            annotations=decode_annotations(self.tokens[start : self.pos]),
        )

    # ── Directives ────────────────────────────────────────────────────────────

    def apply_init(self, diagram: Diagram, fields: dict[str, str]) -> None:
        for key in _INIT_FIELDS:
            value = fields.get(key)
            if value:
                setattr(diagram, key, value)

    def add_flow(self, diagram: Diagram, tok: Token) -> None:
        if any(f.id == tok.name for f in diagram.flows):
            logger.debug("flow %r declared twice, keeping the first", tok.name)
            return
        diagram.flows.append(FlowDefinition(tok.name, tok.display_name or tok.name, tok.color))

    # ── Top-level parse ───────────────────────────────────────────────────────

    def parse_diagram(self) -> Diagram:
        diagram = Diagram.new()

        while not self.eof():
            tok = self.tokens[self.pos]

            if tok.kind == TokenKind.Keyword:
                if tok.value in _PARTICIPANT_KEYWORDS:
                    _upsert_participant(diagram.participants, self.parse_participant())
                elif tok.value == "title":
                    diagram.title = self.parse_heading()
                elif tok.value == "description":
                    diagram.description = self.parse_heading()
                else:
                    self.pos += 1
            elif tok.kind == TokenKind.Identifier:
                message = self.try_parse_message()
                if message is not None:
                    diagram.messages.append(message)
            elif tok.kind == TokenKind.InitDirective:
                self.apply_init(diagram, tok.value or {})
                self.pos += 1
            elif tok.kind == TokenKind.FlowDirective:
                self.add_flow(diagram, tok)
                self.pos += 1
            else:
                # Newline, Comment and stray tokens
                self.pos += 1

        infer_participants(diagram)
        return diagram


# ─── Helpers ─────────────────────────────────────────────────────────────────


def _upsert_participant(participants: list[Participant], participant: Participant) -> None:
    """First-declaration-wins: insert only if the id is not already present."""
    if any(p.id == participant.id for p in participants):
        logger.debug("participant %r declared twice, keeping the first", participant.id)
        return
    participants.append(participant)


def infer_participants(diagram: Diagram) -> None:
    """Append a default participant for every undeclared message endpoint, in first-appearance order."""
    known = {p.id for p in diagram.participants}
    for message in diagram.messages:
        for endpoint in (message.source, message.target):
            if endpoint not in known:
                known.add(endpoint)
                diagram.participants.append(Participant.bare(endpoint))


class SequenceParser:
    """Sequence diagram parser."""

    def parse(self, src: str) -> Diagram:
        return self.parse_tokens(tokenize(src))

    def parse_tokens(self, tokens: list[Token]) -> Diagram:
        cursor = _Cursor(tokens=list(tokens))
        return cursor.parse_diagram()
