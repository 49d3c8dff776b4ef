"""Sequence-diagram tokenizer — hand-rolled single-pass scanner.

Converts DSL source into a flat list of tokens. The scanner never fails:
unknown characters are skipped and malformed directives degrade to comment
tokens. ``tokenize`` and ``tokenize_with_spans`` share one scanner, so
highlighting consumers always see the same token boundaries as the parser.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from seqflow.directives import INIT_TERMINATOR, decode_directive
from seqflow.tokens import Span, Token
from seqflow.types import TokenKind

# ─── Lexical tables ──────────────────────────────────────────────────────────

KEYWORDS: frozenset[str] = frozenset(
    {
        "sequenceDiagram",
        "participant",
        "actor",
        "Note",
        "over",
        "right",
        "left",
        "of",
        "title",
        "description",
    }
)

# Longest first: "->" is a prefix of "->>"
ARROWS: tuple[str, ...] = ("-->>", "->>", "-->", "->")

_WHITESPACE_RE = re.compile(r"[ \t\r]+")
_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_ANNOTATION_NAME_RE = re.compile(r"[A-Za-z0-9_]*")

_CLOSERS = {"(": ")", "{": "}"}


@dataclass
class _Scanner:
    """Stateful cursor over the source string."""

    src: str
    pos: int = 0

    # ── Primitive helpers ─────────────────────────────────────────────────────

    def eof(self) -> bool:
        return self.pos >= len(self.src)

    def peek(self, s: str) -> bool:
        return self.src.startswith(s, self.pos)

    def current(self) -> str:
        return self.src[self.pos] if self.pos < len(self.src) else ""

    def match_re(self, pattern: re.Pattern[str]) -> str | None:
        m = pattern.match(self.src, self.pos)
        if m:
            self.pos = m.end()
            return m.group(0)
        return None

    def line_end(self, start: int) -> int:
        idx = self.src.find("\n", start)
        return len(self.src) if idx == -1 else idx

    # ── Token readers ─────────────────────────────────────────────────────────

    def read_directive(self) -> Token:
        start = self.pos
        end = self.line_end(start)
        if self.src.startswith("{", start + 2):
            idx = self.src.find(INIT_TERMINATOR, start + 2)
            if idx != -1:
                end = idx + len(INIT_TERMINATOR)
        self.pos = end
        return decode_directive(self.src[start:end]).to_token()

    def read_annotation(self) -> Token:
        self.pos += 1  # consume @
        name = self.match_re(_ANNOTATION_NAME_RE) or ""
        opener = self.current()
        if opener not in _CLOSERS:
            return Token(TokenKind.Annotation, None, name=name)
        return Token(TokenKind.Annotation, self.read_bracketed(opener), name=name)

    def read_bracketed(self, opener: str) -> str:
        """Depth-counted scan to the matching close bracket of the same type."""
        closer = _CLOSERS[opener]
        self.pos += 1
        start = self.pos
        depth = 1
        while not self.eof():
            ch = self.src[self.pos]
            if ch == opener:
                depth += 1
            elif ch == closer:
                depth -= 1
                if depth == 0:
                    value = self.src[start : self.pos]
                    self.pos += 1
                    return value
            self.pos += 1
        return self.src[start:]

    def read_string(self) -> Token:
        quote = self.src[self.pos]
        start = self.pos + 1
        end = self.src.find(quote, start)
        if end == -1:
            self.pos = len(self.src)
            return Token(TokenKind.String, self.src[start:])
        self.pos = end + 1
        return Token(TokenKind.String, self.src[start:end])

    def read_word(self) -> Token | None:
        word = self.match_re(_IDENT_RE)
        if word is None:
            return None
        if word in KEYWORDS:
            return Token(TokenKind.Keyword, word)
        if word.lower() == "as":
            return Token(TokenKind.As, word)
        return Token(TokenKind.Identifier, word)

    # ── Dispatch ──────────────────────────────────────────────────────────────

    def next_token(self) -> Token | None:
        """Read one token at the cursor, or skip one unknown character."""
        if self.peek("\n"):
            self.pos += 1
            return Token(TokenKind.Newline)
        if self.peek("%%"):
            return self.read_directive()
        if self.peek("@"):
            return self.read_annotation()
        for arrow in ARROWS:
            if self.peek(arrow):
                self.pos += len(arrow)
                return Token(TokenKind.Arrow, arrow)
        if self.peek(":"):
            self.pos += 1
            return Token(TokenKind.Colon, ":")
        if self.current() in ('"', "'"):
            return self.read_string()
        token = self.read_word()
        if token is None:
            self.pos += 1
        return token

    def scan(self) -> Iterator[tuple[Token, Span]]:
        while not self.eof():
            self.match_re(_WHITESPACE_RE)
            if self.eof():
                break
            start = self.pos
            token = self.next_token()
            if token is not None:
                yield token, Span(token.kind, self.src[start : self.pos], start, self.pos)


# ─── Public API ──────────────────────────────────────────────────────────────


def tokenize(source: str) -> list[Token]:
    """Tokenize DSL source into an ordered list of tokens. Never raises."""
    return [token for token, _ in _Scanner(src=source).scan()]


def tokenize_with_spans(source: str) -> list[Span]:
    """Tokenize DSL source, returning each token's kind and exact source extent."""
    return [span for _, span in _Scanner(src=source).scan()]
