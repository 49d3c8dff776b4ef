"""Error types raised by the seqflow parser."""

from __future__ import annotations


class ParseError(ValueError):
    """Raised when the token stream cannot be turned into a diagram.

    Most malformed input degrades silently; this is reserved for constructs
    with no sensible fallback, such as a ``participant`` keyword with no
    identifier after it.
    """

    def __init__(self, message: str, position: int | None = None):
        self.message = message
        self.position = position
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.position is not None:
            return f"token {self.position}: {self.message}"
        return self.message
