"""STRING mode scanner mixin."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from curlymark.lexer.modes import LexerMode
from curlymark.tokens import Token, TokenKind

if TYPE_CHECKING:
    from curlymark.location import Position


class StringScannerMixin:
    """Mixin providing quoted-string scanning logic.

    A string is emitted as one or more segments. Each ``{{`` inside the
    quotes flushes the text so far as STRING_INTERPOLATION and hands over
    to EXPR mode, which returns here after the matching ``}}``. The closing
    quote (or EOF) flushes the final segment as STRING. A string without
    ``{{`` is therefore exactly one STRING token.

    A backslash immediately followed by the quote character escapes it;
    the backslash is kept in the token literal.

    """

    # These will be set by the Scanner class
    _source: str
    _pos: int
    _source_len: int
    _mode: LexerMode
    _quote_char: str
    _segment_start: Position
    _literal_start: int

    def _advance_to(self, end: int) -> None:
        """Advance position to end."""
        raise NotImplementedError

    def _make_token(
        self,
        kind: TokenKind,
        literal: str,
        *,
        start: Position | None = None,
        quote_char: str | None = None,
    ) -> Token:
        """Create a token ending at the current position."""
        raise NotImplementedError

    def _diagnose(self, phrase: str) -> None:
        """Record a diagnostic."""
        raise NotImplementedError

    def _begin_expr(self, kind: TokenKind, return_mode: LexerMode) -> None:
        """Switch to EXPR mode. Implemented by ExprScannerMixin."""
        raise NotImplementedError

    def _scan_string(self) -> Iterator[Token]:
        """Scan one string segment.

        Yields:
            STRING_INTERPOLATION when a ``{{`` is reached, STRING at the
            closing quote or at EOF.
        """
        source = self._source
        source_len = self._source_len
        quote = self._quote_char
        literal_start = self._literal_start
        pos = self._pos

        while pos < source_len:
            char = source[pos]
            if char == "\\" and pos + 1 < source_len and source[pos + 1] == quote:
                pos += 2
            elif char == quote:
                literal = source[literal_start:pos]
                self._advance_to(pos + 1)
                self._mode = LexerMode.TAG
                yield self._make_token(
                    TokenKind.STRING,
                    literal,
                    start=self._segment_start,
                    quote_char=quote,
                )
                return
            elif char == "{" and source.startswith("{{", pos):
                literal = source[literal_start:pos]
                self._advance_to(pos)
                yield self._make_token(
                    TokenKind.STRING_INTERPOLATION,
                    literal,
                    start=self._segment_start,
                    quote_char=quote,
                )
                self._begin_expr(TokenKind.INTERPOLATED_EXECUTABLE, LexerMode.STRING)
                return
            else:
                pos += 1

        self._advance_to(source_len)
        self._diagnose("Unterminated string value")
        self._mode = LexerMode.TAG
        yield self._make_token(
            TokenKind.STRING,
            source[literal_start:],
            start=self._segment_start,
            quote_char=quote,
        )
