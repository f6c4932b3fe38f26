"""TAG and ATTR_VALUE mode scanner mixin."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from curlymark.lexer.modes import (
    ATTR_KEY_CHARS,
    ATTR_KEY_START,
    COMMENT_CLOSE,
    COMMENT_OPEN,
    EXPR_OPEN,
    QUOTES,
    TAG_NAME_CHARS,
    UNQUOTED_VALUE_TERMINATORS,
    WHITESPACE,
    LexerMode,
)
from curlymark.tokens import Token, TokenKind

if TYPE_CHECKING:
    from curlymark.location import Position


class TagScannerMixin:
    """Mixin providing tag scanning logic.

    Handles the opener (``<name``, ``</name``, ``<!--``), then in TAG mode
    scans attribute keys, ``=`` and the terminators ``>`` and ``/>``.
    ATTR_VALUE mode picks the value form after ``=``: quoted string,
    ``{{ }}`` block or unquoted run.

    Comments are scanned verbatim to the first ``-->``; nested comment
    openers are not recognised, so ``<!-- a <!-- b --> c -->`` ends at the
    first ``-->``.

    """

    # These will be set by the Scanner class
    _source: str
    _pos: int
    _source_len: int
    _mode: LexerMode
    _in_closing_tag: bool
    _quote_char: str
    _segment_start: Position
    _literal_start: int

    def _peek(self, offset: int = 0) -> str:
        """Peek at a character without advancing."""
        raise NotImplementedError

    def _at(self, text: str) -> bool:
        """Whether the source continues with text."""
        raise NotImplementedError

    def _advance(self) -> str:
        """Advance one character."""
        raise NotImplementedError

    def _advance_to(self, end: int) -> None:
        """Advance position to end."""
        raise NotImplementedError

    def _skip_whitespace(self, chars: frozenset[str]) -> None:
        """Advance past a run of chars."""
        raise NotImplementedError

    def _location(self) -> Position:
        """Current position."""
        raise NotImplementedError

    def _save_location(self) -> None:
        """Save current location for token creation."""
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

    def _scan_while(self, chars: frozenset[str]) -> str:
        """Consume the run of characters in ``chars`` and return it."""
        source = self._source
        source_len = self._source_len
        start = end = self._pos
        while end < source_len and source[end] in chars:
            end += 1
        self._advance_to(end)
        return source[start:end]

    # =========================================================================
    # Openers
    # =========================================================================

    def _scan_tag_open(self) -> Iterator[Token]:
        """Scan ``<!--``, ``</name`` or ``<name`` at the current position.

        Yields:
            TAG_BEGIN or TAG_CLOSING_START (plus the comment body for comments).
        """
        if self._at(COMMENT_OPEN):
            yield from self._scan_comment()
            return

        self._save_location()
        self._advance()  # <
        closing = self._peek() == "/"
        if closing:
            self._advance()  # /
        name = self._scan_while(TAG_NAME_CHARS)

        self._in_closing_tag = closing
        self._mode = LexerMode.TAG
        if closing:
            yield self._make_token(TokenKind.TAG_CLOSING_START, "</" + name)
        else:
            yield self._make_token(TokenKind.TAG_BEGIN, "<" + name)

    def _scan_comment(self) -> Iterator[Token]:
        """Scan a whole comment: opener, then the body up to ``-->``.

        Yields:
            TAG_BEGIN (``<!--``) and TAG_COMMENT_END carrying the body.
        """
        self._save_location()
        self._advance_to(self._pos + len(COMMENT_OPEN))
        yield self._make_token(TokenKind.TAG_BEGIN, COMMENT_OPEN)

        self._save_location()
        body_start = self._pos
        close_at = self._source.find(COMMENT_CLOSE, body_start)
        if close_at == -1:
            self._advance_to(self._source_len)
            self._diagnose("Unterminated comment tag")
            body = self._source[body_start:]
        else:
            body = self._source[body_start:close_at]
            self._advance_to(close_at + len(COMMENT_CLOSE))

        self._mode = LexerMode.TEXT
        yield self._make_token(TokenKind.TAG_COMMENT_END, body)

    # =========================================================================
    # TAG mode
    # =========================================================================

    def _scan_tag(self) -> Iterator[Token]:
        """Scan one item inside a tag: an attribute, a terminator, or junk.

        Yields:
            ATTR_KEY (+ EQUAL), RIGHT_ANGLED, TAG_CLOSING_END or TAG_END.
        """
        self._skip_whitespace(WHITESPACE)
        char = self._peek()
        if not char:
            return

        self._save_location()
        if char == ">":
            self._advance()
            self._mode = LexerMode.TEXT
            if self._in_closing_tag:
                yield self._make_token(TokenKind.TAG_CLOSING_END, ">")
            else:
                yield self._make_token(TokenKind.RIGHT_ANGLED, ">")
            return

        if char == "/" and self._peek(1) == ">":
            self._advance_to(self._pos + 2)
            self._mode = LexerMode.TEXT
            yield self._make_token(TokenKind.TAG_END, "/>")
            return

        if char in ATTR_KEY_START:
            yield from self._scan_attr()
            return

        self._diagnose(f"Unexpected character {char!r} in tag")
        self._advance()

    def _scan_attr(self) -> Iterator[Token]:
        """Scan an attribute key and, if present, the ``=`` after it.

        Yields:
            ATTR_KEY, then EQUAL when a value follows.
        """
        key = self._scan_while(ATTR_KEY_CHARS)
        yield self._make_token(TokenKind.ATTR_KEY, key)

        self._skip_whitespace(WHITESPACE)
        if self._peek() == "=":
            self._save_location()
            self._advance()
            self._mode = LexerMode.ATTR_VALUE
            yield self._make_token(TokenKind.EQUAL, "=")

    # =========================================================================
    # ATTR_VALUE mode
    # =========================================================================

    def _scan_attr_value(self) -> Iterator[Token]:
        """Scan the value after ``=``.

        Quoted values switch to STRING mode, ``{{`` switches to EXPR mode,
        anything else is an unquoted run ending at whitespace, ``/`` or ``>``.

        Yields:
            ATTR_VALUE_UNQUOTED for unquoted values; nothing otherwise.
        """
        self._skip_whitespace(WHITESPACE)
        char = self._peek()

        if char in QUOTES:
            self._segment_start = self._location()
            self._advance()
            self._quote_char = char
            self._literal_start = self._pos
            self._mode = LexerMode.STRING
            return

        if self._at(EXPR_OPEN):
            self._begin_expr(TokenKind.EXECUTABLE, LexerMode.TAG)
            return

        self._mode = LexerMode.TAG
        self._save_location()
        source = self._source
        source_len = self._source_len
        start = end = self._pos
        while end < source_len and source[end] not in UNQUOTED_VALUE_TERMINATORS:
            end += 1

        if end == start:
            self._diagnose("Missing attribute value")
            return

        self._advance_to(end)
        yield self._make_token(TokenKind.ATTR_VALUE_UNQUOTED, source[start:end])
