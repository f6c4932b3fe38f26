"""TEXT mode scanner mixin."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from curlymark.lexer.modes import (
    COMMENT_OPEN,
    EXPR_OPEN,
    TAG_NAME_START,
    LexerMode,
)
from curlymark.tokens import Token, TokenKind

if TYPE_CHECKING:
    from curlymark.location import Position


class TextScannerMixin:
    """Mixin providing TEXT mode scanning logic.

    Accumulates literal text until a markup opener (``<name``, ``</``,
    ``<!--``) or an executable opener (``{{``), flushes the pending run as
    one LITERAL token, then hands over to the tag or expression scanner.

    A ``<`` that does not open markup (``a < b``) stays in the literal.

    """

    # These will be set by the Scanner class
    _source: str
    _pos: int
    _source_len: int
    _mode: LexerMode

    def _save_location(self) -> None:
        """Save current location for token creation."""
        raise NotImplementedError

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

    def _scan_tag_open(self) -> Iterator[Token]:
        """Scan a tag or comment opener. Implemented by TagScannerMixin."""
        raise NotImplementedError

    def _begin_expr(self, kind: TokenKind, return_mode: LexerMode) -> None:
        """Switch to EXPR mode. Implemented by ExprScannerMixin."""
        raise NotImplementedError

    def _scan_text(self) -> Iterator[Token]:
        """Scan a literal run and whatever opener ends it.

        Yields:
            LITERAL token for non-empty runs, then the opener's tokens.
        """
        self._save_location()
        source = self._source
        source_len = self._source_len
        start = self._pos

        stop = self._find_text_end(start)
        if stop > start:
            self._advance_to(stop)
            yield self._make_token(TokenKind.LITERAL, source[start:stop])

        if stop >= source_len:
            return

        if source.startswith(EXPR_OPEN, stop):
            self._begin_expr(TokenKind.EXECUTABLE, LexerMode.TEXT)
        else:
            yield from self._scan_tag_open()

    def _find_text_end(self, start: int) -> int:
        """Find where the literal run starting at ``start`` ends.

        Uses str.find so long text runs cost one C-level scan per opener
        candidate rather than a Python loop per character.

        Returns:
            Offset of the opener that ends the run, or end of source.
        """
        source = self._source
        source_len = self._source_len
        pos = start

        while pos < source_len:
            lt = source.find("<", pos)
            stop = source_len if lt == -1 else lt
            # A {{ before the candidate ends the run first
            expr_at = source.find(EXPR_OPEN, pos, stop)
            if expr_at != -1:
                return expr_at
            if lt == -1 or self._opens_markup(lt):
                return stop
            pos = lt + 1

        return source_len

    def _opens_markup(self, lt: int) -> bool:
        """Whether the ``<`` at offset ``lt`` starts a tag, closing tag or comment."""
        source = self._source
        nxt = source[lt + 1 : lt + 2]
        if nxt in TAG_NAME_START or nxt == "/":
            return True
        return source.startswith(COMMENT_OPEN, lt)
