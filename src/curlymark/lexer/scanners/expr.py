"""EXPR mode scanner mixin."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from curlymark.lexer.modes import EXPR_CLOSE, EXPR_OPEN, LexerMode
from curlymark.tokens import Token, TokenKind

if TYPE_CHECKING:
    from curlymark.location import Position


class ExprScannerMixin:
    """Mixin providing ``{{ }}`` block scanning logic.

    Tracks single-brace depth with one integer so nested pairs such as
    ``{{ arr[ {x:1} ] }}`` or ``{{ if(x) {{ y }} }}`` pass through
    untouched; the block ends at the first ``}}`` seen at depth 0. Depth
    never drops below zero.

    The emitted token's literal is the text between the outer braces; its
    span includes them. An unclosed block records a diagnostic and emits
    nothing.

    """

    # These will be set by the Scanner class
    _source: str
    _pos: int
    _source_len: int
    _mode: LexerMode
    _expr_kind: TokenKind
    _expr_return_mode: LexerMode
    _segment_start: Position
    _literal_start: int

    def _advance_to(self, end: int) -> None:
        """Advance position to end."""
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
        """Switch to EXPR mode at a ``{{``.

        Args:
            kind: EXECUTABLE, or INTERPOLATED_EXECUTABLE inside a string.
            return_mode: Mode to resume after the block.
        """
        self._expr_kind = kind
        self._expr_return_mode = return_mode
        self._mode = LexerMode.EXPR

    def _scan_expr(self) -> Iterator[Token]:
        """Scan a whole ``{{ ... }}`` block.

        Yields:
            The EXECUTABLE or INTERPOLATED_EXECUTABLE token.
        """
        self._save_location()
        self._advance_to(self._pos + len(EXPR_OPEN))

        source = self._source
        source_len = self._source_len
        inner_start = pos = self._pos
        depth = 0

        while pos < source_len:
            char = source[pos]
            if depth == 0 and char == "}" and source.startswith(EXPR_CLOSE, pos):
                literal = source[inner_start:pos]
                self._advance_to(pos + len(EXPR_CLOSE))
                token = self._make_token(self._expr_kind, literal)
                self._leave_expr()
                yield token
                return
            if char == "{":
                depth += 1
            elif char == "}" and depth > 0:
                depth -= 1
            pos += 1

        self._advance_to(source_len)
        self._diagnose("Unmatched {{ block")
        self._leave_expr()

    def _leave_expr(self) -> None:
        """Return to the mode that entered EXPR."""
        self._mode = self._expr_return_mode
        if self._mode == LexerMode.STRING:
            self._segment_start = self._location()
            self._literal_start = self._pos
