"""State-machine scanner with O(n) guaranteed performance.

One explicit loop dispatches on the current LexerMode. Every mode scanner
is iterative and always advances, so stack usage is O(1) no matter how
deeply braces or tags nest, and the scanner can never stall.

Diagnostics are collected into a list threaded through the scan loop,
never raised, so independent problems in one source are all reported.

Thread Safety:
Scanner instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from curlymark.lexer.modes import LexerMode
from curlymark.lexer.scanners import (
    ExprScannerMixin,
    StringScannerMixin,
    TagScannerMixin,
    TextScannerMixin,
)
from curlymark.location import Position
from curlymark.tokens import Token, TokenKind
from curlymark.utils.logger import get_logger

logger = get_logger(__name__)


class Scanner(
    # A mixin must precede every mixin that stubs its methods
    ExprScannerMixin,
    TagScannerMixin,
    StringScannerMixin,
    TextScannerMixin,
):
    """State-machine scanner for curlymark templates.

    Usage:
            >>> scanner = Scanner('<div title="oops>')
            >>> [t.kind.value for t in scanner.tokenize()]
            ['tag_begin', 'attr_key', 'equal', 'string']
            >>> scanner.diagnostics
            ['Unterminated string value at line 1, column 18, offset 17']

    Thread Safety:
        Scanner instances are single-use. Create one per source string.
        All state is instance-local; no shared mutable state.

    """

    __slots__ = (
        "_source",
        "_source_len",  # Cached len(source)
        "_pos",
        "_line",
        "_col",
        "_mode",
        "_source_file",
        "_saved",  # Start position of the token being scanned
        "_diagnostics",
        # Tag state
        "_in_closing_tag",
        # String state
        "_quote_char",
        "_segment_start",  # Span start of the current string segment
        "_literal_start",  # Offset where the segment's payload begins
        # Expression state
        "_expr_kind",
        "_expr_return_mode",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize scanner with source text.

        Args:
            source: Template source text
            source_file: Optional source file path for log messages
        """
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._line = 1
        self._col = 1
        self._mode = LexerMode.TEXT
        self._source_file = source_file
        self._saved = Position.start()
        self._diagnostics: list[str] = []

        self._in_closing_tag = False

        self._quote_char = '"'
        self._segment_start = Position.start()
        self._literal_start = 0

        self._expr_kind = TokenKind.EXECUTABLE
        self._expr_return_mode = LexerMode.TEXT

    @property
    def diagnostics(self) -> list[str]:
        """Diagnostics recorded so far, in source order."""
        return self._diagnostics

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into token stream.

        Yields:
            Token objects one at a time

        Complexity: O(n) where n = len(source)
        """
        source_len = self._source_len
        while self._pos < source_len:
            yield from self._dispatch_mode()

        # Constructs left open at EOF still owe a token or a diagnostic
        if self._mode == LexerMode.STRING:
            yield from self._scan_string()
        elif self._mode == LexerMode.ATTR_VALUE:
            yield from self._scan_attr_value()

    def stats(self) -> Position:
        """Current scan position (the end of input once tokenize() is exhausted)."""
        return self._location()

    def _dispatch_mode(self) -> Iterator[Token]:
        """Dispatch to the scanner for the current mode.

        Yields:
            Token objects from the mode-specific scanner.
        """
        mode = self._mode
        if mode == LexerMode.TEXT:
            yield from self._scan_text()
        elif mode == LexerMode.TAG:
            yield from self._scan_tag()
        elif mode == LexerMode.ATTR_VALUE:
            yield from self._scan_attr_value()
        elif mode == LexerMode.STRING:
            yield from self._scan_string()
        elif mode == LexerMode.EXPR:
            yield from self._scan_expr()

    # =========================================================================
    # Character navigation helpers
    # =========================================================================

    def _peek(self, offset: int = 0) -> str:
        """Peek at a character without advancing.

        Returns:
            The character, or empty string past the end of input.
        """
        pos = self._pos + offset
        if pos >= self._source_len:
            return ""
        return self._source[pos]

    def _at(self, text: str) -> bool:
        """Whether the source continues with ``text`` at the current position."""
        return self._source.startswith(text, self._pos)

    def _advance(self) -> str:
        """Advance position by one character.

        Updates line/column tracking.

        Returns:
            The consumed character.
        """
        if self._pos >= self._source_len:
            return ""

        char = self._source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1

        return char

    def _advance_to(self, end: int) -> None:
        """Advance position to ``end`` in one step.

        Uses str.count/rfind instead of a character loop.

        Args:
            end: Target offset (must not be behind the current position).
        """
        if end <= self._pos:
            return

        segment = self._source[self._pos : end]
        newline_count = segment.count("\n")

        if newline_count > 0:
            last_nl = segment.rfind("\n")
            self._line += newline_count
            self._col = len(segment) - last_nl  # chars after last newline + 1
        else:
            self._col += len(segment)

        self._pos = end

    def _skip_whitespace(self, chars: frozenset[str]) -> None:
        """Advance past any run of characters in ``chars``."""
        source = self._source
        source_len = self._source_len
        end = self._pos
        while end < source_len and source[end] in chars:
            end += 1
        self._advance_to(end)

    # =========================================================================
    # Location tracking and token creation
    # =========================================================================

    def _location(self) -> Position:
        """Position of the next unconsumed character."""
        return Position(line=self._line, column=self._col, offset=self._pos)

    def _save_location(self) -> None:
        """Remember the current position as the start of the next token."""
        self._saved = self._location()

    def _make_token(
        self,
        kind: TokenKind,
        literal: str,
        *,
        start: Position | None = None,
        quote_char: str | None = None,
    ) -> Token:
        """Create a Token ending at the current position.

        Args:
            kind: The token kind.
            literal: The token payload.
            start: Start position override (defaults to the saved location).
            quote_char: Quote character for string segments.

        Returns:
            Token spanning from start to the current position.
        """
        return Token(
            kind=kind,
            literal=literal,
            start=start if start is not None else self._saved,
            end=self._location(),
            quote_char=quote_char,
        )

    def _diagnose(self, phrase: str) -> None:
        """Record a non-fatal diagnostic at the current position."""
        message = f"{phrase} at {self._location().describe()}"
        self._diagnostics.append(message)
        logger.debug(
            "%s: %s",
            self._source_file or "<string>",
            message,
        )
