"""Forward-only cursor over the scanner's token list.

The parser reads tokens exclusively through TokenStream. Lookahead is a
single token for grammar decisions; ``peek_at`` exists for diagnostics.
There is no backtracking.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from curlymark.errors import GrammarError
from curlymark.tokens import Token, TokenKind


class TokenStream:
    """Cursor over an ordered token sequence.

    Usage:
            >>> from curlymark import tokenize
            >>> tokens, _ = tokenize("<br/>")
            >>> stream = TokenStream(tokens)
            >>> stream.peek_kind()
            <TokenKind.TAG_BEGIN: 'tag_begin'>
            >>> stream.consume().literal
            '<br'
            >>> stream.consume().literal
            '/>'
            >>> stream.empty()
            True

    """

    __slots__ = ("_tokens", "_tokens_len", "_pos", "_previous")

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens = tokens
        self._tokens_len = len(tokens)
        self._pos = 0
        self._previous: Token | None = None

    @property
    def index(self) -> int:
        """Index of the current token in the underlying sequence."""
        return self._pos

    @property
    def previous(self) -> Token:
        """The most recently consumed token.

        Raises:
            GrammarError: If nothing has been consumed yet.
        """
        if self._previous is None:
            raise GrammarError("TokenStream.previous")
        return self._previous

    def empty(self) -> bool:
        """Check if every token has been consumed."""
        return self._pos >= self._tokens_len

    def peek(self) -> Token:
        """Current token.

        Raises:
            GrammarError: If the stream is empty.
        """
        if self._pos >= self._tokens_len:
            raise GrammarError("TokenStream.peek")
        return self._tokens[self._pos]

    def peek_kind(self) -> TokenKind | None:
        """Kind of the current token, None when the stream is empty."""
        if self._pos >= self._tokens_len:
            return None
        return self._tokens[self._pos].kind

    def peek_at(self, offset: int) -> Token | None:
        """Token ``offset`` positions ahead of the current one, if any.

        Raises:
            ValueError: If ``offset`` is negative; the cursor never looks back.
        """
        if offset < 0:
            raise ValueError(f"peek_at offset must be non-negative, got {offset}")
        pos = self._pos + offset
        if 0 <= pos < self._tokens_len:
            return self._tokens[pos]
        return None

    def peek_kind_at(self, offset: int) -> TokenKind | None:
        """Kind of the token ``offset`` positions ahead, if any."""
        token = self.peek_at(offset)
        return token.kind if token is not None else None

    def consume(self) -> Token:
        """Return the current token and advance past it.

        Raises:
            GrammarError: If the stream is empty.
        """
        if self._pos >= self._tokens_len:
            raise GrammarError("TokenStream.consume")
        token = self._tokens[self._pos]
        self._pos += 1
        self._previous = token
        return token

    def discard(self) -> None:
        """Advance past the current token without returning it."""
        self.consume()

    def status(self) -> dict[str, Any]:
        """Debug snapshot of the cursor."""
        return {
            "index": self._pos,
            "length": self._tokens_len,
            "current": self.peek_at(0),
            "next": self.peek_at(1),
            "previous": self._previous,
        }
