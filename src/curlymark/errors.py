"""Exception classes for curlymark.

Provides standardized exceptions for error handling throughout curlymark.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from curlymark.tokens import Token, TokenKind


class CurlymarkError(Exception):
    """Base exception for all curlymark errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(CurlymarkError):
    """Aggregate failure raised when the scanner reported diagnostics.

    Parsing never starts in this case; every diagnostic is listed in order.
    """

    def __init__(
        self,
        errors: Iterable[str],
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error from scanner diagnostics.

        Args:
            errors: Diagnostics in the order the scanner recorded them
            source_file: Path to source file (optional)
        """
        self.errors = tuple(errors)
        self.source_file = source_file

        count = len(self.errors)
        plural = "s" if count != 1 else ""
        message = f"Parsing failed with {count} error{plural}: {', '.join(self.errors)}"
        if source_file:
            message = f"{source_file}: {message}"

        super().__init__(message)


class GrammarError(CurlymarkError):
    """Internal invariant violation.

    Raised when the parser meets a token its current state cannot handle.
    This signals a scanner/parser contract breach and is unreachable for
    any input the scanner accepts without diagnostics.
    """

    def __init__(
        self,
        context: str,
        kind: TokenKind | None = None,
        token: Token | None = None,
    ) -> None:
        """Initialize grammar error.

        Args:
            context: Name of the parser routine that failed
            kind: Kind of the offending token, None at end of stream
            token: The offending token (optional)
        """
        self.context = context
        self.kind = kind
        self.token = token

        found = kind.value if kind is not None else "end of stream"
        location = f" at {token.start}" if token is not None else ""
        super().__init__(f"Unexpected {found}{location} in {context}")
