"""Source positions for tokens, AST nodes and diagnostics.

Provides the Position dataclass used throughout curlymark.

Thread Safety:
Position is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """A point in source text.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed, resets after each newline)
        offset: Absolute character offset into the source (0-indexed)

    Examples:
            >>> pos = Position(line=2, column=5, offset=12)
            >>> str(pos)
            '2:5'

    """

    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        """Format position for error messages.

        Returns:
            Formatted string like "10:5"
        """
        return f"{self.line}:{self.column}"

    def describe(self) -> str:
        """Long form used in scanner diagnostics."""
        return f"line {self.line}, column {self.column}, offset {self.offset}"

    @classmethod
    def start(cls) -> Position:
        """Position of the first character of any source."""
        return cls(line=1, column=1, offset=0)

    @classmethod
    def unknown(cls) -> Position:
        """Create a placeholder position.

        Use for AST nodes created synthetically, e.g. by transform().
        """
        return cls(line=0, column=0, offset=0)
