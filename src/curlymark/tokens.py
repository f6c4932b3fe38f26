"""Token and TokenKind definitions for the curlymark scanner.

The scanner produces an ordered list of Token objects that the parser
consumes through a TokenStream. Each Token has a kind, a literal payload,
a start/end Position and, for string segments, the quote character.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenKind is an enum (inherently immutable).

"""

from dataclasses import dataclass
from enum import Enum

from curlymark.location import Position


class TokenKind(Enum):
    """Token kinds produced by the scanner.

    The set is closed; the parser matches on it exhaustively.
    Values are the lowercase names used in debug output and serialized data.

    """

    # Text between markup
    LITERAL = "literal"

    # Tag structure
    TAG_BEGIN = "tag_begin"  # <name or <!--
    TAG_END = "tag_end"  # />
    TAG_CLOSING_START = "tag_closing_start"  # </name
    TAG_CLOSING_END = "tag_closing_end"  # > after </name
    TAG_COMMENT_END = "tag_comment_end"  # comment body, terminated by -->
    RIGHT_ANGLED = "right_angled"  # > after <name

    # Attributes
    ATTR_KEY = "attr_key"
    EQUAL = "equal"
    ATTR_VALUE_UNQUOTED = "attr_value_unquoted"

    # Quoted strings
    STRING = "string"  # terminal (or only) segment
    STRING_INTERPOLATION = "string_interpolation"  # text before an embedded {{ }}

    # Executable blocks
    INTERPOLATED_EXECUTABLE = "interpolated_executable"  # {{ }} inside a string
    EXECUTABLE = "executable"  # {{ }} in text or as an attribute value


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the scanner.

    Attributes:
        kind: The token kind (from TokenKind enum)
        literal: Payload text; delimiters such as ``{{``/``}}`` or quotes
            are excluded, escape backslashes inside strings are kept
        start: Position of the first character of the lexeme
        end: Position just past the last character of the lexeme
        quote_char: ``"`` or ``'`` for string segments, otherwise None

    """

    kind: TokenKind
    literal: str
    start: Position
    end: Position
    quote_char: str | None = None

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.literal
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.kind.name}, {val!r}, {self.start})"

    @property
    def span(self) -> tuple[int, int]:
        """Half-open ``[start, end)`` offset range covered by the lexeme."""
        return self.start.offset, self.end.offset
