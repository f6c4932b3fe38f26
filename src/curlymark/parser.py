"""Recursive descent parser producing a typed AST.

Runs the Scanner over the source, refuses to continue if it reported any
diagnostics, then walks the tokens through a TokenStream and builds
immutable (frozen) dataclass nodes.

Recovery:
Malformed but lexically valid markup never raises. The parser keeps an
explicit stack of open tag names, so a closing tag is resolved like this:

- it matches the innermost open tag: that tag is closed;
- it matches an enclosing open tag: the inner tags are closed implicitly
  and the token is left for the enclosing frame;
- it matches nothing: it becomes a ``bad_tag`` Tag node and is consumed.

Every step either consumes a token or closes a tag whose parent will, so
parsing always terminates. Nested tags live on the same stack rather than
in recursive calls, so arbitrarily deep markup parses without hitting the
interpreter's recursion limit.

Thread Safety:
- Parser instances are single-use and not thread-safe
- Configuration is read from ContextVar (thread-local)
- The resulting AST is immutable and safe to share across threads

"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import islice
from typing import TYPE_CHECKING, assert_never

from curlymark.config import ParseConfig, get_parse_config
from curlymark.errors import GrammarError, ParseError
from curlymark.lexer import Scanner
from curlymark.lexer.modes import COMMENT_OPEN
from curlymark.nodes import (
    Attr,
    Child,
    Comment,
    Executable,
    Interpolation,
    Literal,
    PlainText,
    String,
    Tag,
)
from curlymark.stream import TokenStream
from curlymark.tokens import Token, TokenKind
from curlymark.utils.logger import get_logger

if TYPE_CHECKING:
    from curlymark.location import Position

logger = get_logger(__name__)

_TAG_TERMINATORS = frozenset({TokenKind.TAG_END, TokenKind.TAG_CLOSING_END})
_ATTR_VALUE_TYPES = (Literal, String, Executable, Interpolation)


def _split_tag_name(literal: str) -> tuple[str, bool]:
    """Strip ``<`` or ``</`` from an opener literal.

    Returns:
        (name, is_closing)
    """
    if literal.startswith("</"):
        return literal[2:], True
    return literal[1:], False


@dataclass(slots=True)
class _OpenTag:
    """A tag whose opener has been consumed but which is not closed yet."""

    index: int
    opener: Token
    name: str
    bad_tag: bool
    attributes: list[Attr] = field(default_factory=list)
    children: list[Child] = field(default_factory=list)
    in_body: bool = False
    self_closing: bool = False

    def close(self, end: Position) -> Tag:
        return Tag(
            self.opener.start,
            end,
            self.index,
            self.name,
            self_closing=self.self_closing,
            bad_tag=self.bad_tag,
            attributes=tuple(self.attributes),
            children=tuple(self.children),
        )


class Parser:
    """Recursive descent parser for curlymark templates.

    Usage:
            >>> parser = Parser('<Banner title={{ title }} />')
            >>> nodes = parser.parse()
            >>> nodes[0].name, nodes[0].self_closing
            ('Banner', True)
            >>> nodes[0].attributes[0].value.source
            ' title '

    Raises:
        ParseError: From the constructor, when the scanner reported
            diagnostics. No partial parse is attempted.

    """

    __slots__ = ("_source_file", "_stream", "_open_tags")

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Tokenize the source and prepare the token stream.

        Args:
            source: Template source text
            source_file: Optional source file path for error messages
        """
        self._source_file = source_file

        scanner = Scanner(source, source_file)
        tokens = list(scanner.tokenize())
        if scanner.diagnostics:
            logger.debug(
                "%s: refusing to parse, %d lexical error(s)",
                source_file or "<string>",
                len(scanner.diagnostics),
            )
            raise ParseError(scanner.diagnostics, source_file=source_file)

        self._stream = TokenStream(tokens)
        self._open_tags: list[_OpenTag] = []

    @property
    def stream(self) -> TokenStream:
        """The token stream being parsed."""
        return self._stream

    @property
    def _config(self) -> ParseConfig:
        """Get current parse configuration (thread-local)."""
        return get_parse_config()

    def parse(self) -> list[Child]:
        """Parse every remaining token into top-level nodes.

        Returns:
            Top-level nodes in source order
        """
        nodes: list[Child] = []
        while not self._stream.empty():
            node = self.parse_one()
            if node is not None:
                nodes.append(node)
        return nodes

    def parse_one(self) -> Child | None:
        """Parse the node starting at the current token.

        Returns:
            The node, or None when nothing is produced (a comment opener at
            the very end, or content dropped by configuration).

        Raises:
            GrammarError: If the current token cannot start a node.
        """
        stream = self._stream
        token = stream.peek()
        kind = token.kind

        match kind:
            case TokenKind.LITERAL:
                index = stream.index
                stream.discard()
                if not self._config.keep_whitespace_text and token.literal.isspace():
                    return None
                return PlainText(token.start, token.end, index, token.literal)
            case TokenKind.TAG_BEGIN:
                if token.literal == COMMENT_OPEN:
                    return self.parse_comment()
                return self.parse_tag()
            case TokenKind.ATTR_VALUE_UNQUOTED:
                index = stream.index
                stream.discard()
                return Literal(token.start, token.end, index, token.literal)
            case TokenKind.STRING:
                index = stream.index
                stream.discard()
                return self._make_string(token, index)
            case TokenKind.EXECUTABLE:
                return self._parse_executable()
            case TokenKind.STRING_INTERPOLATION:
                return self.parse_string_interpolation()
            case TokenKind.TAG_CLOSING_START:
                return self._parse_orphan_closing()
            case (
                TokenKind.TAG_END
                | TokenKind.TAG_CLOSING_END
                | TokenKind.TAG_COMMENT_END
                | TokenKind.RIGHT_ANGLED
                | TokenKind.ATTR_KEY
                | TokenKind.EQUAL
                | TokenKind.INTERPOLATED_EXECUTABLE
            ):
                raise GrammarError("parse_one", kind, token)
            case _:
                assert_never(kind)

    def parse_comment(self) -> Comment | None:
        """Parse ``<!--`` and the comment body that follows it.

        The scanner emits the whole body as a single TAG_COMMENT_END token.
        """
        stream = self._stream
        opener = stream.consume()
        if stream.empty():
            return None

        index = stream.index
        body = stream.consume()
        if body.kind != TokenKind.TAG_COMMENT_END:
            raise GrammarError("parse_comment", body.kind, body)
        if not self._config.keep_comments:
            return None
        return Comment(opener.start, body.end, index, body.literal)

    def parse_string_interpolation(self) -> Interpolation:
        """Parse alternating string/executable segments up to the terminal STRING."""
        stream = self._stream
        index = stream.index
        first = stream.consume()
        values: list[String | Executable] = [self._make_string(first, index)]

        while not stream.empty():
            token = stream.peek()
            match token.kind:
                case TokenKind.EXECUTABLE | TokenKind.INTERPOLATED_EXECUTABLE:
                    values.append(self._parse_executable())
                case TokenKind.STRING_INTERPOLATION:
                    values.append(self._make_string(token, stream.index))
                    stream.discard()
                case TokenKind.STRING:
                    values.append(self._make_string(token, stream.index))
                    stream.discard()
                    break
                case _:
                    raise GrammarError("parse_string_interpolation", token.kind, token)

        return Interpolation(first.start, stream.previous.end, index, tuple(values))

    def parse_tag(self) -> Tag:
        """Parse a tag: its attributes, then either ``/>`` or a body and closing tag.

        Nested tags are pushed onto the open-tag stack instead of being
        parsed by a recursive call, so nesting depth does not consume
        Python stack. An unterminated body runs to the end of input.
        """
        stream = self._stream
        open_tags = self._open_tags
        base = len(open_tags)
        self._push_tag()

        try:
            while True:
                current = open_tags[-1]
                if not self._step_tag(current):
                    continue
                open_tags.pop()
                tag = current.close(stream.previous.end)
                if len(open_tags) == base:
                    return tag
                open_tags[-1].children.append(tag)
        finally:
            del open_tags[base:]

    def parse_attr(self) -> Attr:
        """Parse ``key`` or ``key=value``."""
        stream = self._stream
        index = stream.index
        key = stream.consume()
        if stream.peek_kind() != TokenKind.EQUAL:
            return Attr(key.start, key.end, index, key.literal)

        stream.discard()  # =
        value = self.parse_one()
        if not isinstance(value, _ATTR_VALUE_TYPES):
            raise GrammarError("parse_attr", stream.previous.kind, stream.previous)
        return Attr(key.start, value.position_end, index, key.literal, value)

    def discard_until_tag_end(self) -> None:
        """Skip tokens through the next TAG_END or TAG_CLOSING_END (or end of stream)."""
        stream = self._stream
        while not stream.empty() and stream.peek_kind() not in _TAG_TERMINATORS:
            stream.discard()
        if not stream.empty():
            stream.discard()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _push_tag(self) -> None:
        """Consume a tag opener and make it the innermost open tag."""
        stream = self._stream
        index = stream.index
        opener = stream.consume()
        name, bad_tag = _split_tag_name(opener.literal)
        self._open_tags.append(_OpenTag(index, opener, name, bad_tag))

    def _step_tag(self, current: _OpenTag) -> bool:
        """Advance the innermost open tag by one token or one child node.

        Returns:
            True once the tag is closed: by ``/>``, by its closing tag,
            implicitly by an enclosing tag's closing tag, or by end of input.
        """
        stream = self._stream
        if stream.empty():
            return True

        token = stream.peek()
        match token.kind:
            case TokenKind.TAG_CLOSING_START:
                return self._close_or_orphan(current, token)
            case TokenKind.TAG_BEGIN if current.in_body and token.literal != COMMENT_OPEN:
                self._push_tag()
            case _ if current.in_body:
                node = self.parse_one()
                if node is not None:
                    current.children.append(node)
            case TokenKind.RIGHT_ANGLED:
                stream.discard()
                current.in_body = True
            case TokenKind.TAG_END:
                stream.discard()
                current.self_closing = True
                return True
            case TokenKind.ATTR_KEY:
                current.attributes.append(self.parse_attr())
            case _:
                raise GrammarError("parse_tag", token.kind, token)
        return False

    def _close_or_orphan(self, current: _OpenTag, token: Token) -> bool:
        """Resolve a closing tag met while ``current`` is innermost.

        Returns:
            True when ``current`` is closed by it, explicitly or implicitly.
        """
        closing_name, _ = _split_tag_name(token.literal)
        if closing_name == current.name:
            self.discard_until_tag_end()
            return True

        open_tags = self._open_tags
        if any(tag.name == closing_name for tag in islice(open_tags, len(open_tags) - 1)):
            logger.debug(
                "Implicitly closing <%s> at %s before </%s>",
                current.name,
                token.start,
                closing_name,
            )
            return True

        logger.debug(
            "Orphan closing tag </%s> at %s inside <%s>",
            closing_name,
            token.start,
            current.name,
        )
        current.children.append(self._parse_orphan_closing())
        current.in_body = True
        return False

    def _parse_orphan_closing(self) -> Tag:
        """Turn a closing tag that matches no open tag into a bad_tag node."""
        stream = self._stream
        index = stream.index
        token = stream.consume()
        name, bad_tag = _split_tag_name(token.literal)
        self.discard_until_tag_end()
        return Tag(token.start, stream.previous.end, index, name, bad_tag=bad_tag)

    def _parse_executable(self) -> Executable:
        index = self._stream.index
        token = self._stream.consume()
        return Executable(token.start, token.end, index, token.literal)

    @staticmethod
    def _make_string(token: Token, index: int) -> String:
        quote = token.quote_char or '"'
        literal = token.literal.replace("\\" + quote, quote)
        return String(token.start, token.end, index, literal, quote)


__all__ = ["Parser"]
