"""
curlymark: scanner and parser for HTML-style templates with {{ }} blocks

Turns component-oriented markup (tags, attributes, quoted strings,
comments and opaque ``{{ ... }}`` executable blocks) into a typed,
immutable AST. Executable content is never interpreted; it is captured
verbatim for a downstream renderer.

Quick Start:
    >>> from curlymark import parse
    >>> nodes = parse('<a href="/u/{{ id }}">{{ name }}</a>')
    >>> tag = nodes[0]
    >>> tag.name, tag.attributes[0].name
    ('a', 'href')
    >>> [type(v).__name__ for v in tag.attributes[0].value.values]
    ['String', 'Executable', 'String']
    >>> tag.children[0].source
    ' name '

Tokens only:
    >>> from curlymark import tokenize
    >>> tokens, diagnostics = tokenize("<br/>")
    >>> [t.kind.value for t in tokens], diagnostics
    (['tag_begin', 'tag_end'], [])

Errors:
    Lexical problems are collected by the scanner. parse() raises a single
    ParseError listing all of them; malformed nesting never raises and is
    recovered instead (see curlymark.parser).

"""

from curlymark.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from curlymark.errors import CurlymarkError, GrammarError, ParseError
from curlymark.lexer import LexerMode, Scanner
from curlymark.location import Position
from curlymark.nodes import (
    Attr,
    AttrValue,
    Child,
    Comment,
    Executable,
    Interpolation,
    Literal,
    Node,
    PlainText,
    String,
    Tag,
)
from curlymark.parser import Parser
from curlymark.serialization import from_dict, from_json, to_dict, to_json
from curlymark.stream import TokenStream
from curlymark.tokens import Token, TokenKind
from curlymark.visitor import BaseVisitor, transform

__version__ = "0.1.0"


def tokenize(source: str, *, source_file: str | None = None) -> tuple[list[Token], list[str]]:
    """Scan source into tokens without parsing.

    Never raises for any input string.

    Args:
        source: Template source text
        source_file: Optional source file path for log messages

    Returns:
        (tokens, diagnostics); diagnostics is empty for well-formed input

    """
    scanner = Scanner(source, source_file)
    tokens = list(scanner.tokenize())
    return tokens, list(scanner.diagnostics)


def parse(
    source: str,
    *,
    source_file: str | None = None,
    config: ParseConfig | None = None,
) -> list[Child]:
    """Parse template source into a typed AST.

    Args:
        source: Template source text
        source_file: Optional source file path for error messages
        config: Parse configuration for this call. When None, the config
            active in the current context is used.

    Returns:
        Top-level nodes in source order

    Raises:
        ParseError: If the scanner reported any diagnostics.

    Example:
        >>> parse("<!-- note -->", config=ParseConfig(keep_comments=False))
        []

    """
    if config is None:
        return Parser(source, source_file=source_file).parse()

    with parse_config_context(config):
        return Parser(source, source_file=source_file).parse()


__all__ = [  # noqa: RUF022 (grouped by category)
    # Version
    "__version__",
    # Core API
    "parse",
    "tokenize",
    # Nodes
    "Node",
    "PlainText",
    "Literal",
    "Comment",
    "String",
    "Executable",
    "Interpolation",
    "Attr",
    "Tag",
    "AttrValue",
    "Child",
    # Tokens and scanning
    "Position",
    "Token",
    "TokenKind",
    "Scanner",
    "LexerMode",
    "TokenStream",
    "Parser",
    # Errors
    "CurlymarkError",
    "ParseError",
    "GrammarError",
    # Configuration
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Visitor
    "BaseVisitor",
    "transform",
]
