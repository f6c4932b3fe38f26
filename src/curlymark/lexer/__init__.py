"""State-machine scanner for curlymark templates.

Turns template source into an ordered token list plus non-fatal
diagnostics. The scanner never raises; lexical problems are collected
and scanning continues to the end of input.

Architecture:
lexer/
├── __init__.py          # Re-exports Scanner, LexerMode
├── core.py              # Scanner class (mixin composition + navigation)
├── modes.py             # LexerMode enum, character classes
└── scanners/            # Mode-specific scanners
    ├── text.py          # TEXT mode (literal runs, markup detection)
    ├── tag.py           # TAG and ATTR_VALUE modes, comments
    ├── string.py        # STRING mode (quotes, escapes, interpolation)
    └── expr.py          # EXPR mode (brace-depth aware {{ }} blocks)

Usage:
    >>> from curlymark.lexer import Scanner
    >>> scanner = Scanner("<b>{{ name }}</b>")
    >>> for token in scanner.tokenize():
    ...     print(token)
    Token(TAG_BEGIN, '<b', 1:1)
    Token(RIGHT_ANGLED, '>', 1:3)
    Token(EXECUTABLE, ' name ', 1:4)
    Token(TAG_CLOSING_START, '</b', 1:14)
    Token(TAG_CLOSING_END, '>', 1:17)

"""

from curlymark.lexer.core import Scanner
from curlymark.lexer.modes import LexerMode

__all__ = ["LexerMode", "Scanner"]
