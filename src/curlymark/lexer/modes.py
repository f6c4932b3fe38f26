"""Scanner operating modes and character classes.

This module defines the finite state machine modes for the scanner
and the frozensets used for O(1) character classification.
"""

from __future__ import annotations

import string
from enum import Enum, auto


class LexerMode(Enum):
    """Scanner operating modes.

    The scanner switches between modes based on context:
    - TEXT: Between tags and inside tag bodies
    - TAG: After a tag opener, scanning attributes and terminators
    - ATTR_VALUE: After ``=``, choosing how to scan the value
    - STRING: Inside a quoted attribute value
    - EXPR: Inside a ``{{ }}`` block; returns to the mode that entered it

    """

    TEXT = auto()
    TAG = auto()
    ATTR_VALUE = auto()
    STRING = auto()
    EXPR = auto()


EXPR_OPEN = "{{"
EXPR_CLOSE = "}}"
COMMENT_OPEN = "<!--"
COMMENT_CLOSE = "-->"

WHITESPACE: frozenset[str] = frozenset(" \t\n\r\f\v")

QUOTES: frozenset[str] = frozenset("\"'")

# Tag names: Foo, my-widget, Foo::Bar::Banner, ui.Button
TAG_NAME_START: frozenset[str] = frozenset(string.ascii_letters)
TAG_NAME_CHARS: frozenset[str] = TAG_NAME_START | frozenset(string.digits) | frozenset("-_:.")

# Attribute keys: id, cx-ref, data.value, :bind, @click
ATTR_KEY_START: frozenset[str] = frozenset(string.ascii_letters) | frozenset("_:@")
ATTR_KEY_CHARS: frozenset[str] = ATTR_KEY_START | frozenset(string.digits) | frozenset("-.")

# Characters that end an unquoted attribute value
UNQUOTED_VALUE_TERMINATORS: frozenset[str] = WHITESPACE | frozenset("/>")
