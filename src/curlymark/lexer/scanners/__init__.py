"""Mode-specific scanners for the curlymark scanner.

Each scanner is a mixin that provides scanning logic for one or more
scanner modes (TEXT, TAG, ATTR_VALUE, STRING, EXPR).
"""

from __future__ import annotations

from curlymark.lexer.scanners.expr import ExprScannerMixin
from curlymark.lexer.scanners.string import StringScannerMixin
from curlymark.lexer.scanners.tag import TagScannerMixin
from curlymark.lexer.scanners.text import TextScannerMixin

__all__ = [
    "ExprScannerMixin",
    "StringScannerMixin",
    "TagScannerMixin",
    "TextScannerMixin",
]
