"""Token scanners for the schemat lexer.

Each scanner is a mixin that provides scanning logic for one family
of tokens: data (atoms, strings, prefixes) and trivia (whitespace,
comments, directives).
"""

from __future__ import annotations

from schemat.lexer.scanners.literal import LiteralScannerMixin
from schemat.lexer.scanners.trivia import TriviaScannerMixin

__all__ = [
    "LiteralScannerMixin",
    "TriviaScannerMixin",
]
