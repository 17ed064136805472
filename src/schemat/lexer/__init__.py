"""Single-pass lexer for S-expression source.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, scan
├── core.py              # Lexer class (dispatch + position tracking)
└── scanners/
    ├── literal.py       # atoms, strings, quote prefixes, #-forms
    └── trivia.py        # whitespace, blank lines, comments, directives

Usage:
    >>> from schemat.lexer import scan
    >>> [t.type.name for t in scan("'(a)")]
    ['QUOTE_PREFIX', 'OPEN', 'ATOM', 'CLOSE', 'EOF']

"""

from schemat.lexer.core import Lexer
from schemat.tokens import Token


def scan(source: str, source_file: str | None = None) -> list[Token]:
    """Tokenize source into a list ending with one EOF token."""
    return list(Lexer(source, source_file=source_file).tokenize())


__all__ = ["Lexer", "scan"]
