"""Token navigation utilities for the schemat parser.

Provides mixin for token stream navigation and error construction.
"""

from collections.abc import Sequence

from schemat.errors import ParseError, ParseErrorKind
from schemat.tokens import Token, TokenType


class TokenNavigationMixin:
    """Mixin providing token stream navigation methods.

    Required Host Attributes:
        - _tokens: Sequence[Token]
        - _tokens_len: int (cached len(_tokens) for hot loops)
        - _pos: int
        - _current: Token | None
        - _source_file: str | None
        - _source: str | None (scanned text, for error context)

    """

    _tokens: Sequence[Token]
    _tokens_len: int
    _pos: int
    _current: Token | None
    _source_file: str | None
    _source: str | None

    def _at_end(self) -> bool:
        """Check if at end of token stream."""
        return self._current is None or self._current.type == TokenType.EOF

    def _advance(self) -> Token | None:
        """Advance to next token and return it."""
        self._pos += 1
        if self._pos < self._tokens_len:
            self._current = self._tokens[self._pos]
        else:
            self._current = None
        return self._current

    def _error(self, kind: ParseErrorKind, token: Token, message: str) -> ParseError:
        """Build a ParseError positioned at token."""
        return ParseError(
            message,
            kind,
            lineno=token.lineno,
            col_offset=token.col,
            source_file=self._source_file or token._source_file,
            source_line=self._line_of(token),
        )

    def _line_of(self, token: Token) -> str | None:
        """Return the source line holding the start of token."""
        source = self._source
        if source is None:
            return None
        offset = token.location.offset
        start = source.rfind("\n", 0, offset) + 1
        end = source.find("\n", offset)
        return source[start : end if end != -1 else len(source)]
