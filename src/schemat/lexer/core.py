"""Single-pass lexer for S-expression source.

Scans the source once from left to right. Every character is consumed by
exactly one token or by an inter-token whitespace run, so the scanner
always makes forward progress and is total: it never raises, and bytes it
cannot classify end up inside ATOM tokens for the parser to judge.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

from collections.abc import Iterator

from schemat.lexer.scanners import LiteralScannerMixin, TriviaScannerMixin
from schemat.tokens import CLOSERS, OPENERS, Delimiter, Token, TokenKind, TokenType


class Lexer(
    # Trivia first: its comment and directive scanners resolve the
    # stubs declared on LiteralScannerMixin
    TriviaScannerMixin,
    LiteralScannerMixin,
):
    """Single-pass lexer with O(n) performance.

    Usage:
            >>> lexer = Lexer("(foo ; bar\\n\\n'baz)")
            >>> for token in lexer.tokenize():
            ...     print(token)
        Token(OPEN, '(', 1:1)
        Token(ATOM, 'foo', 1:2)
        Token(WHITESPACE, ' ', 1:5)
        Token(LINE_COMMENT, '; bar', 1:6)
        Token(BLANK_LINE, '\\n\\n', 1:11)
        Token(QUOTE_PREFIX, "'", 3:1)
        Token(ATOM, 'baz', 3:2)
        Token(CLOSE, ')', 3:5)
        Token(EOF, '', 3:6)

    Thread Safety:
        Lexer instances are single-use. Create one per source string.
        All state is instance-local; no shared mutable state.

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_pos",
        "_lineno",
        "_col",
        "_source_file",
        "_saved_lineno",
        "_saved_col",
        "_depth",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize lexer with source text.

        Line endings are normalized to ``\\n`` before scanning; token offsets
        index the normalized text.

        Args:
            source: S-expression source text
            source_file: Optional source file path for error messages
        """
        self._source = source.replace("\r\n", "\n")
        self._source_len = len(self._source)
        self._pos = 0
        self._lineno = 1
        self._col = 1
        self._source_file = source_file
        self._saved_lineno = 1
        self._saved_col = 1
        # Open lists; #lang is only a directive outside of them
        self._depth = 0

    @property
    def source(self) -> str:
        """The newline-normalized source being scanned."""
        return self._source

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into token stream.

        Yields:
            Token objects one at a time, ending with a single EOF token.

        Complexity: O(n) where n = len(source)
        """
        source = self._source
        source_len = self._source_len
        while self._pos < source_len:
            char = source[self._pos]
            if char.isspace():
                yield self._scan_whitespace()
            elif char == ";":
                yield self._scan_line_comment()
            elif char in OPENERS:
                self._depth += 1
                yield self._scan_delimiter(TokenType.OPEN)
            elif char in CLOSERS:
                if self._depth:
                    self._depth -= 1
                yield self._scan_delimiter(TokenType.CLOSE)
            elif char == '"':
                yield self._scan_string()
            elif char == "#":
                yield self._scan_hash()
            elif char in "'`,":
                yield self._scan_prefix_or_atom()
            else:
                yield self._scan_atom()

        yield self._make_token_at_current(TokenType.EOF, "")

    def _scan_delimiter(self, token_type: TokenType) -> Token:
        """Scan a single opening or closing delimiter character."""
        self._save_location()
        start = self._pos
        char = self._source[start]
        self._commit_to(start + 1)
        return self._make_token(token_type, char, start, kind=Delimiter.for_char(char))

    # =========================================================================
    # Position helpers
    # =========================================================================

    def _commit_to(self, end: int) -> None:
        """Advance position to end, updating line and column.

        Uses str.count on the skipped segment instead of a per-character loop.

        Args:
            end: Position to commit to.
        """
        segment = self._source[self._pos : end]
        newline_count = segment.count("\n")

        if newline_count > 0:
            last_nl = segment.rfind("\n")
            self._lineno += newline_count
            self._col = len(segment) - last_nl  # chars after last newline + 1
        else:
            self._col += len(segment)

        self._pos = end

    def _next_is_datum(self, pos: int) -> bool:
        """Check that a character exists at pos and is not whitespace."""
        return pos < self._source_len and not self._source[pos].isspace()

    # =========================================================================
    # Location tracking
    # =========================================================================

    def _save_location(self) -> None:
        """Save current location for O(1) token location creation.

        Call this at the START of scanning a token, before any position changes.
        """
        self._saved_lineno = self._lineno
        self._saved_col = self._col

    def _make_token(
        self,
        token_type: TokenType,
        value: str,
        start_pos: int,
        *,
        kind: TokenKind | None = None,
        terminated: bool = True,
    ) -> Token:
        """Create a Token with raw coordinates (lazy SourceLocation).

        Uses the location saved by _save_location() as the token start and
        the current position as its end.

        Args:
            token_type: The token type.
            value: The raw string value.
            start_pos: Start position in source.
            kind: Delimiter, quote or directive kind, if any.
            terminated: Whether a delimited literal found its closing mark.

        Returns:
            Token with raw coordinates for lazy location creation.
        """
        return Token(
            type=token_type,
            value=value,
            _lineno=self._saved_lineno,
            _col=self._saved_col,
            _start_offset=start_pos,
            _end_offset=self._pos,
            _end_lineno=self._lineno,
            kind=kind,
            terminated=terminated,
            _source_file=self._source_file,
        )

    def _make_token_at_current(self, token_type: TokenType, value: str) -> Token:
        """Create a Token at current position (for EOF).

        Args:
            token_type: The token type.
            value: The raw string value.

        Returns:
            Token at current position.
        """
        return Token(
            type=token_type,
            value=value,
            _lineno=self._lineno,
            _col=self._col,
            _start_offset=self._pos,
            _end_offset=self._pos,
            _end_lineno=self._lineno,
            _source_file=self._source_file,
        )
