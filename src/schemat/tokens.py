"""Token and TokenType definitions for the schemat lexer.

The lexer produces a stream of Token objects that the parser consumes.
Each Token has a type, value, and source location.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType and the kind enums are inherently immutable.

Performance Note:
Token stores raw coordinates and lazily creates SourceLocation on demand.
Most tokens never have their location read; only errors and comment
attachment need positions.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from schemat.location import SourceLocation


class TokenType(Enum):
    """Token types produced by the lexer."""

    # Stream structure
    EOF = auto()
    WHITESPACE = auto()  # spaces, tabs and at most one newline
    BLANK_LINE = auto()  # two or more newlines with only whitespace between

    # Lists
    OPEN = auto()  # ( [ {
    CLOSE = auto()  # ) ] }

    # Data
    ATOM = auto()  # foo, 42, #t, #\(, |odd symbol|
    STRING = auto()  # "..."
    QUOTE_PREFIX = auto()  # ' ` , ,@ #' #` #, #,@ #; #( #u8(

    # Trivia kept by the parser
    LINE_COMMENT = auto()  # ; to end of line
    BLOCK_COMMENT = auto()  # #| ... |#
    DIRECTIVE = auto()  # #!... at offset 0, #lang ... at line start


class Delimiter(Enum):
    """The three list delimiter shapes."""

    PAREN = ("(", ")")
    BRACKET = ("[", "]")
    BRACE = ("{", "}")

    @property
    def open(self) -> str:
        return self.value[0]

    @property
    def close(self) -> str:
        return self.value[1]

    @classmethod
    def for_char(cls, char: str) -> "Delimiter":
        """Look up the delimiter owning an opening or closing character."""
        return _DELIMITER_BY_CHAR[char]


_DELIMITER_BY_CHAR: dict[str, Delimiter] = {}
for _delimiter in Delimiter:
    _DELIMITER_BY_CHAR[_delimiter.open] = _delimiter
    _DELIMITER_BY_CHAR[_delimiter.close] = _delimiter

OPENERS = frozenset("([{")
CLOSERS = frozenset(")]}")


class QuoteKind(Enum):
    """Reader prefixes that glue onto the datum that follows them.

    The value is the canonical prefix text. HASH prefixes carry their
    own text (``#``, ``#u8``, ``#hash``...) on the token and node.
    """

    QUOTE = "'"
    QUASIQUOTE = "`"
    UNQUOTE = ","
    UNQUOTE_SPLICING = ",@"
    SYNTAX = "#'"
    QUASISYNTAX = "#`"
    UNSYNTAX = "#,"
    UNSYNTAX_SPLICING = "#,@"
    DATUM_COMMENT = "#;"
    HASH = "#"


class DirectiveKind(Enum):
    """Leading non-S-expression lines kept verbatim."""

    SHEBANG = "shebang"  # #!/usr/bin/env gsi
    LANG = "lang"  # #lang racket


TokenKind = Delimiter | QuoteKind | DirectiveKind


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Tokens are the atomic units passed from lexer to parser.
    Each token has a type, string value, and source location (lazy).

    Attributes:
        type: The token type (from TokenType enum)
        value: The raw string value from source
        _lineno: Start line number (1-indexed)
        _col: Start column offset (1-indexed)
        _start_offset: Absolute start position in source
        _end_offset: Absolute end position in source
        _end_lineno: Line number of the last character of the token
        kind: Delimiter, QuoteKind or DirectiveKind for tokens that have one
        terminated: False for a string, ``|symbol|`` or block comment
            that ran into end of input
        _source_file: Optional source file path

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.
        The lazy cache uses idempotent write (safe for concurrent access).

    """

    type: TokenType
    value: str
    _lineno: int
    _col: int
    _start_offset: int
    _end_offset: int
    _end_lineno: int | None = None
    kind: TokenKind | None = None
    terminated: bool = True
    _source_file: str | None = None
    # Cache field - excluded from repr and comparison
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached).

        Returns:
            SourceLocation object for this token.
        """
        if self._location_cache is not None:
            return self._location_cache

        # Import here to avoid circular import at module load
        from schemat.location import SourceLocation

        loc = SourceLocation(
            lineno=self._lineno,
            col_offset=self._col,
            offset=self._start_offset,
            end_offset=self._end_offset,
            end_lineno=self._end_lineno,
            source_file=self._source_file,
        )
        # Safe mutation of frozen dataclass cache field (idempotent write)
        object.__setattr__(self, "_location_cache", loc)
        return loc

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self._lineno}:{self._col})"

    @property
    def lineno(self) -> int:
        """Line number (convenience accessor)."""
        return self._lineno

    @property
    def col(self) -> int:
        """Column offset (convenience accessor)."""
        return self._col

    @property
    def end_lineno(self) -> int:
        """Line of the token's last character."""
        return self._end_lineno if self._end_lineno is not None else self._lineno
