"""Atom, string and reader-prefix scanner mixin."""

from schemat.tokens import CLOSERS, OPENERS, DirectiveKind, QuoteKind, Token, TokenType

# Prefixes checked longest first so ",@" wins over ",".
_PLAIN_PREFIXES: tuple[QuoteKind, ...] = (
    QuoteKind.UNQUOTE_SPLICING,
    QuoteKind.QUOTE,
    QuoteKind.QUASIQUOTE,
    QuoteKind.UNQUOTE,
)

_SYNTAX_PREFIXES: tuple[QuoteKind, ...] = (
    QuoteKind.UNSYNTAX_SPLICING,
    QuoteKind.SYNTAX,
    QuoteKind.QUASISYNTAX,
    QuoteKind.UNSYNTAX,
)


class LiteralScannerMixin:
    """Mixin providing scanning of data tokens.

    Atoms are maximal runs of characters that are not whitespace, list
    delimiters or ``;``. Inside a run a backslash escapes the next character
    and ``"..."`` or ``|...|`` segments are consumed whole, which keeps
    ``#\\(``, ``#"bytes"`` and ``|odd symbol|`` in one atom.

    """

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int
    _col: int

    def _save_location(self) -> None:
        raise NotImplementedError

    def _commit_to(self, end: int) -> None:
        raise NotImplementedError

    def _next_is_datum(self, pos: int) -> bool:
        raise NotImplementedError

    def _make_token(
        self,
        token_type: TokenType,
        value: str,
        start_pos: int,
        *,
        kind: object = None,
        terminated: bool = True,
    ) -> Token:
        raise NotImplementedError

    def _scan_line_comment(self) -> Token:
        raise NotImplementedError

    def _scan_block_comment(self) -> Token:
        raise NotImplementedError

    def _scan_directive(self, kind: DirectiveKind) -> Token:
        raise NotImplementedError

    def _at_lang_directive(self) -> bool:
        raise NotImplementedError

    def _scan_string(self) -> Token:
        """Scan a double-quoted string literal, escapes included."""
        self._save_location()
        start = self._pos
        end, terminated = self._skip_delimited(start)
        self._commit_to(end)
        return self._make_token(
            TokenType.STRING, self._source[start:end], start, terminated=terminated
        )

    def _scan_atom(self) -> Token:
        """Scan an atom run starting at the current position."""
        self._save_location()
        start = self._pos
        end, terminated = self._find_atom_end(start)
        self._commit_to(end)
        return self._make_token(
            TokenType.ATOM, self._source[start:end], start, terminated=terminated
        )

    def _scan_prefix_or_atom(self) -> Token:
        """Scan ``'``, `````, ``,`` or ``,@``.

        A quote character is a prefix only when a datum character follows it
        immediately; otherwise it is an ordinary atom constituent.
        """
        for kind in _PLAIN_PREFIXES:
            token = self._try_prefix(kind)
            if token is not None:
                return token
        return self._scan_atom()

    def _scan_hash(self) -> Token:
        """Dispatch on the character after ``#``.

        Handles block comments, directives, the ``#'`` family, datum
        comments and hash-led atoms glued to an opening delimiter
        (``#(``, ``#u8(``...), falling back to a plain atom.
        """
        source = self._source
        pos = self._pos
        following = source[pos + 1] if pos + 1 < self._source_len else ""

        if following == "|":
            return self._scan_block_comment()
        if following == "!" and pos == 0:
            return self._scan_directive(DirectiveKind.SHEBANG)
        if self._at_lang_directive():
            return self._scan_directive(DirectiveKind.LANG)
        if following == ";":
            return self._emit_prefix(QuoteKind.DATUM_COMMENT, 2)
        for kind in _SYNTAX_PREFIXES:
            token = self._try_prefix(kind)
            if token is not None:
                return token

        end, terminated = self._find_atom_end(pos)
        run = source[pos:end]
        if (
            terminated
            and end < self._source_len
            and source[end] in OPENERS
            and "\\" not in run
            and '"' not in run
            and "|" not in run
        ):
            self._save_location()
            self._commit_to(end)
            return self._make_token(
                TokenType.QUOTE_PREFIX, run, pos, kind=QuoteKind.HASH
            )
        return self._scan_atom()

    # =========================================================================
    # Helpers
    # =========================================================================

    def _try_prefix(self, kind: QuoteKind) -> Token | None:
        """Emit a prefix token if the source continues with kind's text and a datum."""
        text = kind.value
        if not self._source.startswith(text, self._pos):
            return None
        if not self._next_is_datum(self._pos + len(text)):
            return None
        return self._emit_prefix(kind, len(text))

    def _emit_prefix(self, kind: QuoteKind, length: int) -> Token:
        self._save_location()
        start = self._pos
        self._commit_to(start + length)
        return self._make_token(
            TokenType.QUOTE_PREFIX, self._source[start : start + length], start, kind=kind
        )

    def _find_atom_end(self, start: int) -> tuple[int, bool]:
        """Find the end of an atom run.

        Returns:
            (end position, whether every embedded segment was closed)
        """
        source = self._source
        source_len = self._source_len
        pos = start
        while pos < source_len:
            char = source[pos]
            if char == "\\":
                pos = min(pos + 2, source_len)
            elif char == '"' or char == "|":
                pos, closed = self._skip_delimited(pos)
                if not closed:
                    return pos, False
            elif char.isspace() or char == ";" or char in OPENERS or char in CLOSERS:
                break
            else:
                pos += 1
        return pos, True

    def _skip_delimited(self, start: int) -> tuple[int, bool]:
        """Skip a ``"..."`` or ``|...|`` segment whose opening mark is at start.

        Returns:
            (position after the closing mark or end of input, whether it closed)
        """
        source = self._source
        source_len = self._source_len
        mark = source[start]
        pos = start + 1
        while pos < source_len:
            char = source[pos]
            if char == "\\":
                pos += 2
            elif char == mark:
                return pos + 1, True
            else:
                pos += 1
        return source_len, False
