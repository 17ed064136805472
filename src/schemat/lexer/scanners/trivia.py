"""Whitespace, comment and directive scanner mixin."""

from schemat.tokens import DirectiveKind, Token, TokenType


class TriviaScannerMixin:
    """Mixin providing scanning of non-datum source text.

    A whitespace run becomes one WHITESPACE token, or one BLANK_LINE token
    when it holds two or more newlines.

    """

    # These will be set by the Lexer class
    _source: str
    _source_len: int
    _pos: int
    _col: int
    _depth: int

    def _save_location(self) -> None:
        raise NotImplementedError

    def _commit_to(self, end: int) -> None:
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

    def _find_line_end(self) -> int:
        """Find the end of the current line (position of \\n or EOF)."""
        idx = self._source.find("\n", self._pos)
        return idx if idx != -1 else self._source_len

    def _scan_whitespace(self) -> Token:
        """Consume a whitespace run.

        Returns:
            A BLANK_LINE token if the run spans a blank line, else WHITESPACE.
        """
        source = self._source
        start = self._pos
        end = start
        while end < self._source_len and source[end].isspace():
            end += 1

        segment = source[start:end]
        self._save_location()
        self._commit_to(end)
        if segment.count("\n") >= 2:
            return self._make_token(TokenType.BLANK_LINE, segment, start)
        return self._make_token(TokenType.WHITESPACE, segment, start)

    def _scan_line_comment(self) -> Token:
        """Scan a ``;`` comment up to, not including, the newline."""
        self._save_location()
        start = self._pos
        end = self._find_line_end()
        self._commit_to(end)
        return self._make_token(TokenType.LINE_COMMENT, self._source[start:end], start)

    def _scan_block_comment(self) -> Token:
        """Scan a ``#| ... |#`` comment, honoring nesting."""
        source = self._source
        source_len = self._source_len
        self._save_location()
        start = self._pos
        pos = start + 2
        depth = 1
        while pos < source_len and depth > 0:
            if source.startswith("#|", pos):
                depth += 1
                pos += 2
            elif source.startswith("|#", pos):
                depth -= 1
                pos += 2
            else:
                pos += 1

        self._commit_to(pos)
        return self._make_token(
            TokenType.BLOCK_COMMENT, source[start:pos], start, terminated=depth == 0
        )

    def _at_lang_directive(self) -> bool:
        """Check for ``#lang`` at the start of a top-level line followed by whitespace."""
        if self._depth or self._col != 1 or not self._source.startswith("#lang", self._pos):
            return False
        after = self._pos + len("#lang")
        return after < self._source_len and self._source[after] in " \t"

    def _scan_directive(self, kind: DirectiveKind) -> Token:
        """Scan a directive line; trailing whitespace is not part of the token."""
        self._save_location()
        start = self._pos
        end = self._find_line_end()
        value = self._source[start:end].rstrip()
        self._commit_to(start + len(value))
        return self._make_token(TokenType.DIRECTIVE, value, start, kind=kind)
