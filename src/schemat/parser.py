"""Parser producing the lossless syntax tree.

Consumes the token stream from the Lexer and builds immutable nodes.

Architecture:
An OPEN token pushes a frame, tokens accumulate as children of the
innermost frame and a CLOSE token pops it. Quote prefixes wait on their
frame until the next datum arrives and then wrap it. Comments and blank
lines become children in place, so later stages see them in source order.

Thread Safety:
- Parser instances are single-use; create one per token stream
- The resulting tree is immutable and safe to share across threads

"""

from __future__ import annotations

from collections.abc import Sequence

from schemat.errors import ParseError, ParseErrorKind
from schemat.nodes import (
    Atom,
    Attachment,
    Blank,
    Comment,
    Directive,
    List,
    Node,
    String,
)
from schemat.parsing import FrameStack, ListFrame, TokenNavigationMixin
from schemat.tokens import Delimiter, Token, TokenType


class Parser(TokenNavigationMixin):
    """Stack-based parser for S-expressions.

    Usage:
            >>> from schemat.lexer import scan
            >>> Parser(scan("'(a b)")).parse()
        (Quoted(kind=<QuoteKind.QUOTE: "'">, prefix="'", inner=List(...)),)

    Comment Attachment:
        A comment that starts on the line where the previous token ended
        is TRAILING; any other comment is LEADING. Either way it stays a
        child of the frame it appeared in.

    Directives:
        DIRECTIVE tokens are kept as Directive nodes only while they form
        an unbroken run at the very start of the input. Later ones become
        leading comments rather than errors.

    """

    __slots__ = (
        "_tokens",
        "_tokens_len",
        "_pos",
        "_current",
        "_source_file",
        "_source",
        "_frames",
        "_prev_end_line",
        "_in_directive_run",
    )

    def __init__(
        self,
        tokens: Sequence[Token],
        source_file: str | None = None,
        *,
        source: str | None = None,
    ) -> None:
        """Initialize parser with a token stream.

        Args:
            tokens: Tokens from Lexer.tokenize(), normally ending with EOF
            source_file: Optional source file path for error messages
            source: The scanned text, quoted in error messages when given
        """
        self._tokens = tokens
        self._tokens_len = len(tokens)
        self._pos = 0
        self._current: Token | None = tokens[0] if tokens else None
        self._source_file = source_file
        self._source = source
        self._frames = FrameStack()
        # End line of the last datum or comment token; 0 before any
        self._prev_end_line = 0
        self._in_directive_run = True

    def parse(self) -> tuple[Node, ...]:
        """Parse the token stream into top-level nodes.

        Returns:
            Top-level nodes, directives first

        Raises:
            ParseError: On unbalanced or mismatched delimiters, dangling
                prefixes, or unterminated strings and block comments.
        """
        while not self._at_end():
            token = self._current
            assert token is not None
            if token.type == TokenType.WHITESPACE or (
                # Leading blank lines are dropped and keep the directive run open
                token.type == TokenType.BLANK_LINE and not self._prev_end_line
            ):
                self._advance()
                continue
            if token.type != TokenType.DIRECTIVE:
                self._in_directive_run = False
            self._dispatch(token)
            if token.type != TokenType.BLANK_LINE:
                self._prev_end_line = token.end_lineno
            self._advance()

        return self._finish()

    def _dispatch(self, token: Token) -> None:
        frame = self._frames.current
        match token.type:
            case TokenType.OPEN:
                self._frames.push(ListFrame(open_token=token))
            case TokenType.CLOSE:
                self._close_list(token)
            case TokenType.ATOM:
                self._check_terminated(token, ParseErrorKind.UNTERMINATED_STRING)
                frame.append(Atom(location=token.location, text=token.value))
            case TokenType.STRING:
                self._check_terminated(token, ParseErrorKind.UNTERMINATED_STRING)
                frame.append(String(location=token.location, text=token.value))
            case TokenType.QUOTE_PREFIX:
                frame.prefixes.append(token)
            case TokenType.LINE_COMMENT | TokenType.BLOCK_COMMENT:
                self._check_terminated(token, ParseErrorKind.UNTERMINATED_COMMENT)
                self._add_comment(frame, token)
            case TokenType.DIRECTIVE:
                if self._in_directive_run:
                    frame.append_trivia(
                        Directive(location=token.location, kind=token.kind, text=token.value)  # type: ignore[arg-type]
                    )
                else:
                    self._add_comment(frame, token)
            case TokenType.BLANK_LINE:
                # Blank lines between a prefix and its datum carry no layout
                if not frame.prefixes:
                    frame.mark_blank(Blank(location=token.location))

    def _add_comment(self, frame: ListFrame, token: Token) -> None:
        # A comment between a prefix and its datum moves in front of the
        # quoted form on its own line
        if frame.prefixes:
            attachment = Attachment.LEADING
        elif self._prev_end_line and token.lineno == self._prev_end_line:
            attachment = Attachment.TRAILING
        else:
            attachment = Attachment.LEADING
        comment = Comment(
            location=token.location,
            text=token.value.rstrip(),
            attachment=attachment,
            block=token.type == TokenType.BLOCK_COMMENT,
        )
        if frame.prefixes:
            frame.held.append(comment)
        else:
            frame.append_trivia(comment)

    def _close_list(self, token: Token) -> None:
        if self._frames.at_top_level():
            raise self._error(
                ParseErrorKind.UNEXPECTED_CLOSE,
                token,
                f"unexpected closing delimiter {token.value!r}",
            )

        frame = self._frames.current
        if frame.prefixes:
            raise self._dangling(frame.prefixes[-1])

        open_token = frame.open_token
        assert open_token is not None
        delimiter = frame.delimiter
        assert delimiter is not None
        if token.kind is not delimiter:
            raise self._error(
                ParseErrorKind.MISMATCHED_DELIMITER,
                token,
                f"expected {delimiter.close!r} to close {delimiter.open!r} "
                f"at {open_token.lineno}:{open_token.col}, found {token.value!r}",
            )

        self._frames.pop()
        node = List(
            location=open_token.location.span_to(token.location),
            delimiter=delimiter,
            children=frame.finish(),
        )
        self._frames.current.append(node)

    def _finish(self) -> tuple[Node, ...]:
        frame = self._frames.current
        if frame.prefixes:
            raise self._dangling(frame.prefixes[-1])
        if not self._frames.at_top_level():
            open_token = frame.open_token
            assert open_token is not None
            delimiter: Delimiter = open_token.kind  # type: ignore[assignment]
            raise self._error(
                ParseErrorKind.UNCLOSED_LIST,
                open_token,
                f"unclosed {delimiter.open!r}: expected {delimiter.close!r} before end of input",
            )
        return frame.finish()

    def _check_terminated(self, token: Token, kind: ParseErrorKind) -> None:
        if not token.terminated:
            raise self._error(kind, token, f"{kind.value} reaches end of input")

    def _dangling(self, prefix: Token) -> ParseError:
        return self._error(
            ParseErrorKind.DANGLING_QUOTE,
            prefix,
            f"prefix {prefix.value!r} is not followed by a datum",
        )
