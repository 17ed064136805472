"""Error-path and malformed input tests.

Every structural failure is reported as a ParseError with a kind and a
1-based position. No output is produced for malformed input.
"""

import pytest

from schemat import check, format, parse
from schemat.errors import ParseError, ParseErrorKind, RenderError, SchematError

# =========================================================================
# ParseError construction and formatting
# =========================================================================


class TestParseErrorFormatting:
    """Verify ParseError produces well-formatted messages."""

    def test_message_only(self) -> None:
        err = ParseError("unexpected token", ParseErrorKind.UNEXPECTED_CLOSE)
        assert str(err) == "unexpected token"
        assert err.lineno is None
        assert err.col_offset is None

    def test_with_line_number(self) -> None:
        err = ParseError("bad syntax", ParseErrorKind.UNCLOSED_LIST, lineno=42)
        assert str(err) == "42 bad syntax"

    def test_with_line_and_column(self) -> None:
        err = ParseError("missing bracket", ParseErrorKind.UNCLOSED_LIST, lineno=10, col_offset=5)
        assert str(err) == "10:5 missing bracket"

    def test_with_source_file(self) -> None:
        err = ParseError(
            "error", ParseErrorKind.DANGLING_QUOTE, lineno=1, col_offset=1, source_file="a.scm"
        )
        assert str(err) == "a.scm:1:1 error"
        assert err.message == "error"
        assert err.kind is ParseErrorKind.DANGLING_QUOTE

    def test_source_line_with_caret(self) -> None:
        err = ParseError(
            "unclosed", ParseErrorKind.UNCLOSED_LIST, lineno=3, col_offset=3, source_line="  (foo  "
        )
        assert str(err) == "3:3 unclosed\n      (foo\n      ^"
        assert err.source_line == "  (foo  "

    def test_caret_follows_tabs(self) -> None:
        err = ParseError(
            "x", ParseErrorKind.UNEXPECTED_CLOSE, lineno=1, col_offset=3, source_line="\ta)"
        )
        assert str(err).splitlines()[2] == "    \t ^"

    def test_parse_quotes_offending_line(self) -> None:
        err = parse_error("(a\n  b))")
        assert err.kind is ParseErrorKind.UNEXPECTED_CLOSE
        assert str(err) == "2:5 unexpected closing delimiter ')'\n      b))\n        ^"

    def test_hierarchy(self) -> None:
        assert issubclass(ParseError, SchematError)
        assert issubclass(RenderError, SchematError)


# =========================================================================
# Structural errors
# =========================================================================


def parse_error(source: str) -> ParseError:
    with pytest.raises(ParseError) as exc_info:
        parse(source)
    return exc_info.value


class TestUnclosedList:
    def test_unclosed_at_line_one(self) -> None:
        err = parse_error("(foo\n")
        assert err.kind is ParseErrorKind.UNCLOSED_LIST
        assert (err.lineno, err.col_offset) == (1, 1)

    def test_innermost_open_reported(self) -> None:
        err = parse_error("(a\n  (b")
        assert err.kind is ParseErrorKind.UNCLOSED_LIST
        assert (err.lineno, err.col_offset) == (2, 3)

    def test_message_names_delimiter(self) -> None:
        err = parse_error("[a")
        assert "'['" in err.message
        assert "']'" in err.message


class TestUnexpectedClose:
    def test_close_at_top_level(self) -> None:
        err = parse_error("a)")
        assert err.kind is ParseErrorKind.UNEXPECTED_CLOSE
        assert (err.lineno, err.col_offset) == (1, 2)

    def test_extra_close_after_list(self) -> None:
        err = parse_error("(a))")
        assert err.kind is ParseErrorKind.UNEXPECTED_CLOSE
        assert err.col_offset == 4


class TestMismatchedDelimiter:
    def test_paren_closed_by_bracket(self) -> None:
        err = parse_error("(a]")
        assert err.kind is ParseErrorKind.MISMATCHED_DELIMITER
        assert (err.lineno, err.col_offset) == (1, 3)
        assert err.message == "expected ')' to close '(' at 1:1, found ']'"

    def test_nested_mismatch(self) -> None:
        err = parse_error("[(a})")
        assert err.kind is ParseErrorKind.MISMATCHED_DELIMITER
        assert err.col_offset == 4


class TestDanglingQuote:
    def test_prefix_before_close(self) -> None:
        err = parse_error("(')")
        assert err.kind is ParseErrorKind.DANGLING_QUOTE
        assert (err.lineno, err.col_offset) == (1, 2)

    def test_datum_comment_at_end(self) -> None:
        err = parse_error("(a) #;")
        assert err.kind is ParseErrorKind.DANGLING_QUOTE
        assert err.col_offset == 5

    def test_prefix_before_comment_at_end(self) -> None:
        err = parse_error("';c\n")
        assert err.kind is ParseErrorKind.DANGLING_QUOTE
        assert (err.lineno, err.col_offset) == (1, 1)

    def test_prefix_before_comment_and_close(self) -> None:
        assert parse_error("(a '#| c |#)").kind is ParseErrorKind.DANGLING_QUOTE

    def test_dangling_reported_before_unclosed(self) -> None:
        assert parse_error("(a ,").kind is ParseErrorKind.UNCLOSED_LIST
        assert parse_error("(a #;").kind is ParseErrorKind.DANGLING_QUOTE

    def test_lone_quote_is_an_atom(self) -> None:
        assert format("'") == "'\n"


class TestUnterminated:
    def test_string(self) -> None:
        err = parse_error('(display "oops)')
        assert err.kind is ParseErrorKind.UNTERMINATED_STRING
        assert (err.lineno, err.col_offset) == (1, 10)

    def test_block_comment(self) -> None:
        err = parse_error("a\n#| never closed")
        assert err.kind is ParseErrorKind.UNTERMINATED_COMMENT
        assert (err.lineno, err.col_offset) == (2, 1)

    def test_pipe_symbol(self) -> None:
        assert parse_error("|abc").kind is ParseErrorKind.UNTERMINATED_STRING


class TestPipelineErrors:
    """Errors propagate unchanged through format and check."""

    def test_format_raises(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            format("(a b", source_file="broken.scm")
        assert str(exc_info.value).startswith("broken.scm:1:1 ")

    def test_check_raises(self) -> None:
        with pytest.raises(ParseError):
            check(")")

    def test_errors_are_independent(self) -> None:
        with pytest.raises(ParseError):
            format("(")
        assert format("(a)") == "(a)\n"
