"""Tests for token classification in the lexer.

Covers delimiters, atoms, strings, reader prefixes, comments, blank lines
and directives.
"""

from schemat.lexer import Lexer, scan
from schemat.tokens import Delimiter, DirectiveKind, QuoteKind, Token, TokenType


def significant(source: str) -> list[Token]:
    return [t for t in scan(source) if t.type != TokenType.WHITESPACE]


def types(source: str) -> list[TokenType]:
    return [t.type for t in significant(source)]


def values(source: str) -> list[str]:
    return [t.value for t in significant(source) if t.type != TokenType.EOF]


class TestDelimiters:
    """Open and close tokens carry their delimiter shape."""

    def test_paren_list(self) -> None:
        assert types("(a)") == [
            TokenType.OPEN,
            TokenType.ATOM,
            TokenType.CLOSE,
            TokenType.EOF,
        ]

    def test_delimiter_kinds(self) -> None:
        tokens = significant("[x}")
        assert tokens[0].kind is Delimiter.BRACKET
        assert tokens[2].kind is Delimiter.BRACE

    def test_delimiters_split_atoms(self) -> None:
        assert values("(a(b)c)") == ["(", "a", "(", "b", ")", "c", ")"]

    def test_for_char(self) -> None:
        assert Delimiter.for_char("(") is Delimiter.PAREN
        assert Delimiter.for_char("]") is Delimiter.BRACKET
        assert Delimiter.BRACE.open == "{"
        assert Delimiter.BRACE.close == "}"


class TestAtoms:
    """Atoms are maximal runs of non-delimiter characters."""

    def test_simple_atoms(self) -> None:
        assert values("foo 42 -1.5 <=?") == ["foo", "42", "-1.5", "<=?"]

    def test_semicolon_ends_atom(self) -> None:
        assert types("a;b") == [TokenType.ATOM, TokenType.LINE_COMMENT, TokenType.EOF]

    def test_character_literal_with_escaped_paren(self) -> None:
        tokens = significant("#\\(")
        assert tokens[0].type == TokenType.ATOM
        assert tokens[0].value == "#\\("
        assert tokens[1].type == TokenType.EOF

    def test_escaped_semicolon(self) -> None:
        assert values("#\\; x") == ["#\\;", "x"]

    def test_pipe_symbol_keeps_spaces(self) -> None:
        assert values("|odd symbol| x") == ["|odd symbol|", "x"]

    def test_embedded_string_segment(self) -> None:
        assert values('#px"a b" c') == ['#px"a b"', "c"]

    def test_booleans_are_atoms(self) -> None:
        assert types("#t #f") == [TokenType.ATOM, TokenType.ATOM, TokenType.EOF]

    def test_shebang_lookalike_after_start_is_atom(self) -> None:
        tokens = significant("a #!optional")
        assert tokens[1].type == TokenType.ATOM
        assert tokens[1].value == "#!optional"

    def test_unterminated_pipe_symbol(self) -> None:
        tokens = significant("|abc")
        assert tokens[0].type == TokenType.ATOM
        assert tokens[0].terminated is False


class TestStrings:
    """Strings are opaque and may span lines."""

    def test_simple_string(self) -> None:
        tokens = significant('"hello world"')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].value == '"hello world"'
        assert tokens[0].terminated is True

    def test_escaped_quote(self) -> None:
        assert values('"a\\"b" c') == ['"a\\"b"', "c"]

    def test_multiline_string(self) -> None:
        tokens = significant('"a\nb" c')
        assert tokens[0].value == '"a\nb"'
        assert tokens[0].end_lineno == 2
        assert tokens[1].lineno == 2

    def test_string_hides_delimiters(self) -> None:
        assert types('"(;)"') == [TokenType.STRING, TokenType.EOF]

    def test_unterminated_string(self) -> None:
        tokens = significant('"abc')
        assert tokens[0].type == TokenType.STRING
        assert tokens[0].terminated is False


class TestQuotePrefixes:
    """Prefixes are recognized only when a datum follows immediately."""

    def test_quote(self) -> None:
        tokens = significant("'a")
        assert tokens[0].type == TokenType.QUOTE_PREFIX
        assert tokens[0].kind is QuoteKind.QUOTE
        assert tokens[1].value == "a"

    def test_unquote_splicing_wins_over_unquote(self) -> None:
        tokens = significant(",@xs")
        assert tokens[0].kind is QuoteKind.UNQUOTE_SPLICING
        assert tokens[0].value == ",@"

    def test_quasiquote_and_unquote(self) -> None:
        kinds = [t.kind for t in significant("`(a ,b)") if t.type == TokenType.QUOTE_PREFIX]
        assert kinds == [QuoteKind.QUASIQUOTE, QuoteKind.UNQUOTE]

    def test_prefix_before_whitespace_is_atom(self) -> None:
        assert types("' a") == [TokenType.ATOM, TokenType.ATOM, TokenType.EOF]

    def test_prefix_at_end_of_input_is_atom(self) -> None:
        assert types("a '") == [TokenType.ATOM, TokenType.ATOM, TokenType.EOF]

    def test_prefix_before_close_is_prefix(self) -> None:
        assert types("(')")[1] == TokenType.QUOTE_PREFIX

    def test_stacked_prefixes(self) -> None:
        assert values("'`a") == ["'", "`", "a"]

    def test_syntax_family(self) -> None:
        cases = {
            "#'f": QuoteKind.SYNTAX,
            "#`f": QuoteKind.QUASISYNTAX,
            "#,f": QuoteKind.UNSYNTAX,
            "#,@f": QuoteKind.UNSYNTAX_SPLICING,
        }
        for source, kind in cases.items():
            token = significant(source)[0]
            assert token.type == TokenType.QUOTE_PREFIX, source
            assert token.kind is kind, source

    def test_datum_comment_allows_whitespace(self) -> None:
        tokens = significant("#; (a)")
        assert tokens[0].kind is QuoteKind.DATUM_COMMENT
        assert tokens[1].type == TokenType.OPEN

    def test_hash_vector(self) -> None:
        tokens = significant("#(1 2)")
        assert tokens[0].type == TokenType.QUOTE_PREFIX
        assert tokens[0].kind is QuoteKind.HASH
        assert tokens[0].value == "#"
        assert tokens[1].type == TokenType.OPEN

    def test_named_hash_prefix(self) -> None:
        tokens = significant("#u8(1 2)")
        assert tokens[0].kind is QuoteKind.HASH
        assert tokens[0].value == "#u8"

    def test_hash_atom_without_opener(self) -> None:
        assert types("#u8 (1)")[0] == TokenType.ATOM


class TestComments:
    """Line and block comments."""

    def test_line_comment_excludes_newline(self) -> None:
        tokens = significant("; hi\nx")
        assert tokens[0].type == TokenType.LINE_COMMENT
        assert tokens[0].value == "; hi"
        assert tokens[1].lineno == 2

    def test_block_comment(self) -> None:
        tokens = significant("#| a b |# x")
        assert tokens[0].type == TokenType.BLOCK_COMMENT
        assert tokens[0].value == "#| a b |#"
        assert tokens[1].value == "x"

    def test_nested_block_comment(self) -> None:
        tokens = significant("#| a #| b |# c |#")
        assert len(tokens) == 2
        assert tokens[0].terminated is True

    def test_unterminated_block_comment(self) -> None:
        tokens = significant("#| a #| b |#")
        assert tokens[0].type == TokenType.BLOCK_COMMENT
        assert tokens[0].terminated is False


class TestBlankLines:
    """Whitespace runs spanning a blank line become BLANK_LINE tokens."""

    def test_single_newline_is_whitespace(self) -> None:
        assert [(t.type, t.value) for t in scan("a \nb")] == [
            (TokenType.ATOM, "a"),
            (TokenType.WHITESPACE, " \n"),
            (TokenType.ATOM, "b"),
            (TokenType.EOF, ""),
        ]

    def test_directive_trailing_space_is_whitespace(self) -> None:
        tokens = scan("#lang racket  \n(a)")
        assert tokens[1].type == TokenType.WHITESPACE
        assert tokens[1].value == "  \n"

    def test_two_newlines(self) -> None:
        assert types("a\n\nb")[1] == TokenType.BLANK_LINE

    def test_whitespace_only_line_counts_as_blank(self) -> None:
        assert types("a\n   \n b")[1] == TokenType.BLANK_LINE

    def test_many_newlines_one_token(self) -> None:
        assert types("a\n\n\n\nb") == [
            TokenType.ATOM,
            TokenType.BLANK_LINE,
            TokenType.ATOM,
            TokenType.EOF,
        ]


class TestDirectives:
    """Shebang and #lang lines."""

    def test_shebang_at_start(self) -> None:
        tokens = significant("#!/usr/bin/env gsi\n(foo)")
        assert tokens[0].type == TokenType.DIRECTIVE
        assert tokens[0].kind is DirectiveKind.SHEBANG
        assert tokens[0].value == "#!/usr/bin/env gsi"

    def test_lang_line(self) -> None:
        tokens = significant("#lang racket/base  \n(foo)")
        assert tokens[0].kind is DirectiveKind.LANG
        assert tokens[0].value == "#lang racket/base"

    def test_lang_must_start_line(self) -> None:
        assert types(" #lang racket")[:2] == [TokenType.ATOM, TokenType.ATOM]

    def test_lang_needs_separator(self) -> None:
        assert types("#langx")[0] == TokenType.ATOM

    def test_lang_inside_list_is_atom(self) -> None:
        assert types("(\n#lang x\n)") == [
            TokenType.OPEN,
            TokenType.ATOM,
            TokenType.ATOM,
            TokenType.CLOSE,
            TokenType.EOF,
        ]

    def test_lang_after_list_closes(self) -> None:
        assert types("(a)\n#lang x")[3] == TokenType.DIRECTIVE

    def test_stray_close_keeps_top_level(self) -> None:
        assert types(")\n#lang x")[1] == TokenType.DIRECTIVE

    def test_lang_on_later_line(self) -> None:
        tokens = significant("#!/bin/sh\n#lang racket\n")
        assert [t.kind for t in tokens[:2]] == [DirectiveKind.SHEBANG, DirectiveKind.LANG]


class TestLineEndings:
    """CRLF input is normalized before scanning."""

    def test_crlf_normalized(self) -> None:
        lexer = Lexer("a\r\nb")
        assert lexer.source == "a\nb"
        tokens = [t for t in lexer.tokenize() if t.type != TokenType.WHITESPACE]
        assert tokens[1].value == "b"
        assert tokens[1].lineno == 2
        assert tokens[1].col == 1

    def test_crlf_blank_line(self) -> None:
        assert types("a\r\n\r\nb")[1] == TokenType.BLANK_LINE
