"""
schemat: a code formatter for Scheme, Lisp, and any S-expressions

Reformats S-expression source into one canonical layout while keeping
every atom, string, comment, quote prefix and leading ``#!``/``#lang``
line intact. Formatting is deterministic and idempotent.

Quick Start:
    >>> from schemat import format, check
    >>> format("(define (square x)   (* x x))")
    '(define (square x) (* x x))\\n'
    >>> check("(foo)\\n")
    True

Pipeline:
    source --scan--> tokens --parse--> syntax tree --build--> layout
    document --render--> text

    Each stage is available on its own:

    >>> from schemat import scan, parse, build, render
    >>> render(build(parse("'(a b)")), max_width=80)
    "'(a b)\\n"

Errors:
    Structurally invalid input raises ParseError carrying a kind and a
    1-based line and column. Nothing is formatted for that input.

Thread Safety:
    The pipeline keeps no shared mutable state. Independent inputs can be
    formatted concurrently from any number of threads.
"""

from schemat.config import (
    DEFAULT_MAX_WIDTH,
    FormatConfig,
    format_config_context,
    get_format_config,
    reset_format_config,
    set_format_config,
)
from schemat.errors import ParseError, ParseErrorKind, RenderError, SchematError
from schemat.layout import Doc, DocumentBuilder, LayoutEngine, build, render
from schemat.lexer import Lexer, scan
from schemat.location import SourceLocation
from schemat.nodes import (
    Atom,
    Attachment,
    Blank,
    Comment,
    Directive,
    List,
    Module,
    Node,
    Quoted,
    String,
)
from schemat.parser import Parser
from schemat.tokens import Delimiter, DirectiveKind, QuoteKind, Token, TokenType
from schemat.utils.logger import get_logger
from schemat.visitor import BaseVisitor, transform

__version__ = "0.4.1"

logger = get_logger(__name__)


def parse(source: str, *, source_file: str | None = None) -> Module:
    """Parse S-expression source into a lossless syntax tree.

    Args:
        source: Source text
        source_file: Optional source file path for error messages

    Returns:
        Module root node

    Raises:
        ParseError: If the source is structurally invalid
    """
    lexer = Lexer(source, source_file=source_file)
    tokens = list(lexer.tokenize())
    children = Parser(tokens, source_file=source_file, source=lexer.source).parse()
    loc = SourceLocation(
        lineno=1,
        col_offset=1,
        offset=0,
        end_offset=len(lexer.source),
        source_file=source_file,
    )
    logger.debug(
        "parsed %s: %d tokens, %d top-level nodes",
        source_file or "<string>",
        len(tokens),
        len(children),
    )
    return Module(location=loc, children=children)


def format(
    source: str,
    *,
    source_file: str | None = None,
    max_width: int | None = None,
) -> str:
    """Format S-expression source into canonical layout.

    Args:
        source: Source text
        source_file: Optional source file path for error messages
        max_width: Column budget; defaults to the active FormatConfig (80)

    Returns:
        Formatted text, ending with exactly one newline (or empty for
        input with no content)

    Raises:
        ParseError: If the source is structurally invalid

    Example:
        >>> format("foo\\n\\n\\nbar\\n")
        'foo\\n\\nbar\\n'
    """
    width = max_width if max_width is not None else get_format_config().max_width
    return render(build(parse(source, source_file=source_file)), width)


def format_with_status(
    source: str,
    *,
    source_file: str | None = None,
    max_width: int | None = None,
) -> tuple[str, bool]:
    """Format source and report whether formatting changed it.

    Returns:
        (formatted text, changed)
    """
    formatted = format(source, source_file=source_file, max_width=max_width)
    return formatted, formatted != source


def check(
    source: str,
    *,
    source_file: str | None = None,
    max_width: int | None = None,
) -> bool:
    """Check whether source is already canonically formatted.

    Returns:
        True iff formatting source is a no-op

    Raises:
        ParseError: If the source is structurally invalid
    """
    _, changed = format_with_status(source, source_file=source_file, max_width=max_width)
    return not changed


class Formatter:
    """Reusable formatter bound to one configuration.

    Usage:
        >>> fmt = Formatter(max_width=40)
        >>> fmt("(a b c)")
        '(a b c)\\n'
        >>> fmt.check("(a b c)\\n")
        True

    Thread Safety:
        Holds only an immutable FormatConfig. Safe to share across threads.

    """

    __slots__ = ("_config",)

    def __init__(self, *, max_width: int = DEFAULT_MAX_WIDTH) -> None:
        self._config = FormatConfig(max_width=max_width)

    @property
    def config(self) -> FormatConfig:
        return self._config

    def __call__(self, source: str, *, source_file: str | None = None) -> str:
        return format(source, source_file=source_file, max_width=self._config.max_width)

    def format_with_status(
        self, source: str, *, source_file: str | None = None
    ) -> tuple[str, bool]:
        return format_with_status(
            source, source_file=source_file, max_width=self._config.max_width
        )

    def check(self, source: str, *, source_file: str | None = None) -> bool:
        return check(source, source_file=source_file, max_width=self._config.max_width)


__all__ = [
    # Pipeline
    "build",
    "check",
    "format",
    "format_with_status",
    "parse",
    "render",
    "scan",
    "Formatter",
    # Stages
    "DocumentBuilder",
    "LayoutEngine",
    "Lexer",
    "Parser",
    # Config
    "DEFAULT_MAX_WIDTH",
    "FormatConfig",
    "format_config_context",
    "get_format_config",
    "reset_format_config",
    "set_format_config",
    # Errors
    "ParseError",
    "ParseErrorKind",
    "RenderError",
    "SchematError",
    # Tokens
    "Delimiter",
    "DirectiveKind",
    "QuoteKind",
    "Token",
    "TokenType",
    # Nodes
    "Atom",
    "Attachment",
    "Blank",
    "Comment",
    "Directive",
    "List",
    "Module",
    "Node",
    "Quoted",
    "String",
    "SourceLocation",
    # Layout IR
    "Doc",
    # Visitor
    "BaseVisitor",
    "transform",
]
