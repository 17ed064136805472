"""Exception classes for schemat.

Provides standardized exceptions for error handling throughout schemat.
"""

from __future__ import annotations

from enum import Enum


class SchematError(Exception):
    """Base exception for all schemat errors.

    Subclass this for specific error categories.
    """

    pass


class ParseErrorKind(Enum):
    """Structural failures reported by the parser."""

    MISMATCHED_DELIMITER = "mismatched delimiter"
    UNEXPECTED_CLOSE = "unexpected closing delimiter"
    UNCLOSED_LIST = "unclosed list"
    DANGLING_QUOTE = "dangling quote prefix"
    UNTERMINATED_STRING = "unterminated string"
    UNTERMINATED_COMMENT = "unterminated block comment"


class ParseError(SchematError):
    """Error during S-expression parsing.

    Raised when the parser encounters structurally invalid input. The
    pipeline never returns partial output alongside this error.
    """

    def __init__(
        self,
        message: str,
        kind: ParseErrorKind,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
        source_line: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            kind: Which structural rule was violated
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
            source_line: Text of the offending line, shown with a caret
                under col_offset (optional)
        """
        self.message = message
        self.kind = kind
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file
        self.source_line = source_line

        # Build formatted message
        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        text = f"{location}{message}"
        if source_line is not None and col_offset is not None:
            # Tabs in the margin mirror tabs in the line
            margin = "".join(c if c == "\t" else " " for c in source_line[: col_offset - 1])
            text += f"\n    {source_line.rstrip()}\n    {margin}^"
        super().__init__(text)


class RenderError(SchematError):
    """Error during layout rendering.

    Raised when the layout engine meets a document node it does not know.
    """

    pass
