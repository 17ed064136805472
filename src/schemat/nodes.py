"""Lossless syntax tree for schemat.

All nodes are frozen dataclasses with slots for:
- Immutability: safe sharing across threads, no in-place rewrites
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: ``match`` statements work naturally

Comments and blank-line markers are ordinary children, interleaved with
real forms in source order, so nothing needed to reproduce the input's
comments and paragraphing is kept in a side table.

Node Hierarchy:
Node (base)
├── Module       top-level sequence of one source text
├── Atom         symbol, number, character, #t...
├── String       "..." (opaque)
├── List         ( ) [ ] { }
├── Quoted       prefix + exactly one inner node
├── Comment      ; line or #| block |#
├── Directive    #!... / #lang ... (leading lines only)
└── Blank        one or more blank lines

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from dataclasses import dataclass
from enum import Enum

from schemat.location import SourceLocation
from schemat.tokens import Delimiter, DirectiveKind, QuoteKind


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all syntax nodes.

    All nodes track their source location for error messages and debugging.

    """

    location: SourceLocation


class Attachment(Enum):
    """Where a comment sits relative to the code before it."""

    TRAILING = "same-line-trailing"  # after code on the same line
    LEADING = "own-line-leading"  # on a line of its own


@dataclass(frozen=True, slots=True)
class Atom(Node):
    """Any datum that is not a list, string or prefixed form.

    The text is kept verbatim: no case folding, no number normalization.

    """

    text: str


@dataclass(frozen=True, slots=True)
class String(Node):
    """Double-quoted string literal, quotes and escapes included.

    Opaque to layout; may span several lines.

    """

    text: str


@dataclass(frozen=True, slots=True)
class List(Node):
    """Delimited list.

    Children include comments and blank markers in source order.

    """

    delimiter: Delimiter
    children: tuple[Node, ...]


@dataclass(frozen=True, slots=True)
class Quoted(Node):
    """A reader prefix glued to the node that follows it.

    ``prefix`` is the source text of the prefix: the canonical text for
    the quote family and e.g. ``#u8`` for a HASH prefix.

    """

    kind: QuoteKind
    prefix: str
    inner: Node


@dataclass(frozen=True, slots=True)
class Comment(Node):
    """Line or block comment, text verbatim minus trailing whitespace."""

    text: str
    attachment: Attachment
    block: bool = False


@dataclass(frozen=True, slots=True)
class Directive(Node):
    """Shebang or ``#lang`` line.

    Only found in the leading run of a Module's children.

    """

    kind: DirectiveKind
    text: str


@dataclass(frozen=True, slots=True)
class Blank(Node):
    """One or more blank lines occurred here in the source."""


@dataclass(frozen=True, slots=True)
class Module(Node):
    """Root node: the top-level sequence of one source text."""

    children: tuple[Node, ...]


Form = Atom | String | List | Quoted
Trivia = Comment | Directive | Blank
