"""Layout document IR.

A document is a tree of text, line-break, indent and group primitives.
The builder produces one from a syntax tree and the engine decides, group
by group, which soft lines become spaces and which become newlines.

Primitives:
    Text(text)            literal text, never split
    Concat(parts)         parts in order
    Indent(width, inner)  breaks inside inner indent by width more columns
    Line                  space when its group is flat, newline otherwise
    HardLine              always a newline
    Group(inner)          flat if it fits, else broken

Thread Safety:
Documents are frozen and built bottom-up with no back references.

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from schemat.config import INDENT_WIDTH


@dataclass(frozen=True, slots=True)
class Text:
    text: str


@dataclass(frozen=True, slots=True)
class Concat:
    parts: tuple[Doc, ...]


@dataclass(frozen=True, slots=True)
class Indent:
    width: int
    inner: Doc


@dataclass(frozen=True, slots=True)
class Line:
    """Soft break: a space in a flat group, newline plus indent otherwise."""


@dataclass(frozen=True, slots=True)
class HardLine:
    """Unconditional newline plus indent."""


@dataclass(frozen=True, slots=True)
class Group:
    """A flattening unit.

    ``breaks`` is set when inner holds a HardLine outside any nested
    flat-capable group, or a nested group that itself breaks. Such a
    group can never render flat.

    """

    inner: Doc
    breaks: bool = False


Doc = Text | Concat | Indent | Line | HardLine | Group

EMPTY = Text("")
SPACE = Text(" ")
LINE = Line()
HARD_LINE = HardLine()


def text(s: str) -> Doc:
    return Text(s)


def concat(*parts: Doc) -> Doc:
    """Concatenate parts, splicing nested Concats and dropping empty text."""
    flat: list[Doc] = []
    for part in parts:
        if isinstance(part, Concat):
            flat.extend(part.parts)
        elif part != EMPTY:
            flat.append(part)
    if len(flat) == 1:
        return flat[0]
    return Concat(tuple(flat))


def join(sep: Doc, parts: Iterable[Doc]) -> Doc:
    out: list[Doc] = []
    for part in parts:
        if out:
            out.append(sep)
        out.append(part)
    return concat(*out)


def indent(d: Doc, width: int = INDENT_WIDTH) -> Doc:
    return Indent(width, d)


def group(d: Doc) -> Doc:
    """Wrap d in a Group, precomputing whether it must break."""
    return Group(d, breaks=contains_hard_line(d))


def contains_hard_line(d: Doc) -> bool:
    """Check for an unavoidable break in d.

    Nested groups answer from their own ``breaks`` flag, so each node is
    inspected by the nearest enclosing group only.
    """
    pending: list[Doc] = [d]
    while pending:
        node = pending.pop()
        match node:
            case HardLine():
                return True
            case Group(breaks=breaks):
                if breaks:
                    return True
            case Concat(parts=parts):
                pending.extend(parts)
            case Indent(inner=inner):
                pending.append(inner)
    return False
