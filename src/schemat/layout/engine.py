"""Width-aware layout engine.

Renders a layout document to text under a column budget. Groups are
decided one at a time, outermost first: a group renders flat when the
text up to the next forced line break fits in the remaining width, and
broken otherwise. Nested groups of a broken group get their own test
at their own starting column.

Thread Safety:
LayoutEngine holds only its immutable width; all render state is local
to each render() call.

"""

from __future__ import annotations

from enum import Enum

from schemat.config import DEFAULT_MAX_WIDTH
from schemat.errors import RenderError
from schemat.layout.doc import Concat, Doc, Group, HardLine, Indent, Line, Text
from schemat.stringbuilder import StringBuilder


class Mode(Enum):
    FLAT = "flat"
    BREAK = "break"


# (indent, mode, doc) work item
_Command = tuple[int, Mode, Doc]


class LayoutEngine:
    """Renders documents to text.

    Usage:
            >>> from schemat.layout.doc import group, indent, join, text, LINE
            >>> doc = group(indent(join(LINE, [text("a"), text("b"), text("c")])))
            >>> LayoutEngine(max_width=3).render(doc)
            'a\\n  b\\n  c'

    Indentation after a newline is written lazily, just before the next
    text, so lines never carry trailing whitespace.

    """

    __slots__ = ("_max_width",)

    def __init__(self, max_width: int = DEFAULT_MAX_WIDTH) -> None:
        self._max_width = max_width

    @property
    def max_width(self) -> int:
        return self._max_width

    def render(self, doc: Doc) -> str:
        """Render doc to a string.

        Raises:
            RenderError: If doc contains an unknown node.
        """
        sb = StringBuilder()
        col = 0
        pending_indent = 0
        stack: list[_Command] = [(0, Mode.BREAK, doc)]

        while stack:
            ind, mode, node = stack.pop()
            match node:
                case Text(text=s):
                    if not s:
                        continue
                    if pending_indent:
                        sb.append(" " * pending_indent)
                        pending_indent = 0
                    sb.append(s)
                    last_nl = s.rfind("\n")
                    col = col + len(s) if last_nl == -1 else len(s) - last_nl - 1
                case Concat(parts=parts):
                    stack.extend((ind, mode, part) for part in reversed(parts))
                case Indent(width=width, inner=inner):
                    stack.append((ind + width, mode, inner))
                case Line() if mode is Mode.FLAT:
                    if pending_indent:
                        sb.append(" " * pending_indent)
                        pending_indent = 0
                    sb.append(" ")
                    col += 1
                case Line() | HardLine():
                    sb.append("\n")
                    col = ind
                    pending_indent = ind
                case Group(inner=inner, breaks=breaks):
                    if mode is Mode.FLAT:
                        stack.append((ind, Mode.FLAT, inner))
                    elif not breaks and self._fits(self._max_width - col, inner, stack):
                        stack.append((ind, Mode.FLAT, inner))
                    else:
                        stack.append((ind, Mode.BREAK, inner))
                case _:
                    raise RenderError(f"unknown document node: {type(node).__name__}")

        return sb.build()

    def _fits(self, remaining: int, inner: Doc, rest: list[_Command]) -> bool:
        """Check whether inner, flattened, fits in remaining columns.

        The probe continues past inner into the pending work items (so
        closing delimiters that follow a group count against it) and stops
        at the first newline the output is certain to contain: a HardLine,
        a Line of a broken group, or a newline inside a text fragment.
        """
        if remaining < 0:
            return False

        probe: list[tuple[Mode, Doc]] = [(Mode.FLAT, inner)]
        rest_index = len(rest)

        while True:
            if not probe:
                if rest_index == 0:
                    return True
                rest_index -= 1
                _, mode, node = rest[rest_index]
                probe.append((mode, node))
                continue

            mode, node = probe.pop()
            match node:
                case Text(text=s):
                    first_nl = s.find("\n")
                    remaining -= len(s) if first_nl == -1 else first_nl
                    if remaining < 0:
                        return False
                    if first_nl != -1:
                        return True
                case Concat(parts=parts):
                    probe.extend((mode, part) for part in reversed(parts))
                case Indent(inner=child):
                    probe.append((mode, child))
                case Line() if mode is Mode.FLAT:
                    remaining -= 1
                    if remaining < 0:
                        return False
                case Line() | HardLine():
                    return True
                case Group(inner=child, breaks=breaks):
                    probe.append((Mode.BREAK if breaks else mode, child))
                case _:
                    raise RenderError(f"unknown document node: {type(node).__name__}")


def render(doc: Doc, max_width: int = DEFAULT_MAX_WIDTH) -> str:
    """Render a layout document under a column budget."""
    return LayoutEngine(max_width).render(doc)
