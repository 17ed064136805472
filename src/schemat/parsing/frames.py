"""List frame stack for S-expression parsing.

Each open delimiter pushes a frame that collects the children of that
list; the matching close pops it. The bottom frame collects the module's
top-level nodes and is never popped, so nesting depth is bounded by
memory rather than by the interpreter's recursion limit.

Usage:
    stack = FrameStack()  # Initializes with the module frame

    stack.push(ListFrame(open_token=token))
    stack.current.append(Atom(...))
    frame = stack.pop()
"""

from __future__ import annotations

from dataclasses import dataclass, field

from schemat.nodes import Blank, Node, Quoted
from schemat.tokens import Delimiter, Token


@dataclass(slots=True)
class ListFrame:
    """A frame on the stack representing one open list (or the module).

    Attributes:
        open_token: The OPEN token, None for the module frame
        children: Nodes collected so far, in source order
        prefixes: QUOTE_PREFIX tokens waiting for their datum
        held: Comments seen while prefixes were pending

    """

    open_token: Token | None = None
    children: list[Node] = field(default_factory=list)
    prefixes: list[Token] = field(default_factory=list)
    held: list[Node] = field(default_factory=list)

    @property
    def delimiter(self) -> Delimiter | None:
        """Delimiter of the open token, None for the module frame."""
        if self.open_token is None:
            return None
        return self.open_token.kind  # type: ignore[return-value]

    def append(self, node: Node) -> None:
        """Add a datum, wrapping it in every pending prefix (innermost last).

        Held comments are placed before the wrapped datum.
        """
        if self.held:
            self.children.extend(self.held)
            self.held.clear()
        while self.prefixes:
            prefix = self.prefixes.pop()
            node = Quoted(
                location=prefix.location.span_to(node.location),
                kind=prefix.kind,  # type: ignore[arg-type]
                prefix=prefix.value,
                inner=node,
            )
        self.children.append(node)

    def append_trivia(self, node: Node) -> None:
        """Add a comment or directive without touching pending prefixes."""
        self.children.append(node)

    def mark_blank(self, blank: Blank) -> None:
        """Record a blank line.

        Blank lines before the first child are dropped and a run of them
        collapses to one marker.
        """
        if self.children and not isinstance(self.children[-1], Blank):
            self.children.append(blank)

    def finish(self) -> tuple[Node, ...]:
        """Return the children with trailing blank markers removed."""
        children = self.children
        while children and isinstance(children[-1], Blank):
            children.pop()
        return tuple(children)


class FrameStack:
    """Stack of ListFrames with the module frame at the bottom."""

    __slots__ = ("_frames",)

    def __init__(self) -> None:
        self._frames: list[ListFrame] = [ListFrame()]

    @property
    def current(self) -> ListFrame:
        """Innermost open frame."""
        return self._frames[-1]

    def at_top_level(self) -> bool:
        """True when no list is open."""
        return len(self._frames) == 1

    def push(self, frame: ListFrame) -> None:
        self._frames.append(frame)

    def pop(self) -> ListFrame:
        """Pop the innermost list frame.

        Raises:
            IndexError: If only the module frame remains.
        """
        if len(self._frames) == 1:
            raise IndexError("cannot pop the module frame")
        return self._frames.pop()
