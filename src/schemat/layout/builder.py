"""Document builder: syntax tree to layout document.

Rules:
- Atoms and strings become text verbatim.
- A list is its open delimiter, a group of its indented children
  separated by soft lines, and its close delimiter.
- A quoted form is its prefix text glued to its inner form.
- A comment or directive is its text followed by a hard line. A trailing
  comment counts toward the width of the line it ends.
- A blank marker adds one hard line on top of the separating one, so at
  most one blank line survives.
- Top-level forms are separated by hard lines.

Separators are chosen from the pair of neighbours: nothing after a node
that already ended its line, a space before a trailing comment, a hard
line before an own-line comment or blank marker, else a soft line
(inside lists) or a hard line (at top level).

Thread Safety:
DocumentBuilder is stateless; build() is a pure function of the tree.

"""

from __future__ import annotations

from collections.abc import Sequence

from schemat.layout.doc import (
    EMPTY,
    HARD_LINE,
    LINE,
    SPACE,
    Doc,
    concat,
    group,
    indent,
    text,
)
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


class DocumentBuilder:
    """Builds layout documents from syntax trees.

    Usage:
            >>> from schemat import parse
            >>> from schemat.layout import render
            >>> render(DocumentBuilder().build(parse("(a   b)")))
            '(a b)\\n'

    """

    __slots__ = ()

    def build(self, module: Module) -> Doc:
        """Build the document for a whole module.

        The result ends with exactly one hard line unless the module is empty.
        """
        body = self._sequence(module.children, top_level=True)
        children = module.children
        if children and not isinstance(children[-1], (Comment, Directive)):
            body = concat(body, HARD_LINE)
        return body

    def build_node(self, node: Node) -> Doc:
        """Build the document for a single node."""
        match node:
            case Atom(text=s) | String(text=s):
                return text(s)
            case List():
                return self._list(node)
            case Quoted(prefix=prefix, inner=inner):
                return concat(text(prefix), self.build_node(inner))
            case Comment(text=s) | Directive(text=s):
                return concat(text(s), HARD_LINE)
            case Blank():
                return HARD_LINE
            case Module():
                return self.build(node)
            case _:
                raise TypeError(f"cannot build a document for {type(node).__name__}")

    def _list(self, node: List) -> Doc:
        body = self._sequence(node.children, top_level=False)
        return concat(
            text(node.delimiter.open),
            group(indent(body)),
            text(node.delimiter.close),
        )

    def _sequence(self, children: Sequence[Node], *, top_level: bool) -> Doc:
        parts: list[Doc] = []
        previous: Node | None = None
        for child in children:
            parts.append(self._separator(previous, child, top_level=top_level))
            parts.append(self.build_node(child))
            previous = child
        return concat(*parts)

    def _separator(self, previous: Node | None, child: Node, *, top_level: bool) -> Doc:
        if previous is None:
            if not top_level and _is_own_line_comment(child):
                return HARD_LINE
            return EMPTY
        if isinstance(previous, (Comment, Directive, Blank)):
            return EMPTY
        if isinstance(child, Comment):
            return SPACE if child.attachment is Attachment.TRAILING else HARD_LINE
        if isinstance(child, Blank) or top_level:
            return HARD_LINE
        return LINE


def _is_own_line_comment(node: Node) -> bool:
    return isinstance(node, Comment) and node.attachment is Attachment.LEADING


def build(module: Module) -> Doc:
    """Build the layout document for a parsed module."""
    return DocumentBuilder().build(module)
