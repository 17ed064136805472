"""Syntax tree visitor and transformer for schemat.

Provides a base visitor class with match-based dispatch and an immutable
transform function for rewriting frozen trees.

Example, collecting every symbol:

    class AtomCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.atoms: list[str] = []

        def visit_atom(self, node: Atom) -> None:
            self.atoms.append(node.text)

    collector = AtomCollector()
    collector.visit(module)

Example, dropping every comment:

    new_module = transform(module, lambda n: None if isinstance(n, Comment) else n)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread. The transform function
    is pure and safe to call from any thread.

"""

import dataclasses
from collections.abc import Callable
from typing import Generic, TypeVar

from schemat.nodes import (
    Atom,
    Blank,
    Comment,
    Directive,
    List,
    Module,
    Node,
    Quoted,
    String,
)

T = TypeVar("T")


class BaseVisitor(Generic[T]):
    """Base syntax tree visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call.

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method.

        Walks children automatically after the visit method returns.

        """
        result = self._dispatch(node)
        self._walk_children(node)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method."""
        return None  # type: ignore[return-value]

    def visit_module(self, node: Module) -> T:
        return self.visit_default(node)

    def visit_atom(self, node: Atom) -> T:
        return self.visit_default(node)

    def visit_string(self, node: String) -> T:
        return self.visit_default(node)

    def visit_list(self, node: List) -> T:
        return self.visit_default(node)

    def visit_quoted(self, node: Quoted) -> T:
        return self.visit_default(node)

    def visit_comment(self, node: Comment) -> T:
        return self.visit_default(node)

    def visit_directive(self, node: Directive) -> T:
        return self.visit_default(node)

    def visit_blank(self, node: Blank) -> T:
        return self.visit_default(node)

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Module():
                return self.visit_module(node)
            case Atom():
                return self.visit_atom(node)
            case String():
                return self.visit_string(node)
            case List():
                return self.visit_list(node)
            case Quoted():
                return self.visit_quoted(node)
            case Comment():
                return self.visit_comment(node)
            case Directive():
                return self.visit_directive(node)
            case Blank():
                return self.visit_blank(node)
            case _:
                return self.visit_default(node)

    def _walk_children(self, node: Node) -> None:
        match node:
            case Module(children=children) | List(children=children):
                for child in children:
                    self.visit(child)
            case Quoted(inner=inner):
                self.visit(inner)
            case _:
                pass  # Leaf nodes: no children


def transform(module: Module, fn: Callable[[Node], Node | None]) -> Module:
    """Apply a function to every node in the tree, returning a new tree.

    The function ``fn`` is called bottom-up: children are transformed first,
    then the parent is transformed with its new children.

    Return ``None`` from ``fn`` to remove a node. Removing the inner node of
    a Quoted removes the Quoted as well, since a prefix needs a datum. The
    root Module cannot be removed; returning None for it raises TypeError.

    Args:
        module: The module to transform.
        fn: Function that receives a node and returns a (possibly new) node,
            or None to remove the node from the tree.

    Returns:
        A new Module with the transformation applied.

    """
    result = _transform_node(module, fn)
    if result is None or not isinstance(result, Module):
        msg = "transform fn must return a Module for the root (cannot remove root)"
        raise TypeError(msg)
    return result


def _transform_node(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    """Transform a single node bottom-up: children first, then self."""
    transformed = _transform_children(node, fn)
    if transformed is None:
        return None
    return fn(transformed)


def _transform_children(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    """Produce a new node with children transformed; filter out removed nodes."""

    def _filtered(children: tuple[Node, ...]) -> tuple[Node, ...]:
        return tuple(
            result for c in children
            if (result := _transform_node(c, fn)) is not None
        )

    match node:
        case Module(children=children) | List(children=children):
            new_children = _filtered(children)
            if new_children != children:
                return dataclasses.replace(node, children=new_children)
        case Quoted(inner=inner):
            new_inner = _transform_node(inner, fn)
            if new_inner is None:
                return None
            if new_inner is not inner:
                return dataclasses.replace(node, inner=new_inner)
        case _:
            pass  # Leaf nodes: return as-is

    return node
