"""AST Visitor and Transformer for curlymark.

Provides a base visitor class with match-based dispatch and an immutable
transform function for rewriting frozen node forests. Downstream
renderers build on these instead of switching on node types themselves.

Example: collect every executable source:

    class ExecutableCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.sources: list[str] = []

        def visit_executable(self, node: Executable) -> None:
            self.sources.append(node.source)

    collector = ExecutableCollector()
    for node in parse(source):
        collector.visit(node)

Example: rename a component everywhere:

    def rename(node: Node) -> Node:
        if isinstance(node, Tag) and node.name == "Banner":
            return dataclasses.replace(node, name="Hero")
        return node

    new_nodes = transform(nodes, rename)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread. The transform function
    is pure; safe to call from any thread.

"""

import dataclasses
from collections.abc import Callable, Sequence
from typing import Generic, TypeVar, assert_never

from curlymark.nodes import (
    Attr,
    Comment,
    Executable,
    Interpolation,
    Literal,
    Node,
    PlainText,
    String,
    Tag,
)


T = TypeVar("T")
N = TypeVar("N", bound=Node)


class BaseVisitor(Generic[T]):
    """Base AST visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call: a tag's attributes,
    then its children; an attribute's value; an interpolation's segments.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method, then walk children."""
        result = self._dispatch(node)
        self._walk_children(node)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method.

        Default returns None (suitable for ``BaseVisitor[None]``).

        """
        return None  # type: ignore[return-value]

    def visit_plain_text(self, node: PlainText) -> T:
        return self.visit_default(node)

    def visit_literal(self, node: Literal) -> T:
        return self.visit_default(node)

    def visit_comment(self, node: Comment) -> T:
        return self.visit_default(node)

    def visit_string(self, node: String) -> T:
        return self.visit_default(node)

    def visit_executable(self, node: Executable) -> T:
        return self.visit_default(node)

    def visit_interpolation(self, node: Interpolation) -> T:
        return self.visit_default(node)

    def visit_attr(self, node: Attr) -> T:
        return self.visit_default(node)

    def visit_tag(self, node: Tag) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case PlainText():
                return self.visit_plain_text(node)
            case Literal():
                return self.visit_literal(node)
            case Comment():
                return self.visit_comment(node)
            case String():
                return self.visit_string(node)
            case Executable():
                return self.visit_executable(node)
            case Interpolation():
                return self.visit_interpolation(node)
            case Attr():
                return self.visit_attr(node)
            case Tag():
                return self.visit_tag(node)
            case _:
                return self.visit_default(node)

    def _walk_children(self, node: Node) -> None:
        """Recursively visit nested nodes."""
        match node:
            case Tag(attributes=attributes, children=children):
                for attr in attributes:
                    self.visit(attr)
                for child in children:
                    self.visit(child)
            case Attr(value=value) if value is not None:
                self.visit(value)
            case Interpolation(values=values):
                for segment in values:
                    self.visit(segment)
            case _:
                pass  # Leaf nodes: no children


def transform(nodes: Sequence[N], fn: Callable[[Node], Node | None]) -> list[N]:
    """Apply a function to every node in a forest, returning a new forest.

    The function ``fn`` is called bottom-up: nested nodes are transformed
    first, then the parent is transformed with its new contents.

    Return ``None`` from ``fn`` to remove a node. Removing a tag child or an
    attribute drops it; removing an attribute value leaves ``Attr.value``
    as None. Interpolation segments cannot be removed, because the
    String/Executable alternation would break; doing so raises TypeError.

    Since all nodes are frozen dataclasses, this produces a new immutable
    tree. The original tree is untouched.

    Args:
        nodes: Top-level nodes, as returned by parse().
        fn: Function that receives a node and returns a (possibly new) node,
            or None to remove it.

    Returns:
        A new list of top-level nodes.

    """
    return [
        result for node in nodes
        if (result := _transform_node(node, fn)) is not None  # type: ignore[misc]
    ]


def _transform_node(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    """Transform a single node bottom-up: nested nodes first, then self."""
    transformed = _transform_children(node, fn)
    return fn(transformed)


def _transform_children(node: Node, fn: Callable[[Node], Node | None]) -> Node:
    """Produce a new node with nested nodes transformed."""

    def _filtered(children: tuple[Node, ...]) -> tuple[Node, ...]:
        return tuple(
            result for c in children
            if (result := _transform_node(c, fn)) is not None
        )

    match node:
        case Tag(attributes=attributes, children=children):
            new_attributes = _filtered(attributes)
            new_children = _filtered(children)
            if new_attributes != attributes or new_children != children:
                return dataclasses.replace(node, attributes=new_attributes, children=new_children)
        case Attr(value=value) if value is not None:
            new_value = _transform_node(value, fn)
            if new_value is not value:
                return dataclasses.replace(node, value=new_value)
        case Interpolation(values=values):
            new_values = []
            for segment in values:
                result = _transform_node(segment, fn)
                if result is None:
                    msg = "transform fn cannot remove an interpolation segment"
                    raise TypeError(msg)
                new_values.append(result)
            if tuple(new_values) != values:
                return dataclasses.replace(node, values=tuple(new_values))
        case PlainText() | Literal() | Comment() | String() | Executable() | Attr():
            pass  # Leaf nodes (and valueless attributes): return as-is
        case _:
            assert_never(node)  # type: ignore[arg-type]

    return node
