"""Tests for the AST visitor and transform utilities."""

import dataclasses

import pytest

from curlymark import parse
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
from curlymark.visitor import BaseVisitor, transform

SOURCE = (
    '<Card title="Hi {{ user }}!" size=lg open>'
    "<!-- body -->"
    "text {{ count }}"
    "<Banner src={{ img }} />"
    "</Card>"
)


class _Recorder(BaseVisitor[None]):
    def __init__(self) -> None:
        self.seen: list[str] = []

    def visit_default(self, node: Node) -> None:
        self.seen.append(type(node).__name__)


class TestBaseVisitor:
    """Dispatch and traversal order."""

    def test_visits_every_node_in_order(self) -> None:
        recorder = _Recorder()
        for node in parse(SOURCE):
            recorder.visit(node)

        assert recorder.seen == [
            "Tag",
            "Attr",
            "Interpolation",
            "String",
            "Executable",
            "String",
            "Attr",
            "Literal",
            "Attr",
            "Comment",
            "PlainText",
            "Executable",
            "Tag",
            "Attr",
            "Executable",
        ]

    def test_specific_methods_dispatch(self) -> None:
        class Collector(BaseVisitor[None]):
            def __init__(self) -> None:
                self.sources: list[str] = []
                self.tags: list[str] = []

            def visit_executable(self, node: Executable) -> None:
                self.sources.append(node.source)

            def visit_tag(self, node: Tag) -> None:
                self.tags.append(node.name)

        collector = Collector()
        for node in parse(SOURCE):
            collector.visit(node)

        assert collector.sources == [" user ", " count ", " img "]
        assert collector.tags == ["Card", "Banner"]

    def test_each_visit_method(self) -> None:
        class Names(BaseVisitor[str]):
            def visit_plain_text(self, node: PlainText) -> str:
                return "plain_text"

            def visit_literal(self, node: Literal) -> str:
                return "literal"

            def visit_comment(self, node: Comment) -> str:
                return "comment"

            def visit_string(self, node: String) -> str:
                return "string"

            def visit_executable(self, node: Executable) -> str:
                return "executable"

            def visit_interpolation(self, node: Interpolation) -> str:
                return "interpolation"

            def visit_attr(self, node: Attr) -> str:
                return "attr"

            def visit_tag(self, node: Tag) -> str:
                return "tag"

        (card,) = parse(SOURCE)
        assert isinstance(card, Tag)
        names = Names()
        assert names.visit(card) == "tag"
        assert [names.visit(a) for a in card.attributes] == ["attr", "attr", "attr"]
        assert [names.visit(c) for c in card.children] == [
            "comment",
            "plain_text",
            "executable",
            "tag",
        ]
        interpolation = card.attributes[0].value
        assert interpolation is not None
        assert names.visit(interpolation) == "interpolation"
        assert names.visit(interpolation.values[0]) == "string"  # type: ignore[union-attr]
        assert names.visit(card.attributes[1].value) == "literal"  # type: ignore[arg-type]

    def test_default_returns_none(self) -> None:
        (node,) = parse("x")
        assert BaseVisitor[None]().visit(node) is None


class TestTransform:
    """Bottom-up immutable rewriting."""

    def test_identity_returns_equal_tree(self) -> None:
        nodes = parse(SOURCE)
        assert transform(nodes, lambda n: n) == nodes

    def test_rename_component(self) -> None:
        def rename(node: Node) -> Node:
            if isinstance(node, Tag) and node.name == "Banner":
                return dataclasses.replace(node, name="Hero")
            return node

        nodes = parse(SOURCE)
        (card,) = transform(nodes, rename)
        assert isinstance(card, Tag)
        assert card.children[-1].name == "Hero"  # type: ignore[union-attr]
        # original untouched
        assert nodes[0].children[-1].name == "Banner"  # type: ignore[union-attr]

    def test_remove_children(self) -> None:
        (card,) = transform(parse(SOURCE), lambda n: None if isinstance(n, Comment) else n)
        assert isinstance(card, Tag)
        assert not any(isinstance(c, Comment) for c in card.children)
        assert len(card.children) == 3

    def test_remove_attributes(self) -> None:
        def drop_size(node: Node) -> Node | None:
            if isinstance(node, Attr) and node.name == "size":
                return None
            return node

        (card,) = transform(parse(SOURCE), drop_size)
        assert isinstance(card, Tag)
        assert [a.name for a in card.attributes] == ["title", "open"]

    def test_removed_attr_value_becomes_none(self) -> None:
        (card,) = transform(parse(SOURCE), lambda n: None if isinstance(n, Literal) else n)
        assert isinstance(card, Tag)
        size = card.attributes[1]
        assert size.name == "size"
        assert size.value is None

    def test_remove_top_level(self) -> None:
        nodes = transform(parse("a<b/>c"), lambda n: None if isinstance(n, PlainText) else n)
        assert len(nodes) == 1
        assert isinstance(nodes[0], Tag)

    def test_removing_interpolation_segment_raises(self) -> None:
        with pytest.raises(TypeError, match="interpolation segment"):
            transform(parse(SOURCE), lambda n: None if isinstance(n, Executable) else n)

    def test_rewrite_interpolation_segment(self) -> None:
        def upper(node: Node) -> Node:
            if isinstance(node, String):
                return dataclasses.replace(node, literal=node.literal.upper())
            return node

        (card,) = transform(parse(SOURCE), upper)
        assert isinstance(card, Tag)
        value = card.attributes[0].value
        assert isinstance(value, Interpolation)
        assert [v.literal for v in value.values if isinstance(v, String)] == ["HI ", "!"]

    def test_bottom_up_order(self) -> None:
        order: list[str] = []

        def record(node: Node) -> Node:
            order.append(type(node).__name__)
            return node

        transform(parse("<a x=1><b/></a>"), record)
        assert order == ["Literal", "Attr", "Tag", "Tag"]
