"""Serialize a parsed template to JSON and back, e.g. to cache it on disk."""

import dataclasses

from curlymark import ParseConfig, parse
from curlymark.nodes import Node, Tag
from curlymark.serialization import from_json, to_json
from curlymark.visitor import transform

source = """<Layout>
  <!-- site navigation -->
  <Nav items={{ nav }} />
  <Banner />
</Layout>"""

nodes = parse(source, config=ParseConfig(keep_comments=False, keep_whitespace_text=False))


def rename_banner(node: Node) -> Node:
    if isinstance(node, Tag) and node.name == "Banner":
        return dataclasses.replace(node, name="Hero")
    return node


nodes = transform(nodes, rename_banner)
data = to_json(nodes, indent=2)
print(data)

assert from_json(data) == nodes
