"""AST serialization: JSON round-trip for curlymark AST nodes.

Converts typed AST nodes to/from JSON-compatible dicts. Useful for:
- Handing a parsed template to a renderer in another process
- Caching parsed templates to disk
- Debugging and inspection

All output is deterministic (sorted keys) for cache-key stability.

Example:
    from curlymark import parse
    from curlymark.serialization import to_json, from_json

    nodes = parse('<a href="/u/{{ id }}">{{ name }}</a>')
    restored = from_json(to_json(nodes))
    assert restored == nodes

Thread Safety:
    All functions are pure; safe to call from any thread.

"""

import json
from collections.abc import Sequence
from dataclasses import fields
from typing import Any

from curlymark.location import Position
from curlymark.nodes import NODE_TYPES, Node

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type[Node]] = {cls.__name__: cls for cls in NODE_TYPES}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Recursively serializes child nodes and Position objects.

    Args:
        node: Any curlymark AST node.

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}

    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))

    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if isinstance(value, Node):
        return to_dict(value)
    if isinstance(value, Position):
        return {
            "_type": "Position",
            "line": value.line,
            "column": value.column,
            "offset": value.offset,
        }
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed AST node from a dict.

    Uses the ``_type`` discriminator to determine the node class.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed AST node (frozen dataclass).

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name not in data:
            continue
        kwargs[f.name] = _deserialize_value(data[f.name])

    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name == "Position":
            return Position(
                line=value["line"],
                column=value["column"],
                offset=value["offset"],
            )
        if type_name is not None:
            return from_dict(value)
        return value
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(nodes: Sequence[Node], *, indent: int | None = None) -> str:
    """Serialize a node forest (as returned by parse()) to a JSON array.

    Args:
        nodes: Top-level nodes.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps([to_dict(node) for node in nodes], sort_keys=True, indent=indent)


def from_json(data: str) -> list[Node]:
    """Deserialize a node forest from a JSON string.

    Args:
        data: JSON string (as produced by to_json).

    Returns:
        List of top-level nodes.

    Raises:
        ValueError: If the JSON isn't an array of serialized nodes.

    """
    raw = json.loads(data)
    if not isinstance(raw, list):
        msg = f"Expected a JSON array of nodes, got {type(raw).__name__}"
        raise ValueError(msg)
    return [from_dict(item) for item in raw]
