"""Typed AST nodes for curlymark.

All AST nodes are frozen dataclasses with slots for:
- Type safety: IDE autocomplete, catch errors at dev time
- Immutability: Safe sharing across threads once parsing finishes
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: match statements work naturally

Node Hierarchy:
Node (base)
├── PlainText       text between markup
├── Literal         unquoted attribute value
├── Comment         <!-- body -->
├── String          quoted attribute value (unescaped)
├── Executable      {{ source }}, passed through verbatim
├── Interpolation   "text {{ expr }} text" as alternating segments
├── Attr            name[=value]
└── Tag             <name attrs>children</name> or <name />

The variant set is closed: AttrValue and Child below enumerate every node
that may appear as an attribute value or as a tag child.

Every node records ``token_index``, the index of the token it was built
from in the scanner's token list. It is a plain integer, so the token
list can be dropped once parsing is done. Synthesized nodes use -1.

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from curlymark.location import Position

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    All nodes track their source span for error messages and tooling.

    """

    position_start: Position
    position_end: Position
    token_index: int


# =============================================================================
# Leaves
# =============================================================================


@dataclass(frozen=True, slots=True)
class PlainText(Node):
    """Raw text between tags."""

    literal: str


@dataclass(frozen=True, slots=True)
class Literal(Node):
    """Unquoted attribute value.

    Template: <div count=123>

    """

    value: str


@dataclass(frozen=True, slots=True)
class Comment(Node):
    """Comment body, without the ``<!--`` and ``-->`` delimiters."""

    literal: str


@dataclass(frozen=True, slots=True)
class String(Node):
    """Quoted text.

    ``literal`` has backslash-escaped quotes resolved:
    ``title="a \\"b\\" c"`` gives ``a "b" c``.

    """

    literal: str
    quote_char: str


@dataclass(frozen=True, slots=True)
class Executable(Node):
    """Opaque expression captured between ``{{`` and ``}}``."""

    source: str


@dataclass(frozen=True, slots=True)
class Interpolation(Node):
    """Quoted string with embedded executables.

    Segments alternate String/Executable, and the first and last segments
    are always String (possibly empty):

        "Hi {{ name }}!" -> (String("Hi "), Executable(" name "), String("!"))

    """

    values: tuple[String | Executable, ...]


# =============================================================================
# Markup
# =============================================================================


@dataclass(frozen=True, slots=True)
class Attr(Node):
    """Tag attribute. ``value`` is None unless an ``=`` followed the key."""

    name: str
    value: AttrValue | None = None


@dataclass(frozen=True, slots=True)
class Tag(Node):
    """Tag with attributes and children.

    ``bad_tag`` marks a node synthesized from an orphan closing tag
    (``</div>`` with no matching opener); such nodes have no children.

    """

    name: str
    self_closing: bool = False
    bad_tag: bool = False
    attributes: tuple[Attr, ...] = ()
    children: tuple[Child, ...] = ()


# Node variants allowed in each position
AttrValue: TypeAlias = Literal | String | Executable | Interpolation
Child: TypeAlias = PlainText | Comment | Tag | Executable | String | Literal | Interpolation

NODE_TYPES: tuple[type[Node], ...] = (
    PlainText,
    Literal,
    Comment,
    String,
    Executable,
    Interpolation,
    Attr,
    Tag,
)
