# topmark:header:start
#
#   project      : WxmlFmt
#   file         : nodes.py
#   file_relpath : src/wxmlfmt/parse/nodes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Parse-tree node model.

Every node carries a half-open ``[start, end)`` span of character offsets.
Trees produced by a markup parser carry offsets into the text that parser was
given (protected, possibly wrapped); after restoration they carry offsets
into the original source text.

Invariants of a restored tree:
    * sibling spans are monotonic and non-overlapping;
    * a container's span contains the spans of its children;
    * no placeholder token survives in any text, name or value.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass
class Node:
    """Base class of all parse-tree nodes.

    Attributes:
        start (int): Offset of the first character of the node.
        end (int): Offset one past the last character of the node.
    """

    start: int
    end: int


@dataclass
class Attribute:
    """An attribute of an element start tag.

    Attributes:
        name (str): Attribute name as written.
        value (str | None): Unquoted value, or None for a boolean attribute.
        quote (str): The quote character used in the source (``'"'``, ``"'"``
            or ``""`` when unquoted).
        start (int): Offset of the attribute name.
        end (int): Offset one past the attribute (after the closing quote).
    """

    name: str
    value: str | None
    quote: str
    start: int
    end: int


@dataclass
class Element(Node):
    """A host element.

    Attributes:
        name (str): Tag name.
        attributes (list[Attribute]): Attributes in source order.
        children (list[Node]): Content nodes in source order.
        self_closing (bool): True for ``<tag ... />``.
        content_start (int): Offset right after the start tag (``end`` when self-closing).
        content_end (int): Offset of the end tag (``end`` when self-closing).
    """

    name: str
    attributes: list[Attribute] = field(default_factory=lambda: [])
    children: list[Node] = field(default_factory=lambda: [])
    self_closing: bool = False
    content_start: int = 0
    content_end: int = 0


@dataclass
class ScriptBlock(Element):
    """A ``<wxs>`` element, whose content is ES5 code rather than markup."""


@dataclass
class TextRun(Node):
    """Character data between markup, with entity references left as-is."""

    text: str


@dataclass
class Interpolation(Node):
    """A ``{{ ... }}`` expression.

    Attributes:
        expression (str): The text between the delimiters, verbatim.
    """

    expression: str

    @property
    def source(self) -> str:
        """The expression with its delimiters."""
        return "{{" + self.expression + "}}"


@dataclass
class Comment(Node):
    """A ``<!-- ... -->`` comment (``text`` includes the delimiters)."""

    text: str


@dataclass
class Reference(Node):
    """An entity or character reference such as ``&amp;`` or ``&#38;``."""

    text: str


@dataclass
class CData(Node):
    """A ``<![CDATA[ ... ]]>`` section (``text`` includes the delimiters)."""

    text: str


@dataclass
class Instruction(Node):
    """A processing instruction, XML declaration or doctype, verbatim."""

    text: str


@dataclass
class Document(Node):
    """The root of a parse tree.

    Attributes:
        children (list[Node]): Top-level nodes in source order.
    """

    children: list[Node] = field(default_factory=lambda: [])


def iter_nodes(nodes: list[Node]) -> Iterator[Node]:
    """Yield ``nodes`` and all of their descendants in document order.

    Args:
        nodes (list[Node]): The nodes to walk.

    Yields:
        Node: Every node, parents before children.
    """
    for node in nodes:
        yield node
        if isinstance(node, (Element, Document)):
            yield from iter_nodes(node.children)


def collect_comments(document: Document) -> list[Comment]:
    """Return every comment of ``document`` in document order."""
    return [node for node in iter_nodes(document.children) if isinstance(node, Comment)]
