# topmark:header:start
#
#   project      : WxmlFmt
#   file         : grammar.py
#   file_relpath : src/wxmlfmt/parse/grammar.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Default markup parser: a PEG grammar run by ``parsimonious``.

The grammar accepts XML-shaped markup with a single root element, optionally
surrounded by comments, processing instructions and whitespace. It knows
nothing about WXML tags; interpolations and ``<wxs>`` bodies are expected to
have been replaced by placeholder tokens already.

The resulting tree uses the node classes of [`wxmlfmt.parse.nodes`][] with
offsets into the parsed text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final, NamedTuple

from parsimonious.exceptions import ParseError
from parsimonious.grammar import Grammar
from parsimonious.nodes import NodeVisitor

from wxmlfmt.config.logging import get_logger
from wxmlfmt.errors import MarkupParseError
from wxmlfmt.parse.nodes import (
    Attribute,
    CData,
    Comment,
    Document,
    Element,
    Instruction,
    Node,
    Reference,
    TextRun,
)
from wxmlfmt.parse.scanner import find_unbalanced_tag

if TYPE_CHECKING:
    from parsimonious.nodes import Node as ParseNode

    from wxmlfmt.config.logging import WxmlfmtLogger

logger: WxmlfmtLogger = get_logger(__name__)


WXML_GRAMMAR: Final[Grammar] = Grammar(
    r"""
    document       = misc* element? misc* end_of_input
    misc           = comment / instruction / ws

    element        = empty_element / paired_element
    empty_element  = "<" tag_name attribute* ws? "/>"
    paired_element = start_tag content end_tag
    start_tag      = "<" tag_name attribute* ws? ">"
    end_tag        = "</" ws? tag_name ws? ">"

    attribute      = ws attr_name attr_assign?
    attr_assign    = ws? "=" ws? attr_value
    attr_value     = dq_value / sq_value / bare_value
    dq_value       = ~r'"[^"]*"'
    sq_value       = ~r"'[^']*'"
    bare_value     = ~r"[^\s\"'=<>`]+"

    content        = content_item*
    content_item   = element / comment / cdata / instruction / reference / text

    comment        = ~r"<!--.*?-->"s
    cdata          = ~r"<!\[CDATA\[.*?\]\]>"s
    instruction    = ~r"<\?.*?\?>"s / ~r"<!(?!--)(?!\[CDATA\[)[^>]*>"
    reference      = ~r"&(?:#[0-9]+|#x[0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);"
    text           = ~r"[^<&]+" / "&"

    tag_name       = ~r"[A-Za-z_:][-A-Za-z0-9_:.]*"
    attr_name      = ~r"[^\s\"'<>/=]+"
    ws             = ~r"\s+"
    end_of_input   = !~r"."s
    """
)


class _StartTag(NamedTuple):
    name: str
    attributes: list[Attribute]
    end: int


class _EndTag(NamedTuple):
    name: str
    start: int


def _collect(results: Any, kind: type[Any]) -> list[Any]:
    """Flatten nested visitor results, keeping instances of ``kind`` only."""
    found: list[Any] = []
    if isinstance(results, kind):
        found.append(results)
    elif isinstance(results, list):
        for item in results:
            found.extend(_collect(item, kind))
    return found


def _merge_text(nodes: list[Node]) -> list[Node]:
    """Join adjacent text runs (the grammar splits text at a bare ``&``)."""
    merged: list[Node] = []
    for node in nodes:
        last: Node | None = merged[-1] if merged else None
        if isinstance(node, TextRun) and isinstance(last, TextRun) and last.end == node.start:
            merged[-1] = TextRun(last.start, node.end, last.text + node.text)
        else:
            merged.append(node)
    return merged


class TreeBuilder(NodeVisitor):
    """Turn a parsimonious parse tree into WxmlFmt nodes."""

    unwrapped_exceptions = (MarkupParseError,)

    def generic_visit(self, node: ParseNode, visited_children: list[Any]) -> Any:
        return visited_children or node

    def visit_document(self, node: ParseNode, visited_children: list[Any]) -> Document:
        return Document(node.start, node.end, _collect(visited_children, Node))

    def visit_element(self, node: ParseNode, visited_children: list[Any]) -> Element:
        return visited_children[0]

    def visit_empty_element(self, node: ParseNode, visited_children: list[Any]) -> Element:
        name: str = visited_children[1]
        return Element(
            node.start,
            node.end,
            name=name,
            attributes=_collect(visited_children[2], Attribute),
            self_closing=True,
            content_start=node.end,
            content_end=node.end,
        )

    def visit_paired_element(self, node: ParseNode, visited_children: list[Any]) -> Element:
        start_tag: _StartTag
        children: list[Node]
        end_tag: _EndTag
        start_tag, children, end_tag = visited_children
        if start_tag.name != end_tag.name:
            raise MarkupParseError(
                f"Unexpected closing tag </{end_tag.name}>, expected </{start_tag.name}>",
                end_tag.start,
            )
        return Element(
            node.start,
            node.end,
            name=start_tag.name,
            attributes=start_tag.attributes,
            children=children,
            content_start=start_tag.end,
            content_end=end_tag.start,
        )

    def visit_start_tag(self, node: ParseNode, visited_children: list[Any]) -> _StartTag:
        return _StartTag(
            visited_children[1], _collect(visited_children[2], Attribute), node.end
        )

    def visit_end_tag(self, node: ParseNode, visited_children: list[Any]) -> _EndTag:
        return _EndTag(visited_children[2], node.start)

    def visit_attribute(self, node: ParseNode, visited_children: list[Any]) -> Attribute:
        name_node: ParseNode = node.children[1]
        assign: list[Any] = visited_children[2] if isinstance(visited_children[2], list) else []
        value: str | None = None
        quote: str = ""
        if assign:
            value, quote = assign[0]
        return Attribute(name_node.text, value, quote, name_node.start, node.end)

    def visit_attr_assign(self, node: ParseNode, visited_children: list[Any]) -> tuple[str, str]:
        return visited_children[3]

    def visit_attr_value(self, node: ParseNode, visited_children: list[Any]) -> tuple[str, str]:
        return visited_children[0]

    def visit_dq_value(self, node: ParseNode, visited_children: list[Any]) -> tuple[str, str]:
        return node.text[1:-1], '"'

    def visit_sq_value(self, node: ParseNode, visited_children: list[Any]) -> tuple[str, str]:
        return node.text[1:-1], "'"

    def visit_bare_value(self, node: ParseNode, visited_children: list[Any]) -> tuple[str, str]:
        return node.text, ""

    def visit_content(self, node: ParseNode, visited_children: list[Any]) -> list[Node]:
        return _merge_text(_collect(visited_children, Node))

    def visit_content_item(self, node: ParseNode, visited_children: list[Any]) -> Node:
        return visited_children[0]

    def visit_comment(self, node: ParseNode, visited_children: list[Any]) -> Comment:
        return Comment(node.start, node.end, node.text)

    def visit_cdata(self, node: ParseNode, visited_children: list[Any]) -> CData:
        return CData(node.start, node.end, node.text)

    def visit_instruction(self, node: ParseNode, visited_children: list[Any]) -> Instruction:
        return Instruction(node.start, node.end, node.text)

    def visit_reference(self, node: ParseNode, visited_children: list[Any]) -> Reference:
        return Reference(node.start, node.end, node.text)

    def visit_text(self, node: ParseNode, visited_children: list[Any]) -> TextRun:
        return TextRun(node.start, node.end, node.text)

    def visit_tag_name(self, node: ParseNode, visited_children: list[Any]) -> str:
        return node.text


class GrammarParser:
    """Markup parser backed by `WXML_GRAMMAR`."""

    def parse(self, text: str) -> Document:
        """Parse protected markup.

        Args:
            text (str): Protected (and possibly wrapped) markup.

        Raises:
            MarkupParseError: If the markup is malformed; the offset points into ``text``.

        Returns:
            Document: The parse tree, with offsets into ``text``.
        """
        try:
            tree: ParseNode = WXML_GRAMMAR.parse(text)
        except ParseError as exc:
            problem: tuple[int, str] | None = find_unbalanced_tag(text)
            if problem is not None:
                offset, message = problem
            else:
                offset = exc.pos
                message = "Unexpected markup"
            logger.debug("Grammar rejected input at %d: %s", exc.pos, exc)
            raise MarkupParseError(message, offset) from exc
        document: Document = TreeBuilder().visit(tree)
        logger.trace("Parsed %d top-level node(s)", len(document.children))
        return document
