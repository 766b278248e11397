# topmark:header:start
#
#   project      : WxmlFmt
#   file         : engine.py
#   file_relpath : src/wxmlfmt/layout/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Layout decision engine: restored parse tree to document model.

All WXML layout policy lives here. Every decision is taken while building the
doc (the printer only executes hard lines), so the output is a pure function
of the tree, the original source and the options.

Element layout, in order of precedence:
    1. self-closing: ``<tag attrs />``;
    2. ``<wxs>`` accepted by the script delegate: formatted code, one level deeper;
    3. ``<text>`` under ``wxml_strict_text``: content copied byte for byte;
    4. no printable children: ``<tag attrs></tag>``;
    5. a lone interpolation: ``<tag>{{ expr }}</tag>`` unless the expression is complex;
    6. inline children when they are short, flat and single-line;
    7. otherwise block children, one per line.

Nodes fully inside an ignore range are printed as the original slice, and
consecutive siblings inside the same range share a single slice.
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from wxmlfmt.config.logging import get_logger
from wxmlfmt.constants import ALWAYS_BLOCK_TAGS, INLINE_CONTENT_THRESHOLD, VERBATIM_TEXT_TAG
from wxmlfmt.doc.builders import hardline, indent, join, literal_text
from wxmlfmt.doc.printer import flat_width
from wxmlfmt.errors import LayoutError
from wxmlfmt.layout.attributes import print_attribute, should_break_attributes
from wxmlfmt.layout.expressions import is_complex_expression
from wxmlfmt.layout.ignore import IgnoreTracker
from wxmlfmt.parse.nodes import (
    CData,
    Comment,
    Document,
    Element,
    Instruction,
    Interpolation,
    Reference,
    ScriptBlock,
    TextRun,
)

if TYPE_CHECKING:
    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.config.options import FormatOptions
    from wxmlfmt.doc.builders import Doc
    from wxmlfmt.layout.ignore import IgnoreRange
    from wxmlfmt.parse.nodes import Node
    from wxmlfmt.script.delegate import EmbeddedScriptDelegate

logger: WxmlfmtLogger = get_logger(__name__)

_TEXT_LIKE: Final[tuple[type[Node], ...]] = (TextRun, Interpolation, Reference)


@dataclass(frozen=True)
class LayoutFragment:
    """A laid-out sibling and the source offset it comes from.

    Attributes:
        source_offset (int): Start offset of the first node in the fragment.
        doc (Doc): Its doc.
    """

    source_offset: int
    doc: Doc


def is_blank_text(node: Node) -> bool:
    """Return True for a text run holding only whitespace."""
    return isinstance(node, TextRun) and not node.text.strip()


def interpolation_doc(node: Interpolation) -> Doc:
    """Print an interpolation, keeping ``}}`` aligned with ``{{`` when it spans lines.

    Args:
        node (Interpolation): The interpolation.

    Returns:
        Doc: ``{{expr}}`` on one line, or the first line after ``{{``, the
        remaining lines dedented one level deeper and ``}}`` on its own line
        at the current indentation.
    """
    lines: list[str] = node.expression.split("\n")
    if len(lines) == 1:
        return node.source
    first: str = lines[0].rstrip()
    rest: str = textwrap.dedent("\n".join(lines[1:])).rstrip()
    parts: list[Doc] = ["{{" + first]
    if rest:
        body: list[str] = [text.rstrip() for text in rest.split("\n")]
        parts.append(indent([hardline, join(hardline, body)]))
    parts.extend([hardline, "}}"])
    return parts


def _strip_line(pieces: list[Doc]) -> list[Doc]:
    """Strip the outer whitespace of a line made of strings and docs."""
    result: list[Doc] = [piece for piece in pieces if piece != ""]
    while result and isinstance(result[0], str):
        head: str = result[0].lstrip()
        if head:
            result[0] = head
            break
        result.pop(0)
    while result and isinstance(result[-1], str):
        tail: str = result[-1].rstrip()
        if tail:
            result[-1] = tail
            break
        result.pop()
    return result


def text_run_lines(run: list[Node]) -> list[Doc]:
    """Split a run of text-like nodes into stripped, non-empty lines.

    Interpolations are atomic: a newline inside ``{{ }}`` does not split the run.

    Args:
        run (list[Node]): Consecutive text runs, interpolations and references.

    Returns:
        list[Doc]: One doc per output line.
    """
    lines: list[list[Doc]] = [[]]
    for node in run:
        match node:
            case TextRun():
                parts: list[str] = node.text.split("\n")
                lines[-1].append(parts[0])
                lines.extend([part] for part in parts[1:])
            case Interpolation():
                lines[-1].append(interpolation_doc(node))
            case Reference():
                lines[-1].append(node.text)
            case _:
                raise LayoutError(f"Unexpected node kind in text run: {type(node).__name__}")
    stripped: list[list[Doc]] = [_strip_line(pieces) for pieces in lines]
    return [pieces[0] if len(pieces) == 1 else pieces for pieces in stripped if pieces]


class LayoutEngine:
    """Turns a restored parse tree into a doc.

    Args:
        options (FormatOptions): The formatter options.
        source (str): The original text (for verbatim slices).
        ignore (IgnoreTracker | None): Ignore ranges of the document.
        delegate (EmbeddedScriptDelegate | None): Formatter for ``<wxs>`` bodies;
            when None, script blocks get the default element layout.
    """

    def __init__(
        self,
        options: FormatOptions,
        *,
        source: str,
        ignore: IgnoreTracker | None = None,
        delegate: EmbeddedScriptDelegate | None = None,
    ) -> None:
        self.options: FormatOptions = options
        self.source: str = source
        self.ignore: IgnoreTracker = ignore if ignore is not None else IgnoreTracker()
        self.delegate: EmbeddedScriptDelegate | None = delegate
        self.print_width: int = options.effective_print_width
        self.tab_width: int = options.effective_tab_width
        self.break_tags: frozenset[str] = ALWAYS_BLOCK_TAGS | frozenset(
            options.wxml_prefer_break_tags
        )

    def render(self, document: Document) -> Doc:
        """Lay out a whole document.

        Args:
            document (Document): The restored tree.

        Returns:
            Doc: Top-level items separated by hard lines plus a final newline,
            or ``""`` when the document has no printable content.
        """
        children: list[Node] = document.children
        ranges: list[IgnoreRange | None] = [self.ignore.range_for(child) for child in children]
        docs: list[Doc | None] = [
            None if ignore_range is not None else self._child_doc(child, depth=0)
            for child, ignore_range in zip(children, ranges)
        ]
        items: list[Doc] = self._block_items(children, ranges, docs)
        if not items:
            return ""
        return [join(hardline, items), hardline]

    def render_node(self, node: Node, *, depth: int = 0) -> Doc:
        """Lay out a single node at ``depth`` indentation levels.

        Raises:
            LayoutError: If ``node`` is of an unknown kind.
        """
        match node:
            case ScriptBlock() | Element():
                return self._element(node, depth)
            case TextRun():
                return literal_text(node.text)
            case Interpolation():
                return interpolation_doc(node)
            case Comment() | CData() | Instruction() | Reference():
                return literal_text(node.text)
            case _:
                raise LayoutError(f"Unknown node kind: {type(node).__name__}")

    def _child_doc(self, node: Node, *, depth: int) -> Doc:
        """Doc of ``node`` as an inline child (text-like nodes verbatim)."""
        match node:
            case TextRun():
                return node.text
            case Interpolation():
                return node.source
            case _:
                return self.render_node(node, depth=depth)

    def _block_items(
        self,
        children: list[Node],
        ranges: list[IgnoreRange | None],
        docs: list[Doc | None],
    ) -> list[Doc]:
        """Lay out ``children`` one item per line, in source order."""
        fragments: list[LayoutFragment] = []
        run: list[Node] = []

        def flush() -> None:
            if run:
                offset: int = run[0].start
                fragments.extend(LayoutFragment(offset, line) for line in text_run_lines(run))
                run.clear()

        i: int = 0
        while i < len(children):
            child: Node = children[i]
            ignore_range: IgnoreRange | None = ranges[i]
            if ignore_range is not None:
                flush()
                last: int = i
                while last + 1 < len(children) and ranges[last + 1] == ignore_range:
                    last += 1
                verbatim: str = self.source[child.start : children[last].end]
                fragments.append(LayoutFragment(child.start, literal_text(verbatim)))
                i = last + 1
                continue
            if isinstance(child, _TEXT_LIKE):
                run.append(child)
            else:
                flush()
                doc: Doc | None = docs[i]
                if doc is not None:
                    fragments.append(LayoutFragment(child.start, doc))
            i += 1
        flush()
        # Stable sort: lines of one text run keep their order.
        fragments.sort(key=lambda fragment: fragment.source_offset)
        return [fragment.doc for fragment in fragments]

    def _open_tag(self, element: Element, depth: int) -> Doc:
        """Print the start tag, breaking attributes one per line when needed."""
        printed: list[str] = [
            print_attribute(attribute, single_quote=self.options.wxml_single_quote)
            for attribute in element.attributes
        ]
        close: str = "/>" if element.self_closing else ">"
        if not printed:
            return f"<{element.name} />" if element.self_closing else f"<{element.name}>"
        available: int = self.print_width - depth * self.tab_width
        attribute_docs: list[Doc] = [literal_text(text) for text in printed]
        if should_break_attributes(element, printed, available_width=available):
            return [
                f"<{element.name}",
                indent([hardline, join(hardline, attribute_docs)]),
                hardline,
                close,
            ]
        tail: str = " />" if element.self_closing else ">"
        return [f"<{element.name} ", join(" ", attribute_docs), tail]

    def _element(self, element: Element, depth: int) -> Doc:
        open_tag: Doc = self._open_tag(element, depth)
        if element.self_closing:
            return open_tag
        close_tag: str = f"</{element.name}>"

        if self.delegate is not None and isinstance(element, ScriptBlock):
            delegated: Doc | None = self.delegate.render(
                element, open_tag=open_tag, close_tag=close_tag
            )
            if delegated is not None:
                return delegated

        if element.name == VERBATIM_TEXT_TAG and self.options.wxml_strict_text:
            content: str = self.source[element.content_start : element.content_end]
            return [open_tag, literal_text(content), close_tag]

        children: list[Node] = element.children
        if all(is_blank_text(child) for child in children):
            return [open_tag, close_tag]

        lone: Interpolation | None = self._lone_interpolation(element)
        if lone is not None:
            if is_complex_expression(lone.expression):
                logger.trace("Complex interpolation at %d goes on its own line", lone.start)
                return [open_tag, indent([hardline, interpolation_doc(lone)]), hardline, close_tag]
            return [open_tag, lone.source, close_tag]

        ranges: list[IgnoreRange | None] = [self.ignore.range_for(child) for child in children]
        docs: list[Doc | None] = [
            None if ignore_range is not None else self._child_doc(child, depth=depth + 1)
            for child, ignore_range in zip(children, ranges)
        ]
        if self._can_inline(element, ranges, docs):
            return [open_tag, *[doc for doc in docs if doc is not None], close_tag]

        items: list[Doc] = self._block_items(children, ranges, docs)
        return [open_tag, indent([hardline, join(hardline, items)]), hardline, close_tag]

    def _lone_interpolation(self, element: Element) -> Interpolation | None:
        """Return the only non-whitespace child when it is an interpolation."""
        found: Interpolation | None = None
        for child in element.children:
            if is_blank_text(child):
                continue
            if found is not None or not isinstance(child, Interpolation):
                return None
            if self.ignore.is_ignored(child):
                return None
            found = child
        return found

    def _can_inline(
        self,
        element: Element,
        ranges: list[IgnoreRange | None],
        docs: list[Doc | None],
    ) -> bool:
        """Decide whether the children of ``element`` stay on the tag's line."""
        if element.name in self.break_tags:
            return False
        if any(ignore_range is not None for ignore_range in ranges):
            return False
        total: int = 0
        for child, doc in zip(element.children, docs):
            if isinstance(child, (TextRun, Comment, CData, Reference)) and "\n" in child.text:
                return False
            if isinstance(child, Interpolation) and "\n" in child.expression:
                return False
            if (
                self.options.wxml_strict_text
                and isinstance(child, Element)
                and child.name == VERBATIM_TEXT_TAG
                and child.attributes
            ):
                return False
            width: int | None = flat_width(doc) if doc is not None else None
            if width is None:
                return False
            total += width
        return total < INLINE_CONTENT_THRESHOLD
