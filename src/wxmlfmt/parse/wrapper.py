# topmark:header:start
#
#   project      : WxmlFmt
#   file         : wrapper.py
#   file_relpath : src/wxmlfmt/parse/wrapper.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Synthetic-root workaround for multi-root fragments.

WXML files routinely hold several top-level elements, or loose text next to
elements. Markup grammars expect exactly one root, so such fragments are
wrapped in a reserved ``<__wxml_root__>`` element before parsing and the
wrapper is removed again from the parse tree.

A leading XML declaration stays in front of the synthetic start tag.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from wxmlfmt.config.logging import get_logger
from wxmlfmt.constants import SYNTHETIC_ROOT_TAG
from wxmlfmt.parse.nodes import Document, Element
from wxmlfmt.parse.offsets import Edit, OffsetMap
from wxmlfmt.parse.scanner import TokenKind, scan

if TYPE_CHECKING:
    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.parse.nodes import Node
    from wxmlfmt.parse.scanner import ScanToken

logger: WxmlfmtLogger = get_logger(__name__)

SYNTHETIC_OPEN: Final[str] = f"<{SYNTHETIC_ROOT_TAG}>"
SYNTHETIC_CLOSE: Final[str] = f"</{SYNTHETIC_ROOT_TAG}>"

_XML_DECLARATION_RE: Final[re.Pattern[str]] = re.compile(r"\s*<\?xml\b.*?\?>", re.DOTALL)


@dataclass(frozen=True)
class WrappedText:
    """Result of `wrap`.

    Attributes:
        text (str): The text to parse.
        wrapped (bool): Whether the synthetic root was inserted.
        offset_map (OffsetMap): Wrapped-to-unwrapped offset translation.
    """

    text: str
    wrapped: bool = False
    offset_map: OffsetMap = field(default_factory=OffsetMap.identity)


def needs_synthetic_root(text: str) -> bool:
    """Decide whether ``text`` must be wrapped before parsing.

    Wrapping is needed when non-whitespace content follows the first balanced
    top-level element, when non-whitespace text precedes the first element, or
    when there is text but no element at all. Comments, instructions and
    declarations never count as content.

    Args:
        text (str): Protected markup.

    Returns:
        bool: True when a synthetic root is needed.
    """
    depth: int = 0
    seen_element: bool = False
    root_closed: bool = False
    token: ScanToken
    for token in scan(text):
        match token.kind:
            case TokenKind.TEXT | TokenKind.CDATA:
                if depth == 0 and text[token.start : token.end].strip():
                    return True
            case TokenKind.START_TAG:
                if depth == 0 and root_closed:
                    return True
                seen_element = True
                if token.self_closing:
                    if depth == 0:
                        root_closed = True
                else:
                    depth += 1
            case TokenKind.END_TAG:
                depth = max(0, depth - 1)
                if depth == 0 and seen_element:
                    root_closed = True
            case _:
                pass
    return False


def wrap(text: str) -> WrappedText:
    """Wrap ``text`` in the synthetic root when needed.

    Args:
        text (str): Protected markup.

    Returns:
        WrappedText: The text to parse and its offset map.
    """
    if not needs_synthetic_root(text):
        return WrappedText(text)

    declaration: re.Match[str] | None = _XML_DECLARATION_RE.match(text)
    at: int = declaration.end() if declaration else 0
    wrapped: str = text[:at] + SYNTHETIC_OPEN + text[at:] + SYNTHETIC_CLOSE
    close_at: int = len(text) + len(SYNTHETIC_OPEN)
    offset_map = OffsetMap(
        (
            Edit(at, at + len(SYNTHETIC_OPEN), at, at),
            Edit(close_at, close_at + len(SYNTHETIC_CLOSE), len(text), len(text)),
        )
    )
    logger.debug("Wrapped multi-root fragment in <%s>", SYNTHETIC_ROOT_TAG)
    return WrappedText(wrapped, wrapped=True, offset_map=offset_map)


def unwrap(document: Document) -> Document:
    """Replace the synthetic root by its children.

    Document-level nodes (comments, instructions) are merged with the
    synthetic root's children in source order. Offsets are left untouched:
    they are translated by the caller through the wrapper's offset map.

    Args:
        document (Document): A tree parsed from wrapped text.

    Returns:
        Document: The tree with the synthetic element removed.
    """
    children: list[Node] = []
    found: bool = False
    for child in document.children:
        if isinstance(child, Element) and child.name == SYNTHETIC_ROOT_TAG:
            children.extend(child.children)
            found = True
        else:
            children.append(child)
    if not found:
        return document
    children.sort(key=lambda node: node.start)
    return Document(document.start, document.end, children)
