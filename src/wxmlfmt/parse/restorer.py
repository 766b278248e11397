# topmark:header:start
#
#   project      : WxmlFmt
#   file         : restorer.py
#   file_relpath : src/wxmlfmt/parse/restorer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Put placeholder tokens back and move a parse tree onto original offsets.

The restored tree:
    * has every span translated from parsed-text offsets to original offsets;
    * has text runs split into `TextRun` and `Interpolation` nodes;
    * has ``<wxs>`` elements turned into `ScriptBlock` nodes;
    * contains no placeholder token anywhere.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wxmlfmt.config.logging import get_logger
from wxmlfmt.constants import SCRIPT_TAG
from wxmlfmt.errors import InvariantError
from wxmlfmt.parse.nodes import (
    Attribute,
    CData,
    Comment,
    Document,
    Element,
    Instruction,
    Interpolation,
    Node,
    Reference,
    ScriptBlock,
    TextRun,
)
from wxmlfmt.parse.protector import PlaceholderKind, TokenRestorer

if TYPE_CHECKING:
    import re

    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.parse.offsets import OffsetMapChain
    from wxmlfmt.parse.protector import PlaceholderRecord, ProtectedText

logger: WxmlfmtLogger = get_logger(__name__)


class TreeRestorer:
    """Rebuild a parsed tree in terms of the original source text.

    Args:
        protected (ProtectedText): The protection result the tree was parsed from.
        offsets (OffsetMapChain): Parsed-text to original-text offset translation.
    """

    def __init__(self, protected: ProtectedText, offsets: OffsetMapChain) -> None:
        self._tokens: TokenRestorer = TokenRestorer(protected)
        self._offsets: OffsetMapChain = offsets

    def restore(self, document: Document) -> Document:
        """Restore ``document``.

        Raises:
            InvariantError: If a placeholder is unknown, restored twice or never restored.

        Returns:
            Document: A new tree on original offsets.
        """
        restored = Document(
            self._map(document.start),
            self._map(document.end),
            self._restore_children(document.children),
        )
        self._tokens.finish()
        return restored

    def _map(self, offset: int) -> int:
        return self._offsets.to_original(offset)

    def _restore_children(self, children: list[Node]) -> list[Node]:
        restored: list[Node] = []
        for child in children:
            restored.extend(self._restore_node(child))
        return restored

    def _restore_node(self, node: Node) -> list[Node]:
        start: int = self._map(node.start)
        end: int = self._map(node.end)
        match node:
            case Element():
                cls: type[Element] = ScriptBlock if node.name == SCRIPT_TAG else Element
                return [
                    cls(
                        start,
                        end,
                        name=self._tokens.restore_tokens(node.name),
                        attributes=[self._restore_attribute(a) for a in node.attributes],
                        children=self._restore_children(node.children),
                        self_closing=node.self_closing,
                        content_start=self._map(node.content_start),
                        content_end=self._map(node.content_end),
                    )
                ]
            case TextRun():
                return self._split_text(node)
            case Comment():
                return [Comment(start, end, node.text)]
            case CData():
                return [CData(start, end, node.text)]
            case Reference():
                return [Reference(start, end, node.text)]
            case Instruction():
                return [Instruction(start, end, self._tokens.restore_tokens(node.text))]
            case _:
                raise InvariantError(f"Cannot restore node of kind {type(node).__name__}")

    def _restore_attribute(self, attribute: Attribute) -> Attribute:
        return Attribute(
            name=self._tokens.restore_tokens(attribute.name),
            value=None
            if attribute.value is None
            else self._tokens.restore_tokens(attribute.value),
            quote=attribute.quote,
            start=self._map(attribute.start),
            end=self._map(attribute.end),
        )

    def _split_text(self, run: TextRun) -> list[Node]:
        """Split a text run at its tokens into text and interpolation nodes."""
        token_re: re.Pattern[str] = self._tokens.token_re
        pieces: list[Node] = []
        pos: int = 0
        text: str = run.text
        for m in token_re.finditer(text):
            if m.start() > pos:
                piece_end: int = run.start + m.start()
                pieces.append(self._text_piece(run.start + pos, piece_end, text[pos : m.start()]))
            record: PlaceholderRecord = self._tokens.take(m.group())
            start: int = self._map(run.start + m.start())
            end: int = self._map(run.start + m.end())
            if record.kind is PlaceholderKind.EXPRESSION:
                pieces.append(Interpolation(start, end, record.original))
            else:
                pieces.append(TextRun(start, end, record.original))
            pos = m.end()
        if pos < len(text):
            pieces.append(self._text_piece(run.start + pos, run.end, text[pos:]))
        return pieces

    def _text_piece(self, start: int, end: int, text: str) -> TextRun:
        return TextRun(self._map(start), self._map(end), text)
