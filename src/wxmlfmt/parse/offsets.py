# topmark:header:start
#
#   project      : WxmlFmt
#   file         : offsets.py
#   file_relpath : src/wxmlfmt/parse/offsets.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Offset translation between a rewritten text and the text it came from.

An `OffsetMap` records the edits that turned a *source* text into a
*rewritten* text (each edit replaces a source span by a rewritten span, an
insertion being an edit whose source span is empty) and maps rewritten
offsets back to source offsets:

* offsets outside every edit map exactly;
* an offset inside a rewritten span maps to the start of the source span;
* an offset at the end of a rewritten span maps to the end of the source span.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True)
class Edit:
    """One replaced span.

    Attributes:
        new_start (int): Start of the span in the rewritten text.
        new_end (int): End of the span in the rewritten text.
        old_start (int): Start of the span in the source text.
        old_end (int): End of the span in the source text.
    """

    new_start: int
    new_end: int
    old_start: int
    old_end: int


@dataclass(frozen=True)
class OffsetMap:
    """Rewritten-to-source offset translation built from sorted edits."""

    edits: tuple[Edit, ...] = ()
    _starts: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_starts", tuple(e.new_start for e in self.edits))

    @classmethod
    def identity(cls) -> OffsetMap:
        """Return a map that changes nothing."""
        return cls(())

    def to_original(self, offset: int) -> int:
        """Translate a rewritten offset to a source offset.

        Args:
            offset (int): Offset into the rewritten text.

        Returns:
            int: The corresponding offset into the source text.
        """
        idx: int = bisect_right(self._starts, offset) - 1
        if idx < 0:
            return offset
        edit = self.edits[idx]
        if offset < edit.new_end:
            return edit.old_start
        return offset - edit.new_end + edit.old_end


@dataclass(frozen=True)
class OffsetMapChain:
    """Several offset maps applied one after another."""

    maps: tuple[OffsetMap, ...]

    def to_original(self, offset: int) -> int:
        """Translate ``offset`` through every map in order."""
        for offset_map in self.maps:
            offset = offset_map.to_original(offset)
        return offset


def chain(maps: Iterable[OffsetMap]) -> OffsetMapChain:
    """Compose maps applied outermost first (e.g. wrapper, then protector)."""
    return OffsetMapChain(tuple(maps))
