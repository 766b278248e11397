# topmark:header:start
#
#   project      : WxmlFmt
#   file         : ignore.py
#   file_relpath : src/wxmlfmt/layout/ignore.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Ignore regions delimited by sentinel comments.

Everything between ``<!-- prettier-ignore-start -->`` and the next
``<!-- prettier-ignore-end -->`` (both included) is emitted byte for byte.

Pairing rules:
    * comments are considered in source order, wherever they appear;
    * an end marker with no open start is ignored;
    * a second start while one is open restarts the range at the later start;
    * a start never closed yields no range (and a warning).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from wxmlfmt.config.logging import get_logger
from wxmlfmt.constants import IGNORE_END_COMMENT, IGNORE_START_COMMENT
from wxmlfmt.errors import location_of

if TYPE_CHECKING:
    from collections.abc import Iterable

    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.diagnostic import DiagnosticLog
    from wxmlfmt.parse.nodes import Comment, Node

logger: WxmlfmtLogger = get_logger(__name__)


@dataclass(frozen=True)
class IgnoreRange:
    """A half-open ``[start, end)`` span of original text kept verbatim."""

    start: int
    end: int

    def contains(self, node: Node) -> bool:
        """Return True if ``node`` lies entirely inside this range."""
        return self.start <= node.start and node.end <= self.end


def build_ignore_ranges(
    comments: Iterable[Comment],
    *,
    source: str = "",
    diagnostics: DiagnosticLog | None = None,
) -> list[IgnoreRange]:
    """Pair sentinel comments into ignore ranges.

    Args:
        comments (Iterable[Comment]): Every comment of the document, in any order.
        source (str): The original text, used to locate an unmatched start.
        diagnostics (DiagnosticLog | None): Where to record an unmatched start.

    Returns:
        list[IgnoreRange]: Ranges sorted by start offset.
    """
    ranges: list[IgnoreRange] = []
    open_start: Comment | None = None
    for comment in sorted(comments, key=lambda c: c.start):
        if comment.text == IGNORE_START_COMMENT:
            if open_start is not None:
                logger.debug("Ignore start at %d restarts open range", comment.start)
            open_start = comment
        elif comment.text == IGNORE_END_COMMENT:
            if open_start is None:
                logger.debug("Ignoring stray ignore end at %d", comment.start)
                continue
            ranges.append(IgnoreRange(open_start.start, comment.end))
            open_start = None

    if open_start is not None:
        line, column = location_of(source, open_start.start)
        message: str = (
            f"Unterminated {IGNORE_START_COMMENT} at {line}:{column}; the region is formatted"
        )
        logger.warning(message)
        if diagnostics is not None:
            diagnostics.add_warning(message)

    logger.debug("Built %d ignore range(s)", len(ranges))
    return ranges


class IgnoreTracker:
    """Answers "is this node ignored?" for a set of ranges."""

    def __init__(self, ranges: Iterable[IgnoreRange] = ()) -> None:
        self._ranges: tuple[IgnoreRange, ...] = tuple(ranges)

    @property
    def ranges(self) -> tuple[IgnoreRange, ...]:
        """The tracked ranges."""
        return self._ranges

    def range_for(self, node: Node) -> IgnoreRange | None:
        """Return the range fully containing ``node``, if any."""
        for ignore_range in self._ranges:
            if ignore_range.contains(node):
                return ignore_range
        return None

    def is_ignored(self, node: Node) -> bool:
        """Return True if ``node`` lies entirely inside an ignore range."""
        return self.range_for(node) is not None
