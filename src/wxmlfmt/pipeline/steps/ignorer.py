# topmark:header:start
#
#   project      : WxmlFmt
#   file         : ignorer.py
#   file_relpath : src/wxmlfmt/pipeline/steps/ignorer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Ignore step: pair sentinel comments into verbatim ranges."""

from __future__ import annotations

from typing import TYPE_CHECKING

from wxmlfmt.config.logging import get_logger
from wxmlfmt.layout.ignore import build_ignore_ranges
from wxmlfmt.parse.nodes import collect_comments
from wxmlfmt.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.pipeline.context import FormatContext

logger: WxmlfmtLogger = get_logger(__name__)


class IgnorerStep(BaseStep):
    """Compute the ignore ranges of the restored document.

    Sets:
      - ctx.ignore_ranges
    """

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, ctx: FormatContext) -> bool:
        """Run only once the tree is restored."""
        proceed: bool = not ctx.is_halted and ctx.document is not None
        logger.debug("%s may_proceed is %s", self.name, proceed)
        return proceed

    def run(self, ctx: FormatContext) -> None:
        """Pair the sentinel comments of ``ctx.document``."""
        assert ctx.document is not None
        ctx.ignore_ranges = build_ignore_ranges(
            collect_comments(ctx.document),
            source=ctx.source,
            diagnostics=ctx.diagnostics,
        )
