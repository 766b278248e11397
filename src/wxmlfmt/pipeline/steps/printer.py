# topmark:header:start
#
#   project      : WxmlFmt
#   file         : printer.py
#   file_relpath : src/wxmlfmt/pipeline/steps/printer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Print step: run the doc renderer collaborator."""

from __future__ import annotations

from typing import TYPE_CHECKING

from wxmlfmt.config.logging import get_logger
from wxmlfmt.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.pipeline.context import FormatContext

logger: WxmlfmtLogger = get_logger(__name__)


class PrinterStep(BaseStep):
    """Print ``ctx.doc`` at the effective markup widths.

    Sets:
      - ctx.output
    """

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, ctx: FormatContext) -> bool:
        """Run only once a doc exists."""
        proceed: bool = not ctx.is_halted and ctx.doc is not None
        logger.debug("%s may_proceed is %s", self.name, proceed)
        return proceed

    def run(self, ctx: FormatContext) -> None:
        """Render ``ctx.doc`` into ``ctx.output``."""
        assert ctx.doc is not None
        ctx.output = ctx.renderer.render(
            ctx.doc,
            width=ctx.options.effective_print_width,
            tab_width=ctx.options.effective_tab_width,
        )

    def hint(self, ctx: FormatContext) -> None:
        """Record whether formatting changed the text."""
        if ctx.output is not None:
            logger.debug("Output %s the source", "differs from" if ctx.changed else "matches")
