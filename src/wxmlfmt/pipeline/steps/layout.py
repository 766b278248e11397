# topmark:header:start
#
#   project      : WxmlFmt
#   file         : layout.py
#   file_relpath : src/wxmlfmt/pipeline/steps/layout.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Layout step: turn the restored tree into a doc."""

from __future__ import annotations

from typing import TYPE_CHECKING

from wxmlfmt.config.logging import get_logger
from wxmlfmt.layout.engine import LayoutEngine
from wxmlfmt.layout.ignore import IgnoreTracker
from wxmlfmt.pipeline.steps.base import BaseStep
from wxmlfmt.script.delegate import EmbeddedScriptDelegate

if TYPE_CHECKING:
    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.pipeline.context import FormatContext

logger: WxmlfmtLogger = get_logger(__name__)


class LayoutStep(BaseStep):
    """Run the layout engine (and the script delegate) over ``ctx.document``.

    Sets:
      - ctx.doc

    Raises:
      - EmbeddedScriptError under the ``fail`` policy
      - LayoutError for an unknown node kind
    """

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, ctx: FormatContext) -> bool:
        """Run only once the tree is restored."""
        proceed: bool = not ctx.is_halted and ctx.document is not None
        logger.debug("%s may_proceed is %s", self.name, proceed)
        return proceed

    def run(self, ctx: FormatContext) -> None:
        """Build ``ctx.doc``."""
        assert ctx.document is not None
        delegate: EmbeddedScriptDelegate | None = None
        if ctx.script_formatter is not None:
            delegate = EmbeddedScriptDelegate(
                ctx.script_formatter,
                ctx.options,
                source=ctx.source,
                diagnostics=ctx.diagnostics,
            )
        engine = LayoutEngine(
            ctx.options,
            source=ctx.source,
            ignore=IgnoreTracker(ctx.ignore_ranges),
            delegate=delegate,
        )
        ctx.doc = engine.render(ctx.document)
