# topmark:header:start
#
#   project      : WxmlFmt
#   file         : restorer.py
#   file_relpath : src/wxmlfmt/pipeline/steps/restorer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Restore step: undo wrapping and protection on the parsed tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

from wxmlfmt.config.logging import get_logger
from wxmlfmt.parse.offsets import chain
from wxmlfmt.parse.restorer import TreeRestorer
from wxmlfmt.parse.wrapper import unwrap
from wxmlfmt.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.parse.nodes import Document
    from wxmlfmt.pipeline.context import FormatContext

logger: WxmlfmtLogger = get_logger(__name__)


class RestorerStep(BaseStep):
    """Build the restored tree, on original offsets and without placeholders.

    Sets:
      - ctx.document

    Raises:
      - InvariantError if a placeholder is not consumed exactly once
    """

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, ctx: FormatContext) -> bool:
        """Run only once a tree was parsed."""
        proceed: bool = not ctx.is_halted and ctx.parsed is not None
        logger.debug("%s may_proceed is %s", self.name, proceed)
        return proceed

    def run(self, ctx: FormatContext) -> None:
        """Unwrap and restore ``ctx.parsed``."""
        assert ctx.parsed is not None and ctx.protected is not None and ctx.wrapped is not None
        tree: Document = unwrap(ctx.parsed) if ctx.wrapped.wrapped else ctx.parsed
        restorer = TreeRestorer(
            ctx.protected,
            chain((ctx.wrapped.offset_map, ctx.protected.offset_map)),
        )
        ctx.document = restorer.restore(tree)
