# topmark:header:start
#
#   project      : WxmlFmt
#   file         : wrapper.py
#   file_relpath : src/wxmlfmt/pipeline/steps/wrapper.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Wrapping step: add a synthetic root around multi-root fragments."""

from __future__ import annotations

from typing import TYPE_CHECKING

from wxmlfmt.config.logging import get_logger
from wxmlfmt.parse.wrapper import wrap
from wxmlfmt.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.pipeline.context import FormatContext

logger: WxmlfmtLogger = get_logger(__name__)


class WrapperStep(BaseStep):
    """Wrap the protected text when it has more than one root.

    Sets:
      - ctx.wrapped
    """

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, ctx: FormatContext) -> bool:
        """Run only after protection."""
        proceed: bool = not ctx.is_halted and ctx.protected is not None
        logger.debug("%s may_proceed is %s", self.name, proceed)
        return proceed

    def run(self, ctx: FormatContext) -> None:
        """Wrap ``ctx.protected.text``."""
        assert ctx.protected is not None
        ctx.wrapped = wrap(ctx.protected.text)
