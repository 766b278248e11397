# topmark:header:start
#
#   project      : WxmlFmt
#   file         : protector.py
#   file_relpath : src/wxmlfmt/pipeline/steps/protector.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Protection step: shield interpolations and ``<wxs>`` bodies from the grammar.

Blank input is complete here: the output is the empty string and the flow
stops.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wxmlfmt.config.logging import get_logger
from wxmlfmt.parse.protector import protect
from wxmlfmt.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.pipeline.context import FormatContext

logger: WxmlfmtLogger = get_logger(__name__)


class ProtectorStep(BaseStep):
    """Replace ambiguous substrings with placeholder tokens.

    Sets:
      - ctx.protected
      - ctx.output (``""``) and the halt flag for blank input
    """

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def run(self, ctx: FormatContext) -> None:
        """Protect ``ctx.source``.

        Args:
            ctx (FormatContext): The formatting context.
        """
        if not ctx.source.strip():
            ctx.output = ""
            ctx.stop_flow("blank-input", self)
            return
        ctx.protected = protect(ctx.source)
        logger.trace("Protected text:\n%s", ctx.protected.text)
