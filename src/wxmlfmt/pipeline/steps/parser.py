# topmark:header:start
#
#   project      : WxmlFmt
#   file         : parser.py
#   file_relpath : src/wxmlfmt/pipeline/steps/parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Parse step: run the markup parser collaborator.

Parser failures carry offsets into the wrapped, protected text. They are
translated back through both offset maps (best effort: a failure inside a
placeholder is reported at the start of the protected span) and re-raised as
`WxmlSyntaxError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wxmlfmt.config.logging import get_logger
from wxmlfmt.errors import MarkupParseError, WxmlSyntaxError, location_of
from wxmlfmt.parse.offsets import chain
from wxmlfmt.pipeline.steps.base import BaseStep

if TYPE_CHECKING:
    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.pipeline.context import FormatContext

logger: WxmlfmtLogger = get_logger(__name__)


class ParserStep(BaseStep):
    """Parse the wrapped text into a tree.

    Sets:
      - ctx.parsed

    Raises:
      - WxmlSyntaxError on malformed markup
    """

    def __init__(self) -> None:
        super().__init__(name=self.__class__.__name__)

    def may_proceed(self, ctx: FormatContext) -> bool:
        """Run only once the text is protected and wrapped."""
        proceed: bool = (
            not ctx.is_halted and ctx.protected is not None and ctx.wrapped is not None
        )
        logger.debug("%s may_proceed is %s", self.name, proceed)
        return proceed

    def run(self, ctx: FormatContext) -> None:
        """Parse ``ctx.wrapped.text``.

        Args:
            ctx (FormatContext): The formatting context.

        Raises:
            WxmlSyntaxError: If the parser rejects the markup.
        """
        assert ctx.protected is not None and ctx.wrapped is not None
        try:
            ctx.parsed = ctx.parser.parse(ctx.wrapped.text)
        except MarkupParseError as exc:
            offsets = chain((ctx.wrapped.offset_map, ctx.protected.offset_map))
            offset: int = offsets.to_original(exc.offset)
            line, column = location_of(ctx.source, offset)
            logger.debug("Parse failure at %d maps to %d:%d", exc.offset, line, column)
            raise WxmlSyntaxError(exc.message, line=line, column=column, offset=offset) from exc
