# topmark:header:start
#
#   project      : WxmlFmt
#   file         : runner.py
#   file_relpath : src/wxmlfmt/pipeline/runner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run a formatting pipeline over a single document."""

from __future__ import annotations

from typing import TYPE_CHECKING

from wxmlfmt.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.pipeline.contracts import Step
    from wxmlfmt.pipeline.context import FormatContext

logger: WxmlfmtLogger = get_logger(__name__)


def run(ctx: FormatContext, steps: Sequence[Step]) -> FormatContext:
    """Execute the pipeline sequentially.

    Args:
        ctx (FormatContext): Mutable formatting context.
        steps (Sequence[Step]): Ordered sequence of pipeline steps.
            Each step takes and returns a context.

    Returns:
        FormatContext: The final context after all steps have run.
    """
    logger.debug(
        "Formatting %d character(s) at width %d",
        len(ctx.source),
        ctx.options.effective_print_width,
    )
    for step in steps:
        ctx = step(ctx)
    return ctx
