# topmark:header:start
#
#   project      : WxmlFmt
#   file         : base.py
#   file_relpath : src/wxmlfmt/pipeline/steps/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Base class for class-based pipeline steps.

The runner invokes steps as *callables*. `BaseStep` implements the common
lifecycle:

    ctx = step(ctx)  # internally: may_proceed → run? → hint

Steps raise on failure; a step that completes the work early (for instance
on blank input) sets the output and stops the flow instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from wxmlfmt.config.logging import get_logger

if TYPE_CHECKING:
    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.pipeline.context import FormatContext

logger: WxmlfmtLogger = get_logger(__name__)


@dataclass
class BaseStep:
    """Reusable foundation for pipeline steps.

    Subclass this to implement a concrete step by overriding ``may_proceed()``,
    ``run()``, and optionally ``hint()``. Do not override ``__call__``.

    Attributes:
        name (str): Stable step identifier for logs and tracing.
    """

    name: str

    def __call__(self, ctx: FormatContext) -> FormatContext:
        """Invoke the step lifecycle: gate → run (if allowed) → hint.

        Args:
            ctx (FormatContext): The mutable formatting context.

        Returns:
            FormatContext: The same context instance after mutation/hints.
        """
        ctx.steps.append(self)

        if self.may_proceed(ctx):
            logger.debug("Pipeline step %s - running", self.name)
            self.run(ctx)
            if ctx.flow.halt:
                logger.debug("Pipeline halted by %s: %s", ctx.flow.at_step, ctx.flow.reason)
        else:
            logger.debug("Pipeline step %s may not proceed", self.name)

        self.hint(ctx)
        return ctx

    def may_proceed(self, ctx: FormatContext) -> bool:
        """Return whether the step should run given the current context.

        Default: run unless the flow was halted.

        Args:
            ctx (FormatContext): The mutable formatting context.

        Returns:
            bool: True to run ``run()``, False to skip.
        """
        return not ctx.is_halted

    def run(self, ctx: FormatContext) -> None:
        """Perform the step's primary work, mutating ``ctx`` in place.

        Args:
            ctx (FormatContext): The mutable formatting context.
        """
        pass

    def hint(self, ctx: FormatContext) -> None:
        """Attach diagnostics to ``ctx`` (optional).

        Args:
            ctx (FormatContext): The mutable formatting context.
        """
        pass
