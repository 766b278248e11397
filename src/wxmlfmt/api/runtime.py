# topmark:header:start
#
#   project      : WxmlFmt
#   file         : runtime.py
#   file_relpath : src/wxmlfmt/api/runtime.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Runtime helpers behind the public API: option normalization and pipeline execution."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from wxmlfmt.config.logging import get_logger
from wxmlfmt.config.options import FormatOptions, MutableFormatOptions
from wxmlfmt.errors import InvariantError
from wxmlfmt.pipeline.context import FormatContext
from wxmlfmt.pipeline.pipelines import FORMAT_PIPELINE
from wxmlfmt.pipeline.runner import run

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.pipeline.contracts import DocRenderer, MarkupParser, ScriptFormatter, Step

logger: WxmlfmtLogger = get_logger(__name__)


def ensure_options(
    value: Mapping[str, Any] | MutableFormatOptions | FormatOptions | None,
) -> FormatOptions:
    """Return frozen options from a mapping, a draft or frozen options.

    Args:
        value (Mapping[str, Any] | MutableFormatOptions | FormatOptions | None):
            Plain option mapping (TOML shape, camelCase aliases accepted),
            draft, frozen options, or None for defaults.

    Raises:
        ConfigError: If the mapping holds invalid values.

    Returns:
        FormatOptions: The frozen options.
    """
    if value is None:
        return FormatOptions()
    if isinstance(value, FormatOptions):
        return value
    if isinstance(value, MutableFormatOptions):
        return value.freeze()
    return MutableFormatOptions.from_mapping(dict(value)).freeze()


def run_pipeline(
    source: str,
    options: FormatOptions,
    *,
    parser: MarkupParser | None = None,
    renderer: DocRenderer | None = None,
    script_formatter: ScriptFormatter | None = None,
    pipeline: Sequence[Step] = FORMAT_PIPELINE,
) -> FormatContext:
    """Run ``pipeline`` over ``source`` in a fresh context.

    Raises:
        WxmlfmtError: Whatever a step raises; no partial output is returned.

    Returns:
        FormatContext: The final context.
    """
    ctx: FormatContext = FormatContext.bootstrap(
        source,
        options,
        parser=parser,
        renderer=renderer,
        script_formatter=script_formatter,
    )
    return run(ctx, pipeline)


def require_output(ctx: FormatContext) -> str:
    """Return the output of a finished format pipeline.

    Raises:
        InvariantError: If the pipeline ended without output.
    """
    if ctx.output is None:
        raise InvariantError(
            f"Pipeline finished without output (last step: "
            f"{ctx.steps[-1].name if ctx.steps else 'none'})"
        )
    return ctx.output
