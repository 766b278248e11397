# topmark:header:start
#
#   project      : WxmlFmt
#   file         : __init__.py
#   file_relpath : src/wxmlfmt/api/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public WxmlFmt API (stable surface).

This module exposes a **small, typed API** for integrations that want to
format WXML programmatically without going through the CLI.

Notes:
-----
- Functions here are **thin wrappers** around the internal pipeline.
- The ``options`` parameter accepts a frozen
  [`FormatOptions`][wxmlfmt.config.options.FormatOptions], a plain mapping
  (same keys as the ``[tool.wxmlfmt]`` table, camelCase aliases included) or
  None for the defaults. No option file is read here; see
  [`wxmlfmt.config.loaders.resolve_options`][] for discovery.
- The three collaborators (markup parser, doc renderer, script formatter) can
  be replaced by any object implementing the protocols in
  [`wxmlfmt.pipeline.contracts`][].
- Calls share no state and may run concurrently. A call returns the complete
  output or raises a [`WxmlfmtError`][wxmlfmt.errors.WxmlfmtError].

```python
from wxmlfmt import api

api.format_text("<view><text>Hello</text></view>")
# '<view><text>Hello</text></view>\\n'
```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from wxmlfmt.api.runtime import ensure_options, require_output, run_pipeline
from wxmlfmt.api.types import FileResult, FormatResult, Outcome
from wxmlfmt.config.logging import get_logger
from wxmlfmt.constants import WXMLFMT_VERSION
from wxmlfmt.errors import WxmlfmtError
from wxmlfmt.pipeline.contracts import DocRenderer, MarkupParser, ScriptFormatter
from wxmlfmt.utils.diff import make_patch

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.config.options import FormatOptions
    from wxmlfmt.pipeline.context import FormatContext

logger: WxmlfmtLogger = get_logger(__name__)

__all__: list[str] = [
    "DocRenderer",
    "FileResult",
    "FormatResult",
    "MarkupParser",
    "Outcome",
    "ScriptFormatter",
    "check_text",
    "format_document",
    "format_file",
    "format_text",
    "version",
]


def format_document(
    text: str,
    options: FormatOptions | Mapping[str, Any] | None = None,
    *,
    parser: MarkupParser | None = None,
    renderer: DocRenderer | None = None,
    script_formatter: ScriptFormatter | None = None,
) -> FormatResult:
    """Format ``text`` and report what happened.

    Args:
        text (str): WXML source.
        options (FormatOptions | Mapping[str, Any] | None): Formatter options.
        parser (MarkupParser | None): Markup parser (default: the built-in grammar).
        renderer (DocRenderer | None): Doc renderer (default: the built-in printer).
        script_formatter (ScriptFormatter | None): ``<wxs>`` sub-formatter
            (default: the ES5 formatter).

    Raises:
        WxmlSyntaxError: If the markup is malformed.
        EmbeddedScriptError: If a ``<wxs>`` body fails under the ``fail`` policy.
        ConfigError: If ``options`` is an invalid mapping.

    Returns:
        FormatResult: The output, whether it differs from ``text``, and diagnostics.
    """
    ctx: FormatContext = run_pipeline(
        text,
        ensure_options(options),
        parser=parser,
        renderer=renderer,
        script_formatter=script_formatter,
    )
    output: str = require_output(ctx)
    return FormatResult(
        output=output,
        changed=output != text,
        diagnostics=ctx.diagnostics.freeze(),
    )


def format_text(
    text: str,
    options: FormatOptions | Mapping[str, Any] | None = None,
    *,
    parser: MarkupParser | None = None,
    renderer: DocRenderer | None = None,
    script_formatter: ScriptFormatter | None = None,
) -> str:
    """Format ``text`` and return the formatted output.

    See `format_document` for the arguments and errors.

    Returns:
        str: The formatted text (newline-terminated, or ``""`` for blank input).
    """
    return format_document(
        text,
        options,
        parser=parser,
        renderer=renderer,
        script_formatter=script_formatter,
    ).output


def check_text(
    text: str,
    options: FormatOptions | Mapping[str, Any] | None = None,
) -> bool:
    """Return True when ``text`` is already formatted.

    Raises:
        WxmlfmtError: If ``text`` cannot be formatted.
    """
    return not format_document(text, options).changed


def format_file(
    path: Path,
    options: FormatOptions | Mapping[str, Any] | None = None,
    *,
    write: bool = False,
    diff: bool = False,
) -> FileResult:
    """Format one file.

    Formatting errors are reported in the result rather than raised, so a
    caller can process many files and summarize.

    Args:
        path (Path): The file (UTF-8).
        options (FormatOptions | Mapping[str, Any] | None): Formatter options.
        write (bool): Rewrite the file in place when it changes.
        diff (bool): Include a unified diff when the file changes.

    Raises:
        OSError: If the file cannot be read or written.

    Returns:
        FileResult: The outcome for ``path``.
    """
    source: str = path.read_text(encoding="utf-8")
    try:
        result: FormatResult = format_document(source, options)
    except WxmlfmtError as exc:
        logger.debug("Formatting %s failed: %s", path, exc)
        return FileResult(path=path, outcome=Outcome.FAILED, message=str(exc))

    if not result.changed:
        return FileResult(path=path, outcome=Outcome.UNCHANGED, result=result)
    patch: str | None = make_patch(source, result.output, name=str(path)) if diff else None
    if write:
        path.write_text(result.output, encoding="utf-8")
        logger.info("Formatted %s", path)
        return FileResult(path=path, outcome=Outcome.FORMATTED, result=result, diff=patch)
    return FileResult(path=path, outcome=Outcome.WOULD_CHANGE, result=result, diff=patch)


def version() -> str:
    """Return the installed WxmlFmt version."""
    return WXMLFMT_VERSION
