# topmark:header:start
#
#   project      : WxmlFmt
#   file         : check.py
#   file_relpath : src/wxmlfmt/cli/commands/check.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""WxmlFmt `check` command.

Reports the files whose formatting would change, optionally with a unified
diff. Nothing is written.

Exit codes: 0 when everything is formatted, 2 when a file would change,
65 when a document cannot be formatted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from wxmlfmt.api import format_document, format_file
from wxmlfmt.api.types import Outcome
from wxmlfmt.cli.cmd_common import (
    build_file_list,
    build_overrides,
    exit_if_no_files,
    get_console,
    get_effective_verbosity,
    read_stdin,
    report_diagnostics,
    report_file_result,
    resolve_cli_options,
    wants_stdin,
)
from wxmlfmt.cli.errors import WxmlfmtCliError, WxmlfmtIOError, WxmlfmtSyntaxError
from wxmlfmt.cli.exit_codes import ExitCode
from wxmlfmt.cli.options import (
    common_config_options,
    common_file_options,
    common_formatting_options,
)
from wxmlfmt.config.logging import get_logger
from wxmlfmt.errors import EmbeddedScriptError, WxmlfmtError, WxmlSyntaxError
from wxmlfmt.utils.diff import make_patch, render_patch

if TYPE_CHECKING:
    from pathlib import Path

    from wxmlfmt.api.types import FileResult, FormatResult
    from wxmlfmt.cli.console import ClickConsole
    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.config.options import FormatOptions

logger: WxmlfmtLogger = get_logger(__name__)


def _show_patch(console: ClickConsole, patch: str | None) -> None:
    if not patch:
        return
    console.print(render_patch(patch) if console.enable_color else patch, nl=False)


def _check_stdin(console: ClickConsole, options: FormatOptions, *, diff: bool) -> ExitCode:
    source: str = read_stdin()
    try:
        result: FormatResult = format_document(source, options)
    except (WxmlSyntaxError, EmbeddedScriptError) as exc:
        raise WxmlfmtSyntaxError(f"<stdin>: {exc}") from exc
    except WxmlfmtError as exc:
        raise WxmlfmtCliError(f"<stdin>: {exc}") from exc
    report_diagnostics(console, "<stdin>", result.diagnostics)
    if not result.changed:
        return ExitCode.SUCCESS
    console.print(console.styled("would reformat <stdin>", fg="yellow"))
    if diff:
        _show_patch(console, make_patch(source, result.output, name="<stdin>"))
    return ExitCode.WOULD_CHANGE


@click.command(
    name="check",
    help="Check that WXML files are formatted (exit 2 when a file would change).",
)
@click.argument("paths", nargs=-1, type=str)
@click.option(
    "--diff",
    "diff",
    is_flag=True,
    help="Show a unified diff for each file that would change.",
)
@click.option(
    "--stdin",
    "stdin",
    is_flag=True,
    help="Read the document from STDIN.",
)
@common_config_options
@common_formatting_options
@common_file_options
def check_command(
    *,
    paths: tuple[str, ...],
    diff: bool,
    stdin: bool,
    config_file: Path | None,
    no_config: bool,
    exclude_patterns: tuple[str, ...],
    exclude_from: tuple[Path, ...],
    **formatting: Any,
) -> None:
    """Check whether WXML documents are formatted.

    Args:
        paths (tuple[str, ...]): Files, directories or globs (``-`` for STDIN).
        diff (bool): Print a unified diff for files that would change.
        stdin (bool): Read the document from STDIN.
        config_file (Path | None): Explicit option file.
        no_config (bool): Skip option files.
        exclude_patterns (tuple[str, ...]): Gitwildmatch patterns to skip.
        exclude_from (tuple[Path, ...]): Files holding exclude patterns.
        **formatting (Any): The formatting flags (see `common_formatting_options`).
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    verbosity: int = get_effective_verbosity(ctx)

    options: FormatOptions = resolve_cli_options(
        config_file=config_file,
        no_config=no_config,
        overrides=build_overrides(**formatting),
    )

    if wants_stdin(paths, stdin=stdin):
        code: ExitCode = _check_stdin(console, options, diff=diff)
        if code is not ExitCode.SUCCESS:
            ctx.exit(code)
        return

    file_list: list[Path] = build_file_list(
        paths,
        exclude_patterns=exclude_patterns,
        exclude_from=exclude_from,
    )
    if exit_if_no_files(console, file_list):
        return

    results: list[FileResult] = []
    for path in file_list:
        try:
            file_result: FileResult = format_file(path, options, diff=diff)
        except (OSError, UnicodeDecodeError) as exc:
            raise WxmlfmtIOError(f"Cannot process {path}: {exc}") from exc
        results.append(file_result)
        report_file_result(console, file_result, verbosity=verbosity)
        _show_patch(console, file_result.diff)

    would_change: int = sum(1 for r in results if r.outcome is Outcome.WOULD_CHANGE)
    failed: int = sum(1 for r in results if r.outcome is Outcome.FAILED)
    logger.info(
        "Checked %d file(s): %d would change, %d failed", len(results), would_change, failed
    )
    if failed:
        ctx.exit(ExitCode.SYNTAX_ERROR)
    if would_change:
        ctx.exit(ExitCode.WOULD_CHANGE)
