# topmark:header:start
#
#   project      : WxmlFmt
#   file         : format.py
#   file_relpath : src/wxmlfmt/cli/commands/format.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""WxmlFmt `format` command.

Formats WXML files and prints the result, or rewrites the files in place
with ``--write``. A ``-`` argument (or ``--stdin``) reads the document from
STDIN and prints the formatted text to stdout.

Exit codes: 0 on success, 65 when a document cannot be formatted.
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

if TYPE_CHECKING:
    from pathlib import Path

    from wxmlfmt.api.types import FileResult, FormatResult
    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.config.options import FormatOptions

logger: WxmlfmtLogger = get_logger(__name__)


@click.command(
    name="format",
    help="Format WXML files (print the result, or rewrite the files with --write).",
)
@click.argument("paths", nargs=-1, type=str)
@click.option(
    "--write",
    "-w",
    "write",
    is_flag=True,
    help="Rewrite files in place instead of printing the formatted output.",
)
@click.option(
    "--stdin",
    "stdin",
    is_flag=True,
    help="Read the document from STDIN and print it formatted.",
)
@common_config_options
@common_formatting_options
@common_file_options
def format_command(
    *,
    paths: tuple[str, ...],
    write: bool,
    stdin: bool,
    config_file: Path | None,
    no_config: bool,
    exclude_patterns: tuple[str, ...],
    exclude_from: tuple[Path, ...],
    **formatting: Any,
) -> None:
    """Format WXML documents.

    Args:
        paths (tuple[str, ...]): Files, directories or globs (``-`` for STDIN).
        write (bool): Rewrite changed files in place.
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
        if write:
            logger.warning("--write has no effect when reading from STDIN")
        try:
            result: FormatResult = format_document(read_stdin(), options)
        except (WxmlSyntaxError, EmbeddedScriptError) as exc:
            raise WxmlfmtSyntaxError(f"<stdin>: {exc}") from exc
        except WxmlfmtError as exc:
            raise WxmlfmtCliError(f"<stdin>: {exc}") from exc
        report_diagnostics(console, "<stdin>", result.diagnostics)
        console.print(result.output, nl=False)
        return

    file_list: list[Path] = build_file_list(
        paths,
        exclude_patterns=exclude_patterns,
        exclude_from=exclude_from,
    )
    if exit_if_no_files(console, file_list):
        return

    failed: int = 0
    for path in file_list:
        try:
            file_result: FileResult = format_file(path, options, write=write)
        except (OSError, UnicodeDecodeError) as exc:
            raise WxmlfmtIOError(f"Cannot process {path}: {exc}") from exc
        if file_result.outcome is Outcome.FAILED:
            failed += 1
        if write:
            report_file_result(console, file_result, verbosity=verbosity)
            continue
        if file_result.result is not None:
            report_diagnostics(console, str(path), file_result.result.diagnostics)
            console.print(file_result.result.output, nl=False)
        else:
            console.error(f"{path}: {file_result.message}")

    logger.info("Processed %d file(s), %d failed", len(file_list), failed)
    if failed:
        ctx.exit(ExitCode.SYNTAX_ERROR)
