# topmark:header:start
#
#   project      : WxmlFmt
#   file         : cmd_common.py
#   file_relpath : src/wxmlfmt/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

This module holds small, focused helpers used by multiple CLI commands:
option resolution, file list resolution, STDIN handling and per-file
reporting. Exit code policy stays in the commands.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import click

from wxmlfmt.api.types import Outcome
from wxmlfmt.cli.errors import (
    WxmlfmtConfigError,
    WxmlfmtFileNotFoundError,
    WxmlfmtUsageError,
)
from wxmlfmt.config.loaders import resolve_options
from wxmlfmt.config.logging import get_logger
from wxmlfmt.config.options import MutableFormatOptions, WxsErrorPolicy, parse_tag_list
from wxmlfmt.errors import ConfigError
from wxmlfmt.file_resolver import resolve_file_list

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from wxmlfmt.api.types import FileResult
    from wxmlfmt.cli.console import ClickConsole
    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.config.options import FormatOptions
    from wxmlfmt.file_resolver import ResolvedFiles

logger: WxmlfmtLogger = get_logger(__name__)

#: Positional argument that stands for STDIN.
STDIN_MARKER: str = "-"


def get_console(ctx: click.Context) -> ClickConsole:
    """Return the console stored on the Click context by the group callback."""
    ctx.ensure_object(dict)
    return ctx.obj["console"]


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity as a logging level (WARNING by default)."""
    return int(ctx.obj.get("verbosity_level", logging.WARNING))


def build_overrides(
    *,
    print_width: int | None = None,
    tab_width: int | None = None,
    single_quote: bool | None = None,
    strict_text: bool | None = None,
    prefer_break_tags: str | None = None,
    wxs_semi: bool | None = None,
    wxs_single_quote: bool | None = None,
    wxs_tab_width: int | None = None,
    wxs_error_policy: str | None = None,
) -> MutableFormatOptions:
    """Translate formatting flags into an override draft.

    Unset flags stay None so the option file (or the defaults) apply.

    Raises:
        WxmlfmtConfigError: If ``--prefer-break-tags`` cannot be parsed.

    Returns:
        MutableFormatOptions: The draft holding the command-line values.
    """
    draft = MutableFormatOptions(
        print_width=print_width,
        tab_width=tab_width,
        wxml_single_quote=single_quote,
        wxml_strict_text=strict_text,
        wxs_semi=wxs_semi,
        wxs_single_quote=wxs_single_quote,
        wxs_tab_width=wxs_tab_width,
        sources=["<command line>"],
    )
    if prefer_break_tags is not None:
        try:
            draft.wxml_prefer_break_tags = parse_tag_list(
                prefer_break_tags, key="--prefer-break-tags"
            )
        except ConfigError as exc:
            raise WxmlfmtConfigError(str(exc)) from exc
    if wxs_error_policy is not None:
        draft.wxs_error_policy = WxsErrorPolicy.from_name(wxs_error_policy)
    return draft


def resolve_cli_options(
    *,
    config_file: Path | None,
    no_config: bool,
    overrides: MutableFormatOptions,
) -> FormatOptions:
    """Layer the option file and the command-line overrides.

    Raises:
        WxmlfmtUsageError: If both ``--config`` and ``--no-config`` are given.
        WxmlfmtConfigError: If the option file or a flag value is invalid.

    Returns:
        FormatOptions: The effective options.
    """
    if config_file is not None and no_config:
        raise WxmlfmtUsageError("The '--config' and '--no-config' options are mutually exclusive.")
    try:
        return resolve_options(
            overrides=overrides,
            config_file=config_file,
            use_config=not no_config,
        )
    except ConfigError as exc:
        raise WxmlfmtConfigError(str(exc)) from exc


def wants_stdin(paths: Iterable[str], *, stdin: bool) -> bool:
    """Return True when the input comes from STDIN.

    Raises:
        WxmlfmtUsageError: If STDIN is mixed with file paths.
    """
    args: list[str] = list(paths)
    use_stdin: bool = stdin or STDIN_MARKER in args
    if use_stdin and any(arg != STDIN_MARKER for arg in args):
        raise WxmlfmtUsageError("Reading from STDIN cannot be combined with file paths.")
    return use_stdin


def read_stdin() -> str:
    """Read the whole of STDIN as text."""
    return click.get_text_stream("stdin").read()


def build_file_list(
    paths: Iterable[str],
    *,
    exclude_patterns: Iterable[str] = (),
    exclude_from: Iterable[Path] = (),
) -> list[Path]:
    """Return the files to process.

    Raises:
        WxmlfmtFileNotFoundError: If a literal path does not exist.

    Returns:
        list[Path]: Sorted files (possibly empty).
    """
    resolved: ResolvedFiles = resolve_file_list(
        paths,
        exclude_patterns=exclude_patterns,
        exclude_from=exclude_from,
    )
    if resolved.missing:
        names: str = ", ".join(str(p) for p in resolved.missing)
        raise WxmlfmtFileNotFoundError(f"No such file or directory: {names}")
    return resolved.files


def exit_if_no_files(console: ClickConsole, file_list: list[Path]) -> bool:
    """Echo a friendly message and return True if there is nothing to process."""
    if not file_list:
        console.print(console.styled("No files to process.", fg="blue"))
        return True
    return False


def report_diagnostics(console: ClickConsole, label: str, diagnostics: Iterable[Any]) -> None:
    """Print the diagnostics collected while formatting ``label`` to stderr."""
    for diagnostic in diagnostics:
        console.warn(f"{label}: [{diagnostic.level.value}] {diagnostic.message}")


def report_file_result(console: ClickConsole, result: FileResult, *, verbosity: int) -> None:
    """Print a one-line summary of ``result`` (failures always, the rest when verbose)."""
    if result.result is not None:
        report_diagnostics(console, str(result.path), result.result.diagnostics)
    match result.outcome:
        case Outcome.FAILED:
            console.error(f"{result.path}: {result.message}")
        case Outcome.WOULD_CHANGE:
            if verbosity <= logging.WARNING:
                console.print(console.styled(f"would reformat {result.path}", fg="yellow"))
        case Outcome.FORMATTED:
            if verbosity <= logging.INFO:
                console.print(console.styled(f"formatted {result.path}", fg="green"))
        case Outcome.UNCHANGED:
            if verbosity <= logging.INFO:
                console.print(f"unchanged {result.path}")
