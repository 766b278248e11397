# topmark:header:start
#
#   project      : WxmlFmt
#   file         : options.py
#   file_relpath : src/wxmlfmt/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option decorators and their resolution logic.

Commands stay thin: they stack the decorators below and hand the collected
values to [`wxmlfmt.cli.cmd_common`][].
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Final, ParamSpec, TypeVar

import click

from wxmlfmt.cli.errors import WxmlfmtUsageError
from wxmlfmt.config.logging import LOG_LEVEL_NAMES, get_logger
from wxmlfmt.config.options import WxsErrorPolicy

P = ParamSpec("P")
R = TypeVar("R")

logger = get_logger(__name__)

#: Click context settings shared by all commands.
CONTEXT_SETTINGS: Final[dict[str, list[str]]] = {
    "help_option_names": ["-h", "--help"],
}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from ``-v``/``-q`` counts.

    Args:
        verbose_count (int): Number of times ``-v`` is passed.
        quiet_count (int): Number of times ``-q`` is passed.

    Raises:
        WxmlfmtUsageError: If both flags are used.

    Returns:
        int: A logging level (WARNING by default).
    """
    if verbose_count > 0 and quiet_count > 0:
        raise WxmlfmtUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if verbose_count >= 3:
        return LOG_LEVEL_NAMES["TRACE"]
    if verbose_count == 2:
        return LOG_LEVEL_NAMES["DEBUG"]
    if verbose_count == 1:
        return LOG_LEVEL_NAMES["INFO"]
    if quiet_count >= 1:
        return LOG_LEVEL_NAMES["ERROR"]
    return LOG_LEVEL_NAMES["WARNING"]


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` (counted, mutually exclusive)."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress output. Specify up to twice for even less.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--no-color``."""
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable ANSI colors in program output.",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config PATH`` and ``--no-config``."""
    f = click.option(
        "--config",
        "config_file",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Option file (wxmlfmt.toml or pyproject.toml); disables discovery.",
    )(f)
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore option files; use defaults and command-line flags only.",
    )(f)
    return f


def common_formatting_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the formatting flags; unset flags inherit from the option file."""
    f = click.option(
        "--print-width",
        "print_width",
        type=int,
        default=None,
        help="Target line width (default 80).",
    )(f)
    f = click.option(
        "--tab-width",
        "tab_width",
        type=int,
        default=None,
        help="Spaces per indentation level (default 2).",
    )(f)
    f = click.option(
        "--single-quote/--double-quote",
        "single_quote",
        default=None,
        help="Preferred quote around attribute values (default: double).",
    )(f)
    f = click.option(
        "--strict-text/--no-strict-text",
        "strict_text",
        default=None,
        help="Copy <text> content byte for byte (default: on).",
    )(f)
    f = click.option(
        "--prefer-break-tags",
        "prefer_break_tags",
        default=None,
        metavar="TAGS",
        help="Comma-separated tags whose children always go one per line.",
    )(f)
    f = click.option(
        "--wxs-semi/--no-wxs-semi",
        "wxs_semi",
        default=None,
        help="Keep statement semicolons in <wxs> code (default: on).",
    )(f)
    f = click.option(
        "--wxs-single-quote/--wxs-double-quote",
        "wxs_single_quote",
        default=None,
        help="Preferred quote for <wxs> string literals (default: single).",
    )(f)
    f = click.option(
        "--wxs-tab-width",
        "wxs_tab_width",
        type=int,
        default=None,
        help="Indentation of <wxs> code (default: the markup tab width).",
    )(f)
    f = click.option(
        "--wxs-error-policy",
        "wxs_error_policy",
        type=click.Choice([policy.value for policy in WxsErrorPolicy], case_sensitive=False),
        default=None,
        help="On <wxs> failure: 'fail' the document or 'keep' the code as written.",
    )(f)
    return f


def common_file_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--exclude`` and ``--exclude-from`` (gitwildmatch patterns)."""
    f = click.option(
        "--exclude",
        "exclude_patterns",
        multiple=True,
        metavar="PATTERN",
        help="Skip files matching this pattern (.gitignore syntax). Repeatable.",
    )(f)
    f = click.option(
        "--exclude-from",
        "exclude_from",
        multiple=True,
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="Read exclude patterns from a file. Repeatable.",
    )(f)
    return f
