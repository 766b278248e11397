# topmark:header:start
#
#   project      : WxmlFmt
#   file         : errors.py
#   file_relpath : src/wxmlfmt/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the WxmlFmt CLI.

Raise these in commands to exit with a standardized message and exit code.
They prefer the project console when one is present in the Click context.
"""

from __future__ import annotations

from typing import IO, Any

import click

from wxmlfmt.cli.exit_codes import ExitCode


class WxmlfmtCliError(click.ClickException):
    """Base class for all WxmlFmt CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colors are applied in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx: click.Context | None = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(self.format_message())
                return
        super().show(file)


class WxmlfmtUsageError(WxmlfmtCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class WxmlfmtSyntaxError(WxmlfmtCliError):
    """Error for malformed markup or ``<wxs>`` code."""

    exit_code = ExitCode.SYNTAX_ERROR


class WxmlfmtFileNotFoundError(WxmlfmtCliError):
    """Error when an input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class WxmlfmtIOError(WxmlfmtCliError):
    """Error for I/O errors reading/writing files."""

    exit_code = ExitCode.IO_ERROR


class WxmlfmtConfigError(WxmlfmtCliError):
    """Error for invalid options or option files."""

    exit_code = ExitCode.CONFIG_ERROR
