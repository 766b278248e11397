# topmark:header:start
#
#   project      : WxmlFmt
#   file         : version.py
#   file_relpath : src/wxmlfmt/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""WxmlFmt `version` command.

Prints the current WxmlFmt version as installed in the active Python environment.
"""

from __future__ import annotations

import logging

import click

from wxmlfmt.api import version
from wxmlfmt.cli.cmd_common import get_console, get_effective_verbosity


@click.command(
    name="version",
    help="Show the current version of WxmlFmt.",
)
def version_command() -> None:
    """Show the current version of WxmlFmt."""
    ctx = click.get_current_context()
    console = get_console(ctx)

    version_text: str = version()
    if get_effective_verbosity(ctx) <= logging.INFO:
        console.print(console.styled("WxmlFmt version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(version_text, bold=True)}")
    else:
        console.print(console.styled(version_text, bold=True))
