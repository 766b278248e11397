# topmark:header:start
#
#   project      : WxmlFmt
#   file         : __main__.py
#   file_relpath : src/wxmlfmt/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running WxmlFmt via ``python -m wxmlfmt``.

Delegates to [`wxmlfmt.cli.main.cli`][], the single CLI entry point.

Examples:
    Format a directory in place::

        python -m wxmlfmt format --write pages/
"""

from __future__ import annotations

from wxmlfmt.cli.main import cli

if __name__ == "__main__":
    cli()
