# topmark:header:start
#
#   project      : WxmlFmt
#   file         : __init__.py
#   file_relpath : src/wxmlfmt/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Subcommands of the ``wxmlfmt`` command group."""
