# topmark:header:start
#
#   project      : WxmlFmt
#   file         : __init__.py
#   file_relpath : src/wxmlfmt/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-based command line interface for WxmlFmt."""

from __future__ import annotations
