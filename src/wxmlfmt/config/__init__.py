# topmark:header:start
#
#   project      : WxmlFmt
#   file         : __init__.py
#   file_relpath : src/wxmlfmt/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Formatter options, option-file loading and logging setup."""

from __future__ import annotations

from wxmlfmt.config.options import FormatOptions, MutableFormatOptions, WxsErrorPolicy

__all__ = [
    "FormatOptions",
    "MutableFormatOptions",
    "WxsErrorPolicy",
]
