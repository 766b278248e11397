# topmark:header:start
#
#   project      : WxmlFmt
#   file         : __init__.py
#   file_relpath : src/wxmlfmt/layout/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""WXML layout policy: ignore regions, attributes, expressions and the engine."""

from __future__ import annotations

from wxmlfmt.layout.engine import LayoutEngine, LayoutFragment
from wxmlfmt.layout.ignore import IgnoreRange, IgnoreTracker, build_ignore_ranges

__all__ = [
    "IgnoreRange",
    "IgnoreTracker",
    "LayoutEngine",
    "LayoutFragment",
    "build_ignore_ranges",
]
