# topmark:header:start
#
#   project      : WxmlFmt
#   file         : __init__.py
#   file_relpath : src/wxmlfmt/script/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Formatting of ``<wxs>`` script bodies."""

from __future__ import annotations

from wxmlfmt.script.delegate import EmbeddedScriptDelegate
from wxmlfmt.script.es5 import Es5ScriptFormatter
from wxmlfmt.script.options import ScriptOptions

__all__ = [
    "EmbeddedScriptDelegate",
    "Es5ScriptFormatter",
    "ScriptOptions",
]
