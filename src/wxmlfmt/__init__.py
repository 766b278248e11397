# topmark:header:start
#
#   project      : WxmlFmt
#   file         : __init__.py
#   file_relpath : src/wxmlfmt/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""WxmlFmt package.

WxmlFmt is a deterministic source formatter for WXML, the markup dialect of
WeChat mini programs. It reformats elements, attributes and ``{{ }}``
interpolations, delegates ``<wxs>`` script bodies to an ES5 formatter and keeps
regions marked with ignore comments byte for byte. It exposes both a CLI and a
small typed API (see [`wxmlfmt.api`][]).
"""

from __future__ import annotations
