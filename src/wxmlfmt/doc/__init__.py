# topmark:header:start
#
#   project      : WxmlFmt
#   file         : __init__.py
#   file_relpath : src/wxmlfmt/doc/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Document model (group / indent / line primitives) and its printer."""

from __future__ import annotations

from wxmlfmt.doc.builders import (
    Doc,
    Group,
    Indent,
    Line,
    group,
    hardline,
    indent,
    indented_lines,
    join,
    line,
    literal_text,
    literalline,
    softline,
)
from wxmlfmt.doc.printer import DocPrinter, contains_hard_line, flat_width, print_doc

__all__ = [
    "Doc",
    "DocPrinter",
    "Group",
    "Indent",
    "Line",
    "contains_hard_line",
    "flat_width",
    "group",
    "hardline",
    "indent",
    "indented_lines",
    "join",
    "line",
    "literal_text",
    "literalline",
    "print_doc",
    "softline",
]
