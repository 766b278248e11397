# topmark:header:start
#
#   project      : WxmlFmt
#   file         : __init__.py
#   file_relpath : src/wxmlfmt/parse/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Parsing: text protection, synthetic root, grammar and tree restoration."""

from __future__ import annotations

from wxmlfmt.parse.grammar import GrammarParser
from wxmlfmt.parse.nodes import (
    Attribute,
    CData,
    Comment,
    Document,
    Element,
    Instruction,
    Interpolation,
    Node,
    Reference,
    ScriptBlock,
    TextRun,
)
from wxmlfmt.parse.protector import ProtectedText, protect
from wxmlfmt.parse.restorer import TreeRestorer
from wxmlfmt.parse.wrapper import WrappedText, unwrap, wrap

__all__ = [
    "Attribute",
    "CData",
    "Comment",
    "Document",
    "Element",
    "GrammarParser",
    "Instruction",
    "Interpolation",
    "Node",
    "ProtectedText",
    "Reference",
    "ScriptBlock",
    "TextRun",
    "TreeRestorer",
    "WrappedText",
    "protect",
    "unwrap",
    "wrap",
]
