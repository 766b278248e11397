# topmark:header:start
#
#   project      : WxmlFmt
#   file         : scanner.py
#   file_relpath : src/wxmlfmt/parse/scanner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Lightweight tag scanner.

The scanner splits markup into a flat stream of tokens (start tags, end tags,
comments, CDATA sections, instructions and text) without building a tree.
Quoted attribute values are honored, so a ``>`` inside ``title="a > b"``
does not end the tag.

It is used where a full parse is either not wanted yet (deciding whether a
fragment needs a synthetic root) or has already failed (locating the first
unbalanced tag for a better error message).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterator


class TokenKind(Enum):
    """Kinds of scanner tokens."""

    START_TAG = "start"
    END_TAG = "end"
    COMMENT = "comment"
    CDATA = "cdata"
    INSTRUCTION = "instruction"
    TEXT = "text"


@dataclass(frozen=True)
class ScanToken:
    """One scanner token.

    Attributes:
        kind (TokenKind): What was scanned.
        start (int): Offset of the first character.
        end (int): Offset one past the last character.
        name (str): Tag name for start and end tags, else ``""``.
        self_closing (bool): True for ``<tag/>`` start tags.
    """

    kind: TokenKind
    start: int
    end: int
    name: str = ""
    self_closing: bool = False


_MARKUP_RE: Final[re.Pattern[str]] = re.compile(
    r"""
      (?P<comment><!--.*?(?:-->|\Z))
    | (?P<cdata><!\[CDATA\[.*?(?:\]\]>|\Z))
    | (?P<pi><\?.*?(?:\?>|\Z))
    | (?P<decl><![^>]*>?)
    | (?P<end></\s*(?P<end_name>[^\s>/]+)\s*>)
    | (?P<start><(?P<start_name>[A-Za-z_:][-A-Za-z0-9_:.]*)
        (?:[^>"']|"[^"]*"|'[^']*')*?
        (?P<slash>/?)>)
    """,
    re.DOTALL | re.VERBOSE,
)


def scan(text: str) -> Iterator[ScanToken]:
    """Tokenize ``text`` into markup and text tokens.

    A ``<`` that does not start any recognized construct is treated as text.

    Args:
        text (str): The markup to scan.

    Yields:
        ScanToken: Tokens in source order, covering all of ``text``.
    """
    pos: int = 0
    text_start: int = 0
    length: int = len(text)
    while pos < length:
        lt: int = text.find("<", pos)
        if lt < 0:
            break
        m: re.Match[str] | None = _MARKUP_RE.match(text, lt)
        if m is None:
            pos = lt + 1
            continue
        if text_start < lt:
            yield ScanToken(TokenKind.TEXT, text_start, lt)
        if m.group("comment") is not None:
            yield ScanToken(TokenKind.COMMENT, m.start(), m.end())
        elif m.group("cdata") is not None:
            yield ScanToken(TokenKind.CDATA, m.start(), m.end())
        elif m.group("pi") is not None or m.group("decl") is not None:
            yield ScanToken(TokenKind.INSTRUCTION, m.start(), m.end())
        elif m.group("end") is not None:
            yield ScanToken(TokenKind.END_TAG, m.start(), m.end(), name=m.group("end_name"))
        else:
            yield ScanToken(
                TokenKind.START_TAG,
                m.start(),
                m.end(),
                name=m.group("start_name"),
                self_closing=m.group("slash") == "/",
            )
        pos = text_start = m.end()
    if text_start < length:
        yield ScanToken(TokenKind.TEXT, text_start, length)


def find_unbalanced_tag(text: str) -> tuple[int, str] | None:
    """Locate the first tag that breaks nesting.

    Args:
        text (str): The markup to check.

    Returns:
        tuple[int, str] | None: ``(offset, message)`` of the first mismatched or
        stray end tag, or of the innermost unclosed start tag; None when the
        tags are balanced.
    """
    stack: list[ScanToken] = []
    for token in scan(text):
        if token.kind is TokenKind.START_TAG and not token.self_closing:
            stack.append(token)
        elif token.kind is TokenKind.END_TAG:
            if not stack:
                return token.start, f"Unexpected closing tag </{token.name}>"
            opened: ScanToken = stack.pop()
            if opened.name != token.name:
                return (
                    token.start,
                    f"Unexpected closing tag </{token.name}>, expected </{opened.name}>",
                )
    if stack:
        unclosed: ScanToken = stack[-1]
        return unclosed.start, f"Unclosed element <{unclosed.name}>"
    return None
