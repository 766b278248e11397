# topmark:header:start
#
#   project      : WxmlFmt
#   file         : expressions.py
#   file_relpath : src/wxmlfmt/layout/expressions.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Light-touch handling of ``{{ ... }}`` expression text.

Expressions are never parsed or evaluated. The helpers here only look at
the expression text with string literals masked out.
"""

from __future__ import annotations

import re
from typing import Final

from wxmlfmt.constants import EXPRESSION_CLOSE, EXPRESSION_OPEN
from wxmlfmt.parse.protector import match_expression

_OPERATOR_RE: Final[re.Pattern[str]] = re.compile(r"\s*(===|!==|==|!=|<=|>=|&&|\|\|)\s*")
_NEWLINE_RE: Final[re.Pattern[str]] = re.compile(r"[ \t]*\r?\n\s*")
# ``[`` opens an array literal unless it follows something indexable.
_ARRAY_OPEN_RE: Final[re.Pattern[str]] = re.compile(r"(?:^|[^\w$)\]\s])\s*\[|^\s*\[")


def split_strings(expression: str) -> list[tuple[bool, str]]:
    """Split expression text into code and string-literal segments.

    Args:
        expression (str): Expression text.

    Returns:
        list[tuple[bool, str]]: ``(is_string, text)`` pairs covering the input.
        An unterminated string literal runs to the end of the text.
    """
    segments: list[tuple[bool, str]] = []
    pos: int = 0
    i: int = 0
    length: int = len(expression)
    while i < length:
        ch: str = expression[i]
        if ch not in "\"'":
            i += 1
            continue
        if i > pos:
            segments.append((False, expression[pos:i]))
        j: int = i + 1
        while j < length and expression[j] != ch:
            j += 2 if expression[j] == "\\" else 1
        j = min(j + 1, length)
        segments.append((True, expression[i:j]))
        pos = i = j
    if pos < length:
        segments.append((False, expression[pos:]))
    return segments


def _code_only(expression: str) -> str:
    """Return the expression with string literals replaced by empty strings."""
    return "".join('""' if is_string else text for is_string, text in split_strings(expression))


def is_complex_expression(expression: str) -> bool:
    """Decide whether a lone interpolation deserves its own line.

    An expression is complex when it spans lines, contains an object or array
    literal, two or more ``&&``, or mixes ``&&`` and ``||``.

    Args:
        expression (str): Text between the braces.

    Returns:
        bool: True when complex.
    """
    if "\n" in expression:
        return True
    code: str = _code_only(expression)
    if "{" in code or _ARRAY_OPEN_RE.search(code):
        return True
    ands: int = code.count("&&")
    return ands >= 2 or (ands > 0 and "||" in code)


def normalize_expression(expression: str) -> str:
    """Normalize spacing inside an expression used in an attribute value.

    Line breaks (with surrounding whitespace) collapse to one space, and the
    comparison and logical operators get exactly one space on each side.
    String literals are left untouched.

    Args:
        expression (str): Text between the braces.

    Returns:
        str: The normalized text.
    """
    parts: list[str] = []
    for is_string, text in split_strings(expression):
        if is_string:
            parts.append(text)
            continue
        text = _NEWLINE_RE.sub(" ", text)
        parts.append(_OPERATOR_RE.sub(r" \1 ", text))
    return "".join(parts)


def normalize_attribute_value(value: str) -> str:
    """Normalize every ``{{ ... }}`` inside an attribute value.

    Text outside the interpolations is returned unchanged.

    Args:
        value (str): Unquoted attribute value.

    Returns:
        str: The value with normalized expressions.
    """
    if EXPRESSION_OPEN not in value:
        return value
    parts: list[str] = []
    pos: int = 0
    while True:
        open_at: int = value.find(EXPRESSION_OPEN, pos)
        if open_at < 0:
            break
        close: int = match_expression(value, open_at)
        if close < 0:
            break
        inner: str = value[open_at + len(EXPRESSION_OPEN) : close - len(EXPRESSION_CLOSE)]
        parts.append(value[pos:open_at])
        parts.append(EXPRESSION_OPEN + normalize_expression(inner) + EXPRESSION_CLOSE)
        pos = close
    parts.append(value[pos:])
    return "".join(parts)
