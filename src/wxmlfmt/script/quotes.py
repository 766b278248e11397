# topmark:header:start
#
#   project      : WxmlFmt
#   file         : quotes.py
#   file_relpath : src/wxmlfmt/script/quotes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Text-level passes over ES5 code.

The passes only see code that already parsed, so a small scanner that
recognizes comments, string literals and regular expression literals is
enough.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterator

# A ``/`` after one of these ends an operand, so it is a division.
_OPERAND_END_RE: Final[re.Pattern[str]] = re.compile(r"[\w$)\]]$")
_KEYWORDS_BEFORE_REGEX: Final[frozenset[str]] = frozenset(
    {
        "return",
        "typeof",
        "instanceof",
        "in",
        "new",
        "delete",
        "void",
        "throw",
        "case",
        "do",
        "else",
    }
)
# A line starting with one of these would continue the previous statement.
_CONTINUATION_STARTS: Final[tuple[str, ...]] = ("(", "[", "+", "-", "/", "`")


def _regex_allowed(code: str, pos: int) -> bool:
    """Return True if a ``/`` at ``pos`` starts a regular expression literal."""
    before: str = code[:pos].rstrip()
    if not before:
        return True
    word: re.Match[str] | None = re.search(r"[A-Za-z_$][\w$]*$", before)
    if word is not None and word.group() in _KEYWORDS_BEFORE_REGEX:
        return True
    return _OPERAND_END_RE.search(before) is None


def _skip_regex(code: str, pos: int) -> int:
    """Return the offset after the regular expression literal at ``pos``."""
    i: int = pos + 1
    in_class: bool = False
    length: int = len(code)
    while i < length and code[i] != "\n":
        ch: str = code[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "[":
            in_class = True
        elif ch == "]":
            in_class = False
        elif ch == "/" and not in_class:
            i += 1
            while i < length and (code[i].isalnum() or code[i] in "_$"):
                i += 1
            return i
        i += 1
    return i


def _iter_tokens(code: str) -> Iterator[tuple[str, int, int]]:
    """Yield ``(kind, start, end)`` for the comments and string literals in ``code``.

    ``kind`` is ``"comment"`` or ``"string"``; regular expression literals are
    skipped.
    """
    i: int = 0
    length: int = len(code)
    while i < length:
        ch: str = code[i]
        if code.startswith("//", i):
            newline: int = code.find("\n", i)
            end: int = length if newline < 0 else newline
            yield "comment", i, end
            i = end
        elif code.startswith("/*", i):
            close: int = code.find("*/", i + 2)
            end = length if close < 0 else close + 2
            yield "comment", i, end
            i = end
        elif ch == "/" and _regex_allowed(code, i):
            i = _skip_regex(code, i)
        elif ch in "\"'":
            j: int = i + 1
            while j < length and code[j] != ch and code[j] != "\n":
                j += 2 if code[j] == "\\" else 1
            end = min(j + 1, length)
            yield "string", i, end
            i = end
        else:
            i += 1


def iter_string_literals(code: str) -> Iterator[tuple[int, int]]:
    """Yield the ``(start, end)`` spans of string literals in ``code``.

    Comments and regular expression literals are skipped.

    Args:
        code (str): ES5 code.

    Yields:
        tuple[int, int]: Spans including the quotes.
    """
    for kind, start, end in _iter_tokens(code):
        if kind == "string":
            yield start, end


def comment_texts(code: str) -> Counter[str]:
    """Count the comments of ``code`` by their text.

    Runs of whitespace inside a comment are collapsed, so a comment
    re-indented by a printer still counts as the same comment.

    Args:
        code (str): ES5 code.

    Returns:
        Counter[str]: Normalized comment text to number of occurrences.
    """
    return Counter(
        " ".join(code[start:end].split())
        for kind, start, end in _iter_tokens(code)
        if kind == "comment"
    )


def prefer_quotes(code: str, *, single_quote: bool) -> str:
    """Rewrite simple string literals to use the preferred quote.

    A literal is rewritten only when it contains no backslash and no
    preferred quote character.

    Args:
        code (str): ES5 code.
        single_quote (bool): Whether single quotes are preferred.

    Returns:
        str: The rewritten code.
    """
    preferred: str = "'" if single_quote else '"'
    parts: list[str] = []
    pos: int = 0
    for start, end in iter_string_literals(code):
        literal: str = code[start:end]
        body: str = literal[1:-1]
        if (
            len(literal) >= 2
            and literal[0] == literal[-1]
            and literal[0] != preferred
            and "\\" not in body
            and preferred not in body
        ):
            parts.append(code[pos:start])
            parts.append(preferred + body + preferred)
            pos = end
    parts.append(code[pos:])
    return "".join(parts)


def strip_semicolons(code: str) -> str:
    """Remove statement-terminating semicolons at line ends.

    A semicolon is kept when the next non-blank line starts with a character
    that would make it continue the statement.

    Args:
        code (str): ES5 code, one statement per line.

    Returns:
        str: The code without trailing semicolons.
    """
    lines: list[str] = code.split("\n")
    for idx, text in enumerate(lines):
        stripped: str = text.rstrip()
        if not stripped.endswith(";") or stripped.strip() == ";":
            continue
        if stripped.lstrip().startswith(("//", "/*", "*")):
            continue
        following: str = next((n.strip() for n in lines[idx + 1 :] if n.strip()), "")
        if following.startswith(_CONTINUATION_STARTS):
            continue
        lines[idx] = stripped[:-1]
    return "\n".join(lines)
