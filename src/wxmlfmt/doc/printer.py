# topmark:header:start
#
#   project      : WxmlFmt
#   file         : printer.py
#   file_relpath : src/wxmlfmt/doc/printer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Line-fitting printer for the document model.

The algorithm follows Wadler's "prettier printer": groups are tried flat
against the remaining width (including the content that follows them up to
the next possible break) and broken when they do not fit.

Trailing spaces are trimmed at every line break except literal ones.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from wxmlfmt.config.logging import get_logger
from wxmlfmt.doc.builders import Group, Indent, Line
from wxmlfmt.errors import InvariantError

if TYPE_CHECKING:
    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.doc.builders import Doc

logger: WxmlfmtLogger = get_logger(__name__)


class _Mode(Enum):
    FLAT = "flat"
    BREAK = "break"


_Command = tuple[int, _Mode, "Doc"]


def contains_hard_line(doc: Doc, _memo: dict[int, bool] | None = None) -> bool:
    """Return True if ``doc`` contains a hard (or literal) line anywhere.

    Args:
        doc (Doc): The doc to inspect.

    Returns:
        bool: Whether printing ``doc`` always produces a line break.
    """
    memo: dict[int, bool] = {} if _memo is None else _memo
    key: int = id(doc)
    if key in memo:
        return memo[key]
    result: bool
    match doc:
        case str():
            result = False
        case list():
            result = any(contains_hard_line(part, memo) for part in doc)
        case Group() | Indent():
            result = contains_hard_line(doc.contents, memo)
        case Line():
            result = doc.hard
        case _:
            raise InvariantError(f"Unknown doc element {type(doc).__name__}")
    memo[key] = result
    return result


def flat_width(doc: Doc) -> int | None:
    """Width of ``doc`` printed on a single line.

    Args:
        doc (Doc): The doc to measure.

    Returns:
        int | None: The flat width, or None if ``doc`` contains a hard line.
    """
    match doc:
        case str():
            return len(doc)
        case list():
            total: int = 0
            for part in doc:
                width: int | None = flat_width(part)
                if width is None:
                    return None
                total += width
            return total
        case Group() | Indent():
            return flat_width(doc.contents)
        case Line():
            if doc.hard:
                return None
            return 0 if doc.soft else 1
        case _:
            raise InvariantError(f"Unknown doc element {type(doc).__name__}")


def _fits(
    next_command: _Command,
    rest: list[_Command],
    width: int,
    hard_memo: dict[int, bool],
) -> bool:
    """Check that ``next_command`` printed flat fits in ``width`` columns.

    The content following it (``rest``, popped from the end) is measured too,
    up to its first line break in break mode.
    """
    stack: list[tuple[_Mode, Doc]] = [(next_command[1], next_command[2])]
    rest_idx: int = len(rest)
    remaining: int = width
    while remaining >= 0:
        if not stack:
            if rest_idx == 0:
                return True
            rest_idx -= 1
            _, mode, doc = rest[rest_idx]
            stack.append((mode, doc))
            continue
        mode, doc = stack.pop()
        match doc:
            case str():
                remaining -= len(doc)
            case list():
                for part in reversed(doc):
                    stack.append((mode, part))
            case Indent():
                stack.append((mode, doc.contents))
            case Group():
                group_mode: _Mode = (
                    _Mode.BREAK
                    if doc.should_break or contains_hard_line(doc, hard_memo)
                    else mode
                )
                stack.append((group_mode, doc.contents))
            case Line():
                if mode is _Mode.BREAK or doc.hard:
                    return True
                if not doc.soft:
                    remaining -= 1
            case _:
                raise InvariantError(f"Unknown doc element {type(doc).__name__}")
    return False


def _trim_trailing(out: list[str]) -> None:
    """Remove trailing spaces and tabs from the printed output."""
    while out:
        trimmed: str = out[-1].rstrip(" \t")
        if trimmed:
            out[-1] = trimmed
            return
        out.pop()


def print_doc(doc: Doc, *, width: int, tab_width: int) -> str:
    """Print ``doc``.

    Args:
        doc (Doc): The document model.
        width (int): Target line width.
        tab_width (int): Spaces per indentation level.

    Returns:
        str: The printed text.
    """
    hard_memo: dict[int, bool] = {}
    out: list[str] = []
    column: int = 0
    commands: list[_Command] = [(0, _Mode.BREAK, doc)]
    while commands:
        ind, mode, current = commands.pop()
        match current:
            case str():
                out.append(current)
                column += len(current)
            case list():
                for part in reversed(current):
                    commands.append((ind, mode, part))
            case Indent():
                commands.append((ind + tab_width, mode, current.contents))
            case Group():
                if mode is _Mode.FLAT and not current.should_break:
                    commands.append((ind, _Mode.FLAT, current.contents))
                    continue
                broken: bool = current.should_break or contains_hard_line(current, hard_memo)
                flat: _Command = (ind, _Mode.FLAT, current.contents)
                if not broken and _fits(flat, commands, width - column, hard_memo):
                    commands.append(flat)
                else:
                    commands.append((ind, _Mode.BREAK, current.contents))
            case Line():
                if mode is _Mode.FLAT and not current.hard:
                    if not current.soft:
                        out.append(" ")
                        column += 1
                    continue
                if current.literal:
                    # Verbatim text keeps its trailing whitespace.
                    out.append("\n")
                    column = 0
                else:
                    _trim_trailing(out)
                    out.append("\n" + " " * ind)
                    column = ind
            case _:
                raise InvariantError(f"Unknown doc element {type(current).__name__}")
    return "".join(out)


class DocPrinter:
    """Default document renderer, backed by `print_doc`."""

    def render(self, doc: Doc, *, width: int, tab_width: int) -> str:
        """Print ``doc`` (see `print_doc`)."""
        return print_doc(doc, width=width, tab_width=tab_width)
