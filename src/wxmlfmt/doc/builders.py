# topmark:header:start
#
#   project      : WxmlFmt
#   file         : builders.py
#   file_relpath : src/wxmlfmt/doc/builders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Document-model primitives.

A *doc* describes output without committing to line breaks:

* ``str``: literal text (must not contain ``"\\n"``; use `literal_text`);
* ``list``: concatenation;
* `Group`: printed flat when it fits in the remaining width, broken otherwise;
* `Indent`: increases the indentation of lines breaking inside it;
* `Line`: a possible line break (``line``: space when flat; ``softline``:
  nothing when flat; ``hardline``: always breaks; ``literalline``: always
  breaks and resets the column to zero).

A group containing a hard line always breaks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Union

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


@dataclass(frozen=True)
class Group:
    """Contents printed flat if they fit, else in break mode.

    Attributes:
        contents (Doc): The grouped doc.
        should_break (bool): Force break mode.
    """

    contents: Doc
    should_break: bool = False


@dataclass(frozen=True)
class Indent:
    """Contents whose line breaks are indented one more level."""

    contents: Doc


@dataclass(frozen=True)
class Line:
    """A line-break opportunity.

    Attributes:
        hard (bool): Always break.
        soft (bool): Print nothing (rather than a space) when flat.
        literal (bool): Break to column zero, ignoring indentation.
    """

    hard: bool = False
    soft: bool = False
    literal: bool = False


Doc = Union[str, "list[Doc]", Group, Indent, Line]

line: Final[Line] = Line()
softline: Final[Line] = Line(soft=True)
hardline: Final[Line] = Line(hard=True)
literalline: Final[Line] = Line(hard=True, literal=True)


def group(contents: Doc, *, should_break: bool = False) -> Group:
    """Wrap ``contents`` in a `Group`."""
    return Group(contents, should_break)


def indent(contents: Doc) -> Indent:
    """Wrap ``contents`` in an `Indent`."""
    return Indent(contents)


def join(separator: Doc, docs: Iterable[Doc]) -> list[Doc]:
    """Concatenate ``docs`` with ``separator`` between consecutive items."""
    parts: list[Doc] = []
    for i, doc in enumerate(docs):
        if i:
            parts.append(separator)
        parts.append(doc)
    return parts


def literal_text(text: str) -> Doc:
    """Return ``text`` with its newlines turned into literal lines.

    Lines after the first are printed exactly as given, starting at column zero.
    """
    lines: list[str] = text.split("\n")
    if len(lines) == 1:
        return text
    return join(literalline, lines)


def indented_lines(lines: Sequence[str]) -> Doc:
    """Return ``lines`` separated by hard lines (empty lines stay empty)."""
    return join(hardline, list(lines))
