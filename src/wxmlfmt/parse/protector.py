# topmark:header:start
#
#   project      : WxmlFmt
#   file         : protector.py
#   file_relpath : src/wxmlfmt/parse/protector.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reversible placeholder substitution.

Interpolation expressions (``{{ ... }}``) and ``<wxs>`` bodies may contain
characters the markup grammar cannot cope with (``<``, ``&&``, unbalanced
quotes). Before parsing, each of them is replaced by an opaque token made of
identifier characters only; after parsing, `restore_tokens` puts the original
text back.

Two left-to-right scans run over the source, both skipping comments and
CDATA sections:

1. ``<wxs>`` bodies: from a non-self-closing ``<wxs ...>`` start tag to the
   next ``</wxs>``. Blank bodies are left alone.
2. Expressions, outside the bodies found by the first scan. Braces nest and
   quoted string literals are skipped as units; an expression ends at the first
   ``}}`` seen at depth zero. An unterminated ``{{`` stays literal text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Final

from wxmlfmt.config.logging import get_logger
from wxmlfmt.constants import (
    EXPRESSION_CLOSE,
    EXPRESSION_OPEN,
    EXPRESSION_TOKEN_KIND,
    PLACEHOLDER_PREFIX,
    SCRIPT_TAG,
    SCRIPT_TOKEN_KIND,
)
from wxmlfmt.errors import InvariantError
from wxmlfmt.parse.offsets import Edit, OffsetMap

if TYPE_CHECKING:
    from wxmlfmt.config.logging import WxmlfmtLogger

logger: WxmlfmtLogger = get_logger(__name__)


class PlaceholderKind(Enum):
    """What a placeholder token stands for."""

    EXPRESSION = EXPRESSION_TOKEN_KIND
    SCRIPT_BODY = SCRIPT_TOKEN_KIND


@dataclass(frozen=True)
class PlaceholderRecord:
    """One substituted span.

    Attributes:
        token (str): The opaque token that replaced the span.
        original (str): For expressions, the text between the braces; for
            script bodies, the body trimmed of surrounding whitespace.
        kind (PlaceholderKind): Expression or script body.
        start (int): Start of the replaced span in the original text.
        end (int): End of the replaced span in the original text.
    """

    token: str
    original: str
    kind: PlaceholderKind
    start: int
    end: int


@dataclass(frozen=True)
class ProtectedText:
    """Result of `protect`.

    Attributes:
        text (str): The protected text handed to the markup parser.
        records (dict[str, PlaceholderRecord]): Records by token, in source order.
        offset_map (OffsetMap): Protected-to-original offset translation.
        token_re (re.Pattern[str]): Pattern matching this run's tokens.
    """

    text: str
    records: dict[str, PlaceholderRecord] = field(default_factory=lambda: {})
    offset_map: OffsetMap = field(default_factory=OffsetMap.identity)
    token_re: re.Pattern[str] = field(default_factory=lambda: _token_pattern(PLACEHOLDER_PREFIX))


_SKIP_RE: Final[re.Pattern[str]] = re.compile(
    r"<!--.*?(?:-->|\Z)|<!\[CDATA\[.*?(?:\]\]>|\Z)",
    re.DOTALL,
)
_SCRIPT_OPEN_RE: Final[re.Pattern[str]] = re.compile(
    rf"<!--|<!\[CDATA\[|<{SCRIPT_TAG}(?=[\s/>])(?:[^>\"']|\"[^\"]*\"|'[^']*')*>",
)
_SCRIPT_CLOSE_RE: Final[re.Pattern[str]] = re.compile(rf"</{SCRIPT_TAG}\s*>")
_EXPRESSION_SCAN_RE: Final[re.Pattern[str]] = re.compile(r"<!--|<!\[CDATA\[|\{\{")

_QUOTES: Final[str] = "\"'"


def _token_pattern(prefix: str) -> re.Pattern[str]:
    kinds: str = "|".join(kind.value for kind in PlaceholderKind)
    return re.compile(rf"{re.escape(prefix)}_({kinds})_(\d+)__")


def choose_prefix(text: str) -> str:
    """Return a token prefix that does not occur in ``text``.

    Args:
        text (str): The source text.

    Returns:
        str: ``__WXFMT``, or ``__WXFMT<n>`` with the smallest nonce ``n`` that
        keeps tokens from colliding with literal content.
    """
    prefix: str = PLACEHOLDER_PREFIX
    nonce: int = 0
    while prefix in text:
        nonce += 1
        prefix = f"{PLACEHOLDER_PREFIX}{nonce}"
    if nonce:
        logger.debug("Source contains %r; using token prefix %r", PLACEHOLDER_PREFIX, prefix)
    return prefix


def _skip_to(text: str, m: re.Match[str]) -> int:
    """Return the offset after the comment or CDATA section starting at ``m``."""
    skipped: re.Match[str] | None = _SKIP_RE.match(text, m.start())
    return skipped.end() if skipped else m.end()


def find_script_bodies(text: str) -> list[tuple[int, int]]:
    """Find the non-blank bodies of ``<wxs>`` elements.

    Args:
        text (str): The source text.

    Returns:
        list[tuple[int, int]]: ``(start, end)`` of each body, in source order.
    """
    spans: list[tuple[int, int]] = []
    pos: int = 0
    while True:
        m: re.Match[str] | None = _SCRIPT_OPEN_RE.search(text, pos)
        if m is None:
            return spans
        if m.group().startswith("<!"):
            pos = _skip_to(text, m)
            continue
        if m.group().endswith("/>"):
            pos = m.end()
            continue
        close: re.Match[str] | None = _SCRIPT_CLOSE_RE.search(text, m.end())
        if close is None:
            return spans
        if text[m.end() : close.start()].strip():
            spans.append((m.end(), close.start()))
        pos = close.end()


def _skip_string(text: str, pos: int, end: int) -> int:
    """Return the offset after the string literal opening at ``pos``, or -1."""
    quote: str = text[pos]
    i: int = pos + 1
    while i < end:
        ch: str = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        i += 1
    return -1


def match_expression(text: str, open_at: int, limit: int | None = None) -> int:
    """Find the end of the interpolation opening at ``open_at``.

    Args:
        text (str): The text to scan.
        open_at (int): Offset of the opening ``{{``.
        limit (int | None): Scan no further than this offset.

    Returns:
        int: Offset one past the closing ``}}``, or -1 when unterminated.
    """
    end: int = len(text) if limit is None else limit
    depth: int = 0
    i: int = open_at + len(EXPRESSION_OPEN)
    while i < end:
        ch: str = text[i]
        if ch in _QUOTES:
            after: int = _skip_string(text, i, end)
            if after < 0:
                return -1
            i = after
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            if depth == 0:
                if text.startswith(EXPRESSION_CLOSE, i) and i + 2 <= end:
                    return i + 2
            else:
                depth -= 1
        i += 1
    return -1


def find_expressions(text: str, exclude: list[tuple[int, int]]) -> list[tuple[int, int]]:
    """Find ``{{ ... }}`` spans outside comments, CDATA and excluded spans.

    Args:
        text (str): The source text.
        exclude (list[tuple[int, int]]): Sorted spans never to look into.

    Returns:
        list[tuple[int, int]]: ``(start, end)`` of each expression (braces
        included), in source order.
    """
    spans: list[tuple[int, int]] = []
    bounds: list[tuple[int, int]] = []
    pos: int = 0
    for start, end in exclude:
        bounds.append((pos, start))
        pos = end
    bounds.append((pos, len(text)))

    for lo, hi in bounds:
        pos = lo
        while True:
            m: re.Match[str] | None = _EXPRESSION_SCAN_RE.search(text, pos, hi)
            if m is None:
                break
            if m.group() != EXPRESSION_OPEN:
                pos = _skip_to(text, m)
                continue
            close: int = match_expression(text, m.start(), hi)
            if close < 0:
                logger.debug("Unterminated interpolation at offset %d kept as text", m.start())
                pos = m.end()
                continue
            spans.append((m.start(), close))
            pos = close
    return spans


def protect(text: str) -> ProtectedText:
    """Replace interpolations and ``<wxs>`` bodies with placeholder tokens.

    Args:
        text (str): The original source text.

    Returns:
        ProtectedText: The protected text, the records and the offset map.
    """
    prefix: str = choose_prefix(text)
    bodies: list[tuple[int, int]] = find_script_bodies(text)
    expressions: list[tuple[int, int]] = find_expressions(text, bodies)

    spans: list[tuple[int, int, PlaceholderKind]] = sorted(
        [(s, e, PlaceholderKind.SCRIPT_BODY) for s, e in bodies]
        + [(s, e, PlaceholderKind.EXPRESSION) for s, e in expressions]
    )

    counters: dict[PlaceholderKind, int] = dict.fromkeys(PlaceholderKind, 0)
    records: dict[str, PlaceholderRecord] = {}
    edits: list[Edit] = []
    parts: list[str] = []
    pos: int = 0
    new_pos: int = 0
    for start, end, kind in spans:
        token: str = f"{prefix}_{kind.value}_{counters[kind]}__"
        counters[kind] += 1
        if kind is PlaceholderKind.EXPRESSION:
            original: str = text[start + len(EXPRESSION_OPEN) : end - len(EXPRESSION_CLOSE)]
        else:
            original = text[start:end].strip()
        records[token] = PlaceholderRecord(token, original, kind, start, end)

        parts.append(text[pos:start])
        new_pos += start - pos
        edits.append(Edit(new_pos, new_pos + len(token), start, end))
        parts.append(token)
        new_pos += len(token)
        pos = end
    parts.append(text[pos:])

    logger.debug(
        "Protected %d expression(s) and %d script body(ies)",
        counters[PlaceholderKind.EXPRESSION],
        counters[PlaceholderKind.SCRIPT_BODY],
    )
    return ProtectedText(
        text="".join(parts),
        records=records,
        offset_map=OffsetMap(tuple(edits)),
        token_re=_token_pattern(prefix),
    )


class TokenRestorer:
    """Consumes placeholder records while tokens are put back.

    Each record must be consumed exactly once; `finish` reports leftovers.
    """

    def __init__(self, protected: ProtectedText) -> None:
        self._protected: ProtectedText = protected
        self._consumed: set[str] = set()

    @property
    def token_re(self) -> re.Pattern[str]:
        """Pattern matching this run's tokens."""
        return self._protected.token_re

    def take(self, token: str) -> PlaceholderRecord:
        """Consume the record of ``token``.

        Raises:
            InvariantError: If the token is unknown or was already consumed.
        """
        record: PlaceholderRecord | None = self._protected.records.get(token)
        if record is None:
            raise InvariantError(f"Unknown placeholder token {token!r}")
        if token in self._consumed:
            raise InvariantError(f"Placeholder token {token!r} restored twice")
        self._consumed.add(token)
        return record

    def restore_tokens(self, text: str) -> str:
        """Replace every token in ``text``; expressions get their braces back."""
        if not text:
            return text

        def _sub(m: re.Match[str]) -> str:
            record: PlaceholderRecord = self.take(m.group())
            if record.kind is PlaceholderKind.EXPRESSION:
                return EXPRESSION_OPEN + record.original + EXPRESSION_CLOSE
            return record.original

        return self.token_re.sub(_sub, text)

    def finish(self) -> None:
        """Check that every record was consumed.

        Raises:
            InvariantError: If a placeholder was never restored.
        """
        left: list[str] = [t for t in self._protected.records if t not in self._consumed]
        if left:
            raise InvariantError(f"Unrestored placeholder token(s): {', '.join(left)}")
