# topmark:header:start
#
#   project      : WxmlFmt
#   file         : attributes.py
#   file_relpath : src/wxmlfmt/layout/attributes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Attribute printing and the attribute-wrapping heuristics."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from wxmlfmt.constants import PLACEHOLDER_LIKE_MIN_ATTRS, SELF_CLOSING_BREAK_MIN_ATTRS
from wxmlfmt.layout.expressions import normalize_attribute_value

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wxmlfmt.parse.nodes import Attribute, Element

# Six or more of the same filler character, e.g. ``______`` or ``======``.
PLACEHOLDER_LIKE_RE: Final[re.Pattern[str]] = re.compile(r"([=\-_.~*])\1{5,}")


def choose_quote(value: str, original_quote: str, *, single_quote: bool) -> str:
    """Pick the quote character for an attribute value.

    The preferred quote is used unless the value contains it; then the
    original quote is kept (or, for an unquoted value, the other quote).

    Args:
        value (str): The unquoted value.
        original_quote (str): Quote used in the source (``""`` when unquoted).
        single_quote (bool): Whether single quotes are preferred.

    Returns:
        str: ``'"'`` or ``"'"``.
    """
    preferred: str = "'" if single_quote else '"'
    alternate: str = '"' if single_quote else "'"
    if preferred not in value:
        return preferred
    if original_quote and original_quote != preferred:
        return original_quote
    return alternate


def print_attribute(attribute: Attribute, *, single_quote: bool) -> str:
    """Serialize one attribute.

    Args:
        attribute (Attribute): The attribute.
        single_quote (bool): Whether single quotes are preferred.

    Returns:
        str: ``name`` for a boolean attribute, else ``name="value"``.
    """
    if attribute.value is None:
        return attribute.name
    value: str = normalize_attribute_value(attribute.value)
    quote: str = choose_quote(value, attribute.quote, single_quote=single_quote)
    return f"{attribute.name}={quote}{value}{quote}"


def approximate_tag_length(name: str, printed: Sequence[str]) -> int:
    """Approximate the length of a start tag printed on one line.

    Args:
        name (str): Tag name.
        printed (Sequence[str]): Printed attributes.

    Returns:
        int: ``len(name) + 2`` plus each attribute's length plus one.
    """
    return len(name) + 2 + sum(len(text) + 1 for text in printed)


def count_placeholder_like(element: Element) -> int:
    """Count attribute values containing a run of six or more filler characters."""
    return sum(
        1
        for attribute in element.attributes
        if attribute.value is not None and PLACEHOLDER_LIKE_RE.search(attribute.value)
    )


def should_break_attributes(
    element: Element,
    printed: Sequence[str],
    *,
    available_width: int,
) -> bool:
    """Decide whether to put each attribute of ``element`` on its own line.

    Args:
        element (Element): The element.
        printed (Sequence[str]): Its printed attributes.
        available_width (int): Print width minus the current indentation.

    Returns:
        bool: True when the start tag must be broken.
    """
    if not printed:
        return False
    if approximate_tag_length(element.name, printed) > available_width:
        return True
    if count_placeholder_like(element) >= PLACEHOLDER_LIKE_MIN_ATTRS:
        return True
    return element.self_closing and len(printed) >= SELF_CLOSING_BREAK_MIN_ATTRS
