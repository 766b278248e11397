# topmark:header:start
#
#   project      : WxmlFmt
#   file         : test_expressions.py
#   file_relpath : tests/layout/test_expressions.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for interpolation-expression helpers."""

from __future__ import annotations

from tests.conftest import parametrize
from wxmlfmt.layout.expressions import (
    is_complex_expression,
    normalize_attribute_value,
    normalize_expression,
    split_strings,
)


def test_split_strings() -> None:
    assert split_strings("a + 'b' + \"c\\\"d\"") == [
        (False, "a + "),
        (True, "'b'"),
        (False, " + "),
        (True, '"c\\"d"'),
    ]
    assert split_strings("'open") == [(True, "'open")]


@parametrize(
    "expression,expected",
    [
        (" name ", False),
        (" a && b ", False),
        (" a || b || c ", False),
        (" list[0] ", False),
        (" fn(x)[1] ", False),
        (" {a: 1} ", True),
        (" [1, 2] ", True),
        (" a ? [1] : [] ", True),
        (" a && b && c ", True),
        (" a && b || c ", True),
        (" '&&' + '{' + '&&' ", False),
        (" a\n + b ", True),
    ],
)
def test_is_complex_expression(expression: str, expected: bool) -> None:
    assert is_complex_expression(expression) is expected


@parametrize(
    "expression,expected",
    [
        ("a&&b", "a && b"),
        ("a  ||b", "a || b"),
        ("x===1", "x === 1"),
        ("x!==1", "x !== 1"),
        ("x==1", "x == 1"),
        ("x!=1", "x != 1"),
        ("x<=1", "x <= 1"),
        ("x>=1", "x >= 1"),
        ("a &&\n   b", "a && b"),
        ("a\n  .b", "a .b"),
        ("s == '&&x'", "s == '&&x'"),
    ],
)
def test_normalize_expression(expression: str, expected: str) -> None:
    assert normalize_expression(expression) == expected


def test_normalize_attribute_value() -> None:
    assert normalize_attribute_value("plain && text") == "plain && text"
    assert normalize_attribute_value("a {{x&&y}} b {{ z }}") == "a {{x && y}} b {{ z }}"
    assert normalize_attribute_value("{{ a }} {{ open") == "{{ a }} {{ open"
