# topmark:header:start
#
#   project      : WxmlFmt
#   file         : test_quotes.py
#   file_relpath : tests/script/test_quotes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the quote and semicolon passes over formatted ES5 code."""

from __future__ import annotations

from collections import Counter

from tests.conftest import parametrize
from wxmlfmt.script.quotes import (
    comment_texts,
    iter_string_literals,
    prefer_quotes,
    strip_semicolons,
)


def test_iter_string_literals_spans() -> None:
    code = "a(\"x\", 'y')"
    assert list(iter_string_literals(code)) == [(2, 5), (7, 10)]


def test_iter_string_literals_skips_comments() -> None:
    code = "// 'a'\n/* \"b\" */ c = 'd';"
    spans = list(iter_string_literals(code))
    assert [code[start:end] for start, end in spans] == ["'d'"]


@parametrize(
    "code,single_quote,expected",
    [
        ('var a = "x";', True, "var a = 'x';"),
        ("var a = 'x';", False, 'var a = "x";'),
        ('var a = "it\'s";', True, 'var a = "it\'s";'),
        ('var a = "a\\n";', True, 'var a = "a\\n";'),
        ("var a = 'x';", True, "var a = 'x';"),
        ('// "x"\nvar b = "y";', True, "// \"x\"\nvar b = 'y';"),
        ('var r = /"a"/g;', True, 'var r = /"a"/g;'),
        ('var d = a / b + "x";', True, "var d = a / b + 'x';"),
    ],
)
def test_prefer_quotes(code: str, single_quote: bool, expected: str) -> None:
    assert prefer_quotes(code, single_quote=single_quote) == expected


@parametrize(
    "code,expected",
    [
        ("var a = 1;\nvar b = 2;", "var a = 1\nvar b = 2"),
        ("var a = b;\n(function () {})();", "var a = b;\n(function () {})()"),
        ("var a = b;\n\n[1, 2].map(f);", "var a = b;\n\n[1, 2].map(f)"),
        ("// note;\nx;", "// note;\nx"),
        ("function f() {\n  return 1;\n}", "function f() {\n  return 1\n}"),
    ],
)
def test_strip_semicolons(code: str, expected: str) -> None:
    assert strip_semicolons(code) == expected


def test_comment_texts_normalizes_whitespace() -> None:
    code = "// a  b\nvar s = '// not a comment';\n/* c\n   d */ x = 1;\n// a b"
    assert comment_texts(code) == Counter({"// a b": 2, "/* c d */": 1})
