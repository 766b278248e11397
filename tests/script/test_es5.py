# topmark:header:start
#
#   project      : WxmlFmt
#   file         : test_es5.py
#   file_relpath : tests/script/test_es5.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the calmjs.parse backed script formatter."""

from __future__ import annotations

import pytest

from wxmlfmt.errors import EmbeddedScriptError
from wxmlfmt.script.es5 import Es5ScriptFormatter, check_comments_kept
from wxmlfmt.script.options import ScriptOptions

CODE = "var a=1;function f(x){return x+1}"


def test_format_pretty_prints() -> None:
    formatted = Es5ScriptFormatter().format(CODE, ScriptOptions())
    lines = formatted.split("\n")
    assert "var a = 1;" in lines
    assert "function f(x) {" in lines
    assert "  return x + 1;" in lines
    assert not formatted.endswith("\n")


def test_format_uses_tab_width() -> None:
    formatted = Es5ScriptFormatter().format(CODE, ScriptOptions(tab_width=4))
    assert "    return x + 1;" in formatted.split("\n")


def test_generator_indent_override() -> None:
    options = ScriptOptions(generator_options={"indent_str": "\t"})
    formatted = Es5ScriptFormatter().format(CODE, options)
    assert "\treturn x + 1;" in formatted.split("\n")


def test_format_without_semicolons() -> None:
    formatted = Es5ScriptFormatter().format(CODE, ScriptOptions(semi=False))
    lines = formatted.split("\n")
    assert "var a = 1" in lines
    assert "  return x + 1" in lines


def test_invalid_code_raises() -> None:
    with pytest.raises(EmbeddedScriptError) as excinfo:
        Es5ScriptFormatter().format("var = 1;", ScriptOptions())
    assert "Failed to parse/format <wxs> JavaScript" in str(excinfo.value)


def test_dropped_comments_raise() -> None:
    code = "var o = {\n  a: 1, // note\n  b: 2\n};\n/* tail */"
    with pytest.raises(EmbeddedScriptError) as excinfo:
        Es5ScriptFormatter().format(code, ScriptOptions())
    assert "comment" in str(excinfo.value)


def test_check_comments_kept_accepts_reindented_comments() -> None:
    code = "// lead\nvar a = 1;\n/* one\n     two */\nvar b = 2;"
    formatted = "// lead\nvar a = 1;\n/* one\n two */\nvar b = 2;"
    check_comments_kept(code, formatted)


def test_check_comments_kept_counts_duplicates() -> None:
    code = "// x\na();\n// x\nb();"
    with pytest.raises(EmbeddedScriptError) as excinfo:
        check_comments_kept(code, "// x\na();\nb();")
    assert "1 comment(s)" in str(excinfo.value)
    assert "'// x'" in str(excinfo.value)


def test_comments_ignored_without_with_comments() -> None:
    options = ScriptOptions(parser_options={"with_comments": False})
    formatted = Es5ScriptFormatter().format("// gone\nvar a=1;", options)
    assert "var a = 1;" in formatted.split("\n")
    assert "// gone" not in formatted
