# topmark:header:start
#
#   project      : WxmlFmt
#   file         : test_delegate.py
#   file_relpath : tests/script/test_delegate.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the ``<wxs>`` delegate and its error policy."""

from __future__ import annotations

import pytest

from tests.conftest import make_options
from wxmlfmt.api import format_document, format_text
from wxmlfmt.config.options import WxsErrorPolicy
from wxmlfmt.diagnostic import DiagnosticLog
from wxmlfmt.doc.printer import print_doc
from wxmlfmt.errors import EmbeddedScriptError
from wxmlfmt.parse.nodes import Attribute, Comment, Element, ScriptBlock, TextRun
from wxmlfmt.script.delegate import EmbeddedScriptDelegate, script_runs
from wxmlfmt.script.options import ScriptOptions

SOURCE = '<wxs module="m">\n  x +* y\n   z\n</wxs>'


def _script_block(*children: TextRun | Comment, self_closing: bool = False) -> ScriptBlock:
    return ScriptBlock(
        start=0,
        end=len(SOURCE),
        name="wxs",
        attributes=[Attribute("module", "m", '"', 5, 15)],
        children=list(children),
        self_closing=self_closing,
    )


class _FailingFormatter:
    def format(self, code: str, options: ScriptOptions) -> str:
        raise EmbeddedScriptError("boom")


class _UpperFormatter:
    def format(self, code: str, options: ScriptOptions) -> str:
        return code.strip().upper() + '\nvar s = "q";'


def test_script_runs_declines() -> None:
    assert script_runs(_script_block(self_closing=True)) is None
    assert script_runs(_script_block(TextRun(16, 19, "\n  \n"))) is None
    assert script_runs(_script_block(TextRun(16, 20, "a"), Comment(20, 30, "<!-- c -->"))) is None
    assert script_runs(Element(0, 10, "view", children=[TextRun(6, 7, "a")])) is None


def test_script_runs_sorted() -> None:
    first = TextRun(16, 18, "a;")
    second = TextRun(18, 20, "b;")
    assert script_runs(_script_block(second, first)) == [first, second]


def test_render_indents_formatted_code() -> None:
    delegate = EmbeddedScriptDelegate(_UpperFormatter(), make_options())
    doc = delegate.render(
        _script_block(TextRun(16, 22, " var a ")),
        open_tag='<wxs module="m">',
        close_tag="</wxs>",
    )
    assert doc is not None
    printed = print_doc(doc, width=80, tab_width=2)
    assert printed == "<wxs module=\"m\">\n  VAR A\n  var s = 'q';\n</wxs>"


def test_render_declines_for_non_script() -> None:
    delegate = EmbeddedScriptDelegate(_UpperFormatter(), make_options())
    assert delegate.render(Element(0, 5, "view"), open_tag="<view>", close_tag="</view>") is None
    assert not delegate.accepts(Element(0, 5, "view"))


def test_fail_policy_raises() -> None:
    delegate = EmbeddedScriptDelegate(_FailingFormatter(), make_options(), source=SOURCE)
    with pytest.raises(EmbeddedScriptError):
        delegate.render(
            _script_block(TextRun(16, 35, "\n  x +* y\n   z\n")),
            open_tag='<wxs module="m">',
            close_tag="</wxs>",
        )


def test_keep_policy_records_warning() -> None:
    diagnostics = DiagnosticLog()
    options = make_options(wxs_error_policy=WxsErrorPolicy.KEEP)
    delegate = EmbeddedScriptDelegate(
        _FailingFormatter(), options, source=SOURCE, diagnostics=diagnostics
    )
    doc = delegate.render(
        _script_block(TextRun(16, 35, "\n  x +* y\n   z\n")),
        open_tag='<wxs module="m">',
        close_tag="</wxs>",
    )
    assert doc is not None
    assert print_doc(doc, width=80, tab_width=2) == '<wxs module="m">\n  x +* y\n  z\n</wxs>'
    assert len(diagnostics) == 1
    message = next(iter(diagnostics)).message
    assert "boom" in message
    assert "1:1" in message


def test_wxs_formatted_in_document() -> None:
    output = format_text('<wxs module="m">var a=1;function f(x){return x+1}</wxs>')
    lines = output.split("\n")
    assert lines[0] == '<wxs module="m">'
    assert "  var a = 1;" in lines
    assert "  function f(x) {" in lines
    assert "    return x + 1;" in lines
    assert output.endswith("</wxs>\n")


def test_wxs_script_tab_width() -> None:
    output = format_text(
        '<wxs module="m">function f(x){return x}</wxs>', make_options(wxs_tab_width=4)
    )
    assert "      return x;" in output.split("\n")


def test_wxs_invalid_code_fails_document() -> None:
    with pytest.raises(EmbeddedScriptError):
        format_text('<wxs module="m">var = ;</wxs>')


def test_wxs_invalid_code_kept_with_keep_policy() -> None:
    options = make_options(wxs_error_policy=WxsErrorPolicy.KEEP)
    result = format_document('<wxs module="m">\n    var = ;\n</wxs>', options)
    assert result.output == '<wxs module="m">\n  var = ;\n</wxs>\n'
    assert len(result.diagnostics) == 1


def test_empty_wxs_uses_element_layout() -> None:
    assert format_text('<wxs module="m"></wxs>') == '<wxs module="m"></wxs>\n'
    assert format_text('<wxs src="./a.wxs" module="m" />') == '<wxs src="./a.wxs" module="m" />\n'


class _CrashingFormatter:
    def format(self, code: str, options: ScriptOptions) -> str:
        raise ValueError("sub-formatter crashed")


def test_unexpected_formatter_error_is_wrapped() -> None:
    delegate = EmbeddedScriptDelegate(_CrashingFormatter(), make_options(), source=SOURCE)
    with pytest.raises(EmbeddedScriptError) as excinfo:
        delegate.render(
            _script_block(TextRun(16, 35, "\n  x +* y\n   z\n")),
            open_tag='<wxs module="m">',
            close_tag="</wxs>",
        )
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert "sub-formatter crashed" in str(excinfo.value)


def test_unexpected_formatter_error_kept_with_keep_policy() -> None:
    options = make_options(wxs_error_policy=WxsErrorPolicy.KEEP)
    result = format_document(
        '<wxs module="m">var a=1</wxs>', options, script_formatter=_CrashingFormatter()
    )
    assert result.output == '<wxs module="m">\n  var a=1\n</wxs>\n'
    assert len(result.diagnostics) == 1
    assert "ValueError" in next(iter(result.diagnostics)).message


def test_wxs_comments_never_dropped() -> None:
    source = '<wxs module="m">var o = {\n  a: 1, // note\n  b: 2\n};\n/* tail */</wxs>'
    with pytest.raises(EmbeddedScriptError):
        format_text(source)
    options = make_options(wxs_error_policy=WxsErrorPolicy.KEEP)
    result = format_document(source, options)
    assert "  a: 1, // note" in result.output.split("\n")
    assert "  /* tail */" in result.output.split("\n")
    assert len(result.diagnostics) == 1
