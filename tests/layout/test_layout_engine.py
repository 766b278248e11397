# topmark:header:start
#
#   project      : WxmlFmt
#   file         : test_layout_engine.py
#   file_relpath : tests/layout/test_layout_engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the layout decisions, checked on formatted output."""

from __future__ import annotations

import pytest

from tests.conftest import make_options, parametrize
from wxmlfmt.api import format_document, format_text
from wxmlfmt.config.options import FormatOptions
from wxmlfmt.doc.builders import hardline, indent
from wxmlfmt.errors import LayoutError
from wxmlfmt.layout.engine import LayoutEngine, interpolation_doc, text_run_lines
from wxmlfmt.parse.nodes import Interpolation, Node, Reference, TextRun

LONG_VIEW = (
    '<view class="container-class-name" style="color: red; background: blue" '
    'data-index="{{index}}" bindtap="handleTap"></view>'
)


@parametrize(
    "source,expected",
    [
        ("<view><text>Hello</text></view>", "<view><text>Hello</text></view>\n"),
        ("<a/><b/><c/>", "<a />\n<b />\n<c />\n"),
        ("<view>\n</view>", "<view></view>\n"),
        ("<view> <text>Hi</text> </view>", "<view> <text>Hi</text> </view>\n"),
        ("<block><view>a</view></block>", "<block>\n  <view>a</view>\n</block>\n"),
        (
            "<view>\n  hello\n     world  \n\n</view>",
            "<view>\n  hello\n  world\n</view>\n",
        ),
        ("<view>\n  {{ name }}\n</view>", "<view>{{ name }}</view>\n"),
        ("<block>{{ name }}</block>", "<block>{{ name }}</block>\n"),
        (
            "<view>{{ a && b && c }}</view>",
            "<view>\n  {{ a && b && c }}\n</view>\n",
        ),
        (
            "<view>{{ {a:1, b:[1,2,{c:3}]} }}</view>",
            "<view>\n  {{ {a:1, b:[1,2,{c:3}]} }}\n</view>\n",
        ),
        (
            "<view>{{\n  a\n}}</view>",
            "<view>\n  {{\n    a\n  }}\n</view>\n",
        ),
        (
            "<view>{{a &&\n  b}}</view>",
            "<view>\n  {{a &&\n    b\n  }}\n</view>\n",
        ),
        ("<view class='a' hidden></view>", '<view class="a" hidden></view>\n'),
        ("<view title='say \"hi\"'></view>", "<view title='say \"hi\"'></view>\n"),
        ('<view hidden="{{a&&b}}"></view>', '<view hidden="{{a && b}}"></view>\n'),
        ("<!-- one\n   two -->", "<!-- one\n   two -->\n"),
        ('<?xml version="1.0"?><view/>', '<?xml version="1.0"?>\n<view />\n'),
        ("hello <b>x</b>", "hello\n<b>x</b>\n"),
        ("<view>a &amp; b</view>", "<view>a &amp; b</view>\n"),
    ],
)
def test_layout(source: str, expected: str) -> None:
    assert format_text(source) == expected


@parametrize("source", ["", "   ", "\n\n\t\n"])
def test_blank_input_formats_to_empty_string(source: str) -> None:
    assert format_text(source) == ""


def test_attributes_break_at_default_width() -> None:
    expected = (
        "<view\n"
        '  class="container-class-name"\n'
        '  style="color: red; background: blue"\n'
        '  data-index="{{index}}"\n'
        '  bindtap="handleTap"\n'
        "></view>\n"
    )
    assert format_text(LONG_VIEW) == expected


def test_attributes_stay_on_one_line_when_wide() -> None:
    assert format_text(LONG_VIEW, make_options(print_width=200)) == LONG_VIEW + "\n"


def test_attribute_break_accounts_for_depth() -> None:
    inner = '<text class="aaaaaaaaaaaaaaaaaaaa" id="bbbbbbbbbbbbbbbbbbbb">x</text>'
    source = f"<block><block>{inner}</block></block>"
    # 4 + 2 + 29 + 26 = 61 columns: fits in 64, not in 64 - 2 * 2.
    options = make_options(print_width=64, tab_width=2)
    assert format_text(inner, options) == inner + "\n"
    output = format_text(source, options)
    assert '    <text\n      class="aaaaaaaaaaaaaaaaaaaa"\n' in output
    assert "\n    >x</text>\n" in output


def test_self_closing_with_four_attributes_breaks() -> None:
    source = '<image src="a.png" mode="aspectFill" lazy-load class="c" />'
    assert format_text(source) == (
        '<image\n  src="a.png"\n  mode="aspectFill"\n  lazy-load\n  class="c"\n/>\n'
    )


def test_single_quote_preference() -> None:
    options = make_options(wxml_single_quote=True)
    assert format_text('<view class="a" title="it\'s"></view>', options) == (
        "<view class='a' title=\"it's\"></view>\n"
    )


def test_strict_text_is_verbatim() -> None:
    source = "<view><text>\n  a\n   b  \n</text></view>"
    assert format_text(source) == "<view>\n  <text>\n  a\n   b  \n</text>\n</view>\n"


def test_text_with_attributes_forces_block() -> None:
    source = '<view><text class="t">hi</text></view>'
    assert format_text(source) == '<view>\n  <text class="t">hi</text>\n</view>\n'


def test_strict_text_can_be_disabled() -> None:
    source = "<view><text>\n  a\n   b\n</text></view>"
    options = make_options(wxml_strict_text=False)
    assert format_text(source, options) == "<view>\n  <text>\n    a\n    b\n  </text>\n</view>\n"


def test_prefer_break_tags() -> None:
    source = "<view><text>a</text></view>"
    options = make_options(wxml_prefer_break_tags=["view"])
    assert format_text(source, options) == "<view>\n  <text>a</text>\n</view>\n"


def test_long_inline_content_goes_to_block() -> None:
    words = "alpha beta gamma delta epsilon zeta eta theta iota"
    assert format_text(f"<view>{words}</view>") == f"<view>\n  {words}\n</view>\n"
    assert format_text("<view>short words</view>") == "<view>short words</view>\n"


def test_ignore_region_is_verbatim() -> None:
    source = (
        "<view>\n"
        "  <!-- prettier-ignore-start -->\n"
        '  <view   a="1"  >x</view>\n'
        "     <text>  keep </text>\n"
        "  <!-- prettier-ignore-end -->\n"
        "  <view   b='2'></view>\n"
        "</view>\n"
    )
    expected = (
        "<view>\n"
        "  <!-- prettier-ignore-start -->\n"
        '  <view   a="1"  >x</view>\n'
        "     <text>  keep </text>\n"
        "  <!-- prettier-ignore-end -->\n"
        '  <view b="2"></view>\n'
        "</view>\n"
    )
    assert format_text(source) == expected


def test_ignore_region_at_top_level() -> None:
    source = "<!-- prettier-ignore-start -->\n<a   x='1'/>\n<!-- prettier-ignore-end -->\n<b   />"
    expected = "<!-- prettier-ignore-start -->\n<a   x='1'/>\n<!-- prettier-ignore-end -->\n<b />\n"
    assert format_text(source) == expected


def test_unterminated_ignore_start_is_reported() -> None:
    result = format_document("<view>\n  <!-- prettier-ignore-start -->\n  <view   />\n</view>")
    assert result.output == "<view>\n  <!-- prettier-ignore-start -->\n  <view />\n</view>\n"
    assert len(result.diagnostics) == 1


def test_interpolation_doc_single_line() -> None:
    node = Interpolation(0, 9, " a + b ")
    assert interpolation_doc(node) == "{{ a + b }}"


def test_text_run_lines() -> None:
    run: list[Node] = [
        TextRun(0, 8, "  one\n  two "),
        Interpolation(8, 15, " x "),
        Reference(15, 20, "&amp;"),
        TextRun(20, 24, "\n\n  "),
    ]
    assert text_run_lines(run) == ["one", ["two ", "{{ x }}", "&amp;"]]


def test_unknown_node_kind_is_rejected() -> None:
    engine = LayoutEngine(FormatOptions(), source="")
    with pytest.raises(LayoutError):
        engine.render_node(Node(0, 0))


def test_multiline_interpolation_doc() -> None:
    node = Interpolation(0, 20, "\n    a &&\n      b\n  ")
    assert interpolation_doc(node) == ["{{", indent([hardline, ["a &&", hardline, "  b"]]), hardline, "}}"]


def test_multiline_interpolation_closes_on_own_line() -> None:
    node = Interpolation(0, 14, "a &&\n  b")
    assert interpolation_doc(node) == ["{{a &&", indent([hardline, ["b"]]), hardline, "}}"]
