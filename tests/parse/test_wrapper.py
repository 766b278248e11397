# topmark:header:start
#
#   project      : WxmlFmt
#   file         : test_wrapper.py
#   file_relpath : tests/parse/test_wrapper.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the synthetic root used with multi-root fragments."""

from __future__ import annotations

from tests.conftest import parametrize
from wxmlfmt.constants import SYNTHETIC_ROOT_TAG
from wxmlfmt.parse.nodes import Comment, Document, Element
from wxmlfmt.parse.wrapper import needs_synthetic_root, unwrap, wrap


@parametrize(
    "text,expected",
    [
        ("<view></view>", False),
        ("  <view><text>x</text></view>\n", False),
        ("<!-- c --><view/>", False),
        ('<?xml version="1.0"?>\n<view/>\n<!-- end -->', False),
        ("<a/><b/><c/>", True),
        ("<view></view>\n<view></view>", True),
        ("hello", True),
        ("hello <view/>", True),
        ("<view/> trailing", True),
        ("", False),
        ("   \n", False),
    ],
)
def test_needs_synthetic_root(text: str, expected: bool) -> None:
    assert needs_synthetic_root(text) is expected


def test_quoted_angle_brackets_do_not_confuse_depth() -> None:
    assert needs_synthetic_root('<view data-x="a>b"><text>1</text></view>') is False


def test_wrap_leaves_single_root_alone() -> None:
    wrapped = wrap("<view/>")
    assert wrapped.wrapped is False
    assert wrapped.text == "<view/>"


def test_wrap_keeps_declaration_outside() -> None:
    source = '<?xml version="1.0"?><a/><b/>'
    wrapped = wrap(source)

    assert wrapped.wrapped is True
    assert wrapped.text == f'<?xml version="1.0"?><{SYNTHETIC_ROOT_TAG}><a/><b/></{SYNTHETIC_ROOT_TAG}>'
    # The synthetic tags occupy no source text.
    open_at = wrapped.text.index(f"<{SYNTHETIC_ROOT_TAG}>")
    assert wrapped.offset_map.to_original(open_at) == source.index("<a/>")
    assert wrapped.offset_map.to_original(wrapped.text.index("<b/>")) == source.index("<b/>")
    assert wrapped.offset_map.to_original(len(wrapped.text)) == len(source)


def test_unwrap_merges_document_level_nodes_in_order() -> None:
    root = Element(5, 20, name=SYNTHETIC_ROOT_TAG, children=[Element(6, 10, name="a")])
    document = Document(0, 30, [Comment(0, 5, "<!---->"), root, Comment(21, 30, "<!-- x -->")])

    result = unwrap(document)
    assert [type(node).__name__ for node in result.children] == ["Comment", "Element", "Comment"]
    assert isinstance(result.children[1], Element)
    assert result.children[1].name == "a"


def test_unwrap_without_synthetic_root_is_identity() -> None:
    document = Document(0, 7, [Element(0, 7, name="view", self_closing=True)])
    assert unwrap(document) is document
