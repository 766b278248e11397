# topmark:header:start
#
#   project      : WxmlFmt
#   file         : test_format_api.py
#   file_relpath : tests/api/test_format_api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the public API surface."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.conftest import make_options, parametrize
from wxmlfmt import api
from wxmlfmt.api import Outcome, check_text, format_document, format_file, format_text
from wxmlfmt.constants import WXMLFMT_VERSION
from wxmlfmt.errors import ConfigError, WxmlSyntaxError

if TYPE_CHECKING:
    from pathlib import Path

MESSY = "<view   class='a'>\n<text>Hi</text>\n    <block><view>x</view></block>\n</view>"
TIDY = '<view class="a">\n  <text>Hi</text>\n  <block>\n    <view>x</view>\n  </block>\n</view>\n'


def test_format_text() -> None:
    assert format_text(MESSY) == TIDY


def test_format_is_idempotent() -> None:
    assert format_text(TIDY) == TIDY


def test_format_document_reports_change() -> None:
    result = format_document(MESSY)
    assert result.output == TIDY
    assert result.changed
    assert len(result.diagnostics) == 0
    assert not format_document(TIDY).changed


def test_check_text() -> None:
    assert check_text(TIDY)
    assert not check_text(MESSY)


@parametrize(
    "options",
    [
        {"printWidth": 30},
        {"print_width": 30},
        {"wxml_print_width": 30, "print_width": 200},
    ],
)
def test_mapping_options(options: dict[str, object]) -> None:
    source = '<view class="container" data-id="{{ id }}"></view>'
    assert format_text(source, options) == (
        '<view\n  class="container"\n  data-id="{{ id }}"\n></view>\n'
    )


def test_invalid_mapping_options() -> None:
    with pytest.raises(ConfigError):
        format_text("<view/>", {"printWidth": "wide"})


def test_syntax_error() -> None:
    with pytest.raises(WxmlSyntaxError) as excinfo:
        format_text("<view>\n  <text>a</view>")
    assert excinfo.value.line >= 1


def test_calls_share_no_state() -> None:
    wide = make_options(print_width=200)
    assert format_text(TIDY, wide) == TIDY
    assert format_text(MESSY) == TIDY


def test_format_file_unchanged(tmp_path: Path) -> None:
    path = tmp_path / "index.wxml"
    path.write_text(TIDY, encoding="utf-8")
    result = format_file(path)
    assert result.outcome is Outcome.UNCHANGED
    assert result.diff is None


def test_format_file_would_change_with_diff(tmp_path: Path) -> None:
    path = tmp_path / "index.wxml"
    path.write_text(MESSY, encoding="utf-8")
    result = format_file(path, diff=True)
    assert result.outcome is Outcome.WOULD_CHANGE
    assert result.diff is not None
    assert result.diff.startswith(f"--- {path} (current)\n+++ {path} (formatted)\n")
    assert path.read_text(encoding="utf-8") == MESSY


def test_format_file_write(tmp_path: Path) -> None:
    path = tmp_path / "index.wxml"
    path.write_text(MESSY, encoding="utf-8")
    result = format_file(path, write=True)
    assert result.outcome is Outcome.FORMATTED
    assert path.read_text(encoding="utf-8") == TIDY


def test_format_file_failure_is_reported(tmp_path: Path) -> None:
    path = tmp_path / "broken.wxml"
    path.write_text("<view><text></view>", encoding="utf-8")
    result = format_file(path, write=True)
    assert result.outcome is Outcome.FAILED
    assert result.result is None
    assert result.message
    assert path.read_text(encoding="utf-8") == "<view><text></view>"


def test_format_file_missing(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        format_file(tmp_path / "missing.wxml")


def test_version() -> None:
    assert api.version() == WXMLFMT_VERSION
