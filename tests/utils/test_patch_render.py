# topmark:header:start
#
#   project      : WxmlFmt
#   file         : test_patch_render.py
#   file_relpath : tests/utils/test_patch_render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for unified diffs and their colored preview."""

from __future__ import annotations

import re

from wxmlfmt.utils.diff import make_patch, render_patch

ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def _plain(text: str) -> str:
    return ANSI_RE.sub("", text)


def test_make_patch() -> None:
    patch = make_patch("<view>\n</view>", "<view></view>\n", name="a.wxml")
    assert patch.startswith("--- a.wxml (current)\n+++ a.wxml (formatted)\n")
    assert "-<view>\n" in patch
    assert "-</view>\n" in patch
    assert "+<view></view>\n" in patch
    assert patch.endswith("\n")


def test_make_patch_identical() -> None:
    assert make_patch("<view/>\n", "<view/>\n", name="a.wxml") == ""


def test_render_patch_keeps_lines() -> None:
    patch = make_patch("a\n", "b\n", name="x")
    rendered = render_patch(patch)
    assert _plain(rendered).splitlines() == patch.splitlines()


def test_render_patch_line_numbers() -> None:
    rendered = render_patch(["-a\n", "+b\n"], show_line_numbers=True)
    assert _plain(rendered) == "0001|-a\n0002|+b\n"
