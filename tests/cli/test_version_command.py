# topmark:header:start
#
#   project      : WxmlFmt
#   file         : test_version_command.py
#   file_relpath : tests/cli/test_version_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for ``wxmlfmt version`` and the bare group."""

from __future__ import annotations

from tests.cli.conftest import assert_SUCCESS, assert_USAGE_ERROR, run_cli
from wxmlfmt.constants import WXMLFMT_VERSION


def test_version() -> None:
    result = run_cli(["--no-color", "version"])
    assert_SUCCESS(result)
    assert result.output.strip() == WXMLFMT_VERSION


def test_version_verbose() -> None:
    result = run_cli(["--no-color", "-v", "version"])
    assert_SUCCESS(result)
    assert "WxmlFmt version:" in result.output
    assert WXMLFMT_VERSION in result.output


def test_group_without_command_shows_help() -> None:
    result = run_cli(["--no-color"])
    assert_SUCCESS(result)
    assert "Hint: use 'wxmlfmt format" in result.output
    assert "Usage:" in result.output


def test_verbose_and_quiet_conflict() -> None:
    result = run_cli(["-v", "-q", "version"])
    assert_USAGE_ERROR(result)
