# topmark:header:start
#
#   project      : WxmlFmt
#   file         : test_check_command.py
#   file_relpath : tests/cli/test_check_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for ``wxmlfmt check``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tests.cli.conftest import (
    MESSY,
    TIDY,
    assert_SUCCESS,
    assert_WOULD_CHANGE,
    run_cli_in,
)
from wxmlfmt.cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from pathlib import Path


def test_check_formatted_file(project: Path) -> None:
    (project / "index.wxml").write_text(TIDY, encoding="utf-8")
    result = run_cli_in(project, ["--no-color", "check", "index.wxml"])
    assert_SUCCESS(result)
    assert "would reformat" not in result.output


def test_check_unformatted_file(project: Path) -> None:
    target = project / "index.wxml"
    target.write_text(MESSY, encoding="utf-8")
    result = run_cli_in(project, ["--no-color", "check", "*.wxml"])
    assert_WOULD_CHANGE(result)
    assert "would reformat" in result.output
    assert "index.wxml" in result.output
    assert target.read_text(encoding="utf-8") == MESSY


def test_check_diff(project: Path) -> None:
    (project / "index.wxml").write_text(MESSY, encoding="utf-8")
    result = run_cli_in(project, ["--no-color", "check", "--diff", "index.wxml"])
    assert_WOULD_CHANGE(result)
    assert "(current)" in result.output
    assert "(formatted)" in result.output
    assert "+  <text>Hi</text>" in result.output


def test_check_quiet_hides_summary(project: Path) -> None:
    (project / "index.wxml").write_text(MESSY, encoding="utf-8")
    result = run_cli_in(project, ["--no-color", "-q", "check", "index.wxml"])
    assert_WOULD_CHANGE(result)
    assert "would reformat" not in result.output


def test_check_stdin(project: Path) -> None:
    result = run_cli_in(project, ["--no-color", "check", "-"], input_text=MESSY)
    assert_WOULD_CHANGE(result)
    assert "would reformat <stdin>" in result.output

    result = run_cli_in(project, ["--no-color", "check", "-"], input_text=TIDY)
    assert_SUCCESS(result)


def test_check_failure_wins(project: Path) -> None:
    (project / "a.wxml").write_text("<view><text></view>", encoding="utf-8")
    (project / "b.wxml").write_text(MESSY, encoding="utf-8")
    result = run_cli_in(project, ["--no-color", "check", "."])
    assert result.exit_code == ExitCode.SYNTAX_ERROR


def test_check_exclude_from(project: Path) -> None:
    (project / "index.wxml").write_text(MESSY, encoding="utf-8")
    (project / ".wxmlfmtignore").write_text("index.wxml\n", encoding="utf-8")
    result = run_cli_in(
        project, ["--no-color", "check", "--exclude-from", ".wxmlfmtignore", "."]
    )
    assert_SUCCESS(result)
    assert "No files to process." in result.output
