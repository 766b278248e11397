# topmark:header:start
#
#   project      : WxmlFmt
#   file         : test_format_command.py
#   file_relpath : tests/cli/test_format_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for ``wxmlfmt format``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tests.cli.conftest import (
    MESSY,
    TIDY,
    assert_SUCCESS,
    assert_USAGE_ERROR,
    run_cli_in,
)
from wxmlfmt.cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from pathlib import Path


def test_format_stdin_marker(project: Path) -> None:
    result = run_cli_in(project, ["--no-color", "format", "-"], input_text=MESSY)
    assert_SUCCESS(result)
    assert result.output == TIDY


def test_format_stdin_flag(project: Path) -> None:
    result = run_cli_in(project, ["--no-color", "format", "--stdin"], input_text=MESSY)
    assert_SUCCESS(result)
    assert result.output == TIDY


def test_format_prints_file(project: Path) -> None:
    target = project / "index.wxml"
    target.write_text(MESSY, encoding="utf-8")
    result = run_cli_in(project, ["--no-color", "format", "index.wxml"])
    assert_SUCCESS(result)
    assert result.output == TIDY
    assert target.read_text(encoding="utf-8") == MESSY


def test_format_write(project: Path) -> None:
    target = project / "index.wxml"
    target.write_text(MESSY, encoding="utf-8")
    result = run_cli_in(project, ["--no-color", "-v", "format", "--write", "."])
    assert_SUCCESS(result)
    assert target.read_text(encoding="utf-8") == TIDY
    assert "formatted" in result.output


def test_format_overrides(project: Path) -> None:
    source = '<view class="container" data-id="{{ id }}"></view>'
    result = run_cli_in(
        project,
        ["--no-color", "format", "--print-width", "30", "--single-quote", "-"],
        input_text=source,
    )
    assert_SUCCESS(result)
    assert result.output == "<view\n  class='container'\n  data-id='{{ id }}'\n></view>\n"


def test_format_reads_option_file(tmp_path: Path) -> None:
    (tmp_path / "wxmlfmt.toml").write_text("wxmlSingleQuote = true\n", encoding="utf-8")
    result = run_cli_in(tmp_path, ["--no-color", "format", "-"], input_text='<view a="1"/>')
    assert_SUCCESS(result)
    assert result.output == "<view a='1' />\n"


def test_format_no_config_skips_option_file(tmp_path: Path) -> None:
    (tmp_path / "wxmlfmt.toml").write_text("wxmlSingleQuote = true\n", encoding="utf-8")
    result = run_cli_in(
        tmp_path, ["--no-color", "format", "--no-config", "-"], input_text='<view a="1"/>'
    )
    assert_SUCCESS(result)
    assert result.output == '<view a="1" />\n'


def test_format_syntax_error(project: Path) -> None:
    result = run_cli_in(project, ["format", "-"], input_text="<view><text></view>")
    assert result.exit_code == ExitCode.SYNTAX_ERROR


def test_format_failed_file_does_not_stop_others(project: Path) -> None:
    (project / "a.wxml").write_text("<view><text></view>", encoding="utf-8")
    (project / "b.wxml").write_text(MESSY, encoding="utf-8")
    result = run_cli_in(project, ["--no-color", "format", "--write", "."])
    assert result.exit_code == ExitCode.SYNTAX_ERROR
    assert (project / "b.wxml").read_text(encoding="utf-8") == TIDY
    assert "a.wxml" in result.output


def test_format_missing_file(project: Path) -> None:
    result = run_cli_in(project, ["format", "missing.wxml"])
    assert result.exit_code == ExitCode.FILE_NOT_FOUND


def test_format_stdin_with_paths_is_usage_error(project: Path) -> None:
    result = run_cli_in(project, ["format", "-", "index.wxml"], input_text="<view/>")
    assert_USAGE_ERROR(result)


def test_config_and_no_config_conflict(project: Path) -> None:
    result = run_cli_in(
        project,
        ["format", "--config", "wxmlfmt.toml", "--no-config", "-"],
        input_text="<view/>",
    )
    assert_USAGE_ERROR(result)


def test_invalid_toml_is_config_error(project: Path) -> None:
    (project / "bad.toml").write_text("print_width = [\n", encoding="utf-8")
    result = run_cli_in(project, ["format", "--config", "bad.toml", "-"], input_text="<view/>")
    assert result.exit_code == ExitCode.CONFIG_ERROR


def test_invalid_option_value_is_config_error(tmp_path: Path) -> None:
    (tmp_path / "wxmlfmt.toml").write_text('print_width = "wide"\n', encoding="utf-8")
    result = run_cli_in(tmp_path, ["format", "-"], input_text="<view/>")
    assert result.exit_code == ExitCode.CONFIG_ERROR


def test_format_no_files(project: Path) -> None:
    (project / "notes.txt").write_text("x", encoding="utf-8")
    result = run_cli_in(project, ["--no-color", "format", "."])
    assert_SUCCESS(result)
    assert "No files to process." in result.output


def test_format_exclude(project: Path) -> None:
    (project / "skip").mkdir()
    (project / "skip" / "a.wxml").write_text(MESSY, encoding="utf-8")
    result = run_cli_in(project, ["--no-color", "format", "--write", "--exclude", "skip/", "."])
    assert_SUCCESS(result)
    assert (project / "skip" / "a.wxml").read_text(encoding="utf-8") == MESSY
