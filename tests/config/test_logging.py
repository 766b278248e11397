# topmark:header:start
#
#   project      : WxmlFmt
#   file         : test_logging.py
#   file_relpath : tests/config/test_logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the log level taken from ``WXMLFMT_LOG_LEVEL``."""

from __future__ import annotations

import logging

import pytest

from tests.conftest import parametrize
from wxmlfmt.cli.options import resolve_verbosity
from wxmlfmt.config.logging import TRACE_LEVEL, resolve_env_log_level


@parametrize(
    "value,expected",
    [
        ("trace", TRACE_LEVEL),
        (" Debug ", logging.DEBUG),
        ("30", 30),
        ("chatty", None),
        ("", None),
    ],
)
def test_resolve_env_log_level(
    monkeypatch: pytest.MonkeyPatch, value: str, expected: int | None
) -> None:
    monkeypatch.setenv("WXMLFMT_LOG_LEVEL", value)
    assert resolve_env_log_level() == expected


def test_env_log_level_unset() -> None:
    assert resolve_env_log_level() is None


def test_verbosity_uses_same_levels() -> None:
    assert resolve_verbosity(3, 0) == TRACE_LEVEL
    assert resolve_verbosity(0, 0) == logging.WARNING
    assert resolve_verbosity(0, 1) == logging.ERROR
