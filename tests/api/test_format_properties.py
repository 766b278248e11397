# topmark:header:start
#
#   project      : WxmlFmt
#   file         : test_format_properties.py
#   file_relpath : tests/api/test_format_properties.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Property tests: formatting is idempotent and never leaks placeholders."""

from __future__ import annotations

import pytest
from hypothesis import HealthCheck, given, settings

from tests.strategies_wxml import s_fragment
from wxmlfmt.api import format_text
from wxmlfmt.constants import PLACEHOLDER_PREFIX

pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=60)
@given(source=s_fragment())
def test_format_is_idempotent(source: str) -> None:
    """Formatting the output again changes nothing."""
    once: str = format_text(source)
    assert format_text(once) == once


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=60)
@given(source=s_fragment())
def test_output_has_no_placeholders(source: str) -> None:
    """Protection tokens never survive into the output."""
    output: str = format_text(source)
    assert PLACEHOLDER_PREFIX not in output
    assert output == "" or output.endswith("\n")


@settings(deadline=None, max_examples=40)
@given(source=s_fragment())
def test_expressions_survive_formatting(source: str) -> None:
    """Every interpolation of the input appears in the output."""
    output: str = format_text(source)
    for expression in ("{{ item.name }}", "{{ {a: 1} }}", "{{x}}"):
        if expression in source:
            assert expression in output
