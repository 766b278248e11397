# topmark:header:start
#
#   project      : WxmlFmt
#   file         : types.py
#   file_relpath : src/wxmlfmt/api/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Public, typed result shapes returned by [`wxmlfmt.api`][]."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from wxmlfmt.diagnostic import FrozenDiagnosticLog


class Outcome(str, Enum):
    """High-level outcome of formatting one file."""

    UNCHANGED = "unchanged"
    WOULD_CHANGE = "would change"
    FORMATTED = "formatted"
    FAILED = "failed"


@dataclass(frozen=True)
class FormatResult:
    """Result of formatting one text.

    Attributes:
        output (str): The formatted text.
        changed (bool): Whether ``output`` differs from the input.
        diagnostics (FrozenDiagnosticLog): Warnings recorded while formatting.
    """

    output: str
    changed: bool
    diagnostics: FrozenDiagnosticLog


@dataclass(frozen=True)
class FileResult:
    """Result for a single file.

    Attributes:
        path (Path): The file.
        outcome (Outcome): High-level outcome bucket.
        result (FormatResult | None): The formatting result (None on failure).
        diff (str | None): Unified diff when requested and the file changes.
        message (str | None): Error message when the outcome is ``FAILED``.
    """

    path: Path
    outcome: Outcome
    result: FormatResult | None = None
    diff: str | None = None
    message: str | None = None
