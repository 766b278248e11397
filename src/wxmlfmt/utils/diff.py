# topmark:header:start
#
#   project      : WxmlFmt
#   file         : diff.py
#   file_relpath : src/wxmlfmt/utils/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unified diffs between a source and its formatted output, and their colored preview."""

from __future__ import annotations

import difflib
from typing import TYPE_CHECKING

from yachalk import chalk

from wxmlfmt.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from wxmlfmt.config.logging import WxmlfmtLogger

logger: WxmlfmtLogger = get_logger(__name__)


def make_patch(current: str, updated: str, *, name: str) -> str:
    """Return the unified diff from ``current`` to ``updated``.

    Args:
        current (str): The source text.
        updated (str): The formatted text.
        name (str): Label used in the ``---``/``+++`` header lines.

    Returns:
        str: The diff, or ``""`` when the texts are identical.
    """
    patch_lines: list[str] = list(
        difflib.unified_diff(
            current.splitlines(keepends=True),
            updated.splitlines(keepends=True),
            fromfile=f"{name} (current)",
            tofile=f"{name} (formatted)",
            n=3,
        )
    )
    # A last line without newline would glue onto the next diff line.
    patch_lines = [line if line.endswith("\n") else line + "\n" for line in patch_lines]
    logger.trace("Patch for %s has %d line(s)", name, len(patch_lines))
    return "".join(patch_lines)


def render_patch(patch: Sequence[str] | str, show_line_numbers: bool = False) -> str:
    """Render a colorized preview of a unified diff.

    Args:
        patch (Sequence[str] | str): A unified diff as **either** a sequence of
            lines **or** a single multiline string.
        show_line_numbers (bool): Whether to prefix output with line numbers.

    Returns:
        str: The formatted, colorized diff preview.
    """
    if isinstance(patch, str):
        lines: list[str] = patch.splitlines(keepends=False)
    else:
        lines = [line.rstrip("\n") for line in patch]

    def process_line(line: str) -> str:
        content: str = line.replace("\r", "\\r")
        match line[:1]:
            case "-":
                return chalk.bold.red(content)
            case "+":
                return chalk.bold.green(content)
            case "@":
                return chalk.cyan(content)
            case _:
                return chalk.bold.white(content)

    if show_line_numbers:
        return "".join(f"{i:04d}|{process_line(line)}\n" for i, line in enumerate(lines, 1))
    return "".join(f"{process_line(line)}\n" for line in lines)
