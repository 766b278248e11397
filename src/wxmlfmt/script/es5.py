# topmark:header:start
#
#   project      : WxmlFmt
#   file         : es5.py
#   file_relpath : src/wxmlfmt/script/es5.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Default script sub-formatter, backed by ``calmjs.parse``.

``<wxs>`` code is ES5, which ``calmjs.parse`` parses and pretty prints.

Parser options:
    * ``with_comments`` (bool, default True): keep comments; formatting fails
      rather than drop one.

Generator options:
    * ``indent_str`` (str): indentation string; defaults to ``tab_width`` spaces.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from calmjs.parse.exceptions import ECMASyntaxError
from calmjs.parse.parsers.es5 import parse as parse_es5
from calmjs.parse.unparsers.es5 import pretty_print

from wxmlfmt.config.logging import get_logger
from wxmlfmt.errors import EmbeddedScriptError
from wxmlfmt.script.quotes import comment_texts, strip_semicolons

if TYPE_CHECKING:
    from collections import Counter

    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.script.options import ScriptOptions

logger: WxmlfmtLogger = get_logger(__name__)


class Es5ScriptFormatter:
    """Format ES5 code with ``calmjs.parse``."""

    def format(self, code: str, options: ScriptOptions) -> str:
        """Parse and pretty print ``code``.

        Args:
            code (str): The script source.
            options (ScriptOptions): Script formatting options.

        Raises:
            EmbeddedScriptError: If ``code`` is not valid ES5, cannot be
                printed, or a comment would be lost.

        Returns:
            str: The formatted code (without a trailing newline).
        """
        with_comments: bool = bool(options.parser_options.get("with_comments", True))
        indent_str: Any = options.generator_options.get("indent_str", " " * options.tab_width)
        try:
            program: Any = parse_es5(code, with_comments=with_comments)
        except ECMASyntaxError as exc:
            raise EmbeddedScriptError(f"Failed to parse/format <wxs> JavaScript: {exc}") from exc
        try:
            formatted: str = pretty_print(program, indent_str=str(indent_str)).rstrip("\n")
        except Exception as exc:
            raise EmbeddedScriptError(f"Failed to print <wxs> JavaScript: {exc}") from exc
        if with_comments:
            check_comments_kept(code, formatted)
        if not options.semi:
            formatted = strip_semicolons(formatted)
        logger.trace("Formatted script:\n%s", formatted)
        return formatted


def check_comments_kept(code: str, formatted: str) -> None:
    """Raise if ``formatted`` lost any comment of ``code``.

    ``calmjs.parse`` drops comments it cannot attach to a statement, for
    instance inside object literals or after the last statement.

    Args:
        code (str): The script source.
        formatted (str): The printed code.

    Raises:
        EmbeddedScriptError: If a comment of ``code`` is missing.
    """
    missing: Counter[str] = comment_texts(code) - comment_texts(formatted)
    if missing:
        first: str = next(iter(missing))
        raise EmbeddedScriptError(
            f"Formatting <wxs> JavaScript would drop {sum(missing.values())} comment(s), "
            f"first: {first!r}"
        )
