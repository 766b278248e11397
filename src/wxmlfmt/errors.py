# topmark:header:start
#
#   project      : WxmlFmt
#   file         : errors.py
#   file_relpath : src/wxmlfmt/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the WxmlFmt formatting engine.

These exceptions are CLI-free: the CLI layer maps them onto
[`wxmlfmt.cli.errors`][] and process exit codes.

Hierarchy:
    * `WxmlfmtError`: common base class.
    * `WxmlSyntaxError`: the markup could not be parsed (carries a 1-based location).
    * `EmbeddedScriptError`: a ``<wxs>`` body could not be formatted under the
      ``fail`` policy.
    * `ConfigError`: invalid option values or option files.
    * `InvariantError`: an internal stage broke a contract; always a defect.
    * `LayoutError`: the layout engine met a node kind it does not know.
    * `MarkupParseError`: raised by markup parsers before locations are known.
"""

from __future__ import annotations


class WxmlfmtError(Exception):
    """Base class for all WxmlFmt errors."""


class WxmlSyntaxError(WxmlfmtError):
    """Grammar-level failure with a best-effort source location.

    Attributes:
        message (str): Human readable reason, without the location suffix.
        line (int): 1-based line in the original text.
        column (int): 1-based column in the original text.
        offset (int): 0-based character offset in the original text.
    """

    def __init__(self, message: str, *, line: int, column: int, offset: int) -> None:
        self.message: str = message
        self.line: int = line
        self.column: int = column
        self.offset: int = offset
        super().__init__(f"{message} ({line}:{column})")


class EmbeddedScriptError(WxmlfmtError):
    """Raised when a ``<wxs>`` body cannot be parsed or formatted."""


class ConfigError(WxmlfmtError):
    """Raised for invalid formatter options or unreadable option files."""


class InvariantError(WxmlfmtError):
    """Raised when an earlier stage violated a structural contract."""


class LayoutError(InvariantError):
    """Raised when the layout engine receives a node kind it cannot render."""


def location_of(text: str, offset: int) -> tuple[int, int]:
    """Return the 1-based ``(line, column)`` of ``offset`` in ``text``.

    Offsets past the end of ``text`` are clamped to the end.

    Args:
        text (str): The text the offset refers to.
        offset (int): 0-based character offset.

    Returns:
        tuple[int, int]: The 1-based line and column.
    """
    offset = max(0, min(offset, len(text)))
    line: int = text.count("\n", 0, offset) + 1
    last_nl: int = text.rfind("\n", 0, offset)
    column: int = offset - last_nl
    return line, column


class MarkupParseError(WxmlfmtError):
    """Raised by markup parsers; the offset refers to the text they were given.

    The parse step translates it into a `WxmlSyntaxError` located in the
    original source.

    Attributes:
        message (str): Human readable reason.
        offset (int): 0-based offset into the parsed text.
    """

    def __init__(self, message: str, offset: int) -> None:
        self.message: str = message
        self.offset: int = offset
        super().__init__(f"{message} (offset {offset})")
