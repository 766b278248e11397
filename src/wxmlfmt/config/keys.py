# topmark:header:start
#
#   project      : WxmlFmt
#   file         : keys.py
#   file_relpath : src/wxmlfmt/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML key names for WxmlFmt option files.

This module defines the string constants used when reading formatter options
from ``wxmlfmt.toml`` (top-level keys) and from ``[tool.wxmlfmt]`` in
``pyproject.toml``.

Design notes:
    - Keys defined here represent the *external configuration API*.
    - Renaming or removing keys is a breaking change.
    - The camelCase spellings used by the editor plugins are accepted as
      aliases and mapped onto the snake_case keys.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML keys used by WxmlFmt option files.

    The ordering of constants mirrors the fields of
    [`FormatOptions`][wxmlfmt.config.options.FormatOptions].
    """

    # Host-wide widths
    KEY_TAB_WIDTH: Final[str] = "tab_width"
    KEY_PRINT_WIDTH: Final[str] = "print_width"

    # Markup
    KEY_WXML_TAB_WIDTH: Final[str] = "wxml_tab_width"
    KEY_WXML_PRINT_WIDTH: Final[str] = "wxml_print_width"
    KEY_WXML_SINGLE_QUOTE: Final[str] = "wxml_single_quote"
    KEY_WXML_STRICT_TEXT: Final[str] = "wxml_strict_text"
    KEY_WXML_PREFER_BREAK_TAGS: Final[str] = "wxml_prefer_break_tags"

    # Embedded script
    KEY_WXS_SEMI: Final[str] = "wxs_semi"
    KEY_WXS_SINGLE_QUOTE: Final[str] = "wxs_single_quote"
    KEY_WXS_TAB_WIDTH: Final[str] = "wxs_tab_width"
    KEY_WXS_PARSER_OPTIONS: Final[str] = "wxs_parser_options"
    KEY_WXS_GENERATOR_OPTIONS: Final[str] = "wxs_generator_options"
    KEY_WXS_ERROR_POLICY: Final[str] = "wxs_error_policy"


# camelCase spellings accepted in option files.
TOML_KEY_ALIASES: Final[dict[str, str]] = {
    "tabWidth": Toml.KEY_TAB_WIDTH,
    "printWidth": Toml.KEY_PRINT_WIDTH,
    "wxmlTabWidth": Toml.KEY_WXML_TAB_WIDTH,
    "wxmlPrintWidth": Toml.KEY_WXML_PRINT_WIDTH,
    "wxmlSingleQuote": Toml.KEY_WXML_SINGLE_QUOTE,
    "wxmlStrictText": Toml.KEY_WXML_STRICT_TEXT,
    "wxmlPreferBreakTags": Toml.KEY_WXML_PREFER_BREAK_TAGS,
    "wxsSemi": Toml.KEY_WXS_SEMI,
    "wxsSingleQuote": Toml.KEY_WXS_SINGLE_QUOTE,
    "wxsTabWidth": Toml.KEY_WXS_TAB_WIDTH,
    "wxsBabelParserOptions": Toml.KEY_WXS_PARSER_OPTIONS,
    "wxsParserOptions": Toml.KEY_WXS_PARSER_OPTIONS,
    "wxsBabelGeneratorOptions": Toml.KEY_WXS_GENERATOR_OPTIONS,
    "wxsGeneratorOptions": Toml.KEY_WXS_GENERATOR_OPTIONS,
    "wxsErrorPolicy": Toml.KEY_WXS_ERROR_POLICY,
}


def canonical_key(key: str) -> str:
    """Return the snake_case key for ``key``, resolving camelCase aliases.

    Args:
        key (str): Key as written in the option file.

    Returns:
        str: The canonical key (unchanged when no alias applies).
    """
    return TOML_KEY_ALIASES.get(key, key)
