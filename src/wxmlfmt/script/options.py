# topmark:header:start
#
#   project      : WxmlFmt
#   file         : options.py
#   file_relpath : src/wxmlfmt/script/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Options handed to a script sub-formatter."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

    from wxmlfmt.config.options import FormatOptions


@dataclass(frozen=True)
class ScriptOptions:
    """Formatting options for one ``<wxs>`` body.

    Attributes:
        semi (bool): Keep statement-terminating semicolons.
        single_quote (bool): Prefer single-quoted string literals.
        tab_width (int): Indentation width of the script code.
        print_width (int): Target line width.
        parser_options (Mapping[str, Any]): Pass-through parser options.
        generator_options (Mapping[str, Any]): Pass-through printer options.
    """

    semi: bool = True
    single_quote: bool = True
    tab_width: int = 2
    print_width: int = 80
    parser_options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    generator_options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_format_options(cls, options: FormatOptions) -> ScriptOptions:
        """Derive script options from the formatter options."""
        return cls(
            semi=options.wxs_semi,
            single_quote=options.wxs_single_quote,
            tab_width=options.effective_wxs_tab_width,
            print_width=options.effective_print_width,
            parser_options=options.wxs_parser_options,
            generator_options=options.wxs_generator_options,
        )
