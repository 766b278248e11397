# topmark:header:start
#
#   project      : WxmlFmt
#   file         : options.py
#   file_relpath : src/wxmlfmt/config/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Formatter options: an immutable value and its mutable builder.

`MutableFormatOptions` collects values layer by layer (defaults, option file,
CLI flags) using ``None`` to mean "inherit". `MutableFormatOptions.freeze`
validates the result and produces a frozen `FormatOptions`, which is what
every formatting stage receives. Nothing ever mutates a `FormatOptions`.

Typical flow:
    1. ``MutableFormatOptions.from_mapping(table)`` for each option file.
    2. ``draft.merge_with(cli_overrides)`` (last wins).
    3. ``draft.freeze()``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final, cast

from wxmlfmt.config.keys import Toml, canonical_key
from wxmlfmt.config.logging import get_logger
from wxmlfmt.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from wxmlfmt.config.logging import WxmlfmtLogger

logger: WxmlfmtLogger = get_logger(__name__)


class WxsErrorPolicy(str, Enum):
    """What to do when a ``<wxs>`` body cannot be formatted."""

    FAIL = "fail"
    KEEP = "keep"

    @classmethod
    def from_name(cls, key_name: str | None) -> WxsErrorPolicy | None:
        """Find the policy by its case-insensitive value (``"fail"`` or ``"keep"``).

        Args:
            key_name (str | None): The policy name or None.

        Returns:
            WxsErrorPolicy | None: The matching member, or None when unset or unknown.
        """
        if key_name is None:
            return None
        return cls.__members__.get(key_name.strip().upper())


DEFAULT_TAB_WIDTH: Final[int] = 2
DEFAULT_PRINT_WIDTH: Final[int] = 80
DEFAULT_PREFER_BREAK_TAGS: Final[tuple[str, ...]] = ("wxs", "template")


def _empty_mapping() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class FormatOptions:
    """Immutable formatter options.

    Attributes:
        tab_width (int): Host-wide indentation width.
        print_width (int): Host-wide target line width.
        wxml_tab_width (int | None): Markup indentation width; falls back to ``tab_width``.
        wxml_print_width (int | None): Markup line width; falls back to ``print_width``.
        wxml_single_quote (bool): Prefer single quotes around attribute values.
        wxml_strict_text (bool): Emit ``<text>`` content byte for byte.
        wxml_prefer_break_tags (tuple[str, ...]): Tags whose children always go
            one per line.
        wxs_semi (bool): Keep statement-terminating semicolons in ``<wxs>`` code.
        wxs_single_quote (bool): Prefer single quotes for ``<wxs>`` string literals.
        wxs_tab_width (int | None): Script indentation width; falls back to the
            effective markup tab width.
        wxs_parser_options (Mapping[str, Any]): Pass-through options for the script parser.
        wxs_generator_options (Mapping[str, Any]): Pass-through options for the
            script printer.
        wxs_error_policy (WxsErrorPolicy): Failure policy for ``<wxs>`` bodies.
    """

    tab_width: int = DEFAULT_TAB_WIDTH
    print_width: int = DEFAULT_PRINT_WIDTH
    wxml_tab_width: int | None = None
    wxml_print_width: int | None = None
    wxml_single_quote: bool = False
    wxml_strict_text: bool = True
    wxml_prefer_break_tags: tuple[str, ...] = DEFAULT_PREFER_BREAK_TAGS
    wxs_semi: bool = True
    wxs_single_quote: bool = True
    wxs_tab_width: int | None = None
    wxs_parser_options: Mapping[str, Any] = field(default_factory=_empty_mapping)
    wxs_generator_options: Mapping[str, Any] = field(default_factory=_empty_mapping)
    wxs_error_policy: WxsErrorPolicy = WxsErrorPolicy.FAIL

    @property
    def effective_tab_width(self) -> int:
        """Markup indentation width after fallback."""
        return self.wxml_tab_width if self.wxml_tab_width is not None else self.tab_width

    @property
    def effective_print_width(self) -> int:
        """Markup line width after fallback."""
        return self.wxml_print_width if self.wxml_print_width is not None else self.print_width

    @property
    def effective_wxs_tab_width(self) -> int:
        """Script indentation width after fallback."""
        return self.wxs_tab_width if self.wxs_tab_width is not None else self.effective_tab_width

    def thaw(self) -> MutableFormatOptions:
        """Return a mutable copy with every field explicitly set."""
        return MutableFormatOptions(
            tab_width=self.tab_width,
            print_width=self.print_width,
            wxml_tab_width=self.wxml_tab_width,
            wxml_print_width=self.wxml_print_width,
            wxml_single_quote=self.wxml_single_quote,
            wxml_strict_text=self.wxml_strict_text,
            wxml_prefer_break_tags=list(self.wxml_prefer_break_tags),
            wxs_semi=self.wxs_semi,
            wxs_single_quote=self.wxs_single_quote,
            wxs_tab_width=self.wxs_tab_width,
            wxs_parser_options=dict(self.wxs_parser_options),
            wxs_generator_options=dict(self.wxs_generator_options),
            wxs_error_policy=self.wxs_error_policy,
        )


@dataclass
class MutableFormatOptions:
    """Mutable options builder used while layering option sources.

    Every field defaults to ``None`` (inherit). The optional width fields
    (``wxml_tab_width`` and friends) can only be *set* through this builder;
    there is no way to explicitly reset them to "fall back" from a later layer.

    Attributes:
        sources (list[str]): Option files that contributed to this draft.
    """

    tab_width: int | None = None
    print_width: int | None = None
    wxml_tab_width: int | None = None
    wxml_print_width: int | None = None
    wxml_single_quote: bool | None = None
    wxml_strict_text: bool | None = None
    wxml_prefer_break_tags: list[str] | None = None
    wxs_semi: bool | None = None
    wxs_single_quote: bool | None = None
    wxs_tab_width: int | None = None
    wxs_parser_options: dict[str, Any] | None = None
    wxs_generator_options: dict[str, Any] | None = None
    wxs_error_policy: WxsErrorPolicy | None = None

    sources: list[str] = field(default_factory=lambda: [])

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> FormatOptions:
        """Validate this draft and freeze it into a `FormatOptions`.

        Raises:
            ConfigError: If a width is negative (or a print width is zero).

        Returns:
            FormatOptions: The immutable options.
        """
        for name in ("tab_width", "wxml_tab_width", "wxs_tab_width"):
            value: int | None = getattr(self, name)
            if value is not None and value < 0:
                raise ConfigError(f"Option '{name}' must not be negative (got {value})")
        for name in ("print_width", "wxml_print_width"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ConfigError(f"Option '{name}' must be a positive integer (got {value})")

        defaults = FormatOptions()
        frozen = FormatOptions(
            tab_width=_pick(self.tab_width, defaults.tab_width),
            print_width=_pick(self.print_width, defaults.print_width),
            wxml_tab_width=self.wxml_tab_width,
            wxml_print_width=self.wxml_print_width,
            wxml_single_quote=_pick(self.wxml_single_quote, defaults.wxml_single_quote),
            wxml_strict_text=_pick(self.wxml_strict_text, defaults.wxml_strict_text),
            wxml_prefer_break_tags=tuple(self.wxml_prefer_break_tags)
            if self.wxml_prefer_break_tags is not None
            else defaults.wxml_prefer_break_tags,
            wxs_semi=_pick(self.wxs_semi, defaults.wxs_semi),
            wxs_single_quote=_pick(self.wxs_single_quote, defaults.wxs_single_quote),
            wxs_tab_width=self.wxs_tab_width,
            wxs_parser_options=MappingProxyType(dict(self.wxs_parser_options or {})),
            wxs_generator_options=MappingProxyType(dict(self.wxs_generator_options or {})),
            wxs_error_policy=_pick(self.wxs_error_policy, defaults.wxs_error_policy),
        )
        logger.trace("Frozen options: %r", frozen)
        return frozen

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableFormatOptions) -> MutableFormatOptions:
        """Return a new draft where explicitly-set values of ``other`` win.

        Args:
            other (MutableFormatOptions): The draft whose values override this one.

        Returns:
            MutableFormatOptions: The merged draft.
        """
        merged = MutableFormatOptions(sources=self.sources + other.sources)
        for f in fields(self):
            if f.name == "sources":
                continue
            theirs: object = getattr(other, f.name)
            setattr(merged, f.name, theirs if theirs is not None else getattr(self, f.name))
        return merged

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_mapping(
        cls,
        table: Mapping[str, Any],
        *,
        source: str | None = None,
    ) -> MutableFormatOptions:
        """Build a draft from an option table (TOML section or plain mapping).

        camelCase keys are accepted as aliases. Unknown keys are logged and ignored.

        Args:
            table (Mapping[str, Any]): The raw option table.
            source (str | None): Name of the file the table came from, for messages.

        Raises:
            ConfigError: If a value has the wrong type or cannot be parsed.

        Returns:
            MutableFormatOptions: The populated draft.
        """
        where: str = f" in {source}" if source else ""
        draft = cls(sources=[source] if source else [])
        for raw_key, value in table.items():
            key: str = canonical_key(str(raw_key))
            match key:
                case (
                    Toml.KEY_TAB_WIDTH
                    | Toml.KEY_PRINT_WIDTH
                    | Toml.KEY_WXML_TAB_WIDTH
                    | Toml.KEY_WXML_PRINT_WIDTH
                    | Toml.KEY_WXS_TAB_WIDTH
                ):
                    setattr(draft, key, _as_int(raw_key, value, where))
                case (
                    Toml.KEY_WXML_SINGLE_QUOTE
                    | Toml.KEY_WXML_STRICT_TEXT
                    | Toml.KEY_WXS_SEMI
                    | Toml.KEY_WXS_SINGLE_QUOTE
                ):
                    setattr(draft, key, _as_bool(raw_key, value, where))
                case Toml.KEY_WXML_PREFER_BREAK_TAGS:
                    draft.wxml_prefer_break_tags = parse_tag_list(value, key=raw_key)
                case Toml.KEY_WXS_PARSER_OPTIONS | Toml.KEY_WXS_GENERATOR_OPTIONS:
                    setattr(draft, key, parse_passthrough_options(value, key=raw_key))
                case Toml.KEY_WXS_ERROR_POLICY:
                    draft.wxs_error_policy = parse_error_policy(value, key=raw_key)
                case _:
                    logger.warning("Ignoring unknown option '%s'%s", raw_key, where)
        return draft


def _pick(value: Any, default: Any) -> Any:
    return default if value is None else value


def _as_int(key: str, value: Any, where: str) -> int:
    # bool is an int subclass; ``tab_width = true`` is a mistake, not 1.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"Option '{key}'{where} must be an integer (got {value!r})")
    return value


def _as_bool(key: str, value: Any, where: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"Option '{key}'{where} must be a boolean (got {value!r})")
    return value


def parse_tag_list(
    value: str | Iterable[str],
    *,
    key: str = Toml.KEY_WXML_PREFER_BREAK_TAGS,
) -> list[str]:
    """Parse a break-list given as a comma-separated string or a list of names.

    Args:
        value (str | Iterable[str]): ``"wxs,template"`` or ``["wxs", "template"]``.
        key (str): Option name, for messages.

    Raises:
        ConfigError: If ``value`` is neither a string nor a list of strings.

    Returns:
        list[str]: Stripped, non-empty tag names in their given order.
    """
    items: Iterable[Any]
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = cast("Iterable[Any]", value)
    else:
        raise ConfigError(f"Option '{key}' must be a string or a list of strings (got {value!r})")
    tags: list[str] = []
    for item in items:
        if not isinstance(item, str):
            raise ConfigError(f"Option '{key}' must only contain strings (got {item!r})")
        name: str = item.strip()
        if name:
            tags.append(name)
    return tags


def parse_passthrough_options(value: Any, *, key: str) -> dict[str, Any]:
    """Parse a pass-through option mapping given as a table or a JSON object string.

    An empty string means "no options".

    Args:
        value (Any): A mapping, or a JSON string encoding an object.
        key (str): Option name, for messages.

    Raises:
        ConfigError: If the JSON is malformed or does not encode an object.

    Returns:
        dict[str, Any]: A fresh dict with the options.
    """
    if isinstance(value, dict):
        return dict(cast("dict[str, Any]", value))
    if isinstance(value, str):
        if not value.strip():
            return {}
        try:
            decoded: Any = json.loads(value)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Option '{key}' is not valid JSON: {exc}") from exc
        if not isinstance(decoded, dict):
            raise ConfigError(f"Option '{key}' must encode a JSON object (got {value!r})")
        return cast("dict[str, Any]", decoded)
    raise ConfigError(f"Option '{key}' must be a table or a JSON string (got {value!r})")


def parse_error_policy(value: Any, *, key: str = Toml.KEY_WXS_ERROR_POLICY) -> WxsErrorPolicy:
    """Parse a ``<wxs>`` failure policy name.

    Args:
        value (Any): ``"fail"`` or ``"keep"`` (case-insensitive), or a member.
        key (str): Option name, for messages.

    Raises:
        ConfigError: If the value names no known policy.

    Returns:
        WxsErrorPolicy: The policy.
    """
    if isinstance(value, WxsErrorPolicy):
        return value
    policy: WxsErrorPolicy | None = (
        WxsErrorPolicy.from_name(value) if isinstance(value, str) else None
    )
    if policy is None:
        allowed: str = ", ".join(p.value for p in WxsErrorPolicy)
        raise ConfigError(f"Option '{key}' must be one of: {allowed} (got {value!r})")
    return policy
