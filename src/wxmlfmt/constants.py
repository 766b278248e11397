# topmark:header:start
#
#   project      : WxmlFmt
#   file         : constants.py
#   file_relpath : src/wxmlfmt/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""WxmlFmt Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Final

try:
    WXMLFMT_VERSION: str = get_version("wxmlfmt")
except PackageNotFoundError:  # pragma: no cover - source checkout without install
    WXMLFMT_VERSION = "0.0.0"

# Option files
PYPROJECT_TOML_NAME: Final[str] = "pyproject.toml"
WXMLFMT_TOML_NAME: Final[str] = "wxmlfmt.toml"
PYPROJECT_SECTION: Final[tuple[str, str]] = ("tool", "wxmlfmt")

# Environment variable consulted for the internal log level
LOG_LEVEL_ENV_VAR: Final[str] = "WXMLFMT_LOG_LEVEL"

# Ignore-region sentinels (compared against the full comment text)
IGNORE_START_COMMENT: Final[str] = "<!-- prettier-ignore-start -->"
IGNORE_END_COMMENT: Final[str] = "<!-- prettier-ignore-end -->"

# Reserved name of the synthetic element wrapped around multi-root fragments
SYNTHETIC_ROOT_TAG: Final[str] = "__wxml_root__"

# Placeholder tokens substituted before parsing
PLACEHOLDER_PREFIX: Final[str] = "__WXFMT"
EXPRESSION_TOKEN_KIND: Final[str] = "EXPR"
SCRIPT_TOKEN_KIND: Final[str] = "WXS"

# Interpolation delimiters
EXPRESSION_OPEN: Final[str] = "{{"
EXPRESSION_CLOSE: Final[str] = "}}"

# Designated tags
SCRIPT_TAG: Final[str] = "wxs"
VERBATIM_TEXT_TAG: Final[str] = "text"

# Container tags whose children are always laid out one per line
ALWAYS_BLOCK_TAGS: Final[frozenset[str]] = frozenset(
    {"block", "scroll-view", "swiper", "movable-area", "picker-view"}
)

# Children whose combined printed width stays below this are kept inline
INLINE_CONTENT_THRESHOLD: Final[int] = 50

# Attributes breaking heuristics
PLACEHOLDER_LIKE_MIN_ATTRS: Final[int] = 2
SELF_CLOSING_BREAK_MIN_ATTRS: Final[int] = 4

VALUE_NOT_SET: Final[str] = "<not set>"
