# topmark:header:start
#
#   project      : WxmlFmt
#   file         : loaders.py
#   file_relpath : src/wxmlfmt/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Discover and load WxmlFmt option files.

Options are read from, in order of preference within one directory:
- ``wxmlfmt.toml`` (options as top-level keys), then
- ``pyproject.toml`` (options under ``[tool.wxmlfmt]``).

Discovery walks upwards from a start directory and stops at the first
directory providing either file. Parsing is done with `tomlkit` and returned
as plain `dict` structures.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from wxmlfmt.config.logging import get_logger
from wxmlfmt.config.options import MutableFormatOptions
from wxmlfmt.constants import PYPROJECT_SECTION, PYPROJECT_TOML_NAME, WXMLFMT_TOML_NAME
from wxmlfmt.errors import ConfigError

if TYPE_CHECKING:
    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.config.options import FormatOptions

logger: WxmlfmtLogger = get_logger(__name__)

TomlTable = dict[str, Any]


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.

    Returns:
        TomlTable: The parsed TOML content.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        raise ConfigError(f"Cannot read option file {path}: {e}") from e
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        raise ConfigError(f"Invalid TOML in option file {path}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def extract_option_table(path: Path, data: TomlTable) -> TomlTable | None:
    """Return the option table of a parsed option file.

    For ``pyproject.toml`` this is the ``[tool.wxmlfmt]`` section (None when
    absent); for any other file the whole document is the option table.

    Args:
        path (Path): The file the data was read from.
        data (TomlTable): The parsed document.

    Raises:
        ConfigError: If ``[tool.wxmlfmt]`` exists but is not a table.

    Returns:
        TomlTable | None: The option table, or None when the file has none.
    """
    if path.name != PYPROJECT_TOML_NAME:
        return data
    node: Any = data
    for part in PYPROJECT_SECTION:
        if not isinstance(node, dict) or part not in node:
            return None
        node = cast("TomlTable", node)[part]
    if not isinstance(node, dict):
        raise ConfigError(f"[{'.'.join(PYPROJECT_SECTION)}] in {path} must be a table")
    return cast("TomlTable", node)


def discover_option_file(start: Path) -> Path | None:
    """Find the nearest option file at or above ``start``.

    A ``pyproject.toml`` only counts when it has a ``[tool.wxmlfmt]`` section.

    Args:
        start (Path): Directory (or file, whose parent is used) to start from.

    Returns:
        Path | None: The option file, or None when none was found.
    """
    here: Path = start.resolve()
    if not here.is_dir():
        here = here.parent
    for directory in (here, *here.parents):
        candidate: Path = directory / WXMLFMT_TOML_NAME
        if candidate.is_file():
            logger.debug("Discovered option file %s", candidate)
            return candidate
        candidate = directory / PYPROJECT_TOML_NAME
        if candidate.is_file():
            table: TomlTable | None = extract_option_table(candidate, load_toml_dict(candidate))
            if table is not None:
                logger.debug("Discovered option file %s", candidate)
                return candidate
            logger.trace("Skipping %s: no [tool.wxmlfmt] section", candidate)
    return None


def load_option_file(path: Path) -> MutableFormatOptions:
    """Load one option file into a draft.

    Args:
        path (Path): A ``wxmlfmt.toml`` or ``pyproject.toml`` file.

    Raises:
        ConfigError: If the file is missing, unreadable or holds invalid values.

    Returns:
        MutableFormatOptions: The draft (empty when a pyproject has no section).
    """
    if not path.is_file():
        raise ConfigError(f"Option file not found: {path}")
    table: TomlTable | None = extract_option_table(path, load_toml_dict(path))
    if table is None:
        logger.info("No [tool.wxmlfmt] section in %s", path)
        return MutableFormatOptions(sources=[str(path)])
    return MutableFormatOptions.from_mapping(table, source=str(path))


def resolve_options(
    *,
    overrides: MutableFormatOptions | None = None,
    config_file: Path | None = None,
    use_config: bool = True,
    start: Path | None = None,
) -> FormatOptions:
    """Layer defaults, the option file and explicit overrides into `FormatOptions`.

    Precedence is defaults < option file < overrides.

    Args:
        overrides (MutableFormatOptions | None): Values that win over the option file
            (typically CLI flags).
        config_file (Path | None): Explicit option file; disables discovery.
        use_config (bool): When False, no option file is consulted at all.
        start (Path | None): Discovery start directory (defaults to the working directory).

    Raises:
        ConfigError: If an option file or an override is invalid.

    Returns:
        FormatOptions: The frozen, validated options.
    """
    draft = MutableFormatOptions()
    if use_config:
        path: Path | None = config_file or discover_option_file(start or Path.cwd())
        if path is not None:
            draft = draft.merge_with(load_option_file(path))
            logger.info("Using option file %s", path)
    if overrides is not None:
        draft = draft.merge_with(overrides)
    return draft.freeze()
