# topmark:header:start
#
#   project      : WxmlFmt
#   file         : logging.py
#   file_relpath : src/wxmlfmt/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Logging setup for WxmlFmt: a TRACE level below DEBUG and colored records.

Library modules only call [`get_logger`][wxmlfmt.config.logging.get_logger];
the CLI calls [`setup_logging`][wxmlfmt.config.logging.setup_logging] once per
run. Records go to ``sys.stderr`` so formatted output on ``sys.stdout`` stays
clean when piped.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

from wxmlfmt.constants import LOG_LEVEL_ENV_VAR

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

#: Level names accepted from ``WXMLFMT_LOG_LEVEL`` and by the CLI.
LOG_LEVEL_NAMES: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT: Final[str] = "[%(levelname)s] [%(filename)s:%(lineno)d] %(message)s"

# Highest threshold first; records below TRACE are dimmed.
_LEVEL_COLORS: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (logging.ERROR, chalk.red),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
    (TRACE_LEVEL, chalk.blue),
)


class WxmlfmtLogger(logging.Logger):
    """Logger with a ``trace()`` method for the TRACE level."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log 'msg % args' with severity 'TRACE'."""
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg=msg, args=args, extra=extra, stacklevel=2)


logging.addLevelName(TRACE_LEVEL, "TRACE")
logging.setLoggerClass(WxmlfmtLogger)


class ChalkFormatter(logging.Formatter):
    """Color each formatted record by its level."""

    def format(self, record: logging.LogRecord) -> str:
        message: str = super().format(record)
        for threshold, color in _LEVEL_COLORS:
            if record.levelno >= threshold:
                return color(message)
        return chalk.dim(message)


def resolve_env_log_level() -> int | None:
    """Return the level named by ``WXMLFMT_LOG_LEVEL``, or None if unset or unknown.

    Accepts a level name (``TRACE``, ``debug``, ...) or a number.
    """
    val: str = os.environ.get(LOG_LEVEL_ENV_VAR, "").strip().upper()
    if not val:
        return None
    if val.isdigit():
        return int(val)
    return LOG_LEVEL_NAMES.get(val)


def setup_logging(level: int | None = None) -> None:
    """Install a single colored stderr handler on the root logger.

    Args:
        level (int | None): The root level; when None, ``WXMLFMT_LOG_LEVEL``
            decides and CRITICAL is the fallback.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    root_logger: logging.Logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(
        ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT)
    )
    root_logger.addHandler(stream_handler)
    root_logger.propagate = False


def get_logger(name: str) -> WxmlfmtLogger:
    """Return the `WxmlfmtLogger` named ``name``."""
    return cast("WxmlfmtLogger", logging.getLogger(name))
