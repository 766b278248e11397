# topmark:header:start
#
#   project      : WxmlFmt
#   file         : model.py
#   file_relpath : src/wxmlfmt/diagnostic/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostics collected while formatting one document.

A diagnostic reports a non-fatal finding: an ignore-start comment without a
matching end comment, or a ``<wxs>`` body kept as written because its script
could not be formatted. Fatal problems raise instead (see [`wxmlfmt.errors`][]).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from wxmlfmt.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

    from wxmlfmt.config.logging import WxmlfmtLogger


logger: WxmlfmtLogger = get_logger(__name__)


class DiagnosticLevel(Enum):
    """Severity of a diagnostic; only warnings are recorded."""

    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A severity level and a message locating the finding in the source."""

    level: DiagnosticLevel
    message: str


@dataclass
class DiagnosticLog:
    """Mutable collection owned by one formatting context."""

    items: list[Diagnostic] = field(default_factory=lambda: [])

    def add_warning(self, message: str) -> None:
        """Record a ``warning`` diagnostic.

        Args:
            message: The diagnostic message.
        """
        self.items.append(Diagnostic(DiagnosticLevel.WARNING, message))
        logger.trace("Recorded warning: %r", message)

    def freeze(self) -> FrozenDiagnosticLog:
        """Return an immutable snapshot for the public API."""
        return FrozenDiagnosticLog(items=tuple(self.items))

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True)
class FrozenDiagnosticLog:
    """Immutable snapshot of a `DiagnosticLog`, in insertion order."""

    items: tuple[Diagnostic, ...]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
