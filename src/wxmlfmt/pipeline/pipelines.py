# topmark:header:start
#
#   project      : WxmlFmt
#   file         : pipelines.py
#   file_relpath : src/wxmlfmt/pipeline/pipelines.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Named pipeline variants for WxmlFmt (immutable, typed step sequences).

Pipelines are built from class-based steps that implement the
[`Step`][wxmlfmt.pipeline.contracts.Step] protocol.

Overview
--------
- ``PARSE``: protect → wrap → parse → restore → ignore
- ``LAYOUT``: PARSE + layout
- ``FORMAT``: LAYOUT + print

Notes:
* Pipelines are immutable (Final[tuple[Step, ...]]) and steps are
  instantiated objects holding no per-document state, so one pipeline can
  serve concurrent invocations.
* A step that completes the work early halts the flow; the remaining steps
  decline to run.
"""

from __future__ import annotations

from enum import Enum
from typing import Final

from wxmlfmt.pipeline.contracts import Step
from wxmlfmt.pipeline.steps import ignorer, layout, parser, printer, protector, restorer, wrapper

# Source text to restored tree plus ignore ranges:
PARSE_PIPELINE: Final[tuple[Step, ...]] = (
    protector.ProtectorStep(),  # Replace interpolations and <wxs> bodies by tokens
    wrapper.WrapperStep(),  # Add a synthetic root for multi-root fragments
    parser.ParserStep(),  # Run the markup parser
    restorer.RestorerStep(),  # Unwrap, restore tokens, map offsets to the source
    ignorer.IgnorerStep(),  # Pair ignore sentinels
)

# Stops at the document model (no printing):
LAYOUT_PIPELINE: Final[tuple[Step, ...]] = PARSE_PIPELINE + (
    layout.LayoutStep(),  # Apply the layout policy (and the <wxs> delegate)
)

FORMAT_PIPELINE: Final[tuple[Step, ...]] = LAYOUT_PIPELINE + (
    printer.PrinterStep(),  # Print the doc
)


class Pipeline(tuple[Step, ...], Enum):
    """Available pipelines, mapped to their step sequences."""

    PARSE = PARSE_PIPELINE
    LAYOUT = LAYOUT_PIPELINE
    FORMAT = FORMAT_PIPELINE

    @property
    def steps(self) -> tuple[Step, ...]:
        """Return the instantiated, ordered step sequence for this pipeline."""
        return self.value
