# topmark:header:start
#
#   project      : WxmlFmt
#   file         : context.py
#   file_relpath : src/wxmlfmt/pipeline/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Formatting context passed through the pipeline steps.

A `FormatContext` holds the complete, mutable state of one format invocation:
the source, the frozen options, the three collaborators and every
intermediate product (protected text, wrapped text, raw and restored trees,
ignore ranges, doc and output). Contexts are never shared between invocations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from wxmlfmt.config.logging import get_logger
from wxmlfmt.config.options import FormatOptions
from wxmlfmt.diagnostic.model import DiagnosticLog
from wxmlfmt.doc.printer import DocPrinter
from wxmlfmt.parse.grammar import GrammarParser
from wxmlfmt.script.es5 import Es5ScriptFormatter

if TYPE_CHECKING:
    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.doc.builders import Doc
    from wxmlfmt.layout.ignore import IgnoreRange
    from wxmlfmt.parse.nodes import Document
    from wxmlfmt.parse.protector import ProtectedText
    from wxmlfmt.parse.wrapper import WrappedText
    from wxmlfmt.pipeline.contracts import DocRenderer, MarkupParser, ScriptFormatter, Step

logger: WxmlfmtLogger = get_logger(__name__)


@dataclass
class FlowControl:
    """Execution flow control for the current document."""

    halt: bool = False
    reason: str = ""  # short code, e.g. "blank-input"
    at_step: str = ""  # step name that requested the halt


@dataclass
class FormatContext:
    """State of one document as it flows through the pipeline.

    Attributes:
        source (str): The original text.
        options (FormatOptions): Effective options for this invocation.
        parser (MarkupParser): The markup parser collaborator.
        renderer (DocRenderer): The doc renderer collaborator.
        script_formatter (ScriptFormatter | None): The ``<wxs>`` sub-formatter;
            None leaves script blocks to the default element layout.
        steps (list[Step]): Steps executed so far, in order.
        flow (FlowControl): Halt flag set by a step that finished the work early.
        diagnostics (DiagnosticLog): Warnings collected along the way.
        protected (ProtectedText | None): Output of the protection step.
        wrapped (WrappedText | None): Output of the wrapping step.
        parsed (Document | None): Tree returned by the parser (offsets into
            the wrapped text).
        document (Document | None): Restored tree (offsets into ``source``).
        ignore_ranges (list[IgnoreRange]): Verbatim ranges of ``source``.
        doc (Doc | None): The document model.
        output (str | None): The formatted text.
    """

    source: str
    options: FormatOptions = field(default_factory=FormatOptions)
    parser: MarkupParser = field(default_factory=GrammarParser)
    renderer: DocRenderer = field(default_factory=DocPrinter)
    script_formatter: ScriptFormatter | None = field(default_factory=Es5ScriptFormatter)
    steps: list[Step] = field(default_factory=lambda: [])
    flow: FlowControl = field(default_factory=FlowControl)
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    protected: ProtectedText | None = None
    wrapped: WrappedText | None = None
    parsed: Document | None = None
    document: Document | None = None
    ignore_ranges: list[IgnoreRange] = field(default_factory=lambda: [])
    doc: Doc | None = None
    output: str | None = None

    @classmethod
    def bootstrap(
        cls,
        source: str,
        options: FormatOptions | None = None,
        *,
        parser: MarkupParser | None = None,
        renderer: DocRenderer | None = None,
        script_formatter: ScriptFormatter | None = None,
    ) -> FormatContext:
        """Create a context, filling in the default collaborators.

        Args:
            source (str): The original text.
            options (FormatOptions | None): Options; defaults when None.
            parser (MarkupParser | None): Markup parser; `GrammarParser` when None.
            renderer (DocRenderer | None): Doc renderer; `DocPrinter` when None.
            script_formatter (ScriptFormatter | None): Script sub-formatter;
                `Es5ScriptFormatter` when None.

        Returns:
            FormatContext: A fresh context.
        """
        return cls(
            source=source,
            options=options if options is not None else FormatOptions(),
            parser=parser if parser is not None else GrammarParser(),
            renderer=renderer if renderer is not None else DocPrinter(),
            script_formatter=(
                script_formatter if script_formatter is not None else Es5ScriptFormatter()
            ),
        )

    @property
    def is_halted(self) -> bool:
        """Whether a step requested a stop of the pipeline."""
        return self.flow.halt

    def stop_flow(self, reason: str, at_step: Step) -> None:
        """Request a graceful, terminal stop for the rest of the pipeline.

        Args:
            reason (str): Short machine-friendly reason code for halting the flow.
            at_step (Step): Step instance requesting the halt.
        """
        logger.info("Flow halted in %s: %s", at_step.name, reason)
        self.flow = FlowControl(halt=True, reason=reason, at_step=at_step.name)

    @property
    def changed(self) -> bool:
        """Whether the output differs from the source (False before output exists)."""
        return self.output is not None and self.output != self.source
