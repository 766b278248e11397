# topmark:header:start
#
#   project      : WxmlFmt
#   file         : delegate.py
#   file_relpath : src/wxmlfmt/script/delegate.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Embedded-script delegate for ``<wxs>`` elements.

The delegate accepts a script block only when its content is plain code
(text runs with non-blank content and nothing else); in every other case it
declines and the layout engine prints the element like any other.

On acceptance it rebuilds the code from the text runs, hands it to the script
sub-formatter and lays the result out one indentation level under the tag.
When the sub-formatter fails, whatever it raises, ``wxs_error_policy`` decides:

* ``fail``: the `EmbeddedScriptError` propagates and the document is not
  formatted;
* ``keep``: a warning is logged and recorded, and the original lines are
  emitted trimmed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wxmlfmt.config.logging import get_logger
from wxmlfmt.config.options import WxsErrorPolicy
from wxmlfmt.doc.builders import hardline, indent, indented_lines
from wxmlfmt.errors import EmbeddedScriptError, location_of
from wxmlfmt.parse.nodes import ScriptBlock, TextRun
from wxmlfmt.script.options import ScriptOptions
from wxmlfmt.script.quotes import prefer_quotes

if TYPE_CHECKING:
    from wxmlfmt.config.logging import WxmlfmtLogger
    from wxmlfmt.config.options import FormatOptions
    from wxmlfmt.diagnostic import DiagnosticLog
    from wxmlfmt.doc.builders import Doc
    from wxmlfmt.parse.nodes import Node
    from wxmlfmt.pipeline.contracts import ScriptFormatter

logger: WxmlfmtLogger = get_logger(__name__)


def script_runs(node: Node) -> list[TextRun] | None:
    """Return the text runs holding the code of ``node``, or None to decline.

    Args:
        node (Node): A candidate node.

    Returns:
        list[TextRun] | None: The runs sorted by start offset, or None if
        ``node`` is not an eligible script block.
    """
    if not isinstance(node, ScriptBlock) or node.self_closing or not node.children:
        return None
    runs: list[TextRun] = []
    for child in node.children:
        if not isinstance(child, TextRun):
            return None
        runs.append(child)
    runs.sort(key=lambda run: run.start)
    if not "".join(run.text for run in runs).strip():
        return None
    return runs


class EmbeddedScriptDelegate:
    """Formats eligible ``<wxs>`` bodies with a script sub-formatter.

    Args:
        formatter (ScriptFormatter): The sub-formatter.
        options (FormatOptions): The formatter options.
        source (str): The original text, used to locate failures.
        diagnostics (DiagnosticLog | None): Where ``keep`` failures are recorded.
    """

    def __init__(
        self,
        formatter: ScriptFormatter,
        options: FormatOptions,
        *,
        source: str = "",
        diagnostics: DiagnosticLog | None = None,
    ) -> None:
        self.formatter: ScriptFormatter = formatter
        self.policy: WxsErrorPolicy = options.wxs_error_policy
        self.script_options: ScriptOptions = ScriptOptions.from_format_options(options)
        self.source: str = source
        self.diagnostics: DiagnosticLog | None = diagnostics

    def accepts(self, node: Node) -> bool:
        """Return True if ``node`` is a script block this delegate formats."""
        return script_runs(node) is not None

    def render(self, node: Node, *, open_tag: Doc, close_tag: Doc) -> Doc | None:
        """Lay out ``node`` with its code formatted.

        Args:
            node (Node): The candidate node.
            open_tag (Doc): The printed start tag.
            close_tag (Doc): The printed end tag.

        Raises:
            EmbeddedScriptError: If the code cannot be formatted and the
                policy is ``fail``.

        Returns:
            Doc | None: The element layout, or None when the delegate declines.
        """
        runs: list[TextRun] | None = script_runs(node)
        if runs is None:
            return None
        code: str = "".join(run.text for run in runs)
        try:
            formatted: str = self._format_code(code)
        except EmbeddedScriptError as exc:
            if self.policy is WxsErrorPolicy.FAIL:
                raise
            lines: list[str] = self._keep_original(node, code, exc)
        else:
            formatted = prefer_quotes(formatted, single_quote=self.script_options.single_quote)
            lines = [text.rstrip() for text in formatted.split("\n")]
        logger.debug("Delegated <wxs> at %d: %d line(s)", node.start, len(lines))
        return [open_tag, indent([hardline, indented_lines(lines)]), hardline, close_tag]

    def _format_code(self, code: str) -> str:
        """Run the sub-formatter, reporting any failure as `EmbeddedScriptError`."""
        try:
            return self.formatter.format(code, self.script_options)
        except EmbeddedScriptError:
            raise
        except Exception as exc:
            raise EmbeddedScriptError(
                f"<wxs> sub-formatter failed: {type(exc).__name__}: {exc}"
            ) from exc

    def _keep_original(self, node: Node, code: str, exc: EmbeddedScriptError) -> list[str]:
        line, column = location_of(self.source, node.start)
        message: str = f"{exc} (<wxs> at {line}:{column} kept as written)"
        logger.warning(message)
        if self.diagnostics is not None:
            self.diagnostics.add_warning(message)
        return [text.strip() for text in code.split("\n") if text.strip()]
