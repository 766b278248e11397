# topmark:header:start
#
#   project      : WxmlFmt
#   file         : contracts.py
#   file_relpath : src/wxmlfmt/pipeline/contracts.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type contracts for pipeline steps and formatting collaborators.

Steps are instantiated objects that are *callable*; the runner invokes them as
``step(ctx)`` where ``ctx`` is a `FormatContext`.

Lifecycle
---------
1) The runner calls ``step.may_proceed(ctx)`` to gate execution.
2) If allowed, it calls ``step.run(ctx)`` (which mutates ``ctx`` in place).
3) Regardless, it calls ``step.hint(ctx)`` so a step can attach diagnostics.

Collaborators
-------------
The engine talks to three replaceable components through the protocols below:

* `MarkupParser`: protected markup to a parse tree;
* `DocRenderer`: document model to text;
* `ScriptFormatter`: ``<wxs>`` code to formatted code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from wxmlfmt.doc.builders import Doc
    from wxmlfmt.parse.nodes import Document
    from wxmlfmt.pipeline.context import FormatContext
    from wxmlfmt.script.options import ScriptOptions


class Step(Protocol):
    """Protocol for a single pipeline step.

    Implementations typically subclass [`wxmlfmt.pipeline.steps.base.BaseStep`][].
    """

    name: str

    def may_proceed(self, ctx: FormatContext) -> bool:
        """Return whether the step should run given the current context.

        Args:
            ctx (FormatContext): The mutable formatting context.

        Returns:
            bool: True if the step may run; False to skip this step.
        """
        ...

    def run(self, ctx: FormatContext) -> None:
        """Execute the step, mutating the context in place.

        Formatting failures are raised (there is no partial output).

        Args:
            ctx (FormatContext): The mutable formatting context.
        """
        ...

    def hint(self, ctx: FormatContext) -> None:
        """Attach diagnostics to the context.

        Args:
            ctx (FormatContext): The mutable formatting context.
        """
        ...

    def __call__(self, ctx: FormatContext) -> FormatContext:
        """Run the step lifecycle: gate, run (optional), hint.

        Args:
            ctx (FormatContext): The mutable formatting context.

        Returns:
            FormatContext: The same context object, for chaining.
        """
        ...


class MarkupParser(Protocol):
    """Parses protected markup into a tree with offsets into its input."""

    def parse(self, text: str) -> Document:
        """Parse ``text``.

        Args:
            text (str): Protected, single-rooted markup.

        Raises:
            MarkupParseError: If the markup is malformed.

        Returns:
            Document: The parse tree.
        """
        ...


class DocRenderer(Protocol):
    """Prints a document model."""

    def render(self, doc: Doc, *, width: int, tab_width: int) -> str:
        """Print ``doc`` within ``width`` columns using ``tab_width`` spaces per level.

        Args:
            doc (Doc): The document model.
            width (int): Target line width.
            tab_width (int): Spaces per indentation level.

        Returns:
            str: The printed text.
        """
        ...


class ScriptFormatter(Protocol):
    """Formats embedded script code."""

    def format(self, code: str, options: ScriptOptions) -> str:
        """Format ``code``.

        Args:
            code (str): Script source.
            options (ScriptOptions): Script formatting options.

        Raises:
            EmbeddedScriptError: If the code cannot be parsed or formatted.

        Returns:
            str: The formatted code, without a trailing newline.
        """
        ...
