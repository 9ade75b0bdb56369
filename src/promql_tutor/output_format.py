"""Output format abstraction and format-specific renderers."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol

from rich.console import Console
from rich.syntax import Syntax

from promql_tutor.query_language import ParsedNode, ast_to_dict, explain
from promql_tutor.tui import build_console, build_explanation_tree, print_output


logger = logging.getLogger("promql_tutor")

DEFAULT_OUTPUT_THEME = "github-dark"


class OutputFormat(StrEnum):
    """Supported output formats."""

    TEXT = "text"
    TREE = "tree"
    JSON = "json"


class ExplainOutputFormatter(Protocol):
    """Formatter interface for the explain command."""

    def prepare(self, ast: ParsedNode, color_enabled: bool, out_theme: str) -> PreparedOutput:
        """Prepare explanation output for rendering."""
        ...


@dataclass(frozen=True)
class OutputOperation:
    """One prepared output operation."""

    kind: str
    text: str | None = None
    renderable: object | None = None
    markup: bool = False
    color_enabled: bool = False
    end: str = "\n"


@dataclass(frozen=True)
class PreparedOutput:
    """Prepared output operations ready for console rendering."""

    operations: tuple[OutputOperation, ...]


class OutputFormatError(RuntimeError):
    """Raised when output formatting fails."""


def _write_plain_output(console: Console, text: str) -> None:
    """Write plain output directly to console stream."""
    console.file.write(f"{text}\n")
    console.file.flush()


def print_prepared_output(console: Console, prepared_output: PreparedOutput) -> None:
    """Print already prepared output operations."""
    for operation in prepared_output.operations:
        if operation.kind == "plain_write":
            if operation.text is not None:
                _write_plain_output(console, operation.text)
            continue
        if operation.kind == "print_output":
            if operation.text is not None:
                print_output(
                    console,
                    operation.text,
                    operation.color_enabled,
                    end=operation.end,
                )
            continue
        if operation.renderable is not None:
            console.print(operation.renderable)
            continue
        console.print(operation.text if operation.text is not None else "", markup=operation.markup)


def print_catalog_text(text: str, color_enabled: bool) -> None:
    """Print catalog text on a fresh console."""
    print_prepared_output(
        build_console(color_enabled),
        PreparedOutput(
            operations=(
                OutputOperation(kind="print_output", text=text, color_enabled=color_enabled),
            )
        ),
    )


def _normalize_syntax_theme(out_theme: str) -> str:
    """Return a valid theme name for syntax rendering."""
    normalized_theme = out_theme.strip()
    if normalized_theme:
        return normalized_theme
    return DEFAULT_OUTPUT_THEME


def _prepare_output(
    text: str,
    color_enabled: bool,
    language: str,
    out_theme: str,
) -> PreparedOutput:
    """Prepare output with syntax highlighting when color is enabled."""
    if color_enabled:
        return PreparedOutput(
            operations=(
                OutputOperation(
                    kind="console_print",
                    renderable=Syntax(
                        text,
                        language,
                        theme=_normalize_syntax_theme(out_theme),
                        line_numbers=False,
                        word_wrap=True,
                    ),
                ),
            )
        )
    return PreparedOutput(operations=(OutputOperation(kind="plain_write", text=text),))


class TextExplainOutputFormatter:
    """Single-sentence explanation of the whole query."""

    def prepare(self, ast: ParsedNode, color_enabled: bool, out_theme: str) -> PreparedOutput:
        del color_enabled
        del out_theme
        return PreparedOutput(operations=(OutputOperation(kind="plain_write", text=explain(ast)),))


class TreeExplainOutputFormatter:
    """Tree of every AST node with its explanation."""

    def prepare(self, ast: ParsedNode, color_enabled: bool, out_theme: str) -> PreparedOutput:
        del out_theme
        return PreparedOutput(
            operations=(
                OutputOperation(
                    kind="console_print",
                    renderable=build_explanation_tree(ast, color_enabled),
                ),
            )
        )


class JsonExplainOutputFormatter:
    """JSON dump of the explanation AST."""

    def prepare(self, ast: ParsedNode, color_enabled: bool, out_theme: str) -> PreparedOutput:
        return _prepare_output(
            json.dumps(ast_to_dict(ast), indent=2, ensure_ascii=False),
            color_enabled,
            OutputFormat.JSON,
            out_theme,
        )


_EXPLAIN_FORMATTERS: dict[str, ExplainOutputFormatter] = {
    OutputFormat.TEXT: TextExplainOutputFormatter(),
    OutputFormat.TREE: TreeExplainOutputFormatter(),
    OutputFormat.JSON: JsonExplainOutputFormatter(),
}


def get_explain_formatter(output_format: str) -> ExplainOutputFormatter:
    """Return explain formatter for selected output format."""
    normalized_output = output_format.strip().lower()
    formatter = _EXPLAIN_FORMATTERS.get(normalized_output)
    if formatter is None:
        supported = ", ".join(item.value for item in OutputFormat)
        logger.debug("Rejected output format %r", output_format)
        raise OutputFormatError(
            f"Unsupported output format '{output_format}'. Expected one of: {supported}"
        )
    return formatter
