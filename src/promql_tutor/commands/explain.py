"""Explain command for PromQL queries."""

from __future__ import annotations

from dataclasses import dataclass

import click
import typer

from promql_tutor import config as config_module
from promql_tutor.output_format import (
    DEFAULT_OUTPUT_THEME,
    OutputFormat,
    OutputFormatError,
    get_explain_formatter,
    print_prepared_output,
)
from promql_tutor.query_language import ParseResult, format_syntax_error, parse_query
from promql_tutor.tui import build_console, setup_output


@dataclass
class ExplainArgs:
    """Arguments for the explain command."""

    query: str
    config: str
    color_flag: bool | None
    out: str
    out_theme: str


def format_parse_failure(query: str, result: ParseResult) -> str:
    """Build the usage error message for a failed parse."""
    message = f"Invalid query: {result.error}"
    if result.position is None:
        return message
    return f"{message}\n{format_syntax_error(query, result.position)}"


def run_explain(args: ExplainArgs) -> None:
    """Run the explain command."""
    color_enabled = setup_output(args)
    console = build_console(color_enabled)
    try:
        formatter = get_explain_formatter(args.out)
    except OutputFormatError as exc:
        raise click.UsageError(str(exc)) from exc

    result = parse_query(args.query)
    if not result.success or result.ast is None:
        raise click.UsageError(format_parse_failure(args.query, result))

    print_prepared_output(console, formatter.prepare(result.ast, color_enabled, args.out_theme))


def register(app: typer.Typer) -> None:
    """Register the explain command."""

    @app.command("explain")
    def explain_command(
        query: str = typer.Argument(..., metavar="QUERY", help="PromQL query to explain"),
        config: str = typer.Option(
            config_module.DEFAULT_CONFIG_NAME,
            "--config",
            metavar="FILE",
            help="Config file name to load from current directory",
        ),
        color_flag: bool | None = typer.Option(
            None,
            "--color/--no-color",
            help="Force colored output",
        ),
        out: str = typer.Option(
            OutputFormat.TEXT,
            "--out",
            help="Output format: text, tree, or json",
        ),
        out_theme: str = typer.Option(
            DEFAULT_OUTPUT_THEME,
            "--out-theme",
            help="Syntax theme for highlighted JSON output",
        ),
    ) -> None:
        """Explain what a PromQL query computes."""
        args = ExplainArgs(
            query=query,
            config=config,
            color_flag=color_flag,
            out=out,
            out_theme=out_theme,
        )
        config_module.log_applied_config_defaults("explain")
        config_module.log_command_arguments(args, "explain")
        run_explain(args)
