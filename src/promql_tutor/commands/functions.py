"""Function reference command."""

from __future__ import annotations

from dataclasses import dataclass

import click
import typer

from promql_tutor import config as config_module
from promql_tutor.functions import (
    FUNCTION_CATEGORIES,
    FunctionNotFoundError,
    find_functions,
    get_function,
)
from promql_tutor.output_format import print_catalog_text
from promql_tutor.tui import format_function, format_function_list, setup_output


@dataclass
class FunctionsArgs:
    """Arguments for the functions command."""

    name: str | None
    category: str | None
    search: str | None
    config: str
    color_flag: bool | None


def _validate_category(category: str | None) -> None:
    if category is None:
        return
    if category.lower() not in {name.lower() for name in FUNCTION_CATEGORIES}:
        expected = ", ".join(FUNCTION_CATEGORIES)
        raise click.UsageError(f"Unknown category: {category}. Expected one of: {expected}")


def run_functions(args: FunctionsArgs) -> None:
    """Run the functions command.

    Without a name the matching catalog entries are listed; with a name the
    entry is shown in full.
    """
    color_enabled = setup_output(args)
    if args.name is not None:
        try:
            function = get_function(args.name)
        except FunctionNotFoundError as exc:
            raise click.UsageError(str(exc)) from exc
        print_catalog_text(format_function(function, color_enabled), color_enabled)
        return

    _validate_category(args.category)
    functions = find_functions(category=args.category, search=args.search)
    print_catalog_text(format_function_list(functions, color_enabled), color_enabled)


def register(app: typer.Typer) -> None:
    """Register the functions command."""

    @app.command("functions")
    def functions_command(
        name: str | None = typer.Argument(
            None, metavar="[NAME]", help="Function to describe, e.g. rate"
        ),
        category: str | None = typer.Option(
            None,
            "--category",
            metavar="CATEGORY",
            help=f"Only list functions in a category ({', '.join(FUNCTION_CATEGORIES)})",
        ),
        search: str | None = typer.Option(
            None,
            "--search",
            metavar="TEXT",
            help="Only list functions whose name or description contains TEXT",
        ),
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
    ) -> None:
        """List PromQL functions or show how one works."""
        args = FunctionsArgs(
            name=name,
            category=category,
            search=search,
            config=config,
            color_flag=color_flag,
        )
        config_module.log_command_arguments(args, "functions")
        run_functions(args)
