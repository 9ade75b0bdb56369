#!/usr/bin/env python
"""CLI interface for promql-tutor - PromQL query explanations."""

from __future__ import annotations

import sys
from typing import cast

import typer

from promql_tutor import config, logging_config
from promql_tutor.commands import concepts as concepts_command
from promql_tutor.commands import explain
from promql_tutor.commands import functions as functions_command
from promql_tutor.commands import scenarios as scenarios_command


app = typer.Typer(
    help="Learn PromQL by explaining what queries compute.",
    no_args_is_help=True,
)
scenarios_app = typer.Typer(
    help="Browse the built-in learning scenarios.",
    no_args_is_help=True,
)


DEFAULT_VERBOSITY: dict[str, int] = {"value": 0}


def _resolve_verbosity(verbose: int) -> int:
    return max(verbose, DEFAULT_VERBOSITY["value"])


@app.callback()
def main_callback(
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Enable verbose logging output (repeat for parser debug output)",
    ),
) -> None:
    """Global CLI options."""
    if not verbose and not DEFAULT_VERBOSITY["value"]:
        return
    logging_config.configure_logging(_resolve_verbosity(verbose))


explain.register(app)
functions_command.register(app)
concepts_command.register(app)
scenarios_command.register(scenarios_app)

app.add_typer(scenarios_app, name="scenarios")


def main() -> None:
    """Main CLI entry point."""
    loaded_config = config.load_cli_config(sys.argv)
    defaults = loaded_config.defaults
    DEFAULT_VERBOSITY["value"] = cast(int, defaults.pop("verbose", 0))
    config.CONFIG_DEFAULTS.clear()
    config.CONFIG_DEFAULTS.update(defaults)

    command = typer.main.get_command(app)
    default_map = config.build_default_map(defaults) if defaults else None
    command.main(
        args=sys.argv[1:],
        prog_name="promql-tutor",
        standalone_mode=True,
        default_map=default_map,
    )


if __name__ == "__main__":
    main()
