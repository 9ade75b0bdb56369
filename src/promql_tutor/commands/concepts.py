"""Concepts catalog command."""

from __future__ import annotations

from dataclasses import dataclass

import click
import typer

from promql_tutor import config as config_module
from promql_tutor.concepts import CONCEPTS, ConceptNotFoundError, get_concept
from promql_tutor.output_format import print_catalog_text
from promql_tutor.tui import format_concept, format_concept_list, setup_output


@dataclass
class ConceptsArgs:
    """Arguments for the concepts command."""

    concept_id: str | None
    config: str
    color_flag: bool | None


def run_concepts(args: ConceptsArgs) -> None:
    """Run the concepts command."""
    color_enabled = setup_output(args)
    if args.concept_id is None:
        print_catalog_text(format_concept_list(CONCEPTS, color_enabled), color_enabled)
        return
    try:
        concept = get_concept(args.concept_id)
    except ConceptNotFoundError as exc:
        raise click.UsageError(str(exc)) from exc
    print_catalog_text(format_concept(concept, color_enabled), color_enabled)


def register(app: typer.Typer) -> None:
    """Register the concepts command."""

    @app.command("concepts")
    def concepts_command(
        concept_id: str | None = typer.Argument(None, metavar="[ID]", help="Concept id"),
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
        """List Prometheus concepts or show one in detail."""
        args = ConceptsArgs(concept_id=concept_id, config=config, color_flag=color_flag)
        config_module.log_command_arguments(args, "concepts")
        run_concepts(args)
