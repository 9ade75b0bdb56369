"""Scenario catalog commands."""

from __future__ import annotations

from dataclasses import dataclass

import click
import typer

from promql_tutor import config as config_module
from promql_tutor.output_format import print_catalog_text
from promql_tutor.scenarios import SCENARIOS, ScenarioNotFoundError, get_scenario
from promql_tutor.tui import format_scenario, format_scenario_list, setup_output


@dataclass
class ScenariosListArgs:
    """Arguments for the scenarios list command."""

    config: str
    color_flag: bool | None


@dataclass
class ScenariosShowArgs:
    """Arguments for the scenarios show command."""

    scenario_id: str
    config: str
    color_flag: bool | None


def run_scenarios_list(args: ScenariosListArgs) -> None:
    """Run the scenarios list command."""
    color_enabled = setup_output(args)
    print_catalog_text(format_scenario_list(SCENARIOS, color_enabled), color_enabled)


def run_scenarios_show(args: ScenariosShowArgs) -> None:
    """Run the scenarios show command."""
    color_enabled = setup_output(args)
    try:
        scenario = get_scenario(args.scenario_id)
    except ScenarioNotFoundError as exc:
        raise click.UsageError(str(exc)) from exc
    print_catalog_text(format_scenario(scenario, color_enabled), color_enabled)


def register(app: typer.Typer) -> None:
    """Register the scenarios commands."""

    @app.command("list")
    def list_command(
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
        """List the built-in learning scenarios."""
        args = ScenariosListArgs(config=config, color_flag=color_flag)
        config_module.log_command_arguments(args, "scenarios list")
        run_scenarios_list(args)

    @app.command("show")
    def show_command(
        scenario_id: str = typer.Argument(..., metavar="ID", help="Scenario id"),
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
        """Show a scenario with its explained sample queries."""
        args = ScenariosShowArgs(scenario_id=scenario_id, config=config, color_flag=color_flag)
        config_module.log_command_arguments(args, "scenarios show")
        run_scenarios_show(args)
