"""Configuration handling for the promql-tutor CLI."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import cast

import typer

from promql_tutor.output_format import OutputFormat


DEFAULT_CONFIG_NAME = ".promql-tutor.json"

COMMAND_OPTION_NAMES = {
    "color_flag",
    "out",
    "out_theme",
    "verbose",
}

CONFIG_DEFAULTS: dict[str, object] = {}

DEST_TO_OPTION_NAME: dict[str, str] = {
    "color_flag": "--color/--no-color",
    "out": "--out",
    "out_theme": "--out-theme",
    "verbose": "--verbose",
}

_STR_OPTIONS: dict[str, str] = {
    "--out": "out",
    "--out-theme": "out_theme",
}

_COLOR_ONLY_COMMANDS = ("list", "show")


logger = logging.getLogger("promql_tutor")


@dataclass
class LoadedCliConfig:
    """Fully parsed CLI config payload."""

    defaults: dict[str, object]


def load_config(filepath: str) -> tuple[dict[str, object], bool]:
    """Load config from JSON file.

    Args:
        filepath: Path to config file

    Returns:
        Tuple of (config dict, malformed flag)
    """
    try:
        with open(filepath, encoding="utf-8") as f:
            config = json.load(f)
    except FileNotFoundError:
        return ({}, False)
    except OSError:
        return ({}, True)
    except json.JSONDecodeError:
        return ({}, True)

    if not isinstance(config, dict):
        return ({}, True)

    return (config, False)


def parse_color_defaults(config: dict[str, object]) -> tuple[dict[str, object], bool]:
    """Parse color-related config defaults."""
    defaults: dict[str, object] = {}
    color_value = config.get("--color")
    no_color_value = config.get("--no-color")

    if "--color" in config and not isinstance(color_value, bool):
        return ({}, False)
    if "--no-color" in config and not isinstance(no_color_value, bool):
        return ({}, False)
    if color_value is True and no_color_value is True:
        return ({}, False)

    if color_value is True:
        defaults["color_flag"] = True
    if no_color_value is True:
        defaults["color_flag"] = False

    return (defaults, True)


def validate_verbose_option(value: object) -> int | None:
    """Validate ``--verbose`` as a boolean or a non-negative level."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int) and value >= 0:
        return value
    return None


def validate_str_option(key: str, value: object) -> str | None:
    """Validate string option value."""
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    if not stripped:
        return None
    if key == "--out" and stripped.lower() not in {item.value for item in OutputFormat}:
        return None
    return value


def apply_config_entry(key: str, value: object, defaults: dict[str, object]) -> bool:
    """Apply a config entry to defaults if valid."""
    if key == "--verbose":
        verbose = validate_verbose_option(value)
        if verbose is None:
            return False
        defaults["verbose"] = verbose
        return True

    dest = _STR_OPTIONS.get(key)
    if dest is None:
        return False
    str_value = validate_str_option(key, value)
    if str_value is None:
        return False
    defaults[dest] = str_value
    return True


def parse_config_sections(raw_config: dict[str, object]) -> dict[str, object] | None:
    """Parse top-level config sections.

    Accepted shape:
      {
        "defaults": { ... }
      }
    """
    if any(key != "defaults" for key in raw_config):
        return None

    defaults_section = raw_config.get("defaults", {})
    if not isinstance(defaults_section, dict):
        return None

    return cast(dict[str, object], defaults_section)


def build_config_defaults(config: dict[str, object]) -> dict[str, object] | None:
    """Validate config values and build defaults.

    Args:
        config: Raw ``defaults`` section

    Returns:
        Defaults keyed by command parameter name, or None if malformed
    """
    defaults, color_valid = parse_color_defaults(config)
    if not color_valid:
        return None

    for key, value in config.items():
        if key in ("--color", "--no-color"):
            continue
        if not apply_config_entry(key, value, defaults):
            logger.debug("Invalid config entry %s=%r", key, value)
            return None

    return defaults


def parse_config_argument(argv: list[str]) -> str:
    """Parse only the --config argument from argv."""
    for idx, arg in enumerate(argv[1:], start=1):
        if arg == "--config" and idx + 1 < len(argv):
            return argv[idx + 1]
        if arg.startswith("--config="):
            return arg.split("=", 1)[1]
    return DEFAULT_CONFIG_NAME


def load_cli_config(argv: list[str]) -> LoadedCliConfig:
    """Load config defaults from the configured file path."""
    config_name = parse_config_argument(argv)
    config_path = Path(config_name)
    if not config_path.is_absolute():
        config_path = Path.cwd() / config_name
    config, load_error = load_config(str(config_path))

    if load_error:
        raise typer.BadParameter("Malformed config")

    defaults_config = parse_config_sections(config)
    if defaults_config is None:
        raise typer.BadParameter("Malformed config")

    defaults = build_config_defaults(defaults_config)
    if defaults is None:
        raise typer.BadParameter("Malformed config")

    return LoadedCliConfig(
        defaults={key: value for key, value in defaults.items() if key in COMMAND_OPTION_NAMES}
    )


def build_default_map(defaults: dict[str, object]) -> dict[str, dict[str, object]]:
    """Build Click default_map for Typer commands."""
    explain_defaults = {key: value for key, value in defaults.items() if key != "verbose"}
    color_defaults = {key: value for key, value in defaults.items() if key == "color_flag"}
    return {
        "explain": explain_defaults,
        "scenarios": {command: dict(color_defaults) for command in _COLOR_ONLY_COMMANDS},
        "functions": dict(color_defaults),
        "concepts": dict(color_defaults),
    }


def _format_argument_log_entry(arg_name: str, value: object) -> str:
    """Format one argument/value pair for logging."""
    return f"{arg_name}={value!r}"


def log_applied_config_defaults(command_name: str) -> None:
    """Log config defaults loaded from config file."""
    if not logger.isEnabledFor(logging.INFO):
        return

    entries = [
        _format_argument_log_entry(DEST_TO_OPTION_NAME[dest], value)
        for dest, value in sorted(CONFIG_DEFAULTS.items(), key=lambda item: item[0])
        if dest in DEST_TO_OPTION_NAME
    ]
    if entries:
        logger.info("Config defaults applied (%s): %s", command_name, ", ".join(entries))


def log_command_arguments(args: object, command_name: str) -> None:
    """Log all final argument values used to run a command."""
    if not logger.isEnabledFor(logging.INFO):
        return

    try:
        arg_items = vars(args).items()
    except TypeError:
        return

    entries = [
        _format_argument_log_entry(arg_name, arg_value)
        for arg_name, arg_value in sorted(arg_items, key=lambda item: item[0])
    ]
    logger.info("Command arguments (%s): %s", command_name, ", ".join(entries))
