"""Tests for promql_tutor.config helpers."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import SimpleNamespace

import pytest
import typer

from promql_tutor import config


def _write_config(path: Path, payload: object) -> None:
    path.write_text(json.dumps(payload), encoding="utf-8")


@pytest.fixture
def propagating_logger(monkeypatch: pytest.MonkeyPatch) -> None:
    """Let package log records reach caplog."""
    monkeypatch.setattr(logging.getLogger("promql_tutor"), "propagate", True)


def test_load_config_missing_file_returns_empty(tmp_path: Path) -> None:
    """Missing config should return empty config without error."""
    data, malformed = config.load_config(str(tmp_path / "missing.json"))

    assert data == {}
    assert malformed is False


def test_load_config_directory_path_is_malformed(tmp_path: Path) -> None:
    """Directory path should be treated as malformed config."""
    config_dir = tmp_path / "cfgdir"
    config_dir.mkdir()
    data, malformed = config.load_config(str(config_dir))

    assert data == {}
    assert malformed is True


def test_load_config_invalid_json_is_malformed(tmp_path: Path) -> None:
    """Invalid JSON should be marked malformed."""
    config_path = tmp_path / "config.json"
    config_path.write_text("{not json", encoding="utf-8")

    assert config.load_config(str(config_path)) == ({}, True)


def test_load_config_non_dict_is_malformed(tmp_path: Path) -> None:
    """Non-object JSON should be marked malformed."""
    config_path = tmp_path / "config.json"
    _write_config(config_path, [1, 2, 3])

    assert config.load_config(str(config_path)) == ({}, True)


def test_parse_color_defaults_conflict() -> None:
    """Conflicting color flags should be rejected."""
    assert config.parse_color_defaults({"--color": True, "--no-color": True}) == ({}, False)


def test_parse_color_defaults_invalid_value() -> None:
    """Non-boolean color flag should be rejected."""
    assert config.parse_color_defaults({"--color": "yes"}) == ({}, False)


def test_parse_color_defaults_no_color() -> None:
    """--no-color should disable color by default."""
    assert config.parse_color_defaults({"--no-color": True}) == ({"color_flag": False}, True)


def test_build_config_defaults_valid() -> None:
    """Valid entries should be mapped to parameter names."""
    defaults = config.build_config_defaults(
        {"--verbose": True, "--color": True, "--out": "tree", "--out-theme": "monokai"}
    )

    assert defaults == {"color_flag": True, "verbose": 1, "out": "tree", "out_theme": "monokai"}


@pytest.mark.parametrize(
    "entries",
    [
        {"--out": "yaml"},
        {"--out": ""},
        {"--out-theme": 3},
        {"--verbose": -1},
        {"--verbose": "yes"},
        {"--unknown": True},
    ],
)
def test_build_config_defaults_invalid(entries: dict[str, object]) -> None:
    """Any invalid entry should make the defaults malformed."""
    assert config.build_config_defaults(entries) is None


def test_parse_config_sections_rejects_unknown_sections() -> None:
    """Only the defaults section is accepted."""
    assert config.parse_config_sections({"defaults": {}, "aliases": {}}) is None
    assert config.parse_config_sections({"defaults": []}) is None
    assert config.parse_config_sections({}) == {}


@pytest.mark.parametrize(
    ("argv", "expected"),
    [
        (["promql-tutor", "explain", "up"], ".promql-tutor.json"),
        (["promql-tutor", "explain", "--config", "custom.json", "up"], "custom.json"),
        (["promql-tutor", "explain", "--config=other.json", "up"], "other.json"),
        (["promql-tutor", "explain", "--config"], ".promql-tutor.json"),
    ],
)
def test_parse_config_argument(argv: list[str], expected: str) -> None:
    """--config should be read from argv with a default name."""
    assert config.parse_config_argument(argv) == expected


def test_load_cli_config_reads_defaults_from_cwd(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Config in the working directory should provide defaults."""
    _write_config(tmp_path / ".promql-tutor.json", {"defaults": {"--out": "json"}})
    monkeypatch.chdir(tmp_path)

    loaded = config.load_cli_config(["promql-tutor", "explain", "up"])

    assert loaded.defaults == {"out": "json"}


def test_load_cli_config_missing_file_gives_empty_defaults(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Without a config file there should be no defaults."""
    monkeypatch.chdir(tmp_path)

    assert config.load_cli_config(["promql-tutor"]).defaults == {}


@pytest.mark.parametrize(
    "payload",
    [
        {"defaults": {"--out": "yaml"}},
        {"filters": {}},
        ["not", "an", "object"],
    ],
)
def test_load_cli_config_malformed_raises(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, payload: object
) -> None:
    """Malformed config should raise BadParameter."""
    config_path = tmp_path / "bad.json"
    _write_config(config_path, payload)
    monkeypatch.chdir(tmp_path)

    with pytest.raises(typer.BadParameter, match="Malformed config"):
        config.load_cli_config(["promql-tutor", "--config", str(config_path)])


def test_build_default_map_limits_catalog_defaults() -> None:
    """Catalog commands should only receive the color default."""
    default_map = config.build_default_map({"color_flag": False, "out": "tree", "verbose": 1})

    assert default_map == {
        "explain": {"color_flag": False, "out": "tree"},
        "scenarios": {"list": {"color_flag": False}, "show": {"color_flag": False}},
        "functions": {"color_flag": False},
        "concepts": {"color_flag": False},
    }


@pytest.mark.usefixtures("propagating_logger")
def test_log_command_arguments_when_info_enabled(caplog: pytest.LogCaptureFixture) -> None:
    """Command arguments should be logged sorted by name at INFO."""
    caplog.set_level(logging.INFO, logger="promql_tutor")

    config.log_command_arguments(SimpleNamespace(query="up", out="text"), "explain")

    assert "Command arguments (explain): out='text', query='up'" in caplog.text


def test_log_command_arguments_skips_when_quiet(caplog: pytest.LogCaptureFixture) -> None:
    """Nothing should be logged below INFO."""
    caplog.set_level(logging.WARNING, logger="promql_tutor")

    config.log_command_arguments(SimpleNamespace(query="up"), "explain")

    assert caplog.text == ""


@pytest.mark.usefixtures("propagating_logger")
def test_log_applied_config_defaults(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Applied config defaults should be logged by option name."""
    caplog.set_level(logging.INFO, logger="promql_tutor")
    monkeypatch.setattr(config, "CONFIG_DEFAULTS", {"out": "json", "color_flag": False})

    config.log_applied_config_defaults("explain")

    assert (
        "Config defaults applied (explain): --color/--no-color=False, --out='json'" in caplog.text
    )
