"""Tests for the concepts command."""

from __future__ import annotations

import click
import pytest
from typer.testing import CliRunner

from promql_tutor.cli import app
from promql_tutor.commands.concepts import ConceptsArgs, run_concepts
from promql_tutor.concepts import CONCEPTS


def test_run_concepts_lists_catalog(capsys: pytest.CaptureFixture[str]) -> None:
    """Every concept should be listed once with its title."""
    run_concepts(ConceptsArgs(concept_id=None, config=".promql-tutor.json", color_flag=False))

    lines = capsys.readouterr().out.splitlines()

    assert len(lines) == len(CONCEPTS)
    for line, concept in zip(lines, CONCEPTS, strict=True):
        assert line.startswith(concept.id)
        assert f"{concept.title} - {concept.description}" in line


def test_run_concepts_shows_lesson(capsys: pytest.CaptureFixture[str]) -> None:
    """Showing a concept should print its sections and explain its query."""
    run_concepts(
        ConceptsArgs(concept_id="histogram", config=".promql-tutor.json", color_flag=False)
    )

    captured = capsys.readouterr().out
    query = "histogram_quantile(0.95, rate(http_request_duration_seconds_bucket[5m]))"

    assert captured.startswith("Histogram\n")
    assert "What is it?:\n  Histograms track distributions" in captured
    assert "When to use?:" in captured
    assert f"  {query}\n" in captured
    assert "calculates a percentile from histogram buckets" in captured
    assert "Tips:\n  - Keep the" in captured


def test_run_concepts_unknown() -> None:
    """Unknown ids should become usage errors."""
    with pytest.raises(click.UsageError, match="Unknown concept: summary"):
        run_concepts(
            ConceptsArgs(concept_id="summary", config=".promql-tutor.json", color_flag=False)
        )


def test_concepts_command_via_cli() -> None:
    """The concepts command should be reachable from the main app."""
    runner = CliRunner()

    listed = runner.invoke(app, ["concepts", "--no-color"])
    shown = runner.invoke(app, ["concepts", "labels", "--no-color"])

    assert listed.exit_code == 0
    assert "rate-vs-irate" in listed.output
    assert shown.exit_code == 0
    assert '{status_code="500"}' in shown.output
