"""Tests for PromQL duration parsing and formatting."""

from __future__ import annotations

import pytest

from promql_tutor.query_language import format_duration, parse_duration
from promql_tutor.query_language.duration import DEFAULT_DURATION_MS


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("5m", 300_000),
        ("1h30m", 5_400_000),
        ("30s", 30_000),
        ("250ms", 250),
        ("1d", 86_400_000),
        ("2w", 1_209_600_000),
        ("1y", 31_536_000_000),
        ("1m30s500ms", 90_500),
    ],
)
def test_parse_duration_sums_units(text: str, expected: int) -> None:
    """Every number/unit pair should contribute to the total."""
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "5", "0s"])
def test_parse_duration_defaults_without_value(text: str) -> None:
    """Text without a positive duration should fall back to five minutes."""
    assert parse_duration(text) == DEFAULT_DURATION_MS == 300_000


def test_parse_duration_ignores_unknown_text() -> None:
    """Characters outside number/unit pairs should be ignored."""
    assert parse_duration("[5m]") == 300_000


@pytest.mark.parametrize(
    ("milliseconds", "expected"),
    [
        (300_000, "5m"),
        (5_400_000, "1h"),
        (86_400_000, "1d"),
        (172_800_000, "2d"),
        (90_000, "1m"),
        (30_000, "30s"),
        (999, "999ms"),
        (0, "0ms"),
    ],
)
def test_format_duration_uses_largest_unit(milliseconds: int, expected: str) -> None:
    """The largest reached unit should be used, rounding down."""
    assert format_duration(milliseconds) == expected
