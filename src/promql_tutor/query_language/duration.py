"""PromQL duration literal handling."""

from __future__ import annotations

import re


DEFAULT_DURATION_MS = 300_000

UNIT_MILLISECONDS: dict[str, int] = {
    "ms": 1,
    "s": 1000,
    "m": 60 * 1000,
    "h": 60 * 60 * 1000,
    "d": 24 * 60 * 60 * 1000,
    "w": 7 * 24 * 60 * 60 * 1000,
    "y": 365 * 24 * 60 * 60 * 1000,
}

_DURATION_PART = re.compile(r"(\d+)(ms|s|m|h|d|w|y)")

_DISPLAY_UNITS = (("d", 86_400_000), ("h", 3_600_000), ("m", 60_000), ("s", 1000))


def parse_duration(text: str) -> int:
    """Convert a compound duration such as ``5m30s`` to milliseconds.

    Every ``<integer><unit>`` part found in the text is summed; anything else is
    ignored. Text without any part yields the five minute default.
    """
    total = sum(
        int(amount) * UNIT_MILLISECONDS[unit] for amount, unit in _DURATION_PART.findall(text)
    )
    return total or DEFAULT_DURATION_MS


def format_duration(milliseconds: int) -> str:
    """Render milliseconds using the largest unit the value reaches, e.g. ``5m``."""
    for suffix, size in _DISPLAY_UNITS:
        if milliseconds >= size:
            return f"{milliseconds // size}{suffix}"
    return f"{milliseconds}ms"
