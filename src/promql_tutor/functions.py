"""Reference catalog of commonly used PromQL functions and aggregations."""

from __future__ import annotations

from dataclasses import dataclass


class FunctionNotFoundError(LookupError):
    """Raised when a function name is not in the reference catalog."""


@dataclass(frozen=True)
class FunctionReference:
    """Usage notes for one PromQL function or aggregation operator."""

    name: str
    category: str
    signature: str
    description: str
    example: str
    explanation: str
    tips: tuple[str, ...] = ()


FUNCTION_CATEGORIES: tuple[str, ...] = (
    "Rate",
    "Aggregation",
    "Selection",
    "Histogram",
    "Math",
    "Time",
    "Label",
)

FUNCTIONS: tuple[FunctionReference, ...] = (
    FunctionReference(
        name="rate",
        category="Rate",
        signature="rate(v range-vector)",
        description="Per-second average rate of increase",
        example="rate(http_requests_total[5m])",
        explanation=(
            "Calculates the per-second average rate of increase over the time range. "
            "Essential for counters. The [5m] window should be at least 4x your scrape interval."
        ),
        tips=(
            "Most common function for counters",
            "Use for dashboards and alerting",
            "Handles counter resets automatically",
        ),
    ),
    FunctionReference(
        name="irate",
        category="Rate",
        signature="irate(v range-vector)",
        description="Instant rate using last two points",
        example="irate(http_requests_total[5m])",
        explanation=(
            "Uses only the last two data points to calculate rate. More sensitive to brief "
            "spikes than rate(), but also more volatile and noisy."
        ),
        tips=(
            "Good for real-time spike detection",
            "Not recommended for alerting",
            "Can show misleading values",
        ),
    ),
    FunctionReference(
        name="increase",
        category="Rate",
        signature="increase(v range-vector)",
        description="Total increase over time range",
        example="increase(http_requests_total[1h])",
        explanation=(
            "Returns the total increase over the time period. Equivalent to "
            "rate() * range_duration. Useful when you want counts rather than rates."
        ),
        tips=(
            "Returns count, not rate",
            'Good for "requests in last hour"',
            "Handles counter resets",
        ),
    ),
    FunctionReference(
        name="sum",
        category="Aggregation",
        signature="sum([by|without (labels)]) (v instant-vector)",
        description="Sum values across dimensions",
        example="sum by (route) (rate(http_requests_total[5m]))",
        explanation=(
            'Adds up all values. Use "by" to keep specific labels, "without" to remove '
            "specific labels. Without either, all labels are removed."
        ),
        tips=(
            '"by" keeps specified labels',
            '"without" removes specified labels',
            "No modifier = single total",
        ),
    ),
    FunctionReference(
        name="avg",
        category="Aggregation",
        signature="avg([by|without (labels)]) (v instant-vector)",
        description="Average across dimensions",
        example="avg by (route) (rate(http_requests_total[5m]))",
        explanation=(
            "Calculates arithmetic mean across matching series. Useful for understanding "
            "typical values when you have multiple instances."
        ),
        tips=(
            'Good for "typical" values',
            "Use with by/without like sum",
            "Sensitive to outliers",
        ),
    ),
    FunctionReference(
        name="max",
        category="Aggregation",
        signature="max([by|without (labels)]) (v instant-vector)",
        description="Maximum value across dimensions",
        example="max by (route) (rate(http_requests_total[5m]))",
        explanation=(
            "Returns the highest value among grouped series. Useful for finding peak load "
            "or worst-case latency."
        ),
        tips=(
            "Find peak values",
            "Good for alerting on any instance",
            "Pairs well with min()",
        ),
    ),
    FunctionReference(
        name="min",
        category="Aggregation",
        signature="min([by|without (labels)]) (v instant-vector)",
        description="Minimum value across dimensions",
        example="min by (route) (rate(http_requests_total[5m]))",
        explanation=(
            "Returns the lowest value among grouped series. Useful for finding minimum "
            "throughput or best-case latency."
        ),
        tips=(
            "Find minimum values",
            "Detect instances with low traffic",
            "Pairs well with max()",
        ),
    ),
    FunctionReference(
        name="count",
        category="Aggregation",
        signature="count([by|without (labels)]) (v instant-vector)",
        description="Count number of series",
        example="count by (route) (http_requests_total)",
        explanation=(
            "Counts the number of time series, not values. Useful for knowing how many "
            "series match your query."
        ),
        tips=(
            "Counts series, not values",
            "Good for cardinality checks",
            "Different from sum()",
        ),
    ),
    FunctionReference(
        name="topk",
        category="Selection",
        signature="topk(k, v instant-vector)",
        description="Top k elements by value",
        example="topk(5, sum by (route) (rate(http_requests_total[5m])))",
        explanation=(
            'Returns the k time series with the largest values. Useful for "top N" '
            "dashboards and focusing on highest impact items."
        ),
        tips=(
            "Shows highest values",
            "k must be a positive integer",
            "Returns full time series",
        ),
    ),
    FunctionReference(
        name="bottomk",
        category="Selection",
        signature="bottomk(k, v instant-vector)",
        description="Bottom k elements by value",
        example="bottomk(5, sum by (route) (rate(http_requests_total[5m])))",
        explanation=(
            "Returns the k time series with the smallest values. Useful for finding least "
            "active items or best performers (for error rates)."
        ),
        tips=(
            "Shows lowest values",
            "Good for finding underutilized resources",
            "Opposite of topk",
        ),
    ),
    FunctionReference(
        name="histogram_quantile",
        category="Histogram",
        signature="histogram_quantile(φ scalar, b instant-vector)",
        description="Calculate quantile from histogram",
        example="histogram_quantile(0.95, rate(http_request_duration_seconds_bucket[5m]))",
        explanation=(
            "Calculates the φ-quantile (0 ≤ φ ≤ 1) from histogram buckets. φ=0.95 gives "
            "the 95th percentile. Must use rate() of _bucket metrics."
        ),
        tips=(
            "φ between 0 and 1",
            'Keep "le" label when grouping',
            "Use rate() on buckets first",
            "Common: 0.5 (p50), 0.95 (p95), 0.99 (p99)",
        ),
    ),
    FunctionReference(
        name="abs",
        category="Math",
        signature="abs(v instant-vector)",
        description="Absolute value",
        example="abs(rate(errors[5m]) - rate(errors[5m] offset 1h))",
        explanation=(
            "Returns the absolute value of all sample values. Useful when comparing values "
            "where direction doesn't matter."
        ),
        tips=(
            "Converts negative to positive",
            "Useful for change magnitude",
            "Works element-wise",
        ),
    ),
    FunctionReference(
        name="ceil",
        category="Math",
        signature="ceil(v instant-vector)",
        description="Round up to nearest integer",
        example="ceil(rate(http_requests_total[5m]))",
        explanation=(
            "Rounds all values up to the nearest integer. Useful for display or when you "
            "need whole numbers."
        ),
        tips=("Rounds up", "Returns integer", "Pairs with floor()"),
    ),
    FunctionReference(
        name="floor",
        category="Math",
        signature="floor(v instant-vector)",
        description="Round down to nearest integer",
        example="floor(rate(http_requests_total[5m]))",
        explanation=(
            "Rounds all values down to the nearest integer. Useful when you need whole "
            "numbers and want to be conservative."
        ),
        tips=("Rounds down", "Returns integer", "Pairs with ceil()"),
    ),
    FunctionReference(
        name="round",
        category="Math",
        signature="round(v instant-vector, to_nearest scalar)",
        description="Round to nearest multiple",
        example="round(rate(http_requests_total[5m]), 0.1)",
        explanation=(
            "Rounds values to the nearest multiple of to_nearest. "
            "Default is 1 (nearest integer)."
        ),
        tips=(
            "to_nearest is optional (default 1)",
            "round(x, 0.1) = 1 decimal",
            "round(x, 10) = nearest 10",
        ),
    ),
    FunctionReference(
        name="time",
        category="Time",
        signature="time()",
        description="Current Unix timestamp",
        example="time() - process_start_time_seconds",
        explanation=(
            "Returns the current Unix timestamp (seconds since Jan 1, 1970). Useful for "
            "calculating age or time since events."
        ),
        tips=("No arguments", "Returns seconds", "Useful for uptime calculations"),
    ),
    FunctionReference(
        name="label_replace",
        category="Label",
        signature="label_replace(v, dst_label, replacement, src_label, regex)",
        description="Modify or create labels with regex",
        example='label_replace(up, "short", "$1", "instance", "(.*):.+")',
        explanation=(
            "Matches regex against src_label and creates/replaces dst_label with replacement "
            "(can use capture groups like $1)."
        ),
        tips=(
            "$1, $2 for capture groups",
            "Creates label if doesn't exist",
            "Useful for reformatting",
        ),
    ),
)


def find_functions(
    category: str | None = None,
    search: str | None = None,
) -> tuple[FunctionReference, ...]:
    """Filter the catalog by category and by a name or description substring.

    Args:
        category: Category name, matched case-insensitively; None keeps all
        search: Text looked up in names and descriptions; None or empty keeps all

    Returns:
        Matching entries in catalog order
    """
    needle = (search or "").lower()
    return tuple(
        function
        for function in FUNCTIONS
        if (category is None or function.category.lower() == category.lower())
        and (needle in function.name.lower() or needle in function.description.lower())
    )


def get_function(name: str) -> FunctionReference:
    """Look up a function by name, ignoring case and a trailing ``()``."""
    wanted = name.strip().removesuffix("()").lower()
    for function in FUNCTIONS:
        if function.name == wanted:
            return function
    available = ", ".join(function.name for function in FUNCTIONS)
    raise FunctionNotFoundError(f"Unknown function: {name}. Available functions: {available}")
